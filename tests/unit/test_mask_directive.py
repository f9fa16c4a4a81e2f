"""
Unit tests for the mask-sensitive-data directive.
"""

from unittest.mock import patch

import pytest

from directives import DirectiveParseError, MaskDirective, TokenType
from dlp import Direction, DlpServiceProvider, Mask


def _initialized(provider, **overrides):
    directive = MaskDirective(provider=provider)
    directive.initialize({"column": "contact", "info-type": "EMAIL_ADDRESS", "mask-char": "#", **overrides})
    return directive


class TestDefine:

    def test_arguments(self):
        usage = MaskDirective().define()

        assert usage.directive == "mask-sensitive-data"
        assert [(a.name, a.token_type, a.optional) for a in usage.arguments] == [
            ("column", TokenType.COLUMN_NAME, False),
            ("info-type", TokenType.TEXT_LIST, False),
            ("mask-char", TokenType.TEXT, False),
            ("count", TokenType.NUMERIC, True),
            ("reverse", TokenType.BOOLEAN, True),
        ]

    def test_has_no_project_arguments(self):
        usage = MaskDirective().define()
        assert usage.get("project-id") is None
        assert usage.get("service-account-file-path") is None


class TestInitialize:

    def test_defaults(self, provider):
        directive = _initialized(provider)

        assert directive.derived_column == "contact_masked"
        assert directive.service.config.mode == Mask("#", None, Direction.FROM_START)

    def test_count_and_reverse(self, provider):
        directive = _initialized(provider, count="3", reverse="true")
        assert directive.service.config.mode == Mask("#", 3, Direction.FROM_END)

    def test_acquires_shared_provider_without_arguments(self, provider):
        with patch.object(DlpServiceProvider, "acquire", return_value=provider) as acquire:
            MaskDirective().initialize(
                {"column": "contact", "info-type": "EMAIL_ADDRESS", "mask-char": "*"}
            )

        acquire.assert_called_once_with()

    @pytest.mark.parametrize("overrides", [
        {"mask-char": "##"},
        {"mask-char": ""},
        {"count": 0},
        {"count": -2},
    ])
    def test_invalid_mask_settings(self, provider, overrides):
        with pytest.raises(DirectiveParseError) as exc_info:
            _initialized(provider, **overrides)

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_invalid_settings_fail_before_acquiring_provider(self):
        with patch.object(DlpServiceProvider, "acquire") as acquire:
            with pytest.raises(DirectiveParseError):
                MaskDirective().initialize(
                    {"column": "contact", "info-type": "EMAIL_ADDRESS", "mask-char": "ab"}
                )

        acquire.assert_not_called()

    def test_failed_reinitialize_keeps_previous_state(self, provider):
        directive = _initialized(provider)
        service = directive.service

        with pytest.raises(DirectiveParseError):
            directive.initialize({"column": "other", "info-type": "EMAIL_ADDRESS", "mask-char": "##"})

        assert directive.column == "contact"
        assert directive.service is service
        rows = directive.execute([{"contact": "a@b.com", "other": "c@d.com"}])
        assert rows[0]["contact_masked"] == "#######"
        assert "other_masked" not in rows[0]

    def test_missing_mask_char(self, provider):
        with pytest.raises(DirectiveParseError, match="mask-char"):
            MaskDirective(provider=provider).initialize(
                {"column": "contact", "info-type": "EMAIL_ADDRESS"}
            )


class TestExecute:

    def test_masks_whole_finding(self, provider):
        rows = _initialized(provider).execute([{"contact": "mail a@b.com"}])
        assert rows[0]["contact_masked"] == "mail #######"

    def test_masks_count_from_end(self, provider):
        rows = _initialized(provider, count=3, reverse=True).execute([{"contact": "jane@x.org"}])
        assert rows[0]["contact_masked"] == "jane@x.###"

    def test_count_longer_than_finding(self, provider):
        rows = _initialized(provider, count=100).execute([{"contact": "a@b.com"}])
        assert rows[0]["contact_masked"] == "#######"

    def test_missing_and_non_text(self, provider):
        rows = _initialized(provider).execute([{"name": "x"}, {"contact": 5}])

        assert rows[0]["contact_masked"] is None
        assert rows[1]["contact_masked"] is None
        assert rows[1]["contact"] == 5
