"""
Unit tests for the redact directive.

Tests argument definition, initialization through the provider, and the
row contract: missing columns and non-text values yield None, text values
are redacted, and rows keep their order and count.
"""

from unittest.mock import patch

import pytest
from google.api_core import exceptions as core_exceptions
from google.cloud import dlp_v2

from directives import (
    Arguments,
    DirectiveExecutionError,
    DirectiveParseError,
    RedactDirective,
    TokenType,
)
from dlp import DlpServiceProvider, InitializationError, Redact, TransformError

ARGS = {"column": "body", "info-type": "EMAIL_ADDRESS"}


@pytest.fixture
def directive(provider):
    directive = RedactDirective(provider=provider)
    directive.initialize(ARGS)
    return directive


class TestDefine:

    def test_arguments(self):
        usage = RedactDirective().define()

        assert usage.directive == "redact"
        assert [(a.name, a.token_type, a.optional) for a in usage.arguments] == [
            ("column", TokenType.COLUMN_NAME, False),
            ("info-type", TokenType.TEXT_LIST, False),
            ("project-id", TokenType.IDENTIFIER, True),
            ("service-account-file-path", TokenType.TEXT, True),
        ]

    def test_metadata(self):
        assert RedactDirective.NAME == "redact"
        assert "dlp" in RedactDirective.CATEGORIES


class TestInitialize:

    def test_with_injected_provider(self, directive, provider):
        assert directive.column == "body"
        assert directive.derived_column == "body_redacted"
        assert directive.service.provider is provider
        assert directive.service.config.mode == Redact()
        assert directive.service.config.info_types == ("EMAIL_ADDRESS",)
        assert directive.service.config.likelihood == dlp_v2.Likelihood.POSSIBLE

    def test_accepts_parsed_arguments(self, provider):
        directive = RedactDirective(provider=provider)
        directive.initialize(Arguments.parse(directive.define(), ARGS))
        assert directive.column == "body"

    def test_acquires_shared_provider(self, provider):
        with patch.object(DlpServiceProvider, "acquire", return_value=provider) as acquire:
            directive = RedactDirective()
            directive.initialize({
                **ARGS,
                "project-id": "my-project",
                "service-account-file-path": "/secrets/sa.json",
            })

        acquire.assert_called_once_with("my-project", "/secrets/sa.json")
        assert directive.service.provider is provider

    def test_acquires_with_defaults(self, provider):
        with patch.object(DlpServiceProvider, "acquire", return_value=provider) as acquire:
            RedactDirective().initialize(ARGS)

        acquire.assert_called_once_with(None, None)

    def test_initialization_error_becomes_parse_error(self):
        error = InitializationError("bad credentials")
        with patch.object(DlpServiceProvider, "acquire", side_effect=error):
            with pytest.raises(DirectiveParseError, match="bad credentials") as exc_info:
                RedactDirective().initialize(ARGS)

        assert exc_info.value.__cause__ is error

    def test_missing_column(self, provider):
        with pytest.raises(DirectiveParseError, match="column"):
            RedactDirective(provider=provider).initialize({"info-type": "EMAIL_ADDRESS"})

    def test_empty_info_types_accepted(self, provider, fake_client):
        directive = RedactDirective(provider=provider)
        directive.initialize({"column": "body", "info-type": ""})

        rows = directive.execute([{"body": "contact a@b.com now"}])

        assert rows[0]["body_redacted"] == "contact a@b.com now"
        assert fake_client.requests == []


class TestExecute:

    def test_redacts_text(self, directive):
        rows = directive.execute([{"body": "contact a@b.com now"}])
        assert rows == [{"body": "contact a@b.com now", "body_redacted": "contact  now"}]

    def test_missing_column_yields_none(self, directive, fake_client):
        rows = directive.execute([{"other": "a@b.com"}])

        assert rows == [{"other": "a@b.com", "body_redacted": None}]
        assert fake_client.requests == []

    @pytest.mark.parametrize("value", [None, 42, 3.5, b"a@b.com", ["a@b.com"]])
    def test_non_text_yields_none(self, directive, fake_client, value):
        rows = directive.execute([{"body": value}])

        assert rows[0]["body"] == value
        assert rows[0]["body_redacted"] is None
        assert fake_client.requests == []

    def test_other_columns_untouched(self, directive):
        row = {"id": 7, "body": "x a@b.com", "note": "n@m.org"}
        directive.execute([row])

        assert row == {"id": 7, "body": "x a@b.com", "note": "n@m.org", "body_redacted": "x "}

    def test_preserves_order_and_count(self, directive):
        rows = [
            {"body": "first a@b.com"},
            {"nobody": "here"},
            {"body": 12},
            {"body": "last c@d.com"},
        ]

        result = directive.execute(rows)

        assert result is rows
        assert [row.get("body_redacted") for row in result] == ["first ", None, None, "last "]

    def test_outcomes_added_to_span(self, directive):
        with patch("directives.sensitive.add_span_attributes") as add_attributes:
            directive.execute([{"body": "a@b.com"}, {"id": 1}, {"body": 3}, {"body": "x"}])

        add_attributes.assert_called_once_with(
            rows_transformed=2, rows_missing_column=1, rows_non_text=1
        )

    def test_empty_batch(self, directive):
        assert directive.execute([]) == []

    def test_rerun_overwrites_derived_column(self, directive):
        row = {"body": "a@b.com here", "body_redacted": "stale", "after": 1}
        directive.execute([row])
        directive.execute([row])

        assert row["body_redacted"] == " here"
        assert list(row) == ["body", "body_redacted", "after"]

    def test_batches_are_independent(self, directive):
        first = directive.execute([{"body": "a@b.com"}])
        second = directive.execute([{"body": "keep me"}])

        assert first[0]["body_redacted"] == ""
        assert second[0]["body_redacted"] == "keep me"

    def test_remote_failure_aborts_batch(self, make_client):
        client = make_client(errors=[None, core_exceptions.ResourceExhausted("quota")])
        directive = RedactDirective(provider=DlpServiceProvider(client, "test-project"))
        directive.initialize(ARGS)
        rows = [{"body": "ok a@b.com"}, {"body": "fails"}, {"body": "never"}]

        with pytest.raises(TransformError, match="ResourceExhausted"):
            directive.execute(rows)

        assert rows[0]["body_redacted"] == "ok "
        assert "body_redacted" not in rows[1]
        assert "body_redacted" not in rows[2]
        assert len(client.requests) == 2

    def test_execute_before_initialize(self):
        with pytest.raises(DirectiveExecutionError, match="not been initialized"):
            RedactDirective().execute([{"body": "a@b.com"}])


class TestDestroy:

    def test_destroy_keeps_shared_client(self, directive, fake_client):
        directive.destroy()

        assert directive.service.provider.client is fake_client
        assert directive.execute([{"body": "a@b.com"}])[0]["body_redacted"] == ""
