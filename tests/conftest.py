"""
Pytest configuration and fixtures for the DLP directive tests.
Provides a fake DLP client and isolates the process-wide provider.
"""

import re

import pytest
from google.cloud import dlp_v2

from dlp import DlpServiceProvider

EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+\.[\w.]+")


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "property: mark test as property-based test")


class FakeDlpClient:
    """
    Stands in for ``DlpServiceClient``.

    Detects e-mail addresses when EMAIL_ADDRESS is requested and applies the
    request's redact or character-mask transformation the way DLP does.
    ``errors`` lists what successive calls raise; None lets a call succeed.
    """

    def __init__(self, errors=None):
        self.requests: list[dlp_v2.DeidentifyContentRequest] = []
        self.errors = list(errors or [])

    def deidentify_content(self, request=None, **kwargs):
        self.requests.append(request)
        if self.errors:
            error = self.errors.pop(0)
            if error is not None:
                raise error

        text = request.item.value
        names = {info_type.name for info_type in request.inspect_config.info_types}
        if "EMAIL_ADDRESS" in names:
            transformation = (
                request.deidentify_config.info_type_transformations.transformations[0]
            )
            primitive = transformation.primitive_transformation
            text = EMAIL_PATTERN.sub(lambda m: self._transform(m.group(0), primitive), text)

        return dlp_v2.DeidentifyContentResponse(item=dlp_v2.ContentItem(value=text))

    @staticmethod
    def _transform(finding: str, primitive: dlp_v2.PrimitiveTransformation) -> str:
        mask = primitive.character_mask_config
        if not mask.masking_character:
            return ""

        count = min(mask.number_to_mask or len(finding), len(finding))
        if mask.reverse_order:
            return finding[: len(finding) - count] + mask.masking_character * count
        return mask.masking_character * count + finding[count:]


@pytest.fixture(autouse=True)
def reset_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without a process-wide DLP provider."""
    monkeypatch.setattr(DlpServiceProvider, "_instance", None)


@pytest.fixture
def fake_client() -> FakeDlpClient:
    return FakeDlpClient()


@pytest.fixture
def provider(fake_client: FakeDlpClient) -> DlpServiceProvider:
    return DlpServiceProvider(fake_client, "test-project")


@pytest.fixture
def make_client():
    """Factory for fake clients, e.g. ``make_client(errors=[...])``."""
    return FakeDlpClient
