"""
``redact`` directive: removes sensitive data found in a column.

Usage:
    redact :body 'EMAIL_ADDRESS','US_SOCIAL_SECURITY_NUMBER' [project-id] [service-account-file-path]

Findings are removed from the text and the result is stored in
``<column>_redacted``. Project id and service account file are only needed
outside GCP; they take effect only for the first DLP directive created in
the process.
"""

from google.cloud import dlp_v2

from dlp import DlpServiceProvider, TransformConfig

from .base import ArgumentDefinition, Arguments, TokenType, UsageDefinition
from .sensitive import SensitiveDataDirective


class RedactDirective(SensitiveDataDirective):
    """Redact sensitive data from a column."""

    NAME = "redact"
    CATEGORIES = ("redact", "dlp", "cloud")
    DESCRIPTION = "Redact sensitive data from a column"
    SUFFIX = "_redacted"

    # Findings at or above this likelihood are redacted
    LIKELIHOOD = dlp_v2.Likelihood.POSSIBLE

    def define(self) -> UsageDefinition:
        return UsageDefinition(
            self.NAME,
            (
                ArgumentDefinition("column", TokenType.COLUMN_NAME),
                ArgumentDefinition("info-type", TokenType.TEXT_LIST),
                ArgumentDefinition("project-id", TokenType.IDENTIFIER, optional=True),
                ArgumentDefinition("service-account-file-path", TokenType.TEXT, optional=True),
            ),
        )

    def build_config(self, args: Arguments) -> TransformConfig:
        return TransformConfig.redact(args.value("info-type"), self.LIKELIHOOD)

    def acquire_provider(self, args: Arguments) -> DlpServiceProvider:
        return DlpServiceProvider.acquire(
            args.value("project-id"),
            args.value("service-account-file-path"),
        )
