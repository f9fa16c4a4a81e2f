"""
``mask-sensitive-data`` directive: masks sensitive data found in a column.

Usage:
    mask-sensitive-data :phone 'PHONE_NUMBER' '#' [count] [reverse]

Each finding is overwritten with the masking character; with ``count``
only that many characters are masked, from the start of the finding or,
with ``reverse``, from its end. The result goes to ``<column>_masked``.
"""

from dlp import Direction, DlpServiceProvider, TransformConfig

from .base import ArgumentDefinition, Arguments, TokenType, UsageDefinition
from .sensitive import SensitiveDataDirective


class MaskDirective(SensitiveDataDirective):
    """Mask sensitive data in a column with a character."""

    NAME = "mask-sensitive-data"
    CATEGORIES = ("mask", "dlp", "cloud")
    DESCRIPTION = "Mask sensitive data in a column with a masking character"
    SUFFIX = "_masked"

    def define(self) -> UsageDefinition:
        return UsageDefinition(
            self.NAME,
            (
                ArgumentDefinition("column", TokenType.COLUMN_NAME),
                ArgumentDefinition("info-type", TokenType.TEXT_LIST),
                ArgumentDefinition("mask-char", TokenType.TEXT),
                ArgumentDefinition("count", TokenType.NUMERIC, optional=True),
                ArgumentDefinition("reverse", TokenType.BOOLEAN, optional=True),
            ),
        )

    def build_config(self, args: Arguments) -> TransformConfig:
        direction = Direction.FROM_END if args.value("reverse", False) else Direction.FROM_START
        return TransformConfig.mask(
            args.value("info-type"),
            args.value("mask-char"),
            count=args.value("count"),
            direction=direction,
        )

    def acquire_provider(self, args: Arguments) -> DlpServiceProvider:
        return DlpServiceProvider.acquire()
