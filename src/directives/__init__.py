"""
Recipe directives that redact or mask sensitive data through Cloud DLP.

Directives:
- redact: remove findings, output in ``<column>_redacted``
- mask-sensitive-data: mask findings with a character, output in ``<column>_masked``
"""

from .base import (
    ArgumentDefinition,
    Arguments,
    Directive,
    TokenType,
    UsageDefinition,
)
from .errors import DirectiveError, DirectiveExecutionError, DirectiveParseError
from .mask import MaskDirective
from .redact import RedactDirective
from .registry import DIRECTIVES, get_directive
from .sensitive import SensitiveDataDirective

__version__ = "1.0.0"

__all__ = [
    "Directive",
    "SensitiveDataDirective",
    "RedactDirective",
    "MaskDirective",
    "Arguments",
    "ArgumentDefinition",
    "UsageDefinition",
    "TokenType",
    "DirectiveError",
    "DirectiveParseError",
    "DirectiveExecutionError",
    "DIRECTIVES",
    "get_directive",
]
