"""
Exceptions raised by directives.
"""


class DirectiveError(Exception):
    """Base class for directive failures."""


class DirectiveParseError(DirectiveError):
    """Arguments are invalid or the directive could not be initialized."""


class DirectiveExecutionError(DirectiveError):
    """The directive was asked to process rows it cannot process."""
