"""
Exceptions raised by the DLP client provider and transformation service.
"""


class DlpError(Exception):
    """Base class for DLP adapter failures."""


class InitializationError(DlpError):
    """Credentials could not be loaded or no project id could be resolved."""


class TransformError(DlpError):
    """The remote deidentify call failed for a value."""
