"""
Cloud DLP adapter.

Provides the process-wide DLP client provider and the transformation
service that redacts or masks sensitive data through the DLP API.
"""

from .errors import DlpError, InitializationError, TransformError
from .provider import DlpServiceProvider
from .service import (
    Direction,
    DlpTransformService,
    Mask,
    Redact,
    TransformConfig,
)

__version__ = "1.0.0"

__all__ = [
    "DlpError",
    "InitializationError",
    "TransformError",
    "DlpServiceProvider",
    "DlpTransformService",
    "TransformConfig",
    "Redact",
    "Mask",
    "Direction",
]
