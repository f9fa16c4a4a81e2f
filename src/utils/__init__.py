"""
Utility modules for the DLP directives

Provides:
- logging: console/JSON logging setup
- tracing: OpenTelemetry spans around batches and DLP calls
- retry: opt-in retry with exponential backoff
"""

__version__ = "1.0.0"
__all__ = ["logging", "tracing", "retry"]
