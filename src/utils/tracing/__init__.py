"""
Distributed tracing using OpenTelemetry.

Instruments:
- Directive batches (one span per execute call)
- DLP deidentify calls (one client span per value)

Tracing stays a no-op until ``initialize_tracing`` installs a provider.
"""

from .context import add_span_attributes, trace_operation
from .tracer import get_tracer, initialize_tracing, shutdown_tracing, tracing_requested

__all__ = [
    "initialize_tracing",
    "get_tracer",
    "shutdown_tracing",
    "tracing_requested",
    "trace_operation",
    "add_span_attributes",
]
