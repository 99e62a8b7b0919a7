"""
Shared module - cross-cutting concerns.

- Context variables for request/trace IDs
- Error types and FastAPI error handling (shared.errors)
- Logging utilities with Loguru (shared.logging)
"""

from .context import (
    get_request_id,
    get_trace_id,
    new_trace_id,
    request_context,
    request_id_var,
    trace_id_var,
)

__all__ = [
    "get_request_id",
    "get_trace_id",
    "new_trace_id",
    "request_context",
    "request_id_var",
    "trace_id_var",
]
