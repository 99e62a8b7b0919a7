"""
Trace and request ids for the current request.

Error responses carry the trace id and every log record carries both. The
host application opens a `request_context` per request (usually from a
middleware); outside of one both ids are empty.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_trace_id() -> str:
    return trace_id_var.get()


def get_request_id() -> str:
    return request_id_var.get()


def new_trace_id() -> str:
    """Generate a trace id (32 hex chars, W3C trace-context width)."""
    return uuid4().hex


@contextmanager
def request_context(
    trace_id: str | None = None, request_id: str = ""
) -> Iterator[tuple[str, str]]:
    """Bind trace and request ids for the duration of a block.

    Usage:
        with request_context(request.headers.get("x-trace-id"), request_id):
            ...

    Args:
        trace_id: Incoming trace id; a new one is generated when None or empty
        request_id: Request id, empty when the host does not assign one

    Yields:
        The (trace_id, request_id) pair in effect inside the block
    """
    trace_id = trace_id or new_trace_id()
    trace_token = trace_id_var.set(trace_id)
    request_token = request_id_var.set(request_id)
    try:
        yield trace_id, request_id
    finally:
        request_id_var.reset(request_token)
        trace_id_var.reset(trace_token)
