"""Shared errors package.

HttpError and its FastAPI integration.
"""

from .base import (
    INTERNAL_PUBLIC_MESSAGE,
    NOT_FOUND_MESSAGE,
    HttpError,
    InternalError,
    format_cause_chain,
    iter_causes,
)
from .decorators import safe, safe_with_fallback
from .handlers import build_error_response, register_exception_handlers, setup_exception_handlers
from .mapping import ExceptionMapper
from .schemas import ErrorResponse

__all__ = [
    # Base
    "HttpError",
    "InternalError",
    "INTERNAL_PUBLIC_MESSAGE",
    "NOT_FOUND_MESSAGE",
    # Cause chain
    "iter_causes",
    "format_cause_chain",
    # Mapping
    "ExceptionMapper",
    # Decorators
    "safe",
    "safe_with_fallback",
    # Handlers
    "build_error_response",
    "setup_exception_handlers",
    "register_exception_handlers",
    # Schemas
    "ErrorResponse",
]
