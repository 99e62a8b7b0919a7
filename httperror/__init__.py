"""
HTTP-facing error type with validated status codes.

    from httperror import HttpError

    raise HttpError.not_found()
    raise HttpError.bug("cache returned None for user 42")

The factories are also available as module-level functions.
"""

from httperror.shared.errors import (
    ErrorResponse,
    ExceptionMapper,
    HttpError,
    InternalError,
    format_cause_chain,
    iter_causes,
    safe,
    safe_with_fallback,
    setup_exception_handlers,
)

bad_request = HttpError.bad_request
bad_login = HttpError.bad_login
not_allowed = HttpError.not_allowed
not_found = HttpError.not_found
bug = HttpError.bug
bad_config = HttpError.bad_config
not_implemented = HttpError.not_implemented
feature_unavailable = HttpError.feature_unavailable

__version__ = "1.0.0"

__all__ = [
    "HttpError",
    "InternalError",
    "ErrorResponse",
    "ExceptionMapper",
    "iter_causes",
    "format_cause_chain",
    "safe",
    "safe_with_fallback",
    "setup_exception_handlers",
    # Factories
    "bad_request",
    "bad_login",
    "not_allowed",
    "not_found",
    "bug",
    "bad_config",
    "not_implemented",
    "feature_unavailable",
]
