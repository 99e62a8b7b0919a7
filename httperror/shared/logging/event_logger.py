"""Event logger for HTTP errors.

Structured log records for errors handled at an HTTP boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from httperror.core.config import get_settings

if TYPE_CHECKING:
    from httperror.shared.errors.base import HttpError


def log_http_error(
    error: HttpError,
    *,
    method: str | None = None,
    path: str | None = None,
) -> None:
    """Log an HttpError handled at the HTTP boundary.

    Server errors (5xx) log at ERROR with the traceback and the full cause
    chain. Client errors (4xx) log at INFO when ERRORS_LOG_CLIENT_ERRORS is
    set, DEBUG otherwise, without traceback.

    Args:
        error: The handled error
        method: Optional HTTP method of the failed request
        path: Optional request path
    """
    from httperror.shared.errors.base import format_cause_chain

    event_logger = logger.bind(
        event="http.error",
        status=error.status,
        code=error.code,
        public_msg=error.public_msg,
        cause_chain=format_cause_chain(error),
        method=method,
        path=path,
    )

    if error.is_server_error:
        event_logger.opt(exception=error).error("HTTP server error")
    elif get_settings().errors.log_client_errors:
        event_logger.info("HTTP client error")
    else:
        event_logger.debug("HTTP client error")
