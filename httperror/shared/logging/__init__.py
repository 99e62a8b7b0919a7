"""Shared logging.

Loguru-based logging with:
- JSON lines for production, colored console for development
- Trace id correlation from the request context
- Automatic sensitive field redaction
"""

from loguru import logger

from .config import (
    InterceptHandler,
    configure_third_party_loggers,
    get_logger,
    setup_logger,
)
from .event_logger import log_http_error

__all__ = [
    "logger",
    "setup_logger",
    "get_logger",
    "InterceptHandler",
    "configure_third_party_loggers",
    "log_http_error",
]
