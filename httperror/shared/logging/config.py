"""Logger configuration.

Loguru-based logging for applications that raise HttpError:
- Loguru for application logs (console format or JSON lines)
- Intercept handler for stdlib logging (uvicorn, fastapi, httperror.shared.errors)
- Trace id from the request context on every record
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import Any

from loguru import logger

from httperror.core.config import get_settings
from httperror.shared.context import get_request_id, get_trace_id

# Placeholder when no trace id is set
NO_TRACE = "-"

SENSITIVE_PATTERNS = re.compile(
    r"(password|token|secret|key|auth|credential|api_key|access_token|refresh_token)",
    re.IGNORECASE,
)

# Fields the JSON sink writes itself; extras with these names are dropped
RESERVED_JSON_KEYS = frozenset(
    {
        "timestamp",
        "level",
        "message",
        "module",
        "function",
        "line",
        "trace_id",
        "service",
        "exception",
        "name",
    }
)

THIRD_PARTY_LOGGERS = (
    "",  # root logger
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "fastapi",
    "httperror",
)


class InterceptHandler(logging.Handler):
    """Handler redirecting standard logging records to Loguru.

    uvicorn, fastapi and the error helpers in this package use the
    standard logging module; this keeps every record in one Loguru stream.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = str(record.levelno)

        # Walk out of the logging module so Loguru reports the caller
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _context_patcher(record: dict[str, Any]) -> None:
    """Add trace and request ids from the context to every record."""
    record["extra"].setdefault("trace_id", get_trace_id() or NO_TRACE)
    request_id = get_request_id()
    if request_id:
        record["extra"].setdefault("request_id", request_id)


def _redact_sensitive_value(key: str, value: Any) -> Any:
    if SENSITIVE_PATTERNS.search(key):
        return "***REDACTED***"
    return value


def _create_json_sink(service_name: str, stream: Any = None) -> Any:
    """Create a JSON-lines sink.

    Args:
        service_name: Name of the service for log entries
        stream: Writable text stream, stdout when omitted

    Returns:
        Sink function for Loguru
    """

    def json_sink(message: Any) -> None:
        record = message.record
        log_entry: dict[str, Any] = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "module": record["extra"].get("name", record["name"]),
            "function": record["function"],
            "line": record["line"],
            "trace_id": record["extra"].get("trace_id", NO_TRACE),
            "service": service_name,
        }

        for key, value in record["extra"].items():
            if key not in RESERVED_JSON_KEYS:
                log_entry[key] = _redact_sensitive_value(key, value)

        if record["exception"]:
            exc = record["exception"]
            log_entry["exception"] = {
                "type": exc.type.__name__ if exc.type else None,
                "value": str(exc.value) if exc.value else None,
            }

        out = stream or sys.stdout
        out.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")
        out.flush()

    return json_sink


def setup_logger() -> None:
    """Configure Loguru logger.

    Sets up:
    - Console handler with colored output, or JSON lines when LOG_FORMAT=json
    - Trace id correlation from the request context
    - Third-party library log interception
    """
    settings = get_settings()

    logger.remove()
    logger.configure(patcher=_context_patcher)

    is_json = settings.logging.format.lower() == "json"
    level = settings.logging.level.upper()

    if is_json:
        logger.add(
            _create_json_sink(settings.app.name),
            level=level,
            backtrace=True,
            diagnose=False,
        )
    else:
        dev_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level> | "
            "<dim>trace_id={extra[trace_id]}</dim>"
        )
        logger.add(
            sys.stdout,
            format=dev_format,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=settings.app.debug,
        )

    configure_third_party_loggers()

    logger.info(
        "Logger configured",
        log_level=level,
        log_format="json" if is_json else "console",
    )


def configure_third_party_loggers() -> None:
    """Route stdlib loggers through InterceptHandler.

    uvicorn.access is kept at WARNING in JSON mode to avoid one line per request.
    """
    is_json = get_settings().logging.format.lower() == "json"

    logging.root.handlers = []
    logging.root.setLevel(logging.INFO)

    for logger_name in THIRD_PARTY_LOGGERS:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers.clear()
        logging_logger.addHandler(InterceptHandler())
        logging_logger.propagate = False

        if logger_name == "uvicorn.access" and is_json:
            logging_logger.setLevel(logging.WARNING)
        else:
            logging_logger.setLevel(logging.INFO)

    logger.debug("Third-party loggers configured")


def get_logger(name: str):
    """Get a logger with the specified name.

    Args:
        name: Logger name (usually __name__ of the module)

    Returns:
        Loguru logger with bound name
    """
    return logger.bind(name=name)
