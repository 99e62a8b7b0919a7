"""Mapping of arbitrary exceptions to HttpError.

Centralized registry used by the `safe` decorator and the FastAPI handlers.
"""

import logging
from collections.abc import Callable
from typing import Any

from .base import HttpError

logger = logging.getLogger(__name__)


class ExceptionMapper:
    """Centralized mapping of technical exceptions to HTTP errors."""

    _handlers: dict[type[BaseException], Callable[[Any, str], HttpError]] = {}

    @classmethod
    def register(
        cls, *exception_types: type[BaseException]
    ) -> Callable[[Callable[[Any, str], HttpError]], Callable[[Any, str], HttpError]]:
        """Register a handler for exception types.

        Usage:
            @ExceptionMapper.register(KeyError)
            def _handle_key_error(exc: KeyError, func_name: str) -> HttpError:
                return HttpError.not_found()
        """

        def decorator(
            handler: Callable[[Any, str], HttpError]
        ) -> Callable[[Any, str], HttpError]:
            for exc_type in exception_types:
                cls._handlers[exc_type] = handler
            return handler

        return decorator

    @classmethod
    def unregister(cls, *exception_types: type[BaseException]) -> None:
        """Remove handlers for exception types, if registered."""
        for exc_type in exception_types:
            cls._handlers.pop(exc_type, None)

    @classmethod
    def map(cls, exc: BaseException, func_name: str = "") -> HttpError:
        """Map an exception to an HttpError.

        Args:
            exc: The exception to map
            func_name: Name of the function where exception occurred (for logging)

        Returns:
            The exception itself if it is already an HttpError, otherwise the
            registered handler's result, or a 500 bug error wrapping it.
        """
        if isinstance(exc, HttpError):
            return exc

        # Direct type match
        handler = cls._handlers.get(type(exc))

        # Try inheritance match if no direct match
        if handler is None:
            for exc_type, exc_handler in cls._handlers.items():
                if isinstance(exc, exc_type):
                    handler = exc_handler
                    break

        if handler:
            return handler(exc, func_name)

        logger.error(f"Unhandled exception in {func_name or '<unknown>'}: {type(exc).__name__}")
        where = f" in {func_name}" if func_name else ""
        return HttpError.bug(f"Unhandled {type(exc).__name__}{where}: {exc}", exc)


# --- Register default handlers ---


@ExceptionMapper.register(NotImplementedError)
def _handle_not_implemented(exc: NotImplementedError, func_name: str) -> HttpError:
    """Declared but unimplemented code path."""
    return HttpError.not_implemented("Not implemented", exc)


@ExceptionMapper.register(TimeoutError, ConnectionError)
def _handle_unavailable(exc: OSError, func_name: str) -> HttpError:
    """Downstream dependency timed out or refused the connection."""
    logger.warning(f"Dependency unavailable in {func_name}: {exc}")
    return HttpError.feature_unavailable("Service temporarily unavailable", exc)
