"""Decorators for error handling.

Function wrappers that turn technical errors into HttpError values.
"""

import logging
from collections.abc import Callable
from functools import wraps
from inspect import iscoroutinefunction
from typing import Any, ParamSpec, TypeVar

from .base import HttpError
from .mapping import ExceptionMapper

logger = logging.getLogger(__name__)
P = ParamSpec("P")
T = TypeVar("T")


def _as_http_error(exc: Exception, func: Callable[..., Any]) -> HttpError:
    """Map an exception raised inside `func` to an HttpError.

    `HttpError.bug` wraps the exception in an InternalError, so `__cause__`
    already points at that. The raw exception is linked only when the mapped
    error has no cause of its own.
    """
    error = ExceptionMapper.map(exc, func.__qualname__)
    if error.cause is None:
        error.__cause__ = exc
    return error


def safe(func: Callable[P, T]) -> Callable[P, T]:
    """Decorator for service and repository functions.

    Usage:
        @safe
        async def get_user(user_id: int) -> User:
            ...

    HttpError propagates unchanged. Any other exception is re-raised as the
    HttpError ExceptionMapper picks for it, whose `__cause__` is its `cause`.
    Works with both sync and async functions.
    """
    if iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except HttpError:
                raise
            except Exception as e:
                raise _as_http_error(e, func)

        return async_wrapper  # type: ignore[return-value]

    @wraps(func)
    def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except HttpError:
            raise
        except Exception as e:
            raise _as_http_error(e, func)

    return sync_wrapper  # type: ignore[return-value]


def safe_with_fallback(
    fallback: T,
    log_level: int = logging.WARNING,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator that returns a fallback value on error instead of raising.

    Usage:
        @safe_with_fallback(fallback=[])
        async def get_recommendations() -> list[str]:
            ...

    Args:
        fallback: Value to return when an exception occurs
        log_level: Logging level for caught exceptions
    """

    def _log_fallback(func_name: str, e: Exception) -> None:
        status = e.status if isinstance(e, HttpError) else None
        logger.log(
            log_level,
            f"{type(e).__name__} in {func_name} (status={status}), returning fallback: {e}",
        )

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    _log_fallback(func.__qualname__, e)
                    return fallback

            return async_wrapper  # type: ignore[return-value]

        @wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log_fallback(func.__qualname__, e)
                return fallback

        return sync_wrapper  # type: ignore[return-value]

    return decorator
