"""Exception handlers for FastAPI.

Turns errors raised by route handlers into HttpError responses. The body
carries only the public message; the cause chain goes to the log.
"""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from httperror.core.config import get_settings
from httperror.shared.logging.event_logger import log_http_error

from .base import HttpError, InternalError
from .mapping import ExceptionMapper

INVALID_REQUEST_MESSAGE = "Invalid request parameters"


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Summarise validation errors by location and type, leaving out the input."""
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['type']}"
        for error in exc.errors()
    )


def _public_detail(exc: StarletteHTTPException) -> str:
    if isinstance(exc.detail, str):
        return exc.detail
    try:
        return HTTPStatus(exc.status_code).phrase
    except ValueError:
        return "HTTP Error"


def build_error_response(
    error: HttpError, extra_headers: dict[str, str] | None = None
) -> JSONResponse:
    """Render an HttpError as a JSON response.

    Args:
        error: Error to render
        extra_headers: Additional response headers (e.g. WWW-Authenticate)

    Returns:
        JSONResponse with the error's status and public body
    """
    config = get_settings().errors
    content = error.to_dict()
    if not config.include_trace_id:
        content.pop("trace_id", None)

    headers = dict(extra_headers or {})
    if config.error_code_header:
        headers[config.error_code_header] = error.code

    return JSONResponse(status_code=error.status, content=content, headers=headers)


def _respond(
    request: Request, error: HttpError, extra_headers: dict[str, str] | None = None
) -> JSONResponse:
    log_http_error(error, method=request.method, path=request.url.path)
    return build_error_response(error, extra_headers)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers in FastAPI application.

    Registers handlers for:
    - HttpError
    - Validation errors (RequestValidationError) -> 400
    - HTTP errors (StarletteHTTPException)
    - Unexpected exceptions (Exception) -> mapped via ExceptionMapper

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(HttpError)
    async def http_error_handler(request: Request, exc: HttpError) -> JSONResponse:
        return _respond(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report validation failures as 400 without echoing the input back."""
        error = HttpError(
            400,
            INVALID_REQUEST_MESSAGE,
            InternalError(f"Request validation failed: {_describe_validation_errors(exc)}"),
        )
        return _respond(request, error)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTPException raised by FastAPI/Starlette (404 routes, 405, ...)."""
        if 400 <= exc.status_code < 600:
            error = HttpError(exc.status_code, _public_detail(exc))
        else:
            error = HttpError.bug(f"HTTPException raised with status {exc.status_code}", exc)
        return _respond(request, error, exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last line of defense: anything else becomes a mapped HttpError."""
        return _respond(request, ExceptionMapper.map(exc, request.url.path))


# Alias
register_exception_handlers = setup_exception_handlers
