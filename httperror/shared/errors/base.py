"""HTTP-facing error type.

A single exception carrying a validated status code, a public-safe message
and an optional cause kept for diagnostics.
"""

from collections.abc import Iterator
from http import HTTPStatus
from typing import Any

from httperror.shared.context import get_trace_id

from .schemas import ErrorResponse

INTERNAL_PUBLIC_MESSAGE = "Internal service error"
NOT_FOUND_MESSAGE = "No such resource"


class InternalError(Exception):
    """Internal detail attached to a bug error. Never shown to clients."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.__cause__ = cause

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (self.message, self.cause))


class HttpError(Exception):
    """Error raised when an HTTP service fails a request.

    The status is checked on construction: anything outside 400..599 is a
    misuse of the type and raises a 500 bug error instead.

    Attributes:
        status: HTTP status code (400 <= status < 600)
        public_msg: Message safe to return to the client
        cause: Underlying error, for logs only
    """

    def __init__(
        self,
        status: int,
        public_msg: str,
        cause: BaseException | None = None,
    ) -> None:
        if isinstance(status, bool) or not isinstance(status, int):
            raise HttpError.bug("HTTP error status codes must be integers")
        if status < 400:
            raise HttpError.bug("HTTP error status codes must be 400 or greater")
        if status >= 600:
            raise HttpError.bug("HTTP error status codes must be less than 600")

        super().__init__(public_msg)
        self._status = int(status)
        self._public_msg = public_msg
        self._cause = cause
        self.__cause__ = cause

    @property
    def status(self) -> int:
        return self._status

    @property
    def public_msg(self) -> str:
        return self._public_msg

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def code(self) -> str:
        """Machine-readable code derived from the status (e.g. NOT_FOUND)."""
        try:
            return HTTPStatus(self._status).name
        except ValueError:
            return f"HTTP_{self._status}"

    @property
    def title(self) -> str:
        """Reason phrase for the status."""
        try:
            return HTTPStatus(self._status).phrase
        except ValueError:
            return "HTTP Error"

    @property
    def is_client_error(self) -> bool:
        return self._status < 500

    @property
    def is_server_error(self) -> bool:
        return self._status >= 500

    def __str__(self) -> str:
        return self._public_msg

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._status!r}, {self._public_msg!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (self._status, self._public_msg, self._cause))

    def to_response(self) -> ErrorResponse:
        """Serialize to the public response model. The cause is never included."""
        return ErrorResponse(
            error=self.code,
            message=self._public_msg,
            status=self._status,
            trace_id=get_trace_id(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for a JSON response body."""
        return self.to_response().model_dump()

    # ==================== Client errors ====================

    @classmethod
    def bad_request(cls, public_msg: str) -> "HttpError":
        """400: a client supplied parameter is missing or invalid."""
        return cls(HTTPStatus.BAD_REQUEST, public_msg)

    @classmethod
    def bad_login(cls, public_msg: str) -> "HttpError":
        """401: the client is not authenticated or its credentials are invalid."""
        return cls(HTTPStatus.UNAUTHORIZED, public_msg)

    @classmethod
    def not_allowed(cls, public_msg: str) -> "HttpError":
        """403: the client is not authorised to access the resource."""
        return cls(HTTPStatus.FORBIDDEN, public_msg)

    @classmethod
    def not_found(cls, public_msg: str = NOT_FOUND_MESSAGE) -> "HttpError":
        """404: no such resource."""
        return cls(HTTPStatus.NOT_FOUND, public_msg)

    # ==================== Service errors ====================

    @classmethod
    def bug(cls, internal_msg: str, cause: BaseException | None = None) -> "HttpError":
        """500: a bug was detected.

        The public message is fixed so internal detail never reaches the
        client. `internal_msg` and `cause` are kept on an InternalError
        linked as this error's cause.

        Args:
            internal_msg: Detail for operators
            cause: Optional underlying error

        Returns:
            HttpError with status 500
        """
        return cls(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            INTERNAL_PUBLIC_MESSAGE,
            InternalError(internal_msg, cause),
        )

    @classmethod
    def bad_config(cls, public_msg: str, cause: BaseException | None = None) -> "HttpError":
        """500: the service configuration is invalid."""
        return cls(HTTPStatus.INTERNAL_SERVER_ERROR, public_msg, cause)

    @classmethod
    def not_implemented(
        cls, public_msg: str, cause: BaseException | None = None
    ) -> "HttpError":
        """501: the feature is declared but not implemented."""
        return cls(HTTPStatus.NOT_IMPLEMENTED, public_msg, cause)

    @classmethod
    def feature_unavailable(
        cls, public_msg: str, cause: BaseException | None = None
    ) -> "HttpError":
        """503: the feature is unavailable due to a known issue or maintenance."""
        return cls(HTTPStatus.SERVICE_UNAVAILABLE, public_msg, cause)


def iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Yield every error below `exc` in its cause chain.

    Follows the explicit `cause` attribute when an error has one,
    `__cause__` otherwise. Each error is yielded at most once.
    """
    seen = {id(exc)}
    current = _next_cause(exc)
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = _next_cause(current)


def format_cause_chain(exc: BaseException) -> list[str]:
    """Describe `exc` and its causes as "Type: message" lines, outermost first."""
    return [_describe(item) for item in (exc, *iter_causes(exc))]


def _next_cause(exc: BaseException) -> BaseException | None:
    if isinstance(exc, (HttpError, InternalError)):
        return exc.cause
    return exc.__cause__


def _describe(exc: BaseException) -> str:
    if isinstance(exc, HttpError):
        return f"{type(exc).__name__}: {exc.status} {exc.public_msg}"
    return f"{type(exc).__name__}: {exc}"
