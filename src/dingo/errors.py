"""Exceptions raised by dingo.

``ConfigurationError`` is a setup-time failure. ``HTTPError`` and its
subclasses are request-time: a handler raises one and the dispatcher
answers with its status.
"""

from dataclasses import dataclass


class DingoError(Exception):
    """Base for all dingo-specific errors."""


class ConfigurationError(DingoError):
    """Raised when a route or the dispatcher is configured incorrectly.

    Raised at registration time (bad regex, handler arity mismatch),
    never while serving a request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(DingoError):
    """An error that maps directly to an HTTP status code.

    Handlers may raise it instead of writing an error themselves; the
    dispatcher catches it and emits ``ctx.http_error(status, detail)``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(status=404, detail=detail)


class RequestEntityTooLarge(HTTPError):  # noqa: N818
    """413 — request body exceeds the configured limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            status=413,
            detail=f"Request body exceeds {limit} bytes",
        )
