"""Per-request handler context.

A ``Context`` bundles the inbound request, the response sink, and the
parameters a route extracted from the path. It is created by the
dispatcher for every request and discarded when the handler returns.

Contexts are frozen: a route that binds parameters hands the handler a
new Context built with ``with_params``. The response writer is the only
mutable part, and it belongs to this one request.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from http import HTTPStatus

from dingo._internal.types import ErrorHook
from dingo.http.request import Request
from dingo.http.response import ResponseWriter

MIN_STATUS = 100
MAX_STATUS = 505


def status_text(status: int) -> str:
    """Reason phrase for *status*, empty for unassigned codes."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


@dataclass(frozen=True, slots=True)
class Context:
    """The request, its response sink, and route parameters."""

    request: Request
    response: ResponseWriter
    params: Mapping[str, str] = field(default_factory=dict)
    error_handler: ErrorHook | None = field(default=None, repr=False, compare=False)

    def with_params(self, params: Mapping[str, str]) -> "Context":
        """Return a new Context carrying *params*."""
        return replace(self, params=params)

    def write(self, data: str | bytes) -> int:
        """Write *data* to the response body."""
        return self.response.write(data)

    def redirect(self, url: str) -> None:
        """Issue a ``302 Found`` redirect to *url*."""
        self._redirect(url, HTTPStatus.FOUND)

    def redirect_permanent(self, url: str) -> None:
        """Issue a ``301 Moved Permanently`` redirect to *url*."""
        self._redirect(url, HTTPStatus.MOVED_PERMANENTLY)

    def _redirect(self, url: str, status: int) -> None:
        self.response.headers.set("Location", url)
        self.response.write_header(status)

    def http_error(self, status: int, *messages: str) -> None:
        """Write an error response.

        When the dispatcher has an error hook and no *messages* were
        given, the hook is offered the error first; if it returns true it
        has written the response and nothing else happens.

        Out-of-range statuses become 500. With no *messages* the body is
        the status reason phrase, otherwise the messages concatenated.
        Each call writes a status line, so call this once per request.
        """
        if self.error_handler is not None and not messages:
            if self.error_handler(self, status):
                return

        if status < MIN_STATUS or status > MAX_STATUS:
            status = HTTPStatus.INTERNAL_SERVER_ERROR

        self.response.write_header(status)
        if not messages:
            self.response.write(status_text(status))
        else:
            for message in messages:
                self.response.write(message)
