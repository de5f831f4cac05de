"""The inbound request as handlers see it.

Fully buffered: the ASGI adapter reads the whole body before dispatch,
so nothing on a ``Request`` is awaitable.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qs, quote

from dingo.http.headers import Headers

# Characters left as-is when a path goes back out in a URL (RFC 3986 pchar).
PATH_SAFE = "/:@!$&'()*+,;=-._~"


def _address(value: Any) -> tuple[str, int] | None:
    if not value:
        return None
    host, port = value
    return (host, port)


@dataclass(frozen=True, slots=True)
class Request:
    """Method, path, headers and body of one request.

    ``path`` is the decoded URL path exactly as the client sent it. The
    dispatcher canonicalizes a copy for lookup; a redirect is built with
    ``with_path`` rather than by rewriting this one.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query_string: bytes = b""
    body: bytes = b""
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], body: bytes = b"") -> Request:
        """Build a request from an ASGI ``http`` scope and its read body."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string") or b"",
            body=body,
            http_version=scope.get("http_version") or "1.1",
            server=_address(scope.get("server")),
            client=_address(scope.get("client")),
        )

    @property
    def query(self) -> dict[str, list[str]]:
        """Every query string value, by name. Blank values are kept."""
        return parse_qs(self.query_string.decode("latin-1"), keep_blank_values=True)

    def arg(self, name: str, default: str = "") -> str:
        """First query string value for *name*, or *default*."""
        values = self.query.get(name)
        return values[0] if values else default

    @property
    def url(self) -> str:
        """Percent-encoded path plus ``?query`` when there is one.

        Safe for a ``Location`` header: non-ASCII characters, spaces and
        control characters in the decoded path come out escaped.
        """
        path = quote(self.path, safe=PATH_SAFE)
        if not self.query_string:
            return path
        return path + "?" + self.query_string.decode("latin-1")

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """``Content-Length`` as an int; ``None`` if absent or malformed."""
        raw = self.headers.get("content-length")
        if raw is None or not raw.strip().isdigit():
            return None
        return int(raw)

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding)

    def json(self) -> Any:
        """Decode the body as JSON; raises ``ValueError`` on bad input."""
        return json.loads(self.body)

    def form(self) -> dict[str, list[str]]:
        """Decode an ``application/x-www-form-urlencoded`` body."""
        return parse_qs(self.body.decode("latin-1"), keep_blank_values=True)

    def with_path(self, path: str) -> Request:
        """Copy of this request at *path*, same query string."""
        return replace(self, path=path)
