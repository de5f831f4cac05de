"""Per-request response sink.

Unlike the request, the response is written incrementally by the
handler. ``ResponseWriter`` buffers the status line, headers and body
until the ASGI adapter sends them.
"""

import logging

from dingo.http.headers import MutableHeaders

logger = logging.getLogger("dingo.server")


class ResponseWriter:
    """Mutable response buffer owned by exactly one request.

    The first ``write_header`` call fixes the status. Writing body bytes
    before any status was written implies ``200 OK``. Later
    ``write_header`` calls are logged as superfluous and ignored, so a
    response always carries exactly one status line.
    """

    __slots__ = ("_chunks", "_status", "headers")

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self._status: int | None = None
        self._chunks: list[bytes] = []

    def write_header(self, status: int) -> None:
        """Set the response status; only the first call has an effect."""
        if self._status is not None:
            logger.warning(
                "superfluous write_header(%d), status already %d", status, self._status
            )
            return
        self._status = status

    def write(self, data: str | bytes) -> int:
        """Append *data* to the body, returning the number of bytes written."""
        if self._status is None:
            self._status = 200
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        self._chunks.append(chunk)
        return len(chunk)

    @property
    def written(self) -> bool:
        """True once a status line has been committed."""
        return self._status is not None

    @property
    def status(self) -> int:
        """The committed status, ``200`` if nothing was written yet."""
        return self._status if self._status is not None else 200

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def __repr__(self) -> str:
        return f"<ResponseWriter status={self.status} bytes={len(self.body)}>"
