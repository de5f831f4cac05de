"""Turns a buffered ResponseWriter into ASGI response messages."""

import logging

from dingo._internal.asgi import Send
from dingo.http.response import ResponseWriter

logger = logging.getLogger("dingo.server")

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"
UNSENDABLE_BODY = b"Internal Server Error"


def _body_allowed(status: int) -> bool:
    # 1xx, 204 and 304 never carry a body (RFC 9110).
    return status >= 200 and status not in (204, 304)


def _encode_header(name: str, value: str) -> tuple[bytes, bytes]:
    if "\r" in value or "\n" in value:
        msg = f"line break in {name} header value"
        raise ValueError(msg)
    return name.lower().encode("latin-1"), value.encode("latin-1")


def _raw_headers(response: ResponseWriter, body: bytes) -> list[tuple[bytes, bytes]]:
    raw_headers: list[tuple[bytes, bytes]] = []
    for name, value in response.headers:
        if name.lower() == "content-length":
            continue
        raw_headers.append(_encode_header(name, value))
    if "content-type" not in response.headers and body:
        raw_headers.append((b"content-type", DEFAULT_CONTENT_TYPE.encode("latin-1")))
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    return raw_headers


async def send_response(response: ResponseWriter, send: Send, *, head: bool = False) -> None:
    """Send the buffered *response* as one start and one body message.

    ``head`` suppresses the body (but not its length) for HEAD requests.
    A header that cannot go on the wire (not latin-1, or carrying a line
    break) turns the whole response into a plain ``500``.
    """
    status = int(response.status)
    body = response.body if _body_allowed(status) else b""

    try:
        raw_headers = _raw_headers(response, body)
    except ValueError:
        # UnicodeEncodeError is a ValueError too.
        logger.exception("cannot send %d response headers", status)
        status = 500
        body = UNSENDABLE_BODY
        raw_headers = [
            (b"content-type", DEFAULT_CONTENT_TYPE.encode("latin-1")),
            (b"content-length", str(len(body)).encode("latin-1")),
        ]

    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )
