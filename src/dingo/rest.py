"""JSON handlers.

A REST handler returns ``(status, obj)`` instead of writing the
response itself; ``wrap`` turns it into a regular dingo handler that
encodes ``obj`` as JSON, or as JSONP when the client asked for a
``callback``::

    def show_user(ctx):
        return 200, {"name": ctx.params["name"]}

    app.pattern_route(r"^/api/users/(?P<name>\\w+)/$", rest.wrap(show_user), "GET")
"""

import json
import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from dingo._internal.types import Handler
from dingo.context import Context
from dingo.errors import RequestEntityTooLarge

logger = logging.getLogger("dingo.rest")

RestHandler = Callable[[Context], tuple[int, Any]]

MAX_MESSAGE_SIZE = 1 << 20

JSON = "application/json"
JAVASCRIPT = "application/javascript"
XML_TYPES = frozenset({"application/xml", "text/xml"})


def _media_type(accept: str) -> str:
    return accept.split(",", 1)[0].split(";", 1)[0].strip().lower()


def _pad(data: bytes, callback: str) -> bytes:
    return callback.encode("utf-8") + b"(" + data + b")"


def json_handler(fn: RestHandler, ctx: Context) -> None:
    """Call *fn* and write its result as JSON or JSONP.

    A ``callback`` query parameter switches to JSONP unless the client
    explicitly accepts ``application/json``. A client that asks for XML
    first gets ``406`` without *fn* being called; no XML encoder is
    offered. ``Content-Type`` is set before *fn* runs, so *fn* may
    replace it. A ``None`` result with no callback writes the status only.
    """
    media_type = _media_type(ctx.request.headers.get("accept", ""))
    if media_type in XML_TYPES:
        ctx.http_error(HTTPStatus.NOT_ACCEPTABLE)
        return

    callback = ""
    content_type = JSON
    if media_type != JSON:
        callback = ctx.request.arg("callback")
        if callback:
            content_type = JAVASCRIPT
    ctx.response.headers.set("Content-Type", content_type)

    status, obj = fn(ctx)
    if obj is None and not callback:
        ctx.response.write_header(status)
        return

    try:
        data = json.dumps(obj).encode("utf-8")
    except (TypeError, ValueError):
        logger.exception("cannot encode %s response for %s", content_type, ctx.request.path)
        ctx.response.headers.delete("Content-Type")
        ctx.http_error(HTTPStatus.INTERNAL_SERVER_ERROR)
        return

    if callback:
        data = _pad(data, callback)
    ctx.response.write_header(status)
    ctx.response.write(data)


def wrap(fn: RestHandler) -> Handler:
    """Adapt a REST handler into a dingo handler."""

    def handler(ctx: Context) -> None:
        json_handler(fn, ctx)

    handler.__name__ = getattr(fn, "__name__", "rest_handler")
    handler.__qualname__ = getattr(fn, "__qualname__", handler.__name__)
    return handler


def read_body(ctx: Context, max_size: int = MAX_MESSAGE_SIZE) -> bytes:
    """The request body for POST and PUT, ``b""`` for other methods.

    Raises ``RequestEntityTooLarge`` when the body exceeds *max_size*.
    """
    if ctx.request.method not in ("POST", "PUT"):
        return b""
    body = ctx.request.body
    if len(body) > max_size:
        raise RequestEntityTooLarge(max_size)
    return body


def json_data(ctx: Context, max_size: int = MAX_MESSAGE_SIZE) -> Any:
    """Decode the request body as JSON (``None`` when there is no body)."""
    body = read_body(ctx, max_size)
    if not body:
        return None
    return json.loads(body)


def json_data_map(ctx: Context, max_size: int = MAX_MESSAGE_SIZE) -> dict[str, Any]:
    """Decode the request body as a JSON object.

    Raises ``ValueError`` when the body is valid JSON but not an object.
    """
    data = json_data(ctx, max_size)
    if not isinstance(data, dict):
        msg = f"failed to convert JSON to an object: {data!r}"
        raise ValueError(msg)
    return data
