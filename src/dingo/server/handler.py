"""Request pipeline — canonicalize, look up, redirect or execute, recover.

``dispatch`` is the synchronous state machine every request goes
through. ``handle_request`` is the thin ASGI adapter around it: it reads
the body, builds the ``Request``, runs ``dispatch`` and sends whatever
the handler wrote.
"""

from collections.abc import Mapping
from http import HTTPStatus

from dingo._internal.asgi import Receive, Scope, Send
from dingo._internal.types import ErrorHook
from dingo.context import Context
from dingo.errors import HTTPError, RequestEntityTooLarge
from dingo.http.request import Request
from dingo.http.response import ResponseWriter
from dingo.routing.canonical import canonicalize
from dingo.routing.route import execute, is_canonical
from dingo.routing.table import RouteTable
from dingo.server.errors import handle_http_error, handle_internal_error
from dingo.server.sender import send_response


def dispatch(
    request: Request,
    response: ResponseWriter,
    *,
    tables: Mapping[str, RouteTable],
    error_handler: ErrorHook | None = None,
) -> Context:
    """Route one request and write exactly one terminal response.

    Lookup uses the canonical form of the path. A canonical route hit
    through a non-canonical path answers ``301`` to the canonical URL
    without calling the handler. No match, or an unknown method, is a
    ``404``. Any exception is recovered here; this function never raises.
    """
    ctx = Context(request, response, error_handler=error_handler)
    try:
        try:
            path, was_canonical = canonicalize(request.path)
            table = tables.get(request.method)
            route = table.lookup(path) if table is not None else None

            if route is None:
                ctx.http_error(HTTPStatus.NOT_FOUND)
            elif is_canonical(route) and not was_canonical:
                ctx.redirect_permanent(request.with_path(path).url)
            else:
                execute(route, ctx, path)
        except HTTPError as exc:
            handle_http_error(ctx, exc)
    except Exception as exc:
        # Also covers an error hook that fails while answering an HTTPError.
        handle_internal_error(ctx, exc)
    return ctx


async def read_body(receive: Receive, *, limit: int) -> bytes:
    """Read the full request body, refusing more than *limit* bytes."""
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunk = message.get("body", b"")
        size += len(chunk)
        if size > limit:
            raise RequestEntityTooLarge(limit)
        if chunk:
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    tables: Mapping[str, RouteTable],
    error_handler: ErrorHook | None = None,
    max_body_size: int,
) -> None:
    """Process a single ASGI HTTP request through the dispatch pipeline."""
    if scope["type"] != "http":
        return

    response = ResponseWriter()
    try:
        body = await read_body(receive, limit=max_body_size)
    except RequestEntityTooLarge as exc:
        ctx = Context(Request.from_asgi(scope), response, error_handler=error_handler)
        try:
            handle_http_error(ctx, exc)
        except Exception as inner:
            handle_internal_error(ctx, inner)
    else:
        dispatch(
            Request.from_asgi(scope, body),
            response,
            tables=tables,
            error_handler=error_handler,
        )

    await send_response(response, send, head=scope["method"] == "HEAD")
