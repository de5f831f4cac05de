"""Error recovery at the dispatch boundary.

Everything a handler raises ends here. ``HTTPError`` becomes that
status; any other exception becomes a 500 plus a logged trace. Nothing
propagates past the dispatcher, so one failing request never takes the
server down.
"""

import logging
import traceback
from http import HTTPStatus

from dingo.context import Context, status_text
from dingo.errors import HTTPError

logger = logging.getLogger("dingo.server")

TRACE_START = "_" * 39 + "ERR" + "_" * 38
TRACE_END = "_" * 80


def format_traceback(exc: BaseException) -> str:
    """Render every frame of *exc*'s traceback as file and line entries."""
    lines = [
        f"Line: {frame.lineno}\nfile: {frame.filename}\nin: {frame.name}\n-"
        for frame in traceback.extract_tb(exc.__traceback__)
    ]
    return "\n".join(lines)


def handle_http_error(ctx: Context, exc: HTTPError) -> None:
    """Emit the status carried by a raised ``HTTPError``."""
    request = ctx.request
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    for name, value in exc.headers:
        ctx.response.headers.set(name, value)
    if exc.detail:
        ctx.http_error(exc.status, exc.detail)
    else:
        ctx.http_error(exc.status)


def handle_internal_error(ctx: Context, exc: Exception) -> None:
    """Turn an unexpected exception into a 500 and log its trace.

    The error hook gets the first chance to write the 500; if the hook
    itself fails, the default body is written instead.
    """
    try:
        ctx.http_error(HTTPStatus.INTERNAL_SERVER_ERROR)
    except Exception:
        logger.exception("error handler failed while handling a 500")
        ctx.http_error(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            status_text(HTTPStatus.INTERNAL_SERVER_ERROR),
        )

    request = ctx.request
    logger.error(
        "%s\n500 %s %s\n%r\n%s\n%s",
        TRACE_START,
        request.method,
        request.path,
        exc,
        format_traceback(exc),
        TRACE_END,
    )
