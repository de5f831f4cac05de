"""Request content-type checks.

Both checks look at ``Content-Type`` first and fall back to ``Accept``
when the request has no body type, so they answer "is this a JSON
request" for both submissions and fetches.
"""

from dingo.http.request import Request


def _is(request: Request, media_type: str) -> bool:
    value = request.headers.get("content-type") or request.headers.get("accept") or ""
    return value.lower().startswith(media_type)


def is_application_json(request: Request) -> bool:
    """True for ``application/json`` requests."""
    return _is(request, "application/json")


def is_text_html(request: Request) -> bool:
    """True for ``text/html`` requests."""
    return _is(request, "text/html")
