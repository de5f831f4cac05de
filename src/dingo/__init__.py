"""Dingo — a small HTTP routing framework with template views.

Matches requests by method and path (exact, regex with named groups, or
regex with positional arguments), redirects to canonical paths, and
turns handler failures into 500 responses instead of crashes.

Basic usage::

    from dingo import Dispatcher

    app = Dispatcher()

    def index(ctx):
        ctx.write("Hello, World!")

    app.static_route("/", index, "GET", "HEAD")
    app.serve()
"""

__version__ = "0.1.15"
__all__ = [
    "HTTP_METHODS",
    "ConfigurationError",
    "Context",
    "DingoConfig",
    "DingoError",
    "Dispatcher",
    "HTTPError",
    "NotFound",
    "PatternRoute",
    "PositionalRoute",
    "Request",
    "ResponseWriter",
    "Router",
    "StaticRoute",
    "canonicalize",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import dingo`` fast while providing a clean top-level API.
    """
    if name in ("Dispatcher", "HTTP_METHODS"):
        from dingo import app as _app

        return getattr(_app, name)

    if name == "DingoConfig":
        from dingo.config import DingoConfig

        return DingoConfig

    if name == "Context":
        from dingo.context import Context

        return Context

    if name == "Request":
        from dingo.http.request import Request

        return Request

    if name == "ResponseWriter":
        from dingo.http.response import ResponseWriter

        return ResponseWriter

    if name in ("PatternRoute", "PositionalRoute", "Router", "StaticRoute", "canonicalize"):
        from dingo import routing as _routing

        return getattr(_routing, name)

    if name in ("ConfigurationError", "DingoError", "HTTPError", "NotFound"):
        from dingo import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
