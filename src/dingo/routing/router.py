"""Fluent builder for registering one path under several methods.

Usage::

    dispatcher.static_router("/posts/").get(list_posts).post(create_post)
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from dingo.routing.route import Route

if TYPE_CHECKING:
    from dingo.app import Dispatcher

# Builds a route from (path or pattern, handler)
RouteFactory = Callable[[str, Any], Route]


class Router:
    """Registers a fresh route per call, one method at a time.

    Each verb method builds a new route with the injected *factory* and
    registers it on the dispatcher for that verb only. Returns ``self``
    for chaining.
    """

    __slots__ = ("_dispatcher", "_factory", "path")

    def __init__(self, dispatcher: "Dispatcher", path: str, factory: RouteFactory) -> None:
        self._dispatcher = dispatcher
        self._factory = factory
        self.path = path

    def _add(self, handler: Any, method: str) -> "Router":
        self._dispatcher.route(self._factory(self.path, handler), method)
        return self

    def options(self, handler: Any) -> "Router":
        return self._add(handler, "OPTIONS")

    def get(self, handler: Any) -> "Router":
        return self._add(handler, "GET")

    def head(self, handler: Any) -> "Router":
        return self._add(handler, "HEAD")

    def post(self, handler: Any) -> "Router":
        return self._add(handler, "POST")

    def put(self, handler: Any) -> "Router":
        return self._add(handler, "PUT")

    def delete(self, handler: Any) -> "Router":
        return self._add(handler, "DELETE")

    def trace(self, handler: Any) -> "Router":
        return self._add(handler, "TRACE")

    def connect(self, handler: Any) -> "Router":
        return self._add(handler, "CONNECT")
