"""The dingo dispatcher.

Mutable during setup (route registration). Frozen when it serves its
first request, after which the route tables are read-only.
"""

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from dingo._internal.asgi import Receive, Scope, Send
from dingo._internal.types import ErrorHook, Handler, PositionalHandler
from dingo.config import DingoConfig
from dingo.context import Context
from dingo.http.request import Request
from dingo.http.response import ResponseWriter
from dingo.routing.route import PatternRoute, PositionalRoute, Route, StaticRoute, route_path
from dingo.routing.router import Router
from dingo.routing.table import RouteTable
from dingo.server.handler import dispatch, handle_request
from dingo.server.listeners import Listener, tcp_listener, tls_listener, unix_listener

logger = logging.getLogger("dingo.routing")

HTTP_METHODS: tuple[str, ...] = (
    "OPTIONS",
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "DELETE",
    "TRACE",
    "CONNECT",
)


class Dispatcher:
    """Routes requests to handlers by method and path.

    Usage::

        app = Dispatcher()
        app.static_route("/", index, "GET")
        app.pattern_route(r"^/users/(?P<name>[a-z]+)/$", show_user, "GET")
        app.serve()

    The error hook, when given, is offered every error response that
    has no explicit message (404s, 500s, bare ``HTTPError``) before the
    default reason-phrase body is written.

    Thread safety:
        Registration is single-threaded setup work. The first request
        freezes the dispatcher under a lock; afterwards the route tables
        are only read, so concurrent requests need no locking.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_tables",
        "config",
        "error_handler",
        "listener",
    )

    def __init__(
        self,
        config: DingoConfig | None = None,
        *,
        listener: Listener | None = None,
        error_handler: ErrorHook | None = None,
    ) -> None:
        self.config: DingoConfig = config or DingoConfig()
        self.listener = listener
        self.error_handler = error_handler
        self._tables: dict[str, RouteTable] = {method: RouteTable() for method in HTTP_METHODS}
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Route registration --

    def route(self, route: Route, *methods: str) -> None:
        """Register *route* for each of *methods*.

        The same route instance is added to every method's table. Unknown
        methods are logged and skipped; the rest are still registered.
        """
        self._check_not_frozen()
        for method in methods:
            table = self._tables.get(method)
            if table is None:
                logger.error("Invalid method: %s, for route: %s", method, route_path(route))
                continue
            table.add(route)

    def static_route(self, path: str, handler: Handler, *methods: str) -> StaticRoute:
        """Register a route matching *path* exactly."""
        route = StaticRoute(path, handler)
        self.route(route, *methods)
        return route

    def pattern_route(self, pattern: str, handler: Handler, *methods: str) -> PatternRoute:
        """Register a regex route binding named groups into ``ctx.params``."""
        route = PatternRoute(pattern, handler)
        self.route(route, *methods)
        return route

    def positional_route(
        self, pattern: str, handler: PositionalHandler, *methods: str
    ) -> PositionalRoute:
        """Register a regex route passing unnamed groups as handler arguments."""
        route = PositionalRoute(pattern, handler)
        self.route(route, *methods)
        return route

    def static_router(self, path: str) -> Router:
        """Fluent builder registering static routes for *path*."""
        return Router(self, path, StaticRoute)

    def pattern_router(self, pattern: str) -> Router:
        """Fluent builder registering pattern routes for *pattern*."""
        return Router(self, pattern, PatternRoute)

    def positional_router(self, pattern: str) -> Router:
        """Fluent builder registering positional routes for *pattern*."""
        return Router(self, pattern, PositionalRoute)

    # -- Lookup --

    @property
    def tables(self) -> Mapping[str, RouteTable]:
        """Route tables keyed by method (read-only view)."""
        return MappingProxyType(self._tables)

    def routes(self, method: str) -> tuple[Route, ...]:
        """Routes registered for *method*, in registration order."""
        table = self._tables.get(method)
        return tuple(table) if table is not None else ()

    def lookup(self, method: str, path: str) -> Route | None:
        """First route for *method* matching *path*, or ``None``."""
        table = self._tables.get(method)
        return table.lookup(path) if table is not None else None

    # -- Dispatch --

    def dispatch(self, request: Request, response: ResponseWriter | None = None) -> Context:
        """Handle *request* synchronously, returning the Context it ran with.

        The response written by the handler (or the redirect/error the
        dispatcher wrote) is on ``ctx.response``.
        """
        self._ensure_frozen()
        return dispatch(
            request,
            response if response is not None else ResponseWriter(),
            tables=self._tables,
            error_handler=self.error_handler,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(
            scope,
            receive,
            send,
            tables=self._tables,
            error_handler=self.error_handler,
            max_body_size=self.config.max_body_size,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge ASGI lifespan events; freezes routes at startup."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self._ensure_frozen()
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Server --

    def acquire_listener(self) -> Listener:
        """Bind the listener described by ``config``.

        A Unix socket path wins over host/port; TLS is used when both a
        certificate and key file are configured.
        """
        config = self.config
        if config.unix_socket:
            return unix_listener(config.unix_socket, config.unix_socket_mode)
        if config.ssl_certfile and config.ssl_keyfile:
            return tls_listener(config.host, config.port, config.ssl_certfile, config.ssl_keyfile)
        return tcp_listener(config.host, config.port)

    def serve(self) -> None:
        """Freeze the routes and serve until the server stops. Blocks."""
        from dingo.server.runner import run_server

        self._ensure_frozen()
        if self.listener is None:
            self.listener = self.acquire_listener()
        run_server(self, self.listener, config=self.config)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Mark the route tables read-only; registration fails from here on."""
        if self._frozen:
            return
        with self._freeze_lock:
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot register routes after the dispatcher has started serving requests. "
                "Register all routes before calling serve()."
            )
            raise RuntimeError(msg)
