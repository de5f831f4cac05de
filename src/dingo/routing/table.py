"""Ordered route table for one HTTP method."""

from collections.abc import Iterator

from dingo.routing.route import Route, matches


class RouteTable:
    """Routes for one HTTP method, in registration order.

    Lookup is a linear scan and the first matching route wins, so
    register specific patterns before general ones that would shadow
    them. Safe to read from many requests at once; not safe to add to
    while serving.
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[Route] = []

    def add(self, route: Route) -> None:
        """Append *route* to the table."""
        self._routes.append(route)

    def lookup(self, path: str) -> Route | None:
        """Return the first route matching *path*, or ``None``."""
        for route in self._routes:
            if matches(route, path):
                return route
        return None

    def __iter__(self) -> Iterator[Route]:
        return iter(tuple(self._routes))

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"<RouteTable routes={len(self._routes)}>"
