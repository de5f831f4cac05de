"""Routing — ordered per-method route tables with first-match lookup.

Routes are registered at startup, before the dispatcher serves its
first request, and are read-only afterwards.
"""

from dingo.routing.canonical import canonicalize
from dingo.routing.route import (
    MAX_POSITIONAL_ARGS,
    PatternRoute,
    PositionalRoute,
    Route,
    StaticRoute,
    execute,
    is_canonical,
    matches,
    route_path,
)
from dingo.routing.router import Router
from dingo.routing.table import RouteTable

__all__ = [
    "MAX_POSITIONAL_ARGS",
    "PatternRoute",
    "PositionalRoute",
    "Route",
    "RouteTable",
    "Router",
    "StaticRoute",
    "canonicalize",
    "execute",
    "is_canonical",
    "matches",
    "route_path",
]
