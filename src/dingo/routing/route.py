"""Route variants and their match/execute operations.

The variant set is closed: a route is a ``StaticRoute``, a
``PatternRoute`` or a ``PositionalRoute``. Operations dispatch over it
with ``match`` rather than through methods, so adding behaviour never
means touching three classes.

``matches`` is pure. Only ``execute`` has side effects (binding
parameters and calling the handler, which writes the response).
"""

import inspect
import re
from dataclasses import dataclass, field
from typing import TypeAlias

from dingo._internal.types import Handler, PositionalHandler
from dingo.context import Context
from dingo.errors import ConfigurationError

# Positional handlers take the Context plus at most this many strings.
MAX_POSITIONAL_ARGS = 4


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        msg = f"Invalid route pattern {pattern!r}: {exc}"
        raise ConfigurationError(msg) from exc


@dataclass(frozen=True, slots=True)
class StaticRoute:
    """Matches one path exactly.

    ``StaticRoute("/blog/", handler)`` matches ``/blog/`` and nothing else.
    """

    path: str
    handler: Handler
    canonical: bool = True


@dataclass(frozen=True, slots=True)
class PatternRoute:
    """Matches a regular expression anywhere in the path.

    The pattern is not anchored for you; write ``^...$`` when you mean
    the whole path. Named groups are bound into ``ctx.params``::

        PatternRoute(r"^/users/(?P<name>[a-z]+)/$", show_user)
    """

    pattern: str
    handler: Handler
    canonical: bool = True
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", _compile(self.pattern))


@dataclass(frozen=True, slots=True)
class PositionalRoute:
    """Matches like ``PatternRoute`` and passes unnamed groups as arguments.

    Each unnamed group, left to right, becomes a ``str`` argument after
    the Context::

        def archive(ctx, year, month): ...

        PositionalRoute(r"^/archive/(\\d{4})/(\\d{2})/$", archive)

    The handler's signature is checked against the group count here, so
    an arity mismatch fails at registration instead of on a request.
    """

    pattern: str
    handler: PositionalHandler
    canonical: bool = True
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)
    positions: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        regex = _compile(self.pattern)
        named = set(regex.groupindex.values())
        positions = tuple(i for i in range(1, regex.groups + 1) if i not in named)

        if len(positions) > MAX_POSITIONAL_ARGS:
            msg = (
                f"Route pattern {self.pattern!r} has {len(positions)} unnamed groups; "
                f"positional handlers take at most {MAX_POSITIONAL_ARGS}."
            )
            raise ConfigurationError(msg)

        try:
            signature = inspect.signature(self.handler)
        except (TypeError, ValueError):
            signature = None  # builtins and C callables: trust the caller
        if signature is not None:
            try:
                signature.bind(None, *([""] * len(positions)))
            except TypeError as exc:
                name = getattr(self.handler, "__qualname__", repr(self.handler))
                msg = (
                    f"Handler {name} cannot be called with a context and "
                    f"{len(positions)} positional argument(s) for route {self.pattern!r}: {exc}"
                )
                raise ConfigurationError(msg) from exc

        object.__setattr__(self, "regex", regex)
        object.__setattr__(self, "positions", positions)


Route: TypeAlias = StaticRoute | PatternRoute | PositionalRoute


def route_path(route: Route) -> str:
    """The path or pattern text the route was built from."""
    match route:
        case StaticRoute(path=path):
            return path
        case PatternRoute(pattern=pattern) | PositionalRoute(pattern=pattern):
            return pattern
    raise TypeError(f"not a route: {route!r}")


def is_canonical(route: Route) -> bool:
    """Whether non-canonical spellings of a matching path redirect."""
    return route.canonical


def matches(route: Route, path: str) -> bool:
    """True if *route* handles *path*."""
    match route:
        case StaticRoute():
            return route.path == path
        case PatternRoute() | PositionalRoute():
            return route.regex.search(path) is not None
    raise TypeError(f"not a route: {route!r}")


def execute(route: Route, ctx: Context, path: str) -> None:
    """Bind parameters extracted from *path* and call the handler."""
    match route:
        case StaticRoute():
            route.handler(ctx)
        case PatternRoute():
            found = route.regex.search(path)
            params = found.groupdict(default="") if found else {}
            route.handler(ctx.with_params(params))
        case PositionalRoute():
            found = route.regex.search(path)
            if found is None:
                route.handler(ctx, *([""] * len(route.positions)))
                return
            args = [found.group(i) or "" for i in route.positions]
            named = found.groupdict(default="")
            route.handler(ctx.with_params(named) if named else ctx, *args)
        case _:
            raise TypeError(f"not a route: {route!r}")
