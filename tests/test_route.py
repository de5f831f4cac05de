"""Tests for dingo.routing.route — route variants, matching and execution."""

import pytest

from dingo.context import Context
from dingo.errors import ConfigurationError
from dingo.http.request import Request
from dingo.http.response import ResponseWriter
from dingo.routing.route import (
    MAX_POSITIONAL_ARGS,
    PatternRoute,
    PositionalRoute,
    StaticRoute,
    execute,
    is_canonical,
    matches,
    route_path,
)


def _ctx(path: str = "/") -> Context:
    return Context(Request("GET", path), ResponseWriter())


def _noop(ctx: Context) -> None:
    pass


class TestStaticRoute:
    def test_exact_match(self) -> None:
        route = StaticRoute("/blog/", _noop)
        assert matches(route, "/blog/")

    def test_no_match_without_trailing_slash(self) -> None:
        route = StaticRoute("/blog/", _noop)
        assert not matches(route, "/blog")

    def test_no_prefix_match(self) -> None:
        route = StaticRoute("/blog/", _noop)
        assert not matches(route, "/blog/posts/")

    def test_execute_calls_handler(self) -> None:
        calls: list[Context] = []
        route = StaticRoute("/", calls.append)
        ctx = _ctx()
        execute(route, ctx, "/")
        assert calls == [ctx]

    def test_route_path(self) -> None:
        assert route_path(StaticRoute("/about/", _noop)) == "/about/"

    def test_canonical_by_default(self) -> None:
        assert is_canonical(StaticRoute("/", _noop))
        assert not is_canonical(StaticRoute("/", _noop, canonical=False))


class TestPatternRoute:
    def test_search_is_not_anchored(self) -> None:
        route = PatternRoute(r"/users/", _noop)
        assert matches(route, "/api/users/alice/")

    def test_anchored_pattern(self) -> None:
        route = PatternRoute(r"^/users/$", _noop)
        assert matches(route, "/users/")
        assert not matches(route, "/api/users/")

    def test_named_groups_bound_to_params(self) -> None:
        seen: dict[str, str] = {}

        def handler(ctx: Context) -> None:
            seen.update(ctx.params)

        route = PatternRoute(r"^/(?P<id>[0-9]+)/$", handler)
        execute(route, _ctx("/42/"), "/42/")
        assert seen == {"id": "42"}

    def test_unmatched_optional_group_is_empty(self) -> None:
        seen: dict[str, str] = {}

        def handler(ctx: Context) -> None:
            seen.update(ctx.params)

        route = PatternRoute(r"^/posts/(?P<slug>[a-z]+)?/?$", handler)
        execute(route, _ctx("/posts/"), "/posts/")
        assert seen == {"slug": ""}

    def test_params_do_not_leak_into_original_context(self) -> None:
        route = PatternRoute(r"^/(?P<id>\d+)/$", _noop)
        ctx = _ctx("/7/")
        execute(route, ctx, "/7/")
        assert ctx.params == {}

    def test_invalid_regex(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid route pattern"):
            PatternRoute(r"^/(unclosed/$", _noop)

    def test_route_path_is_source_text(self) -> None:
        assert route_path(PatternRoute(r"^/(?P<id>\d+)/$", _noop)) == r"^/(?P<id>\d+)/$"


class TestPositionalRoute:
    def test_arguments_in_order(self) -> None:
        calls: list[tuple[str, str]] = []

        def handler(ctx: Context, first: str, second: str) -> None:
            calls.append((first, second))

        route = PositionalRoute(r"^/(.*)/(.*)/$", handler)
        execute(route, _ctx("/a/b/"), "/a/b/")
        assert calls == [("a", "b")]

    def test_no_groups(self) -> None:
        calls: list[Context] = []
        route = PositionalRoute(r"^/ping/$", calls.append)
        execute(route, _ctx("/ping/"), "/ping/")
        assert len(calls) == 1

    def test_unmatched_optional_group_is_empty(self) -> None:
        calls: list[str] = []

        def handler(ctx: Context, page: str) -> None:
            calls.append(page)

        route = PositionalRoute(r"^/list/(\d+)?/?$", handler)
        execute(route, _ctx("/list/"), "/list/")
        assert calls == [""]

    def test_named_groups_go_to_params(self) -> None:
        calls: list[tuple[str, dict[str, str]]] = []

        def handler(ctx: Context, year: str) -> None:
            calls.append((year, dict(ctx.params)))

        route = PositionalRoute(r"^/(?P<section>[a-z]+)/(\d{4})/$", handler)
        execute(route, _ctx("/news/2024/"), "/news/2024/")
        assert calls == [("2024", {"section": "news"})]

    def test_max_arguments(self) -> None:
        def handler(ctx: Context, a: str, b: str, c: str, d: str) -> None:
            ctx.write(a + b + c + d)

        route = PositionalRoute(r"^/(.)(.)(.)(.)/$", handler)
        ctx = _ctx("/wxyz/")
        execute(route, ctx, "/wxyz/")
        assert ctx.response.text == "wxyz"

    def test_too_many_groups(self) -> None:
        def handler(ctx: Context, *args: str) -> None:
            pass

        pattern = "^/" + "(.)" * (MAX_POSITIONAL_ARGS + 1) + "/$"
        with pytest.raises(ConfigurationError, match="at most"):
            PositionalRoute(pattern, handler)

    def test_arity_mismatch_fails_at_construction(self) -> None:
        def handler(ctx: Context) -> None:
            pass

        with pytest.raises(ConfigurationError, match="cannot be called"):
            PositionalRoute(r"^/(\d+)/$", handler)

    def test_too_few_groups_for_handler(self) -> None:
        def handler(ctx: Context, a: str, b: str) -> None:
            pass

        with pytest.raises(ConfigurationError):
            PositionalRoute(r"^/(\d+)/$", handler)

    def test_varargs_handler_accepted(self) -> None:
        def handler(ctx: Context, *parts: str) -> None:
            ctx.write("-".join(parts))

        route = PositionalRoute(r"^/(\w+)/(\w+)/$", handler)
        ctx = _ctx("/x/y/")
        execute(route, ctx, "/x/y/")
        assert ctx.response.text == "x-y"

    def test_positions_exclude_named_groups(self) -> None:
        def handler(ctx: Context, a: str) -> None:
            pass

        route = PositionalRoute(r"^/(?P<name>\w+)/(\d+)/$", handler)
        assert route.positions == (2,)


class TestNotARoute:
    def test_route_path_rejects_other_objects(self) -> None:
        with pytest.raises(TypeError):
            route_path("/not/a/route/")  # type: ignore[arg-type]

    def test_matches_rejects_other_objects(self) -> None:
        with pytest.raises(TypeError):
            matches(object(), "/")  # type: ignore[arg-type]
