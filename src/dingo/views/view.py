"""Template views: cached, reloadable, composable kida templates.

A view owns one template source. Views compose: a view that *extends*
another (``{% extends %}``, ``{% include %}``, imported macros) is
compiled together with that view's source, and registers itself as an
*association* of it so that reloading the base reloads every view
built on top of it.

Views are registered in a ``ViewRegistry``, which owns the kida
environment settings (autoescape, template helpers) shared by all of
its views.
"""

import logging
from collections.abc import Callable, Iterator, Mapping
from http import HTTPStatus
from pathlib import Path
from typing import Any

from kida import DictLoader, Environment

from dingo.config import DingoConfig
from dingo.context import Context
from dingo.errors import DingoError

logger = logging.getLogger("dingo.views")

EMPTY_TEMPLATE = (
    "<!doctype html><head><title>Template Doesn't Exist</title></head>"
    "<body>This template doesn't exist, or hasn't been created yet.</body></html>"
)


def equals(x: Any, y: Any) -> bool:
    return x == y


def empty(value: Any) -> bool:
    """True for ``None`` and for empty strings and collections."""
    if value is None:
        return True
    try:
        return len(value) == 0
    except TypeError:
        return False


def join(values: Any, separator: str = "") -> str:
    return separator.join(str(v) for v in values)


BUILTIN_HELPERS: dict[str, Callable[..., Any]] = {
    "equals": equals,
    "empty": empty,
    "join": join,
}


class ViewRegistry:
    """Named views plus the kida settings they compile with.

    Usage::

        views = ViewRegistry(template_dir="templates")
        FileView("base.html", views)
        FileView("index.html", views).extends("base.html")

        def index(ctx):
            views.execute(ctx, "index.html", {"title": "Home"})
    """

    __slots__ = ("_helpers", "_views", "autoescape", "template_dir")

    def __init__(self, *, template_dir: str | Path = "templates", autoescape: bool = True) -> None:
        self.template_dir = Path(template_dir)
        self.autoescape = autoescape
        self._views: dict[str, View] = {}
        self._helpers: dict[str, Callable[..., Any]] = dict(BUILTIN_HELPERS)

    @classmethod
    def from_config(cls, config: DingoConfig) -> "ViewRegistry":
        return cls(template_dir=config.template_dir, autoescape=config.autoescape)

    # -- Collection --

    def add(self, view: "View") -> None:
        """Register *view* under its name, replacing any previous one."""
        self._views[view.name] = view

    def get(self, name: str) -> "View | None":
        return self._views.get(name)

    def __getitem__(self, name: str) -> "View":
        return self._views[name]

    def __contains__(self, name: object) -> bool:
        return name in self._views

    def __iter__(self) -> Iterator["View"]:
        return iter(tuple(self._views.values()))

    def __len__(self) -> int:
        return len(self._views)

    # -- Template environment --

    def add_function(self, name: str, func: Callable[..., Any]) -> None:
        """Expose *func* to templates as both a filter and a global.

        Only affects views compiled after the call; reload existing views
        to pick it up.
        """
        self._helpers[name] = func

    def environment(self, sources: Mapping[str, str]) -> Environment:
        """A kida environment that can load exactly *sources*."""
        env = Environment(loader=DictLoader(dict(sources)), autoescape=self.autoescape)
        env.update_filters(self._helpers)
        for name, func in self._helpers.items():
            env.add_global(name, func)
        return env

    def validate(self, source: str) -> None:
        """Compile *source*, raising kida's syntax error if it is invalid."""
        self.environment({}).from_string(source)

    # -- Rendering --

    def execute(self, ctx: Context, name: str, context: Mapping[str, Any] | None = None) -> None:
        """Render view *name* into the response.

        Missing view is a 404. A view that fails to load or render is
        logged and answered with a 500.
        """
        view = self.get(name)
        if view is None:
            ctx.http_error(HTTPStatus.NOT_FOUND)
            return
        try:
            view.execute(ctx, context)
        except Exception:
            logger.exception("template execution error in view %r", name)
            ctx.http_error(HTTPStatus.INTERNAL_SERVER_ERROR)


class View:
    """Base view: caching, staleness, composition and rendering.

    Subclasses provide ``load`` (read the current source) and ``save``
    (persist a new source).
    """

    def __init__(self, name: str, registry: ViewRegistry) -> None:
        self.name = name
        self.registry = registry
        self.stale = True
        self.associated: list[str] = []
        self.extended: list[str] = []
        self._source = ""
        self._template: Any = None
        registry.add(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} stale={self.stale}>"

    # -- Storage (subclass hooks) --

    def load(self) -> str:
        """Read the current template source."""
        raise NotImplementedError

    def save(self, source: str) -> None:
        """Validate and persist a new template source, then reload."""
        raise NotImplementedError

    # -- Composition --

    def associate(self, *names: str) -> None:
        """Mark views *names* as built on this one (reloaded with it).

        Unknown names are skipped.
        """
        for name in names:
            if name in self.registry and name not in self.associated:
                self.associated.append(name)

    def associations(self) -> list["View"]:
        return [self.registry[name] for name in self.associated]

    def extends(self, name: str) -> "View":
        """Compile this view together with view *name*.

        Raises ``KeyError`` if no view called *name* is registered.
        """
        base = self.registry[name]
        self.stale = True
        if name not in self.extended:
            self.extended.append(name)
        base.associate(self.name)
        return self

    def extensions(self) -> list["View"]:
        return [self.registry[name] for name in self.extended]

    # -- Source and compilation --

    def data(self) -> str:
        """The template source, re-read first if the view is stale.

        A load failure is logged and its message returned in place of
        the source, so editors show what went wrong.
        """
        if self.stale:
            try:
                self._source = self.load()
            except OSError as exc:
                logger.error("cannot load view %r: %s", self.name, exc)
                return str(exc)
        return self._source

    def sources(self) -> dict[str, str]:
        """This view's source and those of everything it extends."""
        collected: dict[str, str] = {}
        self._collect(collected)
        return collected

    def _collect(self, collected: dict[str, str]) -> None:
        if self.name in collected:
            return
        collected[self.name] = self.data()
        for view in self.extensions():
            view._collect(collected)

    def reload(self, _seen: set[str] | None = None) -> None:
        """Re-read and recompile this view, then every view built on it."""
        seen = _seen if _seen is not None else set()
        if self.name in seen:
            return
        seen.add(self.name)

        source = self.load()
        for view in self.extensions():
            if view.stale:
                view.reload(seen)

        sources = {self.name: source}
        for view in self.extensions():
            for name, text in view.sources().items():
                sources.setdefault(name, text)

        self._template = self.registry.environment(sources).get_template(self.name)
        self._source = source
        self.stale = False

        for view in self.associations():
            view.reload(seen)

    def render(self, context: Mapping[str, Any] | None = None) -> str:
        """Render the template, reloading it first if stale."""
        if self.stale:
            self.reload()
        if self._template is None:
            msg = f"view {self.name!r} has no compiled template"
            raise DingoError(msg)
        return self._template.render(dict(context or {}))

    def execute(self, ctx: Context, context: Mapping[str, Any] | None = None) -> None:
        """Render into *ctx*'s response as HTML."""
        body = self.render(context)
        if "content-type" not in ctx.response.headers:
            ctx.response.headers.set("Content-Type", "text/html; charset=utf-8")
        ctx.write(body)


class MemoryView(View):
    """A view whose source lives in memory.

    Starts out as a placeholder page until a source is saved.
    """

    def __init__(self, name: str, registry: ViewRegistry, source: str = EMPTY_TEMPLATE) -> None:
        super().__init__(name, registry)
        self._stored = source

    def load(self) -> str:
        return self._stored

    def save(self, source: str) -> None:
        self.registry.validate(source)
        self._stored = source
        self.reload()
