"""Navigation shell: maps paths to views and owns the mounted one.

Views are looked up through a :class:`ViewRegistry` whose entries are dotted
import paths, imported on first use.  While an entry is being imported the
shell reports the shared loading placeholder instead of a view.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Mapping, Protocol
from urllib.parse import unquote, urlsplit

from starlette.convertors import Convertor
from starlette.routing import compile_path

from user_finder.domain.ports.user_directory import UserDirectory
from user_finder.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class View(Protocol):
    """What the shell needs from a mounted view."""

    name: str

    def mount(self) -> None: ...

    def update(self, params: Mapping[str, str]) -> None: ...

    def dispose(self) -> None: ...


class ViewFactory(Protocol):
    def from_route(
        self,
        directory: UserDirectory,
        settings: Settings,
        params: Mapping[str, str],
        on_change: Callable[[], None] | None = None,
    ) -> View: ...


@lru_cache(maxsize=None)
def _compiled(template: str) -> tuple[re.Pattern[str], dict[str, Convertor]]:
    regex, _, convertors = compile_path(template)
    return regex, convertors


@dataclass(frozen=True, slots=True)
class Route:
    """A named path template such as ``/user/{username}``."""

    name: str
    template: str

    def match(self, path: str) -> dict[str, str] | None:
        """Return the decoded path parameters, or ``None``; a trailing slash is ignored."""
        regex, convertors = _compiled(self.template)
        match = regex.match(path.rstrip("/") or "/")
        if match is None:
            return None
        return {
            key: str(convertors[key].convert(unquote(value)))
            for key, value in match.groupdict().items()
        }


SEARCH_ROUTE = Route("search", "/")
DETAIL_ROUTE = Route("detail", "/user/{username}")

ROUTES: list[Route] = [SEARCH_ROUTE, DETAIL_ROUTE]

DEFAULT_VIEWS: dict[str, str] = {
    "search": "user_finder.services.search_view:SearchView",
    "detail": "user_finder.services.detail_view:DetailView",
}


def match_route(path: str) -> tuple[Route, dict[str, str], str]:
    """Return ``(route, params, normalised_path)``; unknown paths fall back to ``/``."""
    raw_path = urlsplit(path).path or "/"
    for route in ROUTES:
        params = route.match(raw_path)
        if params is not None:
            return route, params, raw_path
    logger.debug("No route for %s, falling back to search", path)
    return SEARCH_ROUTE, {}, "/"


class ViewRegistry:
    """Route name → view class, resolved lazily from ``module:attribute`` paths."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries = dict(entries or DEFAULT_VIEWS)
        self._resolved: dict[str, ViewFactory] = {}

    def is_resolved(self, name: str) -> bool:
        return name in self._resolved

    async def resolve(self, name: str) -> ViewFactory:
        if name in self._resolved:
            return self._resolved[name]

        module_name, _, attribute = self._entries[name].partition(":")
        module = await asyncio.to_thread(importlib.import_module, module_name)
        factory: ViewFactory = getattr(module, attribute)
        self._resolved[name] = factory
        logger.debug("Resolved view %s from %s", name, self._entries[name])
        return factory


class NavigationShell:
    """Owns the current path, the mounted view and the scroll offset.

    Navigating to a path served by the same route updates the mounted view in
    place; any other route unmounts it first.  Every path change puts the
    scroll offset back to the top.
    """

    def __init__(
        self,
        directory: UserDirectory,
        settings: Settings,
        *,
        registry: ViewRegistry | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._directory = directory
        self._settings = settings
        self._registry = registry or ViewRegistry()
        self._on_change = on_change
        self.path: str | None = None
        self.route: Route | None = None
        self.view: View | None = None
        self.scroll_offset = 0

    @property
    def resolving(self) -> bool:
        """True while the current route's view code is still being loaded."""
        return self.route is not None and self.view is None

    async def navigate(self, path: str) -> None:
        route, params, path = match_route(path)
        if path != self.path:
            self.scroll_offset = 0
        self.path = path

        if self.view is not None and self.route is route:
            self.view.update(params)
            self._notify()
            return

        self._unmount()
        self.route = route
        if not self._registry.is_resolved(route.name):
            self._notify()

        factory = await self._registry.resolve(route.name)
        if self.route is not route or self.path != path:
            # superseded while resolving
            return

        self.view = factory.from_route(
            self._directory, self._settings, params, self._notify
        )
        self.view.mount()
        self._notify()

    def scroll_to(self, offset: int) -> None:
        self.scroll_offset = max(0, offset)

    def dispose(self) -> None:
        self._unmount()
        self.route = None

    def _unmount(self) -> None:
        if self.view is not None:
            self.view.dispose()
            self.view = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
