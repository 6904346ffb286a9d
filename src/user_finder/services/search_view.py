"""Debounced user search with pagination.

The view owns the search box text, the current page and the result cards.
Every edit re-arms a debounce timer; when it fires, one search request is
issued for the text and page current at that moment.

Each armed request carries a generation number.  Editing the text, changing
the page or disposing the view bumps the generation, and a response whose
generation is no longer current is dropped, so a slow earlier request can
never overwrite the results of a later one.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import partial
from typing import Callable, Mapping

from user_finder.domain.entities import SearchPage, UserSummary
from user_finder.domain.exceptions import UserFinderError
from user_finder.domain.ports.user_directory import UserDirectory
from user_finder.domain.value_objects import SearchQuery
from user_finder.infrastructure.config import Settings
from user_finder.services.debounce import Debouncer
from user_finder.services.pagination import PAGE_SIZE, PageLink, build_paginator, total_pages

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.5


class SearchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULTS = "results"
    EMPTY = "empty"


class SearchView:
    """State machine behind the ``/`` route."""

    name = "search"

    def __init__(
        self,
        directory: UserDirectory,
        *,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        page_size: int = PAGE_SIZE,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._directory = directory
        self._debouncer = Debouncer(debounce_seconds)
        self._page_size = page_size
        self._on_change = on_change
        self._generation = 0
        self.query = SearchQuery()
        self.users: list[UserSummary] = []
        self.loading = False

    @classmethod
    def from_route(
        cls,
        directory: UserDirectory,
        settings: Settings,
        params: Mapping[str, str],
        on_change: Callable[[], None] | None = None,
    ) -> SearchView:
        return cls(
            directory,
            debounce_seconds=settings.debounce_seconds,
            page_size=settings.page_size,
            on_change=on_change,
        )

    # ── Derived state ───────────────────────────────────────────────────

    @property
    def status(self) -> SearchStatus:
        if self.loading:
            return SearchStatus.LOADING
        if self.query.is_blank:
            return SearchStatus.IDLE
        if self.users:
            return SearchStatus.RESULTS
        return SearchStatus.EMPTY

    @property
    def placeholders(self) -> int:
        """Number of skeleton cards to show while a search is in flight."""
        return self._page_size if self.loading else 0

    @property
    def show_paginator(self) -> bool:
        return self.status is SearchStatus.RESULTS and self.query.total_pages > 1

    @property
    def paginator(self) -> list[PageLink]:
        return build_paginator(self.query.page, self.query.total_pages)

    # ── Lifecycle ───────────────────────────────────────────────────────

    def mount(self) -> None:
        """Nothing to fetch until the user types."""

    def update(self, params: Mapping[str, str]) -> None:
        """The search route carries no parameters."""

    def dispose(self) -> None:
        self._debouncer.cancel()
        self._generation += 1

    async def settle(self) -> None:
        """Wait for the pending timer and every issued request to finish."""
        await self._debouncer.drain()

    # ── User input ──────────────────────────────────────────────────────

    def set_query(self, text: str) -> None:
        """Record a keystroke: new text, back to the first page."""
        self._apply(self.query.with_text(text))

    def set_page(self, page: int) -> None:
        """Jump to a zero-based page picked in the paginator."""
        self._apply(self.query.with_page(page))

    async def submit(self, text: str, page: int = 0) -> None:
        """Search immediately, bypassing the debounce (used for full page loads)."""
        self._debouncer.cancel()
        self._generation += 1
        self.query = SearchQuery(text=text, page=max(page, 0), total_pages=max(page, 0) + 1)
        if self.query.is_blank:
            self.query = SearchQuery(text=text)
            self._clear()
            return
        await self._fetch(self._generation, self.query)

    # ── Internals ───────────────────────────────────────────────────────

    def _apply(self, query: SearchQuery) -> None:
        if query == self.query:
            return
        self.query = query
        self._generation += 1

        if query.is_blank:
            self._debouncer.cancel()
            self._clear()
            return

        self._debouncer.schedule(partial(self._fetch, self._generation, query))

    def _clear(self) -> None:
        self.users = []
        self.loading = False
        self._notify()

    async def _fetch(self, generation: int, query: SearchQuery) -> None:
        self.loading = True
        self._notify()

        result: SearchPage | None = None
        try:
            result = await self._directory.search_users(
                query.text, query.api_page, self._page_size
            )
        except UserFinderError:
            # Failed searches simply show no results.
            result = None
        except Exception:
            logger.debug("Search for %r failed", query.text, exc_info=True)
            result = None

        if generation != self._generation:
            return

        self.loading = False
        if result is None:
            self.users = []
        else:
            self.users = list(result.items)
            self.query = self.query.with_total_pages(
                total_pages(result.total_count, self._page_size)
            )
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
