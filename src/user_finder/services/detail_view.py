"""Profile page state: one user and their most-starred repositories."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Mapping

from user_finder.domain.entities import RepositorySummary, UserProfile
from user_finder.domain.exceptions import UserNotFoundError
from user_finder.domain.ports.user_directory import UserDirectory
from user_finder.infrastructure.config import Settings
from user_finder.services.ranking import TOP_REPOSITORIES, top_repositories

logger = logging.getLogger(__name__)


class DetailStatus(str, Enum):
    LOADING = "loading"
    NOT_FOUND = "not_found"
    READY = "ready"


class DetailView:
    """State machine behind the ``/user/{username}`` route.

    ``load()`` fetches the profile and then the repository listing; the view
    stays in ``LOADING`` until both have resolved or one of them failed.  Any
    failure leaves the view without a profile, which renders as "not found".
    Results are tagged with the username they were requested for and dropped
    if the username has changed in the meantime.
    """

    name = "detail"

    def __init__(
        self,
        directory: UserDirectory,
        username: str,
        *,
        top_n: int = TOP_REPOSITORIES,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._directory = directory
        self._top_n = top_n
        self._on_change = on_change
        self._task: asyncio.Task[None] | None = None
        self._disposed = False
        self.username = username
        self.profile: UserProfile | None = None
        self.repositories: list[RepositorySummary] = []
        self.loading = True

    @classmethod
    def from_route(
        cls,
        directory: UserDirectory,
        settings: Settings,
        params: Mapping[str, str],
        on_change: Callable[[], None] | None = None,
    ) -> DetailView:
        return cls(
            directory,
            params["username"],
            top_n=settings.top_repositories,
            on_change=on_change,
        )

    @property
    def status(self) -> DetailStatus:
        if self.loading:
            return DetailStatus.LOADING
        if self.profile is None:
            return DetailStatus.NOT_FOUND
        return DetailStatus.READY

    # ── Lifecycle ───────────────────────────────────────────────────────

    def mount(self) -> None:
        self._start()

    def update(self, params: Mapping[str, str]) -> None:
        username = params["username"]
        if username == self.username:
            return
        self.username = username
        self.profile = None
        self.repositories = []
        self.loading = True
        self._notify()
        self._start()

    def dispose(self) -> None:
        self._disposed = True

    async def settle(self) -> None:
        """Wait for the most recently started load to finish."""
        while self._task is not None and not self._task.done():
            await self._task

    # ── Loading ─────────────────────────────────────────────────────────

    def _start(self) -> None:
        self._task = asyncio.ensure_future(self.load())

    async def load(self) -> None:
        """Fetch profile and repositories for the current username."""
        username = self.username
        profile: UserProfile | None = None
        repositories: list[RepositorySummary] = []

        try:
            profile = await self._directory.fetch_profile(username)
            repositories = top_repositories(
                await self._directory.fetch_repositories(username), self._top_n
            )
        except UserNotFoundError:
            logger.info("User %s not found", username)
            profile, repositories = None, []
        except Exception:
            logger.warning("Failed to load user %s", username, exc_info=True)
            profile, repositories = None, []

        if self._disposed or username != self.username:
            logger.debug("Dropping stale result for %s", username)
            return

        self.profile = profile
        self.repositories = repositories
        self.loading = False
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
