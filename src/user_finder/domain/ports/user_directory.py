"""Port: user directory — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from user_finder.domain.entities import RepositorySummary, SearchPage, UserProfile


class UserDirectory(Protocol):
    """Abstract contract for the read-only GitHub user endpoints."""

    async def search_users(self, text: str, page: int, per_page: int) -> SearchPage:
        """Return one page of users matching *text* (``page`` is one-based)."""
        ...

    async def fetch_profile(self, username: str) -> UserProfile:
        """Return the public profile, raising ``UserNotFoundError`` when absent."""
        ...

    async def fetch_repositories(self, username: str) -> list[RepositorySummary]:
        """Return the user's public repositories in API order."""
        ...
