"""GitHub REST API adapter — implements the UserDirectory port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from user_finder.domain.entities import (
    RepositorySummary,
    SearchPage,
    UserProfile,
    UserSummary,
)
from user_finder.domain.exceptions import (
    GitHubRateLimitError,
    UpstreamError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_NOT_FOUND_SENTINEL = "Not Found"


class GitHubRestAdapter:
    """Concrete UserDirectory backed by the GitHub v3 REST API.

    Requests are unauthenticated; no token header is ever sent.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = _GITHUB_API,
        user_agent: str = "user-finder/1.0",
        repos_per_page: int = 100,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._repos_per_page = repos_per_page
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }

    async def search_users(self, text: str, page: int, per_page: int) -> SearchPage:
        """GET /search/users?q=…&page=…&per_page=… → SearchPage."""
        data = await self._api_get_json(
            "/search/users",
            params={"q": text, "page": str(page), "per_page": str(per_page)},
        )
        if not isinstance(data, dict):
            raise UpstreamError("Search response is not a JSON object.")

        try:
            items = [_user_summary(item) for item in data.get("items") or []]
        except (KeyError, TypeError) as exc:
            raise UpstreamError(f"Malformed search item: {exc}") from exc
        try:
            total_count = int(data.get("total_count") or 0)
        except (ValueError, TypeError) as exc:
            raise UpstreamError(f"Malformed total_count: {exc}") from exc
        return SearchPage(items=items, total_count=total_count)

    async def fetch_profile(self, username: str) -> UserProfile:
        """GET /users/{username} → UserProfile."""
        data = await self._api_get_json(f"/users/{username}")
        if not isinstance(data, dict) or data.get("message") == _NOT_FOUND_SENTINEL:
            raise UserNotFoundError(f"User {username!r} not found.")

        try:
            return UserProfile(
                login=data["login"],
                avatar_url=data.get("avatar_url", ""),
                html_url=data.get("html_url") or f"https://github.com/{data['login']}",
                name=data.get("name") or None,
                bio=data.get("bio") or None,
                followers=data.get("followers") or 0,
                following=data.get("following") or 0,
                public_repos=data.get("public_repos") or 0,
                location=data.get("location") or None,
                blog=data.get("blog") or None,
                company=data.get("company") or None,
                twitter_username=data.get("twitter_username") or None,
            )
        except KeyError as exc:
            raise UpstreamError(f"Profile for {username!r} is missing {exc}.") from exc

    async def fetch_repositories(self, username: str) -> list[RepositorySummary]:
        """GET /users/{username}/repos?per_page=… → [RepositorySummary] in API order."""
        data = await self._api_get_json(
            f"/users/{username}/repos",
            params={"per_page": str(self._repos_per_page)},
        )
        if not isinstance(data, list):
            raise UpstreamError(f"Repository listing for {username!r} is not a list.")

        try:
            return [
                RepositorySummary(
                    name=item["name"],
                    html_url=item.get("html_url", ""),
                    stargazers_count=item.get("stargazers_count") or 0,
                    description=item.get("description") or None,
                    language=item.get("language") or None,
                    id=item.get("id"),
                )
                for item in data
            ]
        except (KeyError, TypeError) as exc:
            raise UpstreamError(f"Malformed repository item: {exc}") from exc

    async def _api_get_json(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        resp = await self._api_get(endpoint, params=params)
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(f"Malformed JSON from {endpoint}") from exc

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._base_url}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise UserNotFoundError(f"GitHub returned 404 for {endpoint}")

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}."
                )
            raise UpstreamError(f"GitHub API denied access to {endpoint} (HTTP 403).")

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        raise UpstreamError(
            f"GitHub API returned HTTP {resp.status_code} for {url}"
        )


def _user_summary(item: dict[str, Any]) -> UserSummary:
    return UserSummary(
        login=item["login"],
        avatar_url=item.get("avatar_url", ""),
        id=item.get("id"),
        html_url=item.get("html_url"),
    )
