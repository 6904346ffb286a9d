"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from user_finder.infrastructure.config import Settings, get_settings
from user_finder.infrastructure.github_rest_adapter import GitHubRestAdapter

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


def get_app_settings() -> Settings:
    return get_settings()


def get_directory() -> GitHubRestAdapter:
    """Build the GitHub adapter on top of the shared HTTP client."""
    settings = get_settings()

    assert _http_client is not None, "startup() was not called"

    return GitHubRestAdapter(
        client=_http_client,
        base_url=settings.github_api_url,
        user_agent=settings.user_agent,
        repos_per_page=settings.repos_per_page,
    )
