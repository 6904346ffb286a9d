"""Fixtures for unit tests."""

from typing import Any, Callable, Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from user_finder.domain.entities import RepositorySummary, SearchPage, UserProfile, UserSummary
from user_finder.infrastructure.config import Settings
from user_finder.infrastructure.github_rest_adapter import GitHubRestAdapter
from user_finder.interface.app import create_app
from user_finder.interface.dependencies import get_app_settings, get_directory


@pytest.fixture
def settings() -> Settings:
    """Settings with a short debounce so tests stay fast."""
    return Settings(debounce_seconds=0.01)


@pytest.fixture
def directory() -> AsyncMock:
    """A UserDirectory double with canned octocat data."""
    mock = AsyncMock(spec=GitHubRestAdapter)
    mock.search_users.return_value = SearchPage(
        items=[UserSummary(login="octocat", avatar_url="https://avatars.example/octocat", id=583231)],
        total_count=1,
    )
    mock.fetch_profile.return_value = UserProfile(
        login="octocat",
        name="The Octocat",
        avatar_url="https://avatars.example/octocat",
        html_url="https://github.com/octocat",
        followers=100,
        following=9,
        public_repos=8,
        blog="github.blog",
    )
    mock.fetch_repositories.return_value = [
        RepositorySummary(name="A", html_url="https://github.com/octocat/A", stargazers_count=3),
        RepositorySummary(name="B", html_url="https://github.com/octocat/B", stargazers_count=10),
    ]
    return mock


@pytest.fixture
def make_repo() -> Callable[..., RepositorySummary]:
    def _make(name: str, stars: int, **kwargs: Any) -> RepositorySummary:
        return RepositorySummary(
            name=name, html_url=f"https://github.com/octocat/{name}", stargazers_count=stars, **kwargs
        )

    return _make


@pytest.fixture
def client(directory: AsyncMock, settings: Settings) -> Generator[TestClient, None, None]:
    """TestClient whose GitHub adapter is replaced by the ``directory`` double."""
    app = create_app()
    app.dependency_overrides[get_directory] = lambda: directory
    app.dependency_overrides[get_app_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
