"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class UserSummary:
    """A single hit from the user search endpoint."""

    login: str
    avatar_url: str
    id: int | None = None
    html_url: str | None = None

    @property
    def detail_path(self) -> str:
        return f"/user/{self.login}"


@dataclass(frozen=True, slots=True)
class SearchPage:
    """One page of search results plus the total match count reported by GitHub."""

    items: list[UserSummary] = field(default_factory=list)
    total_count: int = 0


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Public profile of a GitHub user."""

    login: str
    avatar_url: str
    html_url: str
    name: str | None = None
    bio: str | None = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    location: str | None = None
    blog: str | None = None
    company: str | None = None
    twitter_username: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.login

    @property
    def website_url(self) -> str | None:
        """Blog link usable as an anchor target (``https://`` added when no scheme)."""
        if not self.blog:
            return None
        if self.blog.startswith("http"):
            return self.blog
        return f"https://{self.blog}"

    @property
    def twitter_url(self) -> str | None:
        if not self.twitter_username:
            return None
        return f"https://twitter.com/{self.twitter_username}"


@dataclass(frozen=True, slots=True)
class RepositorySummary:
    """A repository as listed under ``/users/{username}/repos``."""

    name: str
    html_url: str
    stargazers_count: int = 0
    description: str | None = None
    language: str | None = None
    id: int | None = None
