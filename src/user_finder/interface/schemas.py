"""Pydantic DTOs for the web boundary.

Snapshots are immutable renderings of a view's state; the JSON routes
return them directly and the Jinja2 templates render them to HTML.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from user_finder.domain.entities import RepositorySummary, UserProfile, UserSummary
from user_finder.services.detail_view import DetailView
from user_finder.services.pagination import PageLink
from user_finder.services.search_view import SearchView


class UserCard(BaseModel):
    login: str
    avatar_url: str
    href: str

    @classmethod
    def from_entity(cls, user: UserSummary) -> UserCard:
        return cls(login=user.login, avatar_url=user.avatar_url, href=user.detail_path)


class PageLinkOut(BaseModel):
    kind: str
    label: str
    page: int | None = None
    active: bool = False
    disabled: bool = False

    @classmethod
    def from_link(cls, link: PageLink) -> PageLinkOut:
        return cls(
            kind=link.kind.value,
            label=link.label,
            page=link.page,
            active=link.active,
            disabled=link.disabled,
        )


class SearchSnapshot(BaseModel):
    """Everything needed to draw the search page."""

    status: str
    query: str
    page: int
    total_pages: int
    placeholders: int
    users: list[UserCard]
    show_paginator: bool
    paginator: list[PageLinkOut]

    @classmethod
    def from_view(cls, view: SearchView) -> SearchSnapshot:
        return cls(
            status=view.status.value,
            query=view.query.text,
            page=view.query.page,
            total_pages=view.query.total_pages,
            placeholders=view.placeholders,
            users=[UserCard.from_entity(user) for user in view.users],
            show_paginator=view.show_paginator,
            paginator=[PageLinkOut.from_link(link) for link in view.paginator],
        )


class RepositoryCard(BaseModel):
    name: str
    html_url: str
    stargazers_count: int
    description: str | None = None
    language: str | None = None

    @classmethod
    def from_entity(cls, repo: RepositorySummary) -> RepositoryCard:
        return cls(
            name=repo.name,
            html_url=repo.html_url,
            stargazers_count=repo.stargazers_count,
            description=repo.description,
            language=repo.language,
        )


class ProfileOut(BaseModel):
    login: str
    display_name: str
    avatar_url: str
    html_url: str
    followers: int
    following: int
    public_repos: int
    bio: str | None = None
    location: str | None = None
    blog: str | None = None
    website_url: str | None = None
    company: str | None = None
    twitter_username: str | None = None
    twitter_url: str | None = None

    @classmethod
    def from_entity(cls, profile: UserProfile) -> ProfileOut:
        return cls(
            login=profile.login,
            display_name=profile.display_name,
            avatar_url=profile.avatar_url,
            html_url=profile.html_url,
            followers=profile.followers,
            following=profile.following,
            public_repos=profile.public_repos,
            bio=profile.bio,
            location=profile.location,
            blog=profile.blog,
            website_url=profile.website_url,
            company=profile.company,
            twitter_username=profile.twitter_username,
            twitter_url=profile.twitter_url,
        )


class DetailSnapshot(BaseModel):
    """Everything needed to draw a profile page."""

    status: str
    username: str
    profile: ProfileOut | None = None
    repositories: list[RepositoryCard] = []

    @classmethod
    def from_view(cls, view: DetailView) -> DetailSnapshot:
        return cls(
            status=view.status.value,
            username=view.username,
            profile=ProfileOut.from_entity(view.profile) if view.profile else None,
            repositories=[RepositoryCard.from_entity(repo) for repo in view.repositories],
        )


# ── Live session messages ───────────────────────────────────────────────────


class ClientEvent(BaseModel):
    """A browser event forwarded over the ``/ws`` session."""

    type: Literal["input", "page", "navigate", "scroll"]
    text: str = ""
    page: int = 0
    path: str = "/"
    offset: int = 0


class RenderMessage(BaseModel):
    """Server → browser: replace the app container with *html*."""

    type: Literal["render"] = "render"
    path: str
    scroll: int
    html: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: Literal["error"] = "error"
    message: str
