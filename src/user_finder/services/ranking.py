"""Repository ranking for the profile page."""

from __future__ import annotations

from typing import Sequence

from user_finder.domain.entities import RepositorySummary

TOP_REPOSITORIES = 5


def top_repositories(
    repos: Sequence[RepositorySummary], limit: int = TOP_REPOSITORIES
) -> list[RepositorySummary]:
    """Return the *limit* most-starred repositories, most stars first.

    ``sorted`` is stable with ``reverse=True`` as well, so repositories with
    equal star counts keep their API order.
    """
    ranked = sorted(repos, key=lambda repo: repo.stargazers_count, reverse=True)
    return ranked[:limit]
