"""Domain exception hierarchy.

The GitHub adapter raises these; the views convert them into empty or
"not found" states.  Anything that still escapes to the web layer is
translated to an HTTP status by the interface error handlers.
"""

from __future__ import annotations


class UserFinderError(Exception):
    """Base exception for the entire application."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class UserNotFoundError(UserFinderError):
    """The user does not exist (HTTP 404 or the ``Not Found`` sentinel body)."""


class GitHubRateLimitError(UserFinderError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class UpstreamError(UserFinderError):
    """Transport failure, unexpected status code or malformed response body."""
