"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """Search box text plus the zero-based page the user is looking at.

    ``page`` is kept within ``[0, total_pages)`` by every constructor
    method; ``total_pages`` is never less than 1.
    """

    text: str = ""
    page: int = 0
    total_pages: int = 1

    def __post_init__(self) -> None:
        if self.total_pages < 1:
            raise ValueError(f"total_pages must be >= 1, got {self.total_pages}")
        if not 0 <= self.page < self.total_pages:
            raise ValueError(
                f"page {self.page} outside [0, {self.total_pages})"
            )

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @property
    def api_page(self) -> int:
        """One-based page number as expected by the GitHub search API."""
        return self.page + 1

    def with_text(self, text: str) -> SearchQuery:
        """New text always restarts from the first page."""
        return replace(self, text=text, page=0)

    def with_page(self, page: int) -> SearchQuery:
        return replace(self, page=max(0, min(page, self.total_pages - 1)))

    def with_total_pages(self, total_pages: int) -> SearchQuery:
        total_pages = max(1, total_pages)
        return replace(
            self, total_pages=total_pages, page=min(self.page, total_pages - 1)
        )
