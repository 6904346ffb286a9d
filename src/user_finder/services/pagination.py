"""Page math and paginator layout for the search results.

Everything here is pure: no I/O, no view state.  Pages are zero-based
internally and rendered one-based.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

PAGE_SIZE = 6

# Pages always shown at each end of the paginator.
_MARGIN_PAGES = 3
# Pages shown on each side of the current page.
_NEIGHBOUR_PAGES = 1


class PageLinkKind(str, Enum):
    PREVIOUS = "previous"
    NEXT = "next"
    PAGE = "page"
    BREAK = "break"


@dataclass(frozen=True, slots=True)
class PageLink:
    """One affordance in the paginator bar."""

    kind: PageLinkKind
    label: str
    page: int | None = None  # zero-based target, None for breaks
    active: bool = False
    disabled: bool = False


def total_pages(total_count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of result pages for *total_count* matches (never less than 1)."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(max(total_count, 0) / page_size))


def visible_pages(
    page: int,
    page_count: int,
    *,
    margin: int = _MARGIN_PAGES,
    neighbours: int = _NEIGHBOUR_PAGES,
) -> list[int]:
    """Zero-based page numbers to render, in order, before break insertion."""
    return [
        index
        for index in range(page_count)
        if index < margin
        or index >= page_count - margin
        or abs(index - page) <= neighbours
    ]


def build_paginator(
    page: int,
    page_count: int,
    *,
    margin: int = _MARGIN_PAGES,
    neighbours: int = _NEIGHBOUR_PAGES,
) -> list[PageLink]:
    """Lay out previous / numbered / break / next links for *page* of *page_count*.

    A single ``...`` break replaces every run of hidden pages.
    """
    last = max(page_count - 1, 0)
    links = [
        PageLink(
            kind=PageLinkKind.PREVIOUS,
            label="←",
            page=max(page - 1, 0),
            disabled=page <= 0,
        )
    ]

    previous: int | None = None
    for index in visible_pages(page, page_count, margin=margin, neighbours=neighbours):
        if previous is not None and index - previous > 1:
            links.append(PageLink(kind=PageLinkKind.BREAK, label="..."))
        links.append(
            PageLink(
                kind=PageLinkKind.PAGE,
                label=str(index + 1),
                page=index,
                active=index == page,
            )
        )
        previous = index

    links.append(
        PageLink(
            kind=PageLinkKind.NEXT,
            label="→",
            page=min(page + 1, last),
            disabled=page >= last,
        )
    )
    return links
