"""Unit tests for the debounced search view."""

import asyncio
from unittest.mock import AsyncMock, call

import httpx
import pytest

from user_finder.domain.entities import SearchPage, UserSummary
from user_finder.domain.exceptions import UpstreamError
from user_finder.infrastructure.github_rest_adapter import GitHubRestAdapter
from user_finder.services.search_view import SearchStatus, SearchView


def _users(*logins: str) -> list[UserSummary]:
    return [UserSummary(login=login, avatar_url=f"https://avatars.example/{login}") for login in logins]


@pytest.mark.asyncio
async def test_blank_query_issues_no_request(directory: AsyncMock) -> None:
    """Whitespace-only input never reaches the API and shows the idle prompt."""
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("   ")
    await view.settle()

    directory.search_users.assert_not_awaited()
    assert view.users == []
    assert view.status is SearchStatus.IDLE


@pytest.mark.asyncio
async def test_octocat_scenario(directory: AsyncMock) -> None:
    """'octocat' on page 0 requests page 1 with six per page and shows one card."""
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("octocat")
    await view.settle()

    directory.search_users.assert_awaited_once_with("octocat", 1, 6)
    assert [user.login for user in view.users] == ["octocat"]
    assert view.query.total_pages == 1
    assert view.status is SearchStatus.RESULTS
    assert not view.show_paginator


@pytest.mark.asyncio
async def test_keystrokes_are_debounced(directory: AsyncMock) -> None:
    """Rapid typing issues a single request for the final text."""
    view = SearchView(directory, debounce_seconds=0.01)
    for text in ("o", "oc", "oct", "octocat"):
        view.set_query(text)
    await view.settle()

    directory.search_users.assert_awaited_once_with("octocat", 1, 6)


@pytest.mark.asyncio
async def test_total_pages_from_total_count(directory: AsyncMock) -> None:
    """Thirteen matches make three pages and show the paginator."""
    directory.search_users.return_value = SearchPage(items=_users(*"abcdef"), total_count=13)
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("a")
    await view.settle()

    assert len(view.users) == 6
    assert view.query.total_pages == 3
    assert view.show_paginator


@pytest.mark.asyncio
async def test_page_change_refetches_and_query_change_resets_page(directory: AsyncMock) -> None:
    """Picking a page fetches it; editing the text goes back to page 0."""
    directory.search_users.return_value = SearchPage(items=_users("a"), total_count=30)
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("octo")
    await view.settle()

    view.set_page(3)
    await view.settle()
    assert view.query.page == 3

    view.set_query("octocat")
    assert view.query.page == 0
    await view.settle()

    assert directory.search_users.await_args_list == [
        call("octo", 1, 6),
        call("octo", 4, 6),
        call("octocat", 1, 6),
    ]


@pytest.mark.asyncio
async def test_same_page_does_not_refetch(directory: AsyncMock) -> None:
    """Selecting the page already shown is a no-op."""
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("octocat")
    await view.settle()
    view.set_page(0)
    await view.settle()

    assert directory.search_users.await_count == 1


@pytest.mark.asyncio
async def test_failure_clears_results(directory: AsyncMock) -> None:
    """A failed search shows no results instead of raising."""
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("octocat")
    await view.settle()
    assert view.users

    directory.search_users.side_effect = UpstreamError("boom")
    view.set_query("octocats")
    await view.settle()

    assert view.users == []
    assert view.status is SearchStatus.EMPTY
    assert not view.loading


@pytest.mark.asyncio
async def test_unexpected_error_clears_results(directory: AsyncMock) -> None:
    """Errors outside the domain hierarchy still end loading with no results."""
    directory.search_users.side_effect = ValueError("invalid literal for int()")
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("octocat")
    await view.settle()

    assert view.users == []
    assert view.status is SearchStatus.EMPTY
    assert not view.loading


@pytest.mark.asyncio
async def test_malformed_total_count_shows_empty_state() -> None:
    """A non-numeric total_count from the API leaves the view empty, not loading."""
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json={"items": [], "total_count": "lots"})
        )
    )
    view = SearchView(GitHubRestAdapter(client), debounce_seconds=0.01)
    view.set_query("octocat")
    await view.settle()

    assert view.status is SearchStatus.EMPTY
    assert not view.loading


@pytest.mark.asyncio
async def test_clearing_text_cancels_pending_request(directory: AsyncMock) -> None:
    """Emptying the box before the timer fires issues nothing."""
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("octo")
    view.set_query("")
    await asyncio.sleep(0.03)
    await view.settle()

    directory.search_users.assert_not_awaited()
    assert view.status is SearchStatus.IDLE


@pytest.mark.asyncio
async def test_loading_shows_six_placeholders(directory: AsyncMock) -> None:
    """While a search is in flight the view is loading with six skeleton cards."""
    release = asyncio.Event()

    async def search(text: str, page: int, per_page: int) -> SearchPage:
        await release.wait()
        return SearchPage(items=_users("octocat"), total_count=1)

    directory.search_users.side_effect = search
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("octocat")
    await asyncio.sleep(0.03)

    assert view.status is SearchStatus.LOADING
    assert view.placeholders == 6

    release.set()
    await view.settle()
    assert view.placeholders == 0
    assert view.status is SearchStatus.RESULTS


@pytest.mark.asyncio
async def test_stale_response_is_dropped(directory: AsyncMock) -> None:
    """A slow earlier search cannot overwrite the results of a later one."""
    release = asyncio.Event()

    async def search(text: str, page: int, per_page: int) -> SearchPage:
        if text == "slow":
            await release.wait()
            return SearchPage(items=_users("stale"), total_count=1)
        return SearchPage(items=_users("fresh"), total_count=1)

    directory.search_users.side_effect = search
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("slow")
    await asyncio.sleep(0.03)
    view.set_query("fast")
    await asyncio.sleep(0.03)
    assert [user.login for user in view.users] == ["fresh"]

    release.set()
    await view.settle()
    assert [user.login for user in view.users] == ["fresh"]


@pytest.mark.asyncio
async def test_dispose_cancels_timer(directory: AsyncMock) -> None:
    """An unmounted view never issues its pending search."""
    view = SearchView(directory, debounce_seconds=0.01)
    view.set_query("octocat")
    view.dispose()
    await asyncio.sleep(0.03)

    directory.search_users.assert_not_awaited()


@pytest.mark.asyncio
async def test_on_change_is_notified(directory: AsyncMock) -> None:
    """Observers hear about loading and about the results."""
    changes: list[SearchStatus] = []
    view = SearchView(directory, debounce_seconds=0.01, on_change=lambda: changes.append(view.status))
    view.set_query("octocat")
    await view.settle()

    assert changes == [SearchStatus.LOADING, SearchStatus.RESULTS]


@pytest.mark.asyncio
async def test_submit_searches_immediately(directory: AsyncMock) -> None:
    """submit() skips the debounce and honours the requested page."""
    directory.search_users.return_value = SearchPage(items=_users("a"), total_count=30)
    view = SearchView(directory, debounce_seconds=10)
    await view.submit("octocat", 2)

    directory.search_users.assert_awaited_once_with("octocat", 3, 6)
    assert view.query.page == 2
    assert view.query.total_pages == 5


@pytest.mark.asyncio
async def test_submit_past_last_page_is_clamped(directory: AsyncMock) -> None:
    """Asking for a page beyond the result count lands on the last page."""
    view = SearchView(directory, debounce_seconds=10)
    await view.submit("octocat", 7)

    assert view.query.page == 0
    assert view.query.total_pages == 1
