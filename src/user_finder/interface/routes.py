"""Thin controllers that drive the views and render their state."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, WebSocket
from fastapi.responses import HTMLResponse

from user_finder.domain.exceptions import UserNotFoundError
from user_finder.domain.ports.user_directory import UserDirectory
from user_finder.infrastructure.config import Settings
from user_finder.interface.dependencies import get_app_settings, get_directory
from user_finder.interface.rendering import page_response, render_detail, render_search
from user_finder.interface.schemas import DetailSnapshot, ErrorResponse, SearchSnapshot
from user_finder.interface.session import LiveSession
from user_finder.services.detail_view import DetailStatus, DetailView
from user_finder.services.search_view import SearchView

router = APIRouter()


async def _search(
    directory: UserDirectory, settings: Settings, q: str, page: int
) -> SearchSnapshot:
    view = SearchView(directory, page_size=settings.page_size)
    await view.submit(q, page - 1)
    return SearchSnapshot.from_view(view)


async def _detail(
    directory: UserDirectory, settings: Settings, username: str
) -> DetailSnapshot:
    view = DetailView(directory, username, top_n=settings.top_repositories)
    await view.load()
    return DetailSnapshot.from_view(view)


# ── Pages ───────────────────────────────────────────────────────────────────


@router.get("/", response_class=HTMLResponse)
async def search_page(
    request: Request,
    q: str = "",
    page: int = Query(1, ge=1),
    directory: UserDirectory = Depends(get_directory),
    settings: Settings = Depends(get_app_settings),
) -> HTMLResponse:
    """Search page; ``page`` is one-based."""
    snapshot = await _search(directory, settings, q, page)
    return page_response(request, render_search(snapshot), path="/")


@router.get("/user/{username}", response_class=HTMLResponse)
async def detail_page(
    request: Request,
    username: str,
    directory: UserDirectory = Depends(get_directory),
    settings: Settings = Depends(get_app_settings),
) -> HTMLResponse:
    snapshot = await _detail(directory, settings, username)
    status_code = 404 if snapshot.status == DetailStatus.NOT_FOUND.value else 200
    return page_response(
        request,
        render_detail(snapshot),
        path=f"/user/{username}",
        status_code=status_code,
    )


# ── JSON snapshots ──────────────────────────────────────────────────────────


@router.get(
    "/api/search",
    response_model=SearchSnapshot,
    response_model_exclude_none=True,
)
async def search_api(
    q: str = "",
    page: int = Query(1, ge=1),
    directory: UserDirectory = Depends(get_directory),
    settings: Settings = Depends(get_app_settings),
) -> SearchSnapshot:
    return await _search(directory, settings, q, page)


@router.get(
    "/api/users/{username}",
    response_model=DetailSnapshot,
    response_model_exclude_none=True,
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def detail_api(
    username: str,
    directory: UserDirectory = Depends(get_directory),
    settings: Settings = Depends(get_app_settings),
) -> DetailSnapshot:
    snapshot = await _detail(directory, settings, username)
    if snapshot.status == DetailStatus.NOT_FOUND.value:
        raise UserNotFoundError(f"User {username!r} not found.")
    return snapshot


# ── Live session ────────────────────────────────────────────────────────────


@router.websocket("/ws")
async def live_session(
    websocket: WebSocket,
    path: str = "/",
    q: str = "",
    directory: UserDirectory = Depends(get_directory),
    settings: Settings = Depends(get_app_settings),
) -> None:
    await LiveSession(websocket, directory, settings).run(path, q)
