"""HTML rendering of view snapshots with Jinja2."""

from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from user_finder.interface.schemas import DetailSnapshot, SearchSnapshot
from user_finder.services.detail_view import DetailView
from user_finder.services.navigation import NavigationShell
from user_finder.services.search_view import SearchView

_TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))


def render_search(snapshot: SearchSnapshot) -> str:
    return templates.get_template("search.html").render(search=snapshot)


def render_detail(snapshot: DetailSnapshot) -> str:
    return templates.get_template("detail.html").render(detail=snapshot)


def render_loading() -> str:
    """Shared placeholder shown while a view is not available yet."""
    return templates.get_template("loading.html").render()


def render_shell(shell: NavigationShell) -> str:
    """Render whatever the shell currently has mounted."""
    view = shell.view
    if isinstance(view, SearchView):
        return render_search(SearchSnapshot.from_view(view))
    if isinstance(view, DetailView):
        return render_detail(DetailSnapshot.from_view(view))
    return render_loading()


def page_response(
    request: Request, content: str, *, path: str, status_code: int = 200
) -> HTMLResponse:
    """Wrap a rendered fragment in the full HTML document."""
    return templates.TemplateResponse(
        request,
        "page.html",
        {"content": content, "path": path},
        status_code=status_code,
    )
