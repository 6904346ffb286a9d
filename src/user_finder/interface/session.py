"""Live browser session over a WebSocket.

Each connection owns one :class:`NavigationShell`.  Browser events are
applied to the shell as they arrive; every state change marks the session
dirty and a sender task pushes one re-rendered ``render`` message per batch
of changes.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from user_finder.domain.ports.user_directory import UserDirectory
from user_finder.infrastructure.config import Settings
from user_finder.interface.rendering import render_shell
from user_finder.interface.schemas import ClientEvent, RenderMessage
from user_finder.services.navigation import NavigationShell, ViewRegistry
from user_finder.services.search_view import SearchView

logger = logging.getLogger(__name__)


class LiveSession:
    """One browser tab: a navigation shell driven by WebSocket events."""

    def __init__(
        self,
        websocket: WebSocket,
        directory: UserDirectory,
        settings: Settings,
        registry: ViewRegistry | None = None,
    ) -> None:
        self._websocket = websocket
        self._dirty = asyncio.Event()
        self.shell = NavigationShell(
            directory, settings, registry=registry, on_change=self._dirty.set
        )

    async def run(self, path: str = "/", query: str = "") -> None:
        """Serve the connection until the browser goes away."""
        await self._websocket.accept()
        sender = asyncio.create_task(self._send_renders())
        try:
            await self.shell.navigate(path)
            if query and isinstance(self.shell.view, SearchView):
                self.shell.view.set_query(query)
            self._dirty.set()

            while True:
                payload = await self._websocket.receive_text()
                try:
                    event = ClientEvent.model_validate_json(payload)
                except ValidationError as exc:
                    logger.warning("Ignoring malformed client event: %s", exc)
                    continue
                await self.handle(event)
        except WebSocketDisconnect:
            logger.debug("Live session closed at %s", self.shell.path)
        finally:
            self.shell.dispose()
            sender.cancel()

    async def handle(self, event: ClientEvent) -> None:
        """Apply one browser event to the shell."""
        view = self.shell.view
        if event.type == "navigate":
            await self.shell.navigate(event.path)
        elif event.type == "scroll":
            self.shell.scroll_to(event.offset)
        elif isinstance(view, SearchView):
            if event.type == "input":
                view.set_query(event.text)
            else:
                view.set_page(event.page)
        else:
            logger.debug("Event %s has no effect on %s", event.type, self.shell.path)

    async def _send_renders(self) -> None:
        while True:
            await self._dirty.wait()
            self._dirty.clear()
            message = RenderMessage(
                path=self.shell.path or "/",
                scroll=self.shell.scroll_offset,
                html=render_shell(self.shell),
            )
            await self._websocket.send_json(message.model_dump())
