"""Built-in presenter that renders errors on the terminal with Rich.

Registered through the ``svcclient.plugins`` entry point, so any host that
calls :meth:`PluginManager.discover_and_load` gets visible errors without
writing a plugin. Notifications are one-line messages, alerts are panels, and
iframe dialogs show the server document as highlighted HTML inside a frame.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pluggy
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from svcclient.output.console import create_stderr_console

if TYPE_CHECKING:
    from rich.console import Console
    from rich.status import Status

hookimpl = pluggy.HookimplMarker("svcclient")

logger = logging.getLogger(__name__)


class ConsolePresenterPlugin:
    """Terminal rendering for the presentation and UI-blocking hooks."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or create_stderr_console()
        self._depth = 0
        self._status: Status | None = None

    # ------------------------------------------------------------------
    # Presentation hooks
    # ------------------------------------------------------------------

    @hookimpl
    def notify_error(self, message: str, title: str | None, options: dict[str, Any]) -> None:
        line = Text("✗ ", style="svc.error")
        if title:
            line.append(f"{title} ", style="svc.title")
        line.append(message)
        self.console.print(line)

    @hookimpl
    def alert_dialog(self, message: str) -> None:
        self.console.print(Panel(Text(message), title="Error", border_style="svc.error"))

    @hookimpl
    def iframe_dialog(self, html: str) -> None:
        body = Syntax(html, "html", word_wrap=True, background_color="default")
        self.console.print(Panel(body, title="Server response", border_style="svc.error"))

    @hookimpl
    def navigate(self, location: str) -> None:
        line = Text("→ Redirected to ", style="svc.warning")
        line.append(location, style="svc.url")
        self.console.print(line)

    # ------------------------------------------------------------------
    # UI blocking
    # ------------------------------------------------------------------

    @hookimpl
    def block_ui(self) -> None:
        self._depth += 1
        if self._depth == 1 and self.console.is_terminal:
            self._status = self.console.status("Waiting for the server…")
            self._status.start()

    @hookimpl
    def unblock_ui(self) -> None:
        if self._depth == 0:
            logger.debug("unblock_ui without matching block_ui")
            return
        self._depth -= 1
        if self._depth == 0 and self._status is not None:
            self._status.stop()
            self._status = None
