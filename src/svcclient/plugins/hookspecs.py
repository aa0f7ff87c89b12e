"""Pluggy hook specifications for the host environment svcclient runs in.

The client never renders UI or reads cookie storage itself. Hosts provide
these capabilities by registering plugins; an unimplemented hook is a no-op
(or, for ``get_cookie``, falls back to the built-in cookie-string parser).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from svcclient.domain.envelope import ServiceResponse
    from svcclient.domain.options import ServiceCallOptions

hookspec = pluggy.HookspecMarker("svcclient")


class SvcClientHookSpec:
    """Hook specifications for the svcclient plugin system."""

    # --- UI blocking -------------------------------------------------

    @hookspec
    def block_ui(self) -> None:
        """Called before a blocking call is issued."""

    @hookspec
    def unblock_ui(self) -> None:
        """Called once the call settles. Always paired with ``block_ui``."""

    # --- Activity ----------------------------------------------------

    @hookspec
    def requests_started(self) -> None:
        """Global active-request count went from 0 to 1."""

    @hookspec
    def requests_stopped(self) -> None:
        """Global active-request count returned to 0."""

    # --- Presentation ------------------------------------------------

    @hookspec
    def notify_error(self, message: str, title: str | None, options: dict[str, Any]) -> None:
        """Show a transient error notification."""

    @hookspec
    def alert_dialog(self, message: str) -> None:
        """Show a modal alert with plain text."""

    @hookspec
    def iframe_dialog(self, html: str) -> None:
        """Show *html* as a full document inside a contained frame."""

    # --- Environment -------------------------------------------------

    @hookspec
    def navigate(self, location: str) -> None:
        """The top-level browsing context was sent to *location*."""

    @hookspec(firstresult=True)
    def get_cookie(self, name: str) -> str | None:
        """Return the value of cookie *name*, or None to defer."""

    @hookspec(firstresult=True)
    def handle_not_logged_in(
        self,
        options: ServiceCallOptions | None,
        response: ServiceResponse,
    ) -> bool | None:
        """Return True when a ``NotLoggedIn`` failure was handled by the host."""
