"""BrowsingContext — the "current page" the client runs on behalf of."""

from __future__ import annotations

import httpx


class BrowsingContext:
    """Holds the current page URL and records top-level navigations.

    Origin checks default to :attr:`href`; redirect-follow navigates by
    replacing it. Every navigation target is kept in :attr:`history`.
    """

    def __init__(self, href: str = "http://localhost/") -> None:
        self.href = href
        self.history: list[str] = []

    @property
    def hostname(self) -> str:
        return httpx.URL(self.href).host

    @property
    def location(self) -> str | None:
        """The most recent navigation target, or None if never navigated."""
        return self.history[-1] if self.history else None

    def navigate(self, location: str) -> None:
        self.history.append(location)
        self.href = str(httpx.URL(self.href).join(location))
