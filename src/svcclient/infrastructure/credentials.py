"""Same-origin CSRF token injection.

INVARIANT: The token header is only ever attached to requests whose origin
matches the current page. Cross-origin targets never see it.

Two paths attach the header: the transports call :meth:`CredentialInjector.apply`
for every managed call, and :meth:`CredentialInjector.install` registers an
httpx request event hook so unmanaged calls made with a shared client get the
same treatment.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import TYPE_CHECKING

import httpx

from svcclient.domain.urls import is_same_origin

if TYPE_CHECKING:
    from svcclient.domain.page import BrowsingContext
    from svcclient.infrastructure.cookies import CookieReader

logger = logging.getLogger(__name__)

CSRF_COOKIE = "CSRF-TOKEN"
CSRF_HEADER = "X-CSRF-TOKEN"


class CredentialInjector:
    """Copies the CSRF cookie into a request header for same-origin targets."""

    def __init__(
        self,
        cookies: CookieReader,
        page: BrowsingContext,
        *,
        cookie_name: str = CSRF_COOKIE,
        header_name: str = CSRF_HEADER,
    ) -> None:
        self._cookies = cookies
        self._page = page
        self.cookie_name = cookie_name
        self.header_name = header_name

    def token(self) -> str | None:
        return self._cookies.get_cookie(self.cookie_name)

    def apply(self, url: str, headers: MutableMapping[str, str]) -> bool:
        """Set the token header on *headers* if *url* is same-origin.

        Returns True when a header was attached.
        """
        if not is_same_origin(url, self._page.href):
            return False
        token = self.token()
        if not token:
            return False
        headers[self.header_name] = token
        return True

    # ------------------------------------------------------------------
    # httpx event hooks
    # ------------------------------------------------------------------

    def install(self, client: httpx.Client | httpx.AsyncClient) -> None:
        """Register the default-request hook on *client* (idempotent)."""
        hooks = client.event_hooks
        hook = self._async_hook if isinstance(client, httpx.AsyncClient) else self._sync_hook
        request_hooks = hooks.setdefault("request", [])
        if hook not in request_hooks:
            request_hooks.append(hook)
            client.event_hooks = hooks

    def _sync_hook(self, request: httpx.Request) -> None:
        if self.header_name in request.headers:
            return
        if self.apply(str(request.url), request.headers):
            logger.debug("Attached %s to %s", self.header_name, request.url)

    async def _async_hook(self, request: httpx.Request) -> None:
        self._sync_hook(request)
