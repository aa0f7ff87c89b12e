"""ServiceClient — the single entry point for service calls.

Wires URL resolution, credential injection, request accounting, the two
transport strategies and error presentation behind one contract:

* success returns the validated :class:`ServiceResponse`
* failure raises a :class:`~svcclient.errors.ServiceCallError`

``service_call`` picks the strategy from ``options.asynchronous``: it returns
an awaitable for asynchronous calls and the response itself for blocking ones.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any

import httpx

from svcclient.domain.options import ServiceCallOptions
from svcclient.domain.page import BrowsingContext
from svcclient.domain.urls import (
    is_development_mode,
    is_same_origin,
    resolve_service_url,
    resolve_url,
)
from svcclient.infrastructure.accounting import RequestAccounting, default_accounting
from svcclient.infrastructure.cookies import CookieReader
from svcclient.infrastructure.credentials import CSRF_COOKIE, CSRF_HEADER, CredentialInjector
from svcclient.plugins.manager import PluginManager
from svcclient.services.dispatch import FailureDispatcher
from svcclient.services.presentation import ErrorPresenter
from svcclient.transport.asynchronous import AsyncTransport
from svcclient.transport.base import CallRuntime
from svcclient.transport.synchronous import SyncTransport

if TYPE_CHECKING:
    from svcclient.config.settings import SvcSettings
    from svcclient.domain.envelope import ServiceResponse

logger = logging.getLogger(__name__)


class ServiceClient:
    """Service-invocation client bound to one browsing context.

    Parameters:
        application_path: Prefix substituted for ``~/``.
        page: Current page; defaults to ``http://localhost/``.
        cookies: Raw cookie string, or a ready :class:`CookieReader`.
        plugin_manager: Host hooks (UI, presentation, cookies, navigation).
        accounting: In-flight counter; defaults to the process-wide one.
        http_client / async_http_client: Pre-built httpx clients (e.g. with a
            ``MockTransport``). Built lazily without a timeout when omitted.
    """

    def __init__(
        self,
        *,
        application_path: str = "/",
        page: BrowsingContext | None = None,
        cookies: CookieReader | str = "",
        plugin_manager: PluginManager | None = None,
        accounting: RequestAccounting | None = None,
        http_client: httpx.Client | None = None,
        async_http_client: httpx.AsyncClient | None = None,
        csrf_cookie: str = CSRF_COOKIE,
        csrf_header: str = CSRF_HEADER,
        verify: bool = True,
    ) -> None:
        self.plugin_manager = plugin_manager or PluginManager()
        present = [name for name, ok in self.plugin_manager.capabilities().items() if ok]
        logger.debug("Host capabilities: %s", ", ".join(present) or "none")
        self.page = page or BrowsingContext()
        self.cookies = (
            cookies
            if isinstance(cookies, CookieReader)
            else CookieReader(cookies, plugin_manager=self.plugin_manager)
        )
        self.accounting = accounting if accounting is not None else default_accounting()
        self.accounting.attach(self.plugin_manager)

        self.credentials = CredentialInjector(
            self.cookies,
            self.page,
            cookie_name=csrf_cookie,
            header_name=csrf_header,
        )
        self.presenter = ErrorPresenter(self.plugin_manager)
        self.dispatcher = FailureDispatcher(self.presenter, self.page, self.plugin_manager)
        self.runtime = CallRuntime(
            page=self.page,
            credentials=self.credentials,
            accounting=self.accounting,
            presenter=self.presenter,
            dispatcher=self.dispatcher,
            plugin_manager=self.plugin_manager,
            application_path=application_path,
        )

        self._verify = verify
        self._http_client = http_client
        self._async_http_client = async_http_client
        self._sync_transport: SyncTransport | None = None
        self._async_transport: AsyncTransport | None = None

    @classmethod
    def from_settings(
        cls,
        settings: SvcSettings,
        *,
        plugin_manager: PluginManager | None = None,
        **kwargs: Any,
    ) -> ServiceClient:
        """Build a client from the ``[client]`` and ``[transport]`` sections."""
        client_cfg = settings.client
        return cls(
            application_path=client_cfg.application_path,
            page=BrowsingContext(client_cfg.page_url),
            cookies=client_cfg.cookies,
            plugin_manager=plugin_manager,
            csrf_cookie=client_cfg.csrf_cookie,
            csrf_header=client_cfg.csrf_header,
            verify=settings.transport.verify,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # URL helpers
    # ------------------------------------------------------------------

    @property
    def application_path(self) -> str:
        return self.runtime.application_path

    def resolve_url(self, path: str | None) -> str | None:
        return resolve_url(path, self.application_path)

    def resolve_service_url(self, name: str | None) -> str | None:
        return resolve_service_url(name, self.application_path)

    def is_same_origin(self, url: str, other: str | None = None) -> bool:
        return is_same_origin(url, other if other is not None else self.page.href)

    def is_development_mode(self) -> bool:
        return is_development_mode(self.page.hostname)

    @property
    def active_requests(self) -> int:
        return self.accounting.active

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    def service_call(
        self, options: ServiceCallOptions
    ) -> ServiceResponse | Coroutine[Any, Any, ServiceResponse]:
        """Dispatch *options* to the asynchronous or the blocking strategy."""
        if options.asynchronous:
            return self.call_async(options)
        return self.call_sync(options)

    async def call_async(self, options: ServiceCallOptions) -> ServiceResponse:
        return await self._async().call(options)

    def call_sync(self, options: ServiceCallOptions) -> ServiceResponse:
        return self._sync().call(options)

    def service_request(
        self,
        service: str,
        request: Any = None,
        on_success: Callable[[ServiceResponse], None] | None = None,
        **options: Any,
    ) -> ServiceResponse | Coroutine[Any, Any, ServiceResponse]:
        """Shorthand for ``service_call`` with a service name and payload."""
        return self.service_call(
            ServiceCallOptions(service=service, request=request, on_success=on_success, **options)
        )

    # ------------------------------------------------------------------
    # httpx clients
    # ------------------------------------------------------------------

    def install_default_request_hook(self, client: httpx.Client | httpx.AsyncClient) -> None:
        """Attach same-origin CSRF headers to unmanaged calls made with *client*."""
        self.credentials.install(client)

    def _sync(self) -> SyncTransport:
        if self._sync_transport is None:
            if self._http_client is None:
                self._http_client = httpx.Client(timeout=None, verify=self._verify)
            self.credentials.install(self._http_client)
            self._sync_transport = SyncTransport(self.runtime, self._http_client)
        return self._sync_transport

    def _async(self) -> AsyncTransport:
        if self._async_transport is None:
            if self._async_http_client is None:
                self._async_http_client = httpx.AsyncClient(timeout=None, verify=self._verify)
            self.credentials.install(self._async_http_client)
            self._async_transport = AsyncTransport(self.runtime, self._async_http_client)
        return self._async_transport

    def close(self) -> None:
        if self._http_client is not None:
            self._http_client.close()

    async def aclose(self) -> None:
        if self._async_http_client is not None:
            await self._async_http_client.aclose()
        self.close()

    def __enter__(self) -> ServiceClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    async def __aenter__(self) -> ServiceClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
