"""Shared plumbing for the two transport strategies.

Both strategies nest the same two scopes around one network round-trip:

* outer: request accounting (start before the attempt, finish after it)
* inner: UI block, released together with ``on_cleanup`` once the attempt
  settles, whatever the outcome

They differ in how they wait for the network and in which statuses count as
success (see the concrete strategies).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from svcclient.domain.envelope import (
    RequestErrorInfo,
    ServiceResponse,
    describe_error,
    parse_envelope,
)
from svcclient.domain.options import apply_cache_directive, default_headers
from svcclient.domain.urls import absolute_url, resolve_service_url, resolve_url
from svcclient.errors import EmptyResponseError, ServiceErrorResponse

if TYPE_CHECKING:
    import httpx

    from svcclient.domain.options import ServiceCallOptions
    from svcclient.domain.page import BrowsingContext
    from svcclient.infrastructure.accounting import RequestAccounting
    from svcclient.infrastructure.credentials import CredentialInjector
    from svcclient.plugins.manager import PluginManager
    from svcclient.services.dispatch import FailureDispatcher
    from svcclient.services.presentation import ErrorPresenter

logger = logging.getLogger(__name__)

EMPTY_RESPONSE = "Empty response received!"


@dataclass
class CallRuntime:
    """Collaborators every call needs, shared by both strategies."""

    page: BrowsingContext
    credentials: CredentialInjector
    accounting: RequestAccounting
    presenter: ErrorPresenter
    dispatcher: FailureDispatcher
    plugin_manager: PluginManager
    application_path: str = "/"

    def resolve(self, options: ServiceCallOptions) -> str:
        """Resolve the call target to an absolute URL."""
        if options.service is not None:
            target = resolve_service_url(options.service, self.application_path)
        else:
            target = resolve_url(options.url, self.application_path)
        return absolute_url(target or "", self.page.href)


def http_failure_message(status: int, status_text: str) -> str:
    return f"HTTP {status}: {status_text}!"


class BaseTransport:
    """Request building, UI scope and envelope evaluation."""

    def __init__(self, runtime: CallRuntime) -> None:
        self.runtime = runtime

    def build_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        options: ServiceCallOptions,
        url: str,
    ) -> httpx.Request:
        headers = default_headers(options.headers)
        apply_cache_directive(headers, options.cache)
        self.runtime.credentials.apply(url, headers)
        return client.build_request(options.method, url, headers=headers, content=options.body())

    @contextmanager
    def ui_scope(self, options: ServiceCallOptions) -> Iterator[None]:
        """Block the UI for the enclosed attempt; always release and clean up."""
        hook = self.runtime.plugin_manager.hook
        if options.block_ui:
            hook.block_ui()
        try:
            yield
        finally:
            if options.block_ui:
                hook.unblock_ui()
            if options.on_cleanup is not None:
                options.on_cleanup()

    def accept(self, response: httpx.Response, options: ServiceCallOptions) -> ServiceResponse:
        """Validate a success-status body and hand it to ``on_success``."""
        envelope = parse_envelope(response.content, options.response_model)
        if envelope is None:
            raise EmptyResponseError(
                EMPTY_RESPONSE,
                status=response.status_code,
                status_text=response.reason_phrase,
            )

        if envelope.error is not None:
            info = RequestErrorInfo(
                status=response.status_code,
                status_text=response.reason_phrase,
            )
            self.runtime.presenter.handle_error(envelope, info, options)
            raise ServiceErrorResponse(
                describe_error(envelope.error),
                status=response.status_code,
                status_text=response.reason_phrase,
                response=envelope,
            )

        if options.on_success is not None:
            options.on_success(envelope)
        return envelope
