"""Non-blocking strategy built on ``httpx.AsyncClient``.

Any 2xx status counts as success. An :class:`AbortSignal` cancels the task
awaiting the network call.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from svcclient.errors import (
    CancelledCallError,
    HttpFailureError,
    RedirectRequiredError,
    TransportUnreachableError,
)
from svcclient.services.presentation import ABORT_STATUS_TEXT
from svcclient.transport.base import BaseTransport, CallRuntime, http_failure_message

if TYPE_CHECKING:
    from svcclient.domain.envelope import ServiceResponse
    from svcclient.domain.options import ServiceCallOptions
    from svcclient.domain.signals import AbortSignal

logger = logging.getLogger(__name__)


class AsyncTransport(BaseTransport):
    """Sends a service call without blocking the event loop."""

    def __init__(self, runtime: CallRuntime, client: httpx.AsyncClient) -> None:
        super().__init__(runtime)
        self._client = client

    async def call(self, options: ServiceCallOptions) -> ServiceResponse:
        url = self.runtime.resolve(options)
        request = self.build_request(self._client, options, url)
        logger.debug("Async call %s %s", options.method, url)

        with self.runtime.accounting.track(), self.ui_scope(options):
            response = await self._send(request, options.signal)

            if not response.is_success:
                redirected = self.runtime.dispatcher.dispatch(response, options)
                error_cls = RedirectRequiredError if redirected else HttpFailureError
                raise error_cls(
                    http_failure_message(response.status_code, response.reason_phrase),
                    status=response.status_code,
                    status_text=response.reason_phrase,
                )

            return self.accept(response, options)

    async def _send(self, request: httpx.Request, signal: AbortSignal | None) -> httpx.Response:
        if signal is None:
            return await self._fetch(request)
        if signal.aborted:
            raise _cancelled()

        loop = asyncio.get_running_loop()
        task = loop.create_task(self._fetch(request))
        remove = signal.add_listener(lambda: loop.call_soon_threadsafe(task.cancel))
        try:
            return await task
        except asyncio.CancelledError:
            if signal.aborted and task.cancelled():
                raise _cancelled() from None
            raise
        finally:
            remove()

    async def _fetch(self, request: httpx.Request) -> httpx.Response:
        try:
            return await self._client.send(request)
        except httpx.HTTPError as exc:
            logger.debug("Network call to %s failed: %s", request.url, exc)
            raise TransportUnreachableError(f"{type(exc).__name__}: {exc}") from exc


def _cancelled() -> CancelledCallError:
    return CancelledCallError("Request aborted!", status_text=ABORT_STATUS_TEXT)
