"""Blocking strategy built on ``httpx.Client``.

WARNING: The calling thread is blocked for the whole round-trip. Call it
from the UI thread only when freezing every other interaction is acceptable.

Only status 200 counts as success here, stricter than the asynchronous
strategy's any-2xx check. The two are kept apart on purpose.

With an :class:`AbortSignal` the send runs on a daemon sender thread while
the caller waits for either the response or the abort. An abort returns
control at once; the sender closes the connection as soon as the server
answers, without downloading the body. The
aborted call is reported as status 0 with status text ``"abort"``, which the
presenter treats as silent.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

import httpx

from svcclient.domain.envelope import RequestErrorInfo
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


class SyncTransport(BaseTransport):
    """Sends a service call and blocks until it settles."""

    def __init__(self, runtime: CallRuntime, client: httpx.Client) -> None:
        super().__init__(runtime)
        self._client = client

    def call(self, options: ServiceCallOptions) -> ServiceResponse:
        url = self.runtime.resolve(options)
        request = self.build_request(self._client, options, url)
        logger.debug("Blocking call %s %s", options.method, url)

        with self.runtime.accounting.track(), self.ui_scope(options):
            response = self._send(request, options.signal)

            if response is None:
                info = RequestErrorInfo(status=0, status_text=ABORT_STATUS_TEXT)
                self.runtime.dispatcher.report_status_failure(info, options)
                raise CancelledCallError(
                    http_failure_message(0, ABORT_STATUS_TEXT),
                    status=0,
                    status_text=ABORT_STATUS_TEXT,
                )

            if response.status_code != 200:
                redirected = self.runtime.dispatcher.dispatch(response, options)
                error_cls = RedirectRequiredError if redirected else HttpFailureError
                raise error_cls(
                    http_failure_message(response.status_code, response.reason_phrase),
                    status=response.status_code,
                    status_text=response.reason_phrase,
                )

            return self.accept(response, options)

    def _send(self, request: httpx.Request, signal: AbortSignal | None) -> httpx.Response | None:
        """Send *request*; None means the signal aborted the call."""
        if signal is None:
            return self._fetch(request)
        if signal.aborted:
            return None

        flight = _InFlight()
        remove_listener = signal.add_listener(flight.settled.set)
        sender = threading.Thread(
            target=self._deliver,
            args=(request, signal, flight),
            name="svcclient-send",
            daemon=True,
        )
        try:
            sender.start()
            flight.settled.wait()
        finally:
            remove_listener()

        if signal.aborted:
            logger.debug("Blocking call to %s aborted", request.url)
            if flight.response is not None:
                flight.response.close()
            return None
        if isinstance(flight.error, httpx.HTTPError):
            raise _unreachable(request, flight.error) from flight.error
        if flight.error is not None:
            raise flight.error
        return flight.response

    def _fetch(self, request: httpx.Request) -> httpx.Response:
        try:
            return self._client.send(request)
        except httpx.HTTPError as exc:
            raise _unreachable(request, exc) from exc

    def _deliver(self, request: httpx.Request, signal: AbortSignal, flight: _InFlight) -> None:
        """Sender thread body; the body is only downloaded while not aborted."""
        try:
            response = self._client.send(request, stream=True)
            try:
                if signal.aborted:
                    response.close()
                else:
                    response.read()
            except BaseException:
                response.close()
                raise
            flight.response = response
        except Exception as exc:
            flight.error = exc
        finally:
            flight.settled.set()


def _unreachable(request: httpx.Request, exc: httpx.HTTPError) -> TransportUnreachableError:
    logger.debug("Network call to %s failed: %s", request.url, exc)
    return TransportUnreachableError(f"{type(exc).__name__}: {exc}")


class _InFlight:
    """Outcome of a send running on the sender thread."""

    def __init__(self) -> None:
        self.settled = threading.Event()
        self.response: httpx.Response | None = None
        self.error: Exception | None = None
