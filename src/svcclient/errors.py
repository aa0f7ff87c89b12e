"""ServiceCallError hierarchy — how a rejected call surfaces to callers.

Every rejection raised by a transport is a :class:`ServiceCallError` tagged
with ``origin = "service_call"``. ``silent`` marks failures the user has
already seen (or must not see), so global handlers can skip re-logging them.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svcclient.domain.envelope import ServiceResponse

ORIGIN = "service_call"


class FailureKind(StrEnum):
    """Failure taxonomy for a single invocation."""

    TRANSPORT_UNREACHABLE = "transport_unreachable"
    HTTP_FAILURE = "http_failure"
    SERVICE_ERROR = "service_error"
    EMPTY_RESPONSE = "empty_response"
    REDIRECT_REQUIRED = "redirect_required"
    CANCELLED = "cancelled"


class ServiceCallError(Exception):
    """Base rejection for a service call."""

    kind: FailureKind = FailureKind.TRANSPORT_UNREACHABLE
    silent: bool = False
    origin: str = ORIGIN

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        status_text: str = "",
        response: ServiceResponse | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.status_text = status_text
        self.response = response


class TransportUnreachableError(ServiceCallError):
    """The network call never completed; no status is available."""

    kind = FailureKind.TRANSPORT_UNREACHABLE


class HttpFailureError(ServiceCallError):
    """The server answered with a non-success status."""

    kind = FailureKind.HTTP_FAILURE
    silent = True


class ServiceErrorResponse(ServiceCallError):
    """The envelope carried a populated ``Error``."""

    kind = FailureKind.SERVICE_ERROR
    silent = True


class EmptyResponseError(ServiceCallError):
    """Success status, but no parseable envelope."""

    kind = FailureKind.EMPTY_RESPONSE


class RedirectRequiredError(HttpFailureError):
    """403 with a Location header; the browsing context was navigated."""

    kind = FailureKind.REDIRECT_REQUIRED


class CancelledCallError(ServiceCallError):
    """Aborted through the call's :class:`~svcclient.domain.signals.AbortSignal`."""

    kind = FailureKind.CANCELLED
    silent = True
