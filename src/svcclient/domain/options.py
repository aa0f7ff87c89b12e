"""ServiceCallOptions — configuration for one invocation.

Owned by the invocation and discarded once the call settles.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

import httpx
from pydantic import BaseModel

from svcclient.domain.envelope import RequestErrorInfo, ServiceResponse

if TYPE_CHECKING:
    from svcclient.domain.signals import AbortSignal

ErrorMode = Literal["alert", "notification"]

JSON_CONTENT_TYPE = "application/json"

_CACHE_CONTROL = {
    "no-store": "no-cache, no-store, max-age=0",
    "no-cache": "no-cache",
}


@dataclass
class ServiceCallOptions:
    """Per-call options. Exactly one of ``service`` or ``url`` must be set.

    Callbacks:
        on_success: Receives the validated envelope.
        on_error: Receives ``(response, error_info)``; returning True marks the
            failure handled and suppresses default presentation.
        on_cleanup: Runs once when the call settles, whatever the outcome.
    """

    service: str | None = None
    url: str | None = None
    request: Any = None
    method: str = "POST"
    asynchronous: bool = True
    block_ui: bool = True
    allow_redirect: bool = True
    headers: Mapping[str, str] | None = None
    cache: str | None = None
    signal: AbortSignal | None = None
    on_success: Callable[[ServiceResponse], None] | None = None
    on_error: Callable[[ServiceResponse | None, RequestErrorInfo], bool | None] | None = None
    on_cleanup: Callable[[], None] | None = None
    error_mode: ErrorMode = "alert"
    response_model: type[ServiceResponse] = field(default=ServiceResponse)

    def __post_init__(self) -> None:
        if (self.service is None) == (self.url is None):
            msg = "Exactly one of 'service' or 'url' must be set"
            raise ValueError(msg)

    @property
    def target(self) -> str:
        return self.service if self.service is not None else self.url  # type: ignore[return-value]

    def body(self) -> bytes:
        """Serialize the request payload as JSON."""
        payload = self.request
        if payload is None:
            return b""
        if isinstance(payload, BaseModel):
            return payload.model_dump_json(by_alias=True).encode("utf-8")
        return json.dumps(payload).encode("utf-8")


def default_headers(headers: Mapping[str, str] | None) -> httpx.Headers:
    """Copy *headers* and fill JSON ``Accept``/``Content-Type`` when absent."""
    merged = httpx.Headers(headers or {})
    if "Accept" not in merged:
        merged["Accept"] = JSON_CONTENT_TYPE
    if "Content-Type" not in merged:
        merged["Content-Type"] = JSON_CONTENT_TYPE
    return merged


def apply_cache_directive(headers: httpx.Headers, cache: str | None) -> None:
    """Translate a ``no-store``/``no-cache`` directive into ``Cache-Control``."""
    value = _CACHE_CONTROL.get(cache or "")
    if value and "Cache-Control" not in headers:
        headers["Cache-Control"] = value
