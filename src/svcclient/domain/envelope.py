"""ServiceResponse envelope — the wire contract every backend reply honors.

INVARIANT: A reply is successful iff it parses as a JSON object whose
``Error`` key is absent or null. A missing or unparseable body is an
"empty response", distinct from a populated ``Error``.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, ValidationError


class ServiceError(BaseModel):
    """Structured error payload carried in ``ServiceResponse.error``."""

    model_config = {"frozen": True, "populate_by_name": True, "extra": "allow"}

    code: str | None = Field(default=None, alias="Code")
    message: str | None = Field(default=None, alias="Message")
    arguments: Any = Field(default=None, alias="Arguments")


class ServiceResponse(BaseModel):
    """Base envelope. Service-specific fields are kept as extras.

    Subclass it to declare typed response fields::

        class ListResponse(ServiceResponse):
            entities: list[dict[str, Any]] = Field(default_factory=list, alias="Entities")
    """

    model_config = {"frozen": True, "populate_by_name": True, "extra": "allow"}

    error: ServiceError | None = Field(default=None, alias="Error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_wire(self) -> dict[str, Any]:
        """Dump back to the wire shape (aliased keys, extras included)."""
        return self.model_dump(mode="json", by_alias=True)


class RequestErrorInfo(BaseModel):
    """Transport-level failure descriptor, independent of the envelope.

    ``status`` is None when the request never reached the server.
    """

    model_config = {"frozen": True}

    status: int | None = None
    status_text: str = ""
    response_text: str | None = None


def parse_envelope(
    text: str | bytes | None,
    model: type[ServiceResponse] = ServiceResponse,
) -> ServiceResponse | None:
    """Parse *text* into *model*. Returns None for an empty or malformed body."""
    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    try:
        return model.model_validate(data)
    except ValidationError:
        return None


def describe_error(error: ServiceError) -> str:
    """Rejection message embedding Code, Message and Arguments."""
    return f"Error: {error.code} {error.message} {error.arguments}!"
