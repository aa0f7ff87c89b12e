"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, svcclient.toml only contains overrides.
A fresh project needs only [client] page_url.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- svcclient.toml sections ---


class ClientConfig(BaseModel):
    """[client] section."""

    model_config = {"frozen": True}

    application_path: str = "/"
    page_url: str = "http://localhost/"
    csrf_cookie: str = "CSRF-TOKEN"
    csrf_header: str = "X-CSRF-TOKEN"
    cookies: str = ""


class TransportConfig(BaseModel):
    """[transport] section."""

    model_config = {"frozen": True}

    method: str = "POST"
    block_ui: bool = True
    allow_redirect: bool = True
    verify: bool = True


class PresentationConfig(BaseModel):
    """[presentation] section."""

    model_config = {"frozen": True}

    error_mode: Literal["alert", "notification"] = "alert"


class SvcConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    client: ClientConfig = Field(default_factory=ClientConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    presentation: PresentationConfig = Field(default_factory=PresentationConfig)
