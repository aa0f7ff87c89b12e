"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``SVCCLIENT_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``svcclient.toml`` or ``[tool.svcclient]`` via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from svcclient.config.discovery import find_config, read_config_data
from svcclient.config.models import ClientConfig, PresentationConfig, TransportConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feed the discovered TOML table into pydantic-settings."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = read_config_data(toml_path)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path has to reach settings_customise_sources, a classmethod.
_tls = threading.local()


class SvcSettings(BaseSettings):
    """Frozen settings for the client and the CLI.

    Attributes:
        config_path: The TOML file the values came from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SVCCLIENT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    client: ClientConfig = Field(default_factory=ClientConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    presentation: PresentationConfig = Field(default_factory=PresentationConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        client_overrides: dict[str, Any] | None = None,
        **cli_flags: Any,
    ) -> SvcSettings:
        """Construct settings for a CLI invocation.

        *client_overrides* (``--page-url``, ``--app-path``) are merged over
        the ``[client]`` section rather than replacing it.
        """
        toml_path = Path(config_path) if config_path else find_config(start)
        if toml_path is not None and not toml_path.is_file():
            toml_path = None

        _tls.toml_path = toml_path
        try:
            settings = cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

        if client_overrides:
            merged = settings.client.model_copy(update=client_overrides)
            settings = settings.model_copy(update={"client": merged})
        return settings
