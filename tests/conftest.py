"""Shared pytest fixtures and test helpers for svcclient tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pluggy
import pytest
from click.testing import CliRunner

from svcclient.domain.page import BrowsingContext
from svcclient.infrastructure.accounting import RequestAccounting
from svcclient.plugins.manager import PluginManager
from svcclient.services.client import ServiceClient

hookimpl = pluggy.HookimplMarker("svcclient")

Handler = Callable[[httpx.Request], Any]

PRESENTATION_HOOKS = {"notify_error", "alert_dialog", "iframe_dialog"}


class RecordingPlugin:
    """Records every host hook call as ``(name, *args)`` tuples."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def count(self, name: str) -> int:
        return self.names().count(name)

    def presented(self) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] in PRESENTATION_HOOKS]

    @hookimpl
    def block_ui(self) -> None:
        self.calls.append(("block_ui",))

    @hookimpl
    def unblock_ui(self) -> None:
        self.calls.append(("unblock_ui",))

    @hookimpl
    def requests_started(self) -> None:
        self.calls.append(("requests_started",))

    @hookimpl
    def requests_stopped(self) -> None:
        self.calls.append(("requests_stopped",))

    @hookimpl
    def notify_error(self, message: str, title: str | None, options: dict[str, Any]) -> None:
        self.calls.append(("notify_error", message, title, options))

    @hookimpl
    def alert_dialog(self, message: str) -> None:
        self.calls.append(("alert_dialog", message))

    @hookimpl
    def iframe_dialog(self, html: str) -> None:
        self.calls.append(("iframe_dialog", html))

    @hookimpl
    def navigate(self, location: str) -> None:
        self.calls.append(("navigate", location))


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def recorder() -> RecordingPlugin:
    return RecordingPlugin()


@pytest.fixture
def plugin_manager(recorder: RecordingPlugin) -> PluginManager:
    """PluginManager with only the recording plugin registered."""
    pm = PluginManager()
    pm.register_plugin(recorder, name="recorder")
    return pm


@pytest.fixture
def accounting() -> RequestAccounting:
    """A fresh counter, so tests never touch the process-wide one."""
    return RequestAccounting()


@pytest.fixture
def make_client(
    plugin_manager: PluginManager,
    accounting: RequestAccounting,
) -> Iterator[Callable[..., ServiceClient]]:
    """Factory building a ServiceClient whose network is *handler*."""
    clients: list[ServiceClient] = []

    def factory(
        handler: Handler,
        *,
        cookies: str = "",
        page_url: str = "http://localhost/",
        application_path: str = "/",
    ) -> ServiceClient:
        transport = httpx.MockTransport(handler)
        client = ServiceClient(
            application_path=application_path,
            page=BrowsingContext(page_url),
            cookies=cookies,
            plugin_manager=plugin_manager,
            accounting=accounting,
            http_client=httpx.Client(transport=transport),
            async_http_client=httpx.AsyncClient(transport=transport),
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run in an empty directory so no svcclient.toml is discovered.

    CLI invocations reconfigure logging; the root handlers are restored
    afterwards so later tests don't write to a closed runner stream.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SVCCLIENT_CONFIG", raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    svc_level = logging.getLogger("svcclient").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("svcclient").setLevel(svc_level)


@pytest.fixture
def mock_backend(monkeypatch: pytest.MonkeyPatch) -> Callable[[Handler], None]:
    """Route every CLI-built ServiceClient through a MockTransport."""

    def install(handler: Handler) -> None:
        transport = httpx.MockTransport(handler)
        original = ServiceClient.from_settings.__func__  # type: ignore[attr-defined]

        def from_settings(cls: type[ServiceClient], settings: Any, **kwargs: Any) -> ServiceClient:
            kwargs.setdefault("http_client", httpx.Client(transport=transport))
            kwargs.setdefault("async_http_client", httpx.AsyncClient(transport=transport))
            kwargs.setdefault("accounting", RequestAccounting())
            return original(cls, settings, **kwargs)

        monkeypatch.setattr(ServiceClient, "from_settings", classmethod(from_settings))

    return install

