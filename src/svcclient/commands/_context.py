"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Builds the :class:`ServiceClient` lazily and owns
stdout/stderr routing and exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from svcclient.output.formatters import format_failure, format_response

if TYPE_CHECKING:
    from svcclient.config.settings import SvcSettings
    from svcclient.domain.envelope import ServiceResponse
    from svcclient.errors import ServiceCallError
    from svcclient.services.client import ServiceClient

LOCAL_PLUGIN_DIR = Path(".svcclient") / "plugins"


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The client (and plugin discovery) is created on first use so ``--help``
    and ``--version`` never load plugins.
    """

    def __init__(self, settings: SvcSettings) -> None:
        self.settings = settings
        self._client: ServiceClient | None = None

        from svcclient.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def client(self) -> ServiceClient:
        """The service client (created lazily on first access)."""
        if self._client is None:
            from svcclient.plugins.manager import PluginManager
            from svcclient.services.client import ServiceClient

            pm = PluginManager()
            pm.discover_and_load(local_dir=LOCAL_PLUGIN_DIR)
            self._client = ServiceClient.from_settings(self.settings, plugin_manager=pm)
            ctx = click.get_current_context(silent=True)
            if ctx is not None:
                ctx.call_on_close(self._client.close)
        return self._client

    def emit(self, response: ServiceResponse) -> None:
        """Print a successful envelope to stdout."""
        click.echo(format_response(response, json_output=self.settings.json_output))

    def fail(self, error: ServiceCallError) -> None:
        """Print a rejected call to stderr and exit with code 1."""
        click.echo(format_failure(error, json_output=self.settings.json_output), err=True)
        raise SystemExit(1)
