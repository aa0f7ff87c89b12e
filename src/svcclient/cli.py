"""Root CLI group for svcclient with global flags and command registration."""

from __future__ import annotations

import click

from svcclient import __version__
from svcclient.commands import register_commands
from svcclient.commands._context import AppContext
from svcclient.config.settings import SvcSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="svcclient")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging for svcclient.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--page-url", default=None, help="URL of the page calls are made from.")
@click.option("--app-path", default=None, help="Application root substituted for '~/'.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    page_url: str | None,
    app_path: str | None,
) -> None:
    """svcclient — call JSON envelope services from the command line."""
    overrides = {
        key: value
        for key, value in (("page_url", page_url), ("application_path", app_path))
        if value is not None
    }
    settings = SvcSettings.from_cli(
        config_path=config_path,
        client_overrides=overrides,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
