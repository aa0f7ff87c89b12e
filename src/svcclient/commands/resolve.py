"""Command: show where a service target resolves to."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcclient.commands._base import SvcCommand

if TYPE_CHECKING:
    from svcclient.commands._context import AppContext


@click.command(
    cls=SvcCommand,
    examples="""\
  svcclient resolve Northwind/Order/List
  svcclient resolve ~/Account/Login --url
  svcclient --page-url https://app.example.com/ resolve https://cdn.example.com/x --url""",
)
@click.argument("target")
@click.option("--url", "is_url", is_flag=True, help="Treat TARGET as a literal URL.")
@click.pass_obj
def resolve(app: AppContext, target: str, is_url: bool) -> None:
    """Print the resolved URL and whether it shares the page's origin."""
    from svcclient.domain.urls import (
        absolute_url,
        is_same_origin,
        resolve_service_url,
        resolve_url,
    )

    client_cfg = app.settings.client
    if is_url:
        resolved = resolve_url(target, client_cfg.application_path)
    else:
        resolved = resolve_service_url(target, client_cfg.application_path)
    absolute = absolute_url(resolved or "", client_cfg.page_url)
    same_origin = is_same_origin(absolute, client_cfg.page_url)

    if app.settings.json_output:
        import json

        payload = {
            "target": target,
            "resolved": resolved,
            "url": absolute,
            "same_origin": same_origin,
        }
        click.echo(json.dumps(payload, indent=2))
        return
    click.echo(absolute)
    click.echo(f"same-origin: {'yes' if same_origin else 'no'}")
