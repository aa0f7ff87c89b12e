"""Command: invoke one service and print its envelope."""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any

import click

from svcclient.commands._base import SvcCommand
from svcclient.errors import ServiceCallError
from svcclient.services.presentation import install_rejection_handler

if TYPE_CHECKING:
    from svcclient.commands._context import AppContext
    from svcclient.domain.envelope import ServiceResponse
    from svcclient.domain.options import ServiceCallOptions
    from svcclient.services.client import ServiceClient


async def _call_async(client: ServiceClient, options: ServiceCallOptions) -> ServiceResponse:
    install_rejection_handler()
    try:
        return await client.call_async(options)
    finally:
        await client.aclose()


def _parse_data(_ctx: click.Context, _param: click.Parameter, value: str | None) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except ValueError as exc:
        msg = f"not valid JSON: {exc}"
        raise click.BadParameter(msg) from exc


def _parse_headers(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            msg = f"expected 'Name: value', got {raw!r}"
            raise click.BadParameter(msg)
        headers[name.strip()] = value.strip()
    return headers


@click.command(
    cls=SvcCommand,
    examples="""\
  svcclient call Northwind/Order/List
  svcclient call Northwind/Order/Retrieve --data '{"EntityId": 10248}'
  svcclient call ~/Account/Ping --sync
  svcclient call https://api.example.com/Services/Echo --url --no-redirect
  svcclient --json call Administration/User/List -H 'Accept-Language: de'""",
)
@click.argument("target")
@click.option("--url", "is_url", is_flag=True, help="Treat TARGET as a literal URL.")
@click.option("-d", "--data", callback=_parse_data, help="Request payload as JSON.")
@click.option("--sync", "blocking", is_flag=True, help="Use the blocking transport.")
@click.option("-X", "--method", default=None, help="HTTP method (default from config).")
@click.option(
    "-H", "--header", "headers", multiple=True, callback=_parse_headers, help="Extra header."
)
@click.option(
    "--cache",
    type=click.Choice(["no-cache", "no-store"]),
    default=None,
    help="Cache directive.",
)
@click.option("--no-redirect", is_flag=True, help="Do not follow 403 redirects.")
@click.option("--no-block", is_flag=True, help="Do not block the UI during the call.")
@click.option("--notify", is_flag=True, help="Show errors as notifications, not dialogs.")
@click.pass_obj
def call(
    app: AppContext,
    target: str,
    is_url: bool,
    data: Any,
    blocking: bool,
    method: str | None,
    headers: dict[str, str],
    cache: str | None,
    no_redirect: bool,
    no_block: bool,
    notify: bool,
) -> None:
    """Call a service (or URL) and print the response envelope."""
    from svcclient.domain.options import ServiceCallOptions

    transport_cfg = app.settings.transport
    options = ServiceCallOptions(
        service=None if is_url else target,
        url=target if is_url else None,
        request=data,
        method=(method or transport_cfg.method).upper(),
        asynchronous=not blocking,
        block_ui=transport_cfg.block_ui and not no_block,
        allow_redirect=transport_cfg.allow_redirect and not no_redirect,
        headers=headers or None,
        cache=cache,
        error_mode="notification" if notify else app.settings.presentation.error_mode,
    )

    client = app.client
    try:
        if options.asynchronous:
            response = asyncio.run(_call_async(client, options))
        else:
            response = client.call_sync(options)
    except ServiceCallError as exc:
        app.fail(exc)
        return
    app.emit(response)
