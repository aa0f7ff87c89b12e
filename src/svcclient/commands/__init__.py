"""Subcommand modules for svcclient.

Provides register_commands() which uses deferred imports to keep
``svcclient --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from svcclient.commands.call import call
    from svcclient.commands.resolve import resolve

    cli.add_command(call)
    cli.add_command(resolve)
