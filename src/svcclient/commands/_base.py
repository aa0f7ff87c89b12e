"""Click base command with on-demand usage examples.

``--examples`` prints the command's examples and exits; ``--help`` stays
short and only points at the flag.
"""

from __future__ import annotations

from typing import Any

import click


class SvcCommand(click.Command):
    """Click Command that accepts an ``examples`` block."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        if examples:
            kwargs.setdefault("epilog", "Run with --examples to see sample invocations.")
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)
