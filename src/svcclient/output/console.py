"""Rich Console factory and theme for svcclient output.

``create_console`` renders to a StringIO buffer so formatters keep a plain
``-> str`` contract; ``create_stderr_console`` is what the built-in presenter
draws notifications and dialogs on.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SVC_THEME = Theme(
    {
        "svc.ok": "bold green",
        "svc.error": "bold red",
        "svc.warning": "bold yellow",
        "svc.key": "dim",
        "svc.url": "underline cyan",
        "svc.status": "bold magenta",
        "svc.title": "bold",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SVC_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def create_stderr_console() -> Console:
    """Console bound to stderr, used for user-facing error presentation."""
    return Console(stderr=True, theme=SVC_THEME, highlight=False)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
