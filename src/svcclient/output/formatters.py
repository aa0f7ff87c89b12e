"""Rich/JSON output helpers for call results.

The CLI prints a successful envelope either as JSON (``--json``) or as
indented key/value lines; failures become a single ``ERROR:`` line.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from svcclient.output.console import create_console, get_output

if TYPE_CHECKING:
    from svcclient.domain.envelope import ServiceResponse
    from svcclient.errors import ServiceCallError


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def format_response(response: ServiceResponse, *, json_output: bool = False) -> str:
    """Format a successful envelope for display."""
    wire = response.to_wire()
    if json_output:
        return _json.dumps(wire, indent=2)

    console = create_console()
    console.print(Text("OK", style="svc.ok"))
    for key, value in wire.items():
        if key == "Error":
            continue
        line = Text("  ")
        line.append(f"{key}:", style="svc.key")
        line.append(f" {_format_value(value)}")
        console.print(line)
    return get_output(console).rstrip("\n")


def format_failure(error: ServiceCallError, *, json_output: bool = False) -> str:
    """Format a rejected call for stderr."""
    if json_output:
        payload: dict[str, Any] = {
            "ok": False,
            "kind": str(error.kind),
            "message": error.message,
            "status": error.status,
        }
        if error.response is not None:
            payload["response"] = error.response.to_wire()
        return _json.dumps(payload, indent=2)
    return f"ERROR: {error.kind} — {error.message}"
