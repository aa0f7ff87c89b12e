"""Cookie access for the credential injector.

A plugin implementing ``get_cookie`` takes precedence. Without one, the
reader parses a ``document.cookie``-style string (``a=1; b=2``).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svcclient.plugins.manager import PluginManager

_SEPARATOR = re.compile(r";\s*")


def parse_cookie_string(cookies: str, name: str) -> str | None:
    """Return the value of *name* from a ``;``-separated cookie string.

    Later entries win, matching how browsers order duplicate cookie names.
    """
    prefix = f"{name}="
    for part in reversed(_SEPARATOR.split(cookies or "")):
        if part.startswith(prefix):
            return part[len(prefix) :]
    return None


class CookieReader:
    """Reads cookies through the ``get_cookie`` hook or a raw cookie string."""

    def __init__(self, cookies: str = "", plugin_manager: PluginManager | None = None) -> None:
        self.cookies = cookies
        self._pm = plugin_manager

    def get_cookie(self, name: str) -> str | None:
        if self._pm is not None and self._pm.has_impl("get_cookie"):
            return self._pm.hook.get_cookie(name=name)
        return parse_cookie_string(self.cookies, name)
