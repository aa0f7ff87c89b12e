"""Process-wide accounting of in-flight service calls.

INVARIANT: Every :func:`request_starting` is matched by exactly one
:func:`request_finished`; the counter starts at 0 and never goes negative.
Use :meth:`RequestAccounting.track` to get the pairing for free.

Each client attaches its plugin manager to the counter it uses. On the 0↔1
transitions every attached manager gets ``requests_started`` or
``requests_stopped``. The count changes under a lock; the hooks run after
it is released, so a hook may start another call.
"""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svcclient.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class RequestAccounting:
    """In-flight call counter with paired start/finish operations."""

    def __init__(self) -> None:
        self._active = 0
        self._lock = threading.Lock()
        self._listeners: weakref.WeakSet[PluginManager] = weakref.WeakSet()

    @property
    def active(self) -> int:
        return self._active

    def attach(self, plugin_manager: PluginManager) -> None:
        """Notify *plugin_manager* of idle/busy transitions from now on."""
        with self._lock:
            self._listeners.add(plugin_manager)

    def starting(self) -> None:
        with self._lock:
            self._active += 1
            notify = list(self._listeners) if self._active == 1 else []
        for pm in notify:
            pm.hook.requests_started()

    def finished(self) -> None:
        with self._lock:
            if self._active == 0:
                logger.warning("request_finished called with no request in flight")
                return
            self._active -= 1
            notify = list(self._listeners) if self._active == 0 else []
        for pm in notify:
            pm.hook.requests_stopped()

    @contextmanager
    def track(self) -> Iterator[None]:
        """Count the enclosed block as one in-flight request."""
        self.starting()
        try:
            yield
        finally:
            self.finished()


_default = RequestAccounting()


def default_accounting() -> RequestAccounting:
    return _default


def request_starting() -> None:
    _default.starting()


def request_finished() -> None:
    _default.finished()


def get_active_requests() -> int:
    return _default.active
