"""Cancellation signal shared between a caller and an in-flight call."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class AbortSignal:
    """Thread-safe, one-shot cancellation signal.

    Listeners run once, on the thread that calls :meth:`abort`. A listener
    added after the signal fired is invoked immediately.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._aborted = False
        self._reason: Any = None
        self._listeners: list[Callable[[], None]] = []

    @classmethod
    def timeout(cls, seconds: float) -> AbortSignal:
        """Return a signal that aborts itself after *seconds*."""
        signal = cls()
        timer = threading.Timer(seconds, signal.abort, kwargs={"reason": "timeout"})
        timer.daemon = True
        timer.start()
        return signal

    @property
    def aborted(self) -> bool:
        return self._aborted

    @property
    def reason(self) -> Any:
        return self._reason

    def abort(self, reason: Any = None) -> None:
        with self._lock:
            if self._aborted:
                return
            self._aborted = True
            self._reason = reason
            listeners, self._listeners = self._listeners, []
        for listener in listeners:
            try:
                listener()
            except Exception:
                logger.debug("Abort listener failed", exc_info=True)

    def add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register *listener*; returns a callable that removes it again."""
        with self._lock:
            fire_now = self._aborted
            if not fire_now:
                self._listeners.append(listener)
        if fire_now:
            listener()

        def remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove
