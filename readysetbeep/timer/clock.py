"""Tick clock used to drive the interval engine.

The engine only needs three things from a clock: arm it with a callback,
disarm it, and ask whether it is armed.  ``QtTickClock`` does that with a
repeating ``QTimer``; tests pass a manual clock instead.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, QTimer

TICK_INTERVAL_MS = 1000


class QtTickClock(QObject):
    """One callback per second on the Qt event loop."""

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._callback: Callable[[], None] | None = None
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)

    def start(self, callback: Callable[[], None]) -> None:
        """(Re)arm the clock.  Any previous schedule is discarded."""
        self._timer.stop()
        self._callback = callback
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def _fire(self) -> None:
        if self._callback is not None:
            self._callback()
