"""Coarse background refresh for sessions left running out of focus.

The host wakes the refresher roughly every 15 minutes with a
:class:`WakeTask`.  Each wake re-arms the next one before doing anything
else, then nudges the engine forward.  If the host expires the task
before it completes, the engine is paused (its clock disarmed) and the
task reports failure.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

log = logging.getLogger("readysetbeep.background")

REFRESH_IDENTIFIER = "readysetbeep.refresh"
REFRESH_INTERVAL_SECONDS = 15 * 60


class WakeTask:
    """One background wake handed to the refresher by the host."""

    def __init__(self, identifier: str = REFRESH_IDENTIFIER) -> None:
        self.identifier = identifier
        self.expiration_handler: Callable[[], None] | None = None
        self.success: bool | None = None

    @property
    def completed(self) -> bool:
        return self.success is not None

    def set_completed(self, success: bool) -> None:
        # First completion wins.
        if self.success is None:
            self.success = success

    def expire(self) -> None:
        """Host ran out of background time for this task."""
        if self.expiration_handler is not None:
            self.expiration_handler()


class QtWakeScheduler(QObject):
    """Wake scheduler backed by single-shot ``QTimer``s."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._handler: Callable[[WakeTask], None] | None = None
        self._timers: list[QTimer] = []

    def register(self, handler: Callable[[WakeTask], None]) -> None:
        self._handler = handler

    def submit(self, identifier: str, delay_seconds: float) -> None:
        if self._handler is None:
            raise RuntimeError(f"No handler registered for {identifier!r}")
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(int(delay_seconds * 1000))
        timer.timeout.connect(lambda: self._fire(timer, identifier))
        self._timers.append(timer)
        timer.start()

    def _fire(self, timer: QTimer, identifier: str) -> None:
        if timer in self._timers:
            self._timers.remove(timer)
        timer.deleteLater()
        if self._handler is not None:
            self._handler(WakeTask(identifier))


class BackgroundRefresher(QObject):
    """Keeps an :class:`IntervalEngine` moving while the app is in the
    background.

    Signals
    -------
    refreshed(success: bool)
        Emitted after each wake finishes or expires.
    """

    refreshed = pyqtSignal(bool)

    def __init__(
        self,
        engine,
        parent: QObject | None = None,
        *,
        scheduler=None,
        interval_seconds: float = REFRESH_INTERVAL_SECONDS,
        units_per_wake: int = 1,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._scheduler = scheduler if scheduler is not None else QtWakeScheduler(self)
        self._interval = interval_seconds
        self._units_per_wake = units_per_wake
        self._scheduler.register(self.handle_wake)

    def schedule(self) -> bool:
        """Ask the host for the next wake.  Failures are logged only."""
        try:
            self._scheduler.submit(REFRESH_IDENTIFIER, self._interval)
        except Exception as exc:
            log.warning("Failed to schedule background refresh: %s", exc)
            return False
        return True

    def handle_wake(self, task: WakeTask) -> None:
        self.schedule()

        def _on_expired() -> None:
            # Expiry always parks the session in PAUSED, even after a late call.
            self._engine.pause()
            if task.completed:
                return
            task.set_completed(False)
            self.refreshed.emit(False)

        task.expiration_handler = _on_expired

        if not self._engine.is_paused:
            self._engine.advance(self._units_per_wake)

        if not task.completed:
            task.set_completed(True)
            self.refreshed.emit(True)
