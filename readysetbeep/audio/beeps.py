"""Countdown beep scheduling.

``schedule(count, volume)`` plays ``count`` beeps one second apart on a
wall-clock delay, independent of the session tick clock: beeps already
queued keep playing through a pause.  A beep that cannot be played is
dropped and reported through ``cue_failed``; it never raises back into
the engine.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .sounds import BEEP, AudioUnavailableError

log = logging.getLogger("readysetbeep.audio")

BEEP_SPACING_MS = 1000


def _qt_delay(ms: int, callback: Callable[[], None]) -> None:
    QTimer.singleShot(ms, callback)


class BeepScheduler(QObject):
    """Turns a beep request into a short train of audio cues.

    Signals
    -------
    cue_played(index: int)
        A cue was handed to the audio output.
    cue_failed(index: int, reason: str)
        A cue was dropped because the audio output was unavailable.
    """

    cue_played = pyqtSignal(int)
    cue_failed = pyqtSignal(int, str)

    def __init__(
        self,
        player,
        parent: QObject | None = None,
        *,
        delay: Callable[[int, Callable[[], None]], None] | None = None,
        spacing_ms: int = BEEP_SPACING_MS,
    ) -> None:
        super().__init__(parent)
        self._player = player
        self._delay = delay or _qt_delay
        self._spacing_ms = spacing_ms

    def schedule(self, count: int, volume: float) -> None:
        for i in range(max(0, count)):
            self._delay(i * self._spacing_ms, lambda i=i: self._play(i, volume))

    def _play(self, index: int, volume: float) -> None:
        try:
            self._player.play(BEEP, volume)
        except AudioUnavailableError as exc:
            log.warning("Beep %d dropped: %s", index + 1, exc)
            self.cue_failed.emit(index, str(exc))
            return
        self.cue_played.emit(index)
