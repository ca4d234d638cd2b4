"""Interval engine for ReadySetBeep.

States
------
READY      Built from settings, waiting for ``start()``.
RUNNING    Counting down the current segment, one tick per second.
PAUSED     Clock disarmed, state frozen exactly as-is.
FINISHED   Terminal.  Reached by ``stop()``, by running out of segments,
           or by the elapsed time reaching the session length.

Tick algorithm
--------------
While the current segment has time left a tick takes up to one second
off it and adds the same to the elapsed total, which never passes the
session length.  A tick that finds the segment
already at zero counts it as completed and switches RUN <-> WALK.  A
segment of ``D`` seconds therefore consumes ``D + 1`` ticks.

Beeps are requested on the tick that leaves ``int(remaining) ==
beep_count`` so the last beep lands as the segment runs out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PyQt6.QtCore import QObject, pyqtSignal

from .clock import QtTickClock
from .plan import SegmentKind, SessionPlan, SessionSettings, plan_session

log = logging.getLogger("readysetbeep.engine")


def format_clock(seconds: float) -> str:
    """Render *seconds* as ``MM:SS`` (fractions truncated)."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of the engine state, emitted after every change."""

    segment_kind: SegmentKind
    segment_duration: float
    time_remaining: float
    elapsed: float
    completed_segments: int
    total_segments: int
    segment_progress: float
    total_progress: float
    is_paused: bool
    is_running: bool


class IntervalEngine(QObject):
    """Counts down alternating run/walk segments.

    Signals
    -------
    ticked(time_remaining: float)
        Emitted after every tick that was not ignored.
    state_changed(snapshot: SessionSnapshot)
        Emitted after every mutating operation.
    segment_changed(kind: SegmentKind)
        Emitted when the engine switches between RUN and WALK.
    beep_requested(count: int, volume: float)
        Emitted when the current segment is ``beep_count`` seconds from
        its end.
    finished(completed: bool)
        Emitted once when the session becomes terminal.  ``True`` if it
        ran its course, ``False`` if stopped early.
    """

    ticked = pyqtSignal(float)
    state_changed = pyqtSignal(object)
    segment_changed = pyqtSignal(object)
    beep_requested = pyqtSignal(int, float)
    finished = pyqtSignal(bool)

    def __init__(
        self,
        settings: SessionSettings,
        parent: QObject | None = None,
        *,
        clock=None,
        beeps=None,
    ) -> None:
        super().__init__(parent)

        # Raises InvalidSettingsError / EmptySessionError
        self._plan: SessionPlan = plan_session(settings)
        self._settings = settings

        self._clock = clock if clock is not None else QtTickClock(self)
        self._beeps = beeps

        # ── segment state ─────────────────────────────────────────────
        self._kind: SegmentKind = SegmentKind.RUN
        self._segment_duration: float = settings.run_duration
        self._remaining: float = settings.run_duration
        self._segment_progress: float = 0.0

        # ── session state ─────────────────────────────────────────────
        self._elapsed: float = 0.0
        self._completed_segments: int = 0
        self._is_paused: bool = False
        self._is_running: bool = False
        self._is_finished: bool = False

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def plan(self) -> SessionPlan:
        return self._plan

    @property
    def segment_kind(self) -> SegmentKind:
        return self._kind

    @property
    def segment_duration(self) -> float:
        return self._segment_duration

    @property
    def time_remaining(self) -> float:
        """Seconds left in the current segment."""
        return self._remaining

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def completed_segments(self) -> int:
        return self._completed_segments

    @property
    def is_paused(self) -> bool:
        return self._is_paused

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def is_finished(self) -> bool:
        return self._is_finished

    @property
    def segment_progress(self) -> float:
        """0.0 → 1.0 through the current segment."""
        return self._segment_progress

    @property
    def total_progress(self) -> float:
        """0.0 → 1.0 through the whole session."""
        total = self._plan.total_session_duration
        if total <= 0:
            return 0.0
        return self._elapsed / total

    @property
    def current_segment(self) -> int:
        """1-based index of the segment being played."""
        return self._completed_segments + 1

    @property
    def total_segments(self) -> int:
        return self._plan.total_segments

    @property
    def time_remaining_formatted(self) -> str:
        return format_clock(self._remaining)

    @property
    def elapsed_formatted(self) -> str:
        return format_clock(self._elapsed)

    @property
    def total_remaining_formatted(self) -> str | None:
        """Time left in the session, or ``None`` once nothing is left."""
        total = self._plan.total_session_duration
        if self._elapsed >= total:
            return None
        return format_clock(total - self._elapsed)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            segment_kind=self._kind,
            segment_duration=self._segment_duration,
            time_remaining=self._remaining,
            elapsed=self._elapsed,
            completed_segments=self._completed_segments,
            total_segments=self._plan.total_segments,
            segment_progress=self._segment_progress,
            total_progress=self.total_progress,
            is_paused=self._is_paused,
            is_running=self._is_running,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> bool:
        """Arm the clock.  Returns ``False`` if the session cannot run."""
        if self._is_running:
            return True
        if self._plan.total_segments <= 0:
            log.warning("Cannot start session: no segments")
            return False
        if self._is_finished:
            log.warning("Cannot start session: already finished")
            return False

        self._is_running = True
        self._clock.start(self.tick)
        log.info(
            "Session started: %d run / %d walk segments, %s total",
            self._plan.run_segments,
            self._plan.walk_segments,
            format_clock(self._plan.total_session_duration),
        )
        self._emit_state()
        return True

    def pause(self) -> None:
        """Freeze the session.  No ticks are delivered until ``resume()``."""
        if not self._is_running or self._is_paused:
            return
        self._is_paused = True
        self._clock.stop()
        self._emit_state()

    def resume(self) -> None:
        if not self._is_running or not self._is_paused:
            return
        self._is_paused = False
        self._clock.start(self.tick)
        self._emit_state()

    def toggle_pause(self) -> None:
        if self._is_paused:
            self.resume()
        else:
            self.pause()

    def stop(self) -> None:
        """End the session early.  Safe to call repeatedly."""
        if self._is_finished:
            return
        self._finish(completed=False)

    def advance(self, units: int = 1) -> None:
        """Deliver *units* ticks back to back (stops early when terminal)."""
        for _ in range(max(0, int(units))):
            if not self._is_running or self._is_paused:
                break
            self.tick()

    # ══════════════════════════════════════════════════════════════════
    #  TICK
    # ══════════════════════════════════════════════════════════════════

    def tick(self) -> None:
        """Advance the session by one second."""
        if self._is_paused or not self._is_running:
            return

        if self._remaining > 0:
            # A fractional tail only counts for what is left of it.
            step = min(1.0, self._remaining)
            self._remaining -= step
            self._elapsed = min(self._elapsed + step, self._plan.total_session_duration)
            self._update_progress()
            self._check_for_beeps()
            self.ticked.emit(self._remaining)

            if self._elapsed >= self._plan.total_session_duration:
                self._finish(completed=True)
                return
        else:
            self._completed_segments += 1
            if self._completed_segments >= self._plan.total_segments:
                self._finish(completed=True)
                return
            self._switch_segment()
            self.ticked.emit(self._remaining)

        self._emit_state()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _switch_segment(self) -> None:
        self._kind = self._kind.other
        self._segment_duration = self._settings.duration_for(self._kind)
        self._remaining = self._segment_duration
        self._segment_progress = 0.0
        self.segment_changed.emit(self._kind)

    def _update_progress(self) -> None:
        if self._segment_duration <= 0:
            self._segment_progress = 1.0
            return
        self._segment_progress = 1.0 - (self._remaining / self._segment_duration)

    def _check_for_beeps(self) -> None:
        count = self._settings.beep_count
        if int(self._remaining) != count:
            return
        volume = self._settings.beep_volume
        self.beep_requested.emit(count, volume)
        if self._beeps is not None:
            self._beeps.schedule(count, volume)

    def _finish(self, *, completed: bool) -> None:
        self._clock.stop()
        self._is_running = False
        self._is_paused = False
        self._is_finished = True
        if completed:
            log.info("Session completed after %s", format_clock(self._elapsed))
        else:
            log.info("Session stopped at %s", format_clock(self._elapsed))
        self._emit_state()
        self.finished.emit(completed)

    def _emit_state(self) -> None:
        self.state_changed.emit(self.snapshot())
