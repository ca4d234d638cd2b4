"""Session settings and segment planning.

A session alternates RUN and WALK segments, always starting with RUN.
The total duration is read one of two ways:

Running-time-only
    Only run segments count toward the total.  Every run segment is
    followed by a walk segment, including the last one, so the session
    lasts ``ceil(total / run) * (run + walk)`` seconds.

Wall-clock
    The total is the whole session.  Full run+walk cycles fit first;
    the leftover time gets one more run segment (and a walk segment too
    if it fits completely).  The session lasts exactly ``total`` seconds,
    so it may end part way through the last run.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict, fields
from enum import Enum


class SegmentKind(Enum):
    RUN = "run"
    WALK = "walk"

    @property
    def other(self) -> "SegmentKind":
        return SegmentKind.WALK if self is SegmentKind.RUN else SegmentKind.RUN


# ── errors ────────────────────────────────────────────────────────────────


class SessionError(Exception):
    """Base class for errors that prevent an engine from being built."""


class InvalidSettingsError(SessionError):
    """Run/walk durations cannot produce a schedule."""


class EmptySessionError(SessionError):
    """The derived plan contains no segments."""


# ── settings ──────────────────────────────────────────────────────────────

MIN_BEEPS = 1
MAX_BEEPS = 5


@dataclass(frozen=True)
class SessionSettings:
    """Everything needed to run one session.  Durations in seconds."""

    run_duration: float
    walk_duration: float
    total_duration: float
    total_is_running_time: bool = False
    beep_count: int = 3
    beep_volume: float = 0.5

    def duration_for(self, kind: SegmentKind) -> float:
        if kind is SegmentKind.RUN:
            return self.run_duration
        return self.walk_duration

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SessionSettings":
        valid_keys = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in valid_keys})


# ── plan ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SessionPlan:
    run_segments: int
    walk_segments: int
    total_session_duration: float

    @property
    def total_segments(self) -> int:
        return self.run_segments + self.walk_segments


def plan_session(settings: SessionSettings) -> SessionPlan:
    """Derive segment counts and the session length from *settings*.

    Raises :class:`InvalidSettingsError` when run + walk is not positive
    (or the run is zero in running-time-only mode) and
    :class:`EmptySessionError` when no segment would be played.
    """
    run = settings.run_duration
    walk = settings.walk_duration
    cycle = run + walk
    if cycle <= 0:
        raise InvalidSettingsError("Run and walk durations cannot both be zero.")

    if settings.total_is_running_time:
        if run <= 0:
            raise InvalidSettingsError("Run duration must be greater than zero.")
        runs = math.ceil(settings.total_duration / run)
        walks = runs
        total = runs * cycle
    else:
        full_cycles = int(settings.total_duration // cycle)
        runs = walks = full_cycles
        remainder = math.fmod(settings.total_duration, cycle)
        if remainder >= run:
            runs += 1
            if remainder - run >= walk:
                walks += 1
        elif remainder > 0:
            runs += 1  # session ends mid-run
        total = settings.total_duration

    plan = SessionPlan(
        run_segments=max(0, runs),
        walk_segments=max(0, walks),
        total_session_duration=total,
    )
    if plan.total_segments <= 0:
        raise EmptySessionError("Session has no run or walk segments.")
    return plan
