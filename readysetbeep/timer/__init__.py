"""Timer package."""

from .plan import (
    SegmentKind,
    SessionSettings,
    SessionPlan,
    SessionError,
    InvalidSettingsError,
    EmptySessionError,
    plan_session,
    MIN_BEEPS,
    MAX_BEEPS,
)
from .clock import QtTickClock, TICK_INTERVAL_MS
from .engine import IntervalEngine, SessionSnapshot, format_clock
from .background import (
    BackgroundRefresher,
    QtWakeScheduler,
    WakeTask,
    REFRESH_INTERVAL_SECONDS,
)

__all__ = [
    "SegmentKind",
    "SessionSettings",
    "SessionPlan",
    "SessionError",
    "InvalidSettingsError",
    "EmptySessionError",
    "plan_session",
    "MIN_BEEPS",
    "MAX_BEEPS",
    "QtTickClock",
    "TICK_INTERVAL_MS",
    "IntervalEngine",
    "SessionSnapshot",
    "format_clock",
    "BackgroundRefresher",
    "QtWakeScheduler",
    "WakeTask",
    "REFRESH_INTERVAL_SECONDS",
]
