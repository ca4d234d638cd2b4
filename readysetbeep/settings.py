"""Application preferences with JSON persistence, plus the new-run form
parser that turns text fields into :class:`SessionSettings`.

Preferences are stored at:
    ~/Library/Application Support/ReadySetBeep/settings.json

Usage::

    prefs = load_settings()
    prefs.beep_volume = 0.8
    save_settings(prefs)
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.plan import MAX_BEEPS, MIN_BEEPS, SessionSettings


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "ReadySetBeep"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

INVALID_INPUT_MESSAGE = "Please ensure all durations are greater than zero."


@dataclass
class Settings:
    """User preferences remembered between launches."""

    # ── new-run defaults ──────────────────────────────────────────────
    beep_count: int = 3
    beep_volume: float = 0.5              # 0.0-1.0
    total_is_running_time: bool = False

    # ── app ───────────────────────────────────────────────────────────
    sound_enabled: bool = True
    onboarding_seen: bool = False

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 420
    window_height: int = 720


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError):
        pass
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )


# ═══════════════════════════════════════════════════════════════════════════
#  NEW-RUN FORM
# ═══════════════════════════════════════════════════════════════════════════


class InvalidInputError(ValueError):
    """The new-run form cannot be turned into session settings."""


def _parse(text: str) -> float:
    try:
        value = float(text.strip())
    except (AttributeError, ValueError):
        raise InvalidInputError(INVALID_INPUT_MESSAGE) from None
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(INVALID_INPUT_MESSAGE)
    return value


def build_session_settings(
    run_minutes: str,
    run_seconds: str,
    walk_minutes: str,
    walk_seconds: str,
    total_minutes: str,
    *,
    total_is_running_time: bool = False,
    beep_count: int = 3,
    beep_volume: float = 0.5,
) -> SessionSettings:
    """Validate the form fields and build :class:`SessionSettings`.

    Every field must parse to a non-negative number, the total must be
    positive, and run and walk must each have a positive minute or
    second part.
    """
    run_min, run_sec = _parse(run_minutes), _parse(run_seconds)
    walk_min, walk_sec = _parse(walk_minutes), _parse(walk_seconds)
    total_min = _parse(total_minutes)

    if total_min <= 0:
        raise InvalidInputError(INVALID_INPUT_MESSAGE)
    if not (run_min > 0 or run_sec > 0):
        raise InvalidInputError(INVALID_INPUT_MESSAGE)
    if not (walk_min > 0 or walk_sec > 0):
        raise InvalidInputError(INVALID_INPUT_MESSAGE)

    return SessionSettings(
        run_duration=run_min * 60 + run_sec,
        walk_duration=walk_min * 60 + walk_sec,
        total_duration=total_min * 60,
        total_is_running_time=total_is_running_time,
        beep_count=max(MIN_BEEPS, min(MAX_BEEPS, int(beep_count))),
        beep_volume=max(0.0, min(1.0, float(beep_volume))),
    )


def is_input_valid(*args, **kwargs) -> bool:
    """``True`` if :func:`build_session_settings` would succeed."""
    try:
        build_session_settings(*args, **kwargs)
    except InvalidInputError:
        return False
    return True
