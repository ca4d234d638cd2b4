"""QSS stylesheet and segment colours for ReadySetBeep."""

from __future__ import annotations

from ..timer.plan import SegmentKind

# ── ring / background colours per display state ─────────────────────────
#    (primary, secondary) pairs; primary doubles as the screen background
#    tint while a session is running.

RUN_COLORS = ("#FF6B6B", "#FFA07A")      # warm coral
WALK_COLORS = ("#4ECDC4", "#44B09E")     # cool teal
PAUSED_COLORS = ("#6C7086", "#585B70")   # desaturated gray
IDLE_COLORS = ("#4A4A5E", "#3A3A4E")     # neutral dim

SEGMENT_COLORS: dict[SegmentKind, tuple[str, str]] = {
    SegmentKind.RUN: RUN_COLORS,
    SegmentKind.WALK: WALK_COLORS,
}

SEGMENT_LABELS: dict[SegmentKind, str] = {
    SegmentKind.RUN: "Running",
    SegmentKind.WALK: "Walking",
}

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#89B4FA",
    "accent2":      "#A6E3A1",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "danger":       "#F38BA8",
    "border":       "#313154",
}


def colors_for(kind: SegmentKind, *, paused: bool = False, running: bool = True) -> tuple[str, str]:
    if not running:
        return IDLE_COLORS
    if paused:
        return PAUSED_COLORS
    return SEGMENT_COLORS[kind]


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    """Return the application-wide QSS for *palette*."""
    p = palette or PALETTE
    return f"""
QWidget {{
    background-color: {p["bg"]};
    color: {p["text"]};
    font-size: 14px;
}}
QLineEdit, QSpinBox {{
    background-color: {p["surface"]};
    border: 1px solid {p["border"]};
    border-radius: 6px;
    padding: 6px 8px;
}}
QListWidget {{
    background-color: {p["bg_secondary"]};
    border: 1px solid {p["border"]};
    border-radius: 8px;
}}
QListWidget::item {{
    padding: 8px;
}}
QListWidget::item:selected {{
    background-color: {p["surface"]};
}}
QPushButton {{
    border-radius: 8px;
    padding: 10px 18px;
    font-weight: 600;
}}
QPushButton#primaryButton {{
    background-color: {p["accent"]};
    color: {p["bg"]};
}}
QPushButton#primaryButton:disabled {{
    background-color: {p["border"]};
    color: {p["text_muted"]};
}}
QPushButton#secondaryButton {{
    background-color: {p["accent2"]};
    color: {p["bg"]};
}}
QPushButton#dangerButton {{
    background-color: {p["danger"]};
    color: {p["bg"]};
}}
QProgressBar {{
    background-color: rgba(255, 255, 255, 0.15);
    border: none;
    border-radius: 3px;
    max-height: 6px;
}}
QProgressBar::chunk {{
    background-color: white;
    border-radius: 3px;
}}
"""
