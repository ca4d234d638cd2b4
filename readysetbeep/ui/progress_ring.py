"""Circular segment progress ring.

Fills clockwise from 12 o'clock as the current segment runs down, with
the segment's time left (MM:SS) in the middle and "Running"/"Walking"
underneath.  Arc and colour changes are animated.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import Qt, QRectF, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QPen, QColor, QFont
from PyQt6.QtWidgets import QWidget

from .styles import IDLE_COLORS


def _mix(a: QColor, b: QColor, t: float) -> QColor:
    t = max(0.0, min(1.0, t))
    return QColor.fromRgbF(*(x + (y - x) * t for x, y in zip(a.getRgbF(), b.getRgbF())))


def _font(px: int, *, bold: bool = False) -> QFont:
    font = QFont()
    font.setPixelSize(px)
    if bold:
        font.setWeight(QFont.Weight.Bold)
    return font


class ProgressRing(QWidget):
    """Segment progress ring with centred time and label."""

    RING_DIAMETER = 250
    RING_THICKNESS = 20

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.RING_DIAMETER + 40, self.RING_DIAMETER + 40)

        self._percent = 0.0
        self._shown_percent = 0.0
        self._time_text = "00:00"
        self._label = ""

        # (primary, secondary) now, at the start of a fade, and at its end
        self._colors = (QColor(IDLE_COLORS[0]), QColor(IDLE_COLORS[1]))
        self._fade_from = self._colors
        self._fade_to = self._colors
        self._text_color = QColor("#FFFFFF")

        self._arc_anim = self._animation(400, QEasingCurve.Type.OutCubic, self._on_arc_step)
        self._fade_anim = self._animation(500, QEasingCurve.Type.InOutQuad, self._on_fade_step)
        self._fade_anim.setStartValue(0.0)
        self._fade_anim.setEndValue(1.0)

    def _animation(
        self, ms: int, curve: QEasingCurve.Type, slot: Callable[[object], None],
    ) -> QVariantAnimation:
        anim = QVariantAnimation(self)
        anim.setDuration(ms)
        anim.setEasingCurve(curve)
        anim.valueChanged.connect(slot)
        return anim

    # ── state ─────────────────────────────────────────────────────────

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def label(self) -> str:
        return self._label

    def set_percent(self, pct: float) -> None:
        """Set the arc fill (0..1).  A lower value (new segment) is shown
        immediately rather than animated backwards."""
        pct = max(0.0, min(1.0, pct))
        self._percent = pct
        self._arc_anim.stop()
        if pct < self._shown_percent:
            self._shown_percent = pct
            self.update()
        else:
            self._arc_anim.setStartValue(self._shown_percent)
            self._arc_anim.setEndValue(pct)
            self._arc_anim.start()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_label(self, text: str) -> None:
        self._label = text
        self.update()

    def set_colors(self, primary: str, secondary: str) -> None:
        target = (QColor(primary), QColor(secondary))
        if target[0] == self._fade_to[0]:
            return
        self._fade_from = self._colors
        self._fade_to = target
        self._fade_anim.stop()
        self._fade_anim.start()

    def _on_arc_step(self, value: object) -> None:
        self._shown_percent = float(value)  # type: ignore[arg-type]
        self.update()

    def _on_fade_step(self, value: object) -> None:
        t = float(value)  # type: ignore[arg-type]
        self._colors = tuple(_mix(a, b, t) for a, b in zip(self._fade_from, self._fade_to))
        self.update()

    # ── painting ──────────────────────────────────────────────────────

    def paintEvent(self, event) -> None:  # type: ignore[override]
        side = max(100, min(self.width(), self.height()) - 40)
        rect = QRectF((self.width() - side) / 2, (self.height() - side) / 2, side, side)
        primary, secondary = self._colors

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        track = QColor(secondary)
        track.setAlpha(80)
        painter.setPen(QPen(track, self.RING_THICKNESS))
        painter.drawEllipse(rect)

        if self._shown_percent > 0.001:
            arc = QPen(primary, self.RING_THICKNESS)
            arc.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc)
            # 1/16th degrees; negative span runs clockwise
            painter.drawArc(rect, 90 * 16, -round(self._shown_percent * 360 * 16))

        painter.setPen(self._text_color)
        painter.setFont(_font(48, bold=True))
        painter.drawText(rect.translated(0, -14), Qt.AlignmentFlag.AlignCenter, self._time_text)
        painter.setFont(_font(20))
        painter.drawText(rect.translated(0, 30), Qt.AlignmentFlag.AlignCenter, self._label)
        painter.end()
