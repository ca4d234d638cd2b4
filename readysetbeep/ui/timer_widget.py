"""Session screen.

Layout (top → bottom):
    - Time elapsed / time remaining labels and a total progress bar
    - ProgressRing for the current segment (MM:SS + Running/Walking)
    - "Segment X of Y"
    - Pause/Resume and Stop buttons

The whole card is tinted with the current segment's colour.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame, QProgressBar, QSizePolicy,
)

from ..timer.engine import IntervalEngine, SessionSnapshot
from .progress_ring import ProgressRing
from .styles import SEGMENT_LABELS, colors_for

PROGRESS_STEPS = 1000


class TimerWidget(QWidget):
    """Renders one :class:`IntervalEngine` and forwards user commands."""

    dismiss_requested = pyqtSignal()

    def __init__(self, engine: IntervalEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._refresh(engine.snapshot())

    @property
    def engine(self) -> IntervalEngine:
        return self._engine

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self._card = QFrame(self)
        self._card.setObjectName("timerCard")
        root.addWidget(self._card)

        layout = QVBoxLayout(self._card)
        layout.setContentsMargins(24, 32, 24, 28)
        layout.setSpacing(12)

        # ── top bar: elapsed / remaining ──────────────────────────────
        top = QHBoxLayout()
        self._elapsed_label = self._caption_pair(top, "Time Elapsed", Qt.AlignmentFlag.AlignLeft)
        top.addStretch()
        self._remaining_label = self._caption_pair(top, "Time Remaining", Qt.AlignmentFlag.AlignRight)
        layout.addLayout(top)

        self._total_bar = QProgressBar(self._card)
        self._total_bar.setRange(0, PROGRESS_STEPS)
        self._total_bar.setTextVisible(False)
        layout.addWidget(self._total_bar)

        layout.addStretch()

        # ── ring ──────────────────────────────────────────────────────
        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(self._card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(290, 290)
        self._ring.set_colors("#FFFFFF", "#F0F0F0")
        ring_row.addWidget(self._ring)
        layout.addLayout(ring_row)

        layout.addStretch()

        self._segment_label = QLabel("", self._card)
        self._segment_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._segment_label.setStyleSheet("font-size: 15px; color: white; background: transparent;")
        layout.addWidget(self._segment_label)

        # ── controls ──────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(40)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._pause_btn = QPushButton("Pause", self._card)
        self._pause_btn.setObjectName("primaryButton")
        self._stop_btn = QPushButton("Stop", self._card)
        self._stop_btn.setObjectName("dangerButton")

        btn_row.addWidget(self._pause_btn)
        btn_row.addWidget(self._stop_btn)
        layout.addLayout(btn_row)

    def _caption_pair(self, row: QHBoxLayout, caption: str, align) -> QLabel:
        col = QVBoxLayout()
        cap = QLabel(caption, self._card)
        cap.setAlignment(align)
        cap.setStyleSheet("font-size: 11px; color: white; background: transparent;")
        value = QLabel("00:00", self._card)
        value.setAlignment(align)
        value.setStyleSheet(
            "font-size: 17px; font-weight: 600; color: white; background: transparent;"
        )
        col.addWidget(cap)
        col.addWidget(value)
        row.addLayout(col)
        return value

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._pause_btn.clicked.connect(self._engine.toggle_pause)
        self._stop_btn.clicked.connect(self._on_stop)
        self._engine.state_changed.connect(self._refresh)

    def _on_stop(self) -> None:
        self._engine.stop()
        self.dismiss_requested.emit()

    # ── display ───────────────────────────────────────────────────────────

    def _refresh(self, snap: SessionSnapshot) -> None:
        eng = self._engine

        self._elapsed_label.setText(eng.elapsed_formatted)
        self._remaining_label.setText(eng.total_remaining_formatted or "00:00")
        self._total_bar.setValue(int(min(1.0, snap.total_progress) * PROGRESS_STEPS))

        self._ring.set_time_text(eng.time_remaining_formatted)
        self._ring.set_label(SEGMENT_LABELS[snap.segment_kind])
        self._ring.set_percent(snap.segment_progress)

        current = min(eng.current_segment, snap.total_segments)
        self._segment_label.setText(f"Segment {current} of {snap.total_segments}")

        self._pause_btn.setText("Resume" if snap.is_paused else "Pause")
        self._pause_btn.setEnabled(snap.is_running)

        primary, _ = colors_for(
            snap.segment_kind,
            paused=snap.is_paused,
            running=snap.is_running or not eng.is_finished,
        )
        self._card.setStyleSheet(
            f"QFrame#timerCard {{ background-color: {primary}; border-radius: 0; }}"
        )

    # ── accessors ─────────────────────────────────────────────────────────

    @property
    def segment_text(self) -> str:
        return self._segment_label.text()

    @property
    def elapsed_text(self) -> str:
        return self._elapsed_label.text()

    @property
    def remaining_text(self) -> str:
        return self._remaining_label.text()

    @property
    def pause_button_text(self) -> str:
        return self._pause_btn.text()

    @property
    def ring(self) -> ProgressRing:
        return self._ring
