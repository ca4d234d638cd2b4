"""New-run dialog.

Collects a name, run/walk durations (minutes + seconds), the total
duration and how to read it, and the beep settings.  "Start Session"
stays disabled until the form parses; on accept the run is saved to the
store and the resulting :class:`SessionSettings` is available from
``session_settings``.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QDoubleValidator
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QLineEdit, QSpinBox, QSlider, QCheckBox, QPushButton,
    QMessageBox, QWidget,
)

from ..database.store import RunStore, RunRecord
from ..settings import (
    Settings, InvalidInputError, build_session_settings, save_settings,
)
from ..timer.plan import MAX_BEEPS, MIN_BEEPS, SessionSettings

TOTAL_TIME_LABEL = "Total Time"
TOTAL_RUNNING_TIME_LABEL = "Total Running Time"


class NewRunDialog(QDialog):
    """Modal form for configuring and saving a new run."""

    def __init__(
        self,
        store: RunStore,
        prefs: Settings,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("New Run")
        self.setMinimumWidth(380)
        self.setModal(True)

        self._store = store
        self._prefs = prefs
        self._session_settings: SessionSettings | None = None
        self._saved_run: RunRecord | None = None

        self._build_ui()
        self._populate()
        self._on_input_changed()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(14)

        # ── Run name ─────────────────────────────────────────────────
        root.addWidget(self._section_label("Run Name"))
        self._name_edit = QLineEdit()
        self._name_edit.setPlaceholderText("Enter a name for this run")
        self._name_edit.setMaxLength(255)
        root.addWidget(self._name_edit)

        # ── Run/Walk ratio ───────────────────────────────────────────
        root.addWidget(self._section_label("Run/Walk Ratio"))
        ratio_form = QFormLayout()
        self._run_min, self._run_sec = self._min_sec_row(ratio_form, "Run Duration")
        self._walk_min, self._walk_sec = self._min_sec_row(ratio_form, "Walk Duration")
        root.addLayout(ratio_form)

        # ── Total duration ───────────────────────────────────────────
        root.addWidget(self._section_label("Total Session Duration"))
        total_form = QFormLayout()
        self._running_time_cb = QCheckBox(TOTAL_TIME_LABEL)
        self._running_time_cb.toggled.connect(self._on_mode_toggled)
        total_form.addRow("", self._running_time_cb)
        self._total_min = self._number_edit("Minutes")
        total_form.addRow("Duration (min):", self._total_min)
        root.addLayout(total_form)

        # ── Beeps ────────────────────────────────────────────────────
        root.addWidget(self._section_label("Beep Settings"))
        beep_form = QFormLayout()
        self._beeps_spin = QSpinBox()
        self._beeps_spin.setRange(MIN_BEEPS, MAX_BEEPS)
        beep_form.addRow("Number of Beeps:", self._beeps_spin)

        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        beep_form.addRow("Beep Volume:", self._vol_slider)
        root.addLayout(beep_form)

        # ── Start ────────────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.setObjectName("secondaryButton")
        cancel_btn.clicked.connect(self.reject)
        self._start_btn = QPushButton("Start Session")
        self._start_btn.setObjectName("primaryButton")
        self._start_btn.clicked.connect(self._on_start)
        btn_row.addWidget(cancel_btn)
        btn_row.addStretch()
        btn_row.addWidget(self._start_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    def _number_edit(self, placeholder: str) -> QLineEdit:
        edit = QLineEdit()
        edit.setPlaceholderText(placeholder)
        edit.setAlignment(Qt.AlignmentFlag.AlignCenter)
        edit.setValidator(QDoubleValidator(0.0, 100000.0, 2, edit))
        edit.textChanged.connect(self._on_input_changed)
        return edit

    def _min_sec_row(self, form: QFormLayout, label: str) -> tuple[QLineEdit, QLineEdit]:
        row = QHBoxLayout()
        minutes = self._number_edit("Min")
        seconds = self._number_edit("Sec")
        row.addWidget(minutes)
        row.addWidget(QLabel("min"))
        row.addWidget(seconds)
        row.addWidget(QLabel("sec"))
        wrapper = QWidget()
        wrapper.setLayout(row)
        form.addRow(f"{label}:", wrapper)
        return minutes, seconds

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM PREFERENCES
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        p = self._prefs
        self._running_time_cb.setChecked(p.total_is_running_time)
        self._on_mode_toggled(p.total_is_running_time)
        self._beeps_spin.setValue(p.beep_count)
        self._vol_slider.setValue(round(p.beep_volume * 100))

    # ══════════════════════════════════════════════════════════════════
    #  HANDLERS
    # ══════════════════════════════════════════════════════════════════

    def _on_mode_toggled(self, checked: bool) -> None:
        self._running_time_cb.setText(
            TOTAL_RUNNING_TIME_LABEL if checked else TOTAL_TIME_LABEL
        )

    def _collect(self) -> SessionSettings:
        return build_session_settings(
            self._run_min.text(), self._run_sec.text(),
            self._walk_min.text(), self._walk_sec.text(),
            self._total_min.text(),
            total_is_running_time=self._running_time_cb.isChecked(),
            beep_count=self._beeps_spin.value(),
            beep_volume=self._vol_slider.value() / 100.0,
        )

    def _on_input_changed(self) -> None:
        try:
            self._collect()
        except InvalidInputError:
            self._start_btn.setEnabled(False)
        else:
            self._start_btn.setEnabled(True)

    def _on_start(self) -> None:
        try:
            settings = self._collect()
        except InvalidInputError as exc:
            QMessageBox.warning(self, "Invalid Input", str(exc))
            return

        self._session_settings = settings
        self._saved_run = self._store.add_run(self._name_edit.text(), settings)

        self._prefs.beep_count = settings.beep_count
        self._prefs.beep_volume = settings.beep_volume
        self._prefs.total_is_running_time = settings.total_is_running_time
        save_settings(self._prefs)
        self.accept()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def session_settings(self) -> SessionSettings | None:
        return self._session_settings

    @property
    def saved_run(self) -> RunRecord | None:
        return self._saved_run

    def fill(
        self,
        *,
        name: str = "",
        run: tuple[str, str] = ("", ""),
        walk: tuple[str, str] = ("", ""),
        total_minutes: str = "",
        running_time_only: bool = False,
    ) -> None:
        """Populate the form programmatically."""
        self._name_edit.setText(name)
        self._run_min.setText(run[0])
        self._run_sec.setText(run[1])
        self._walk_min.setText(walk[0])
        self._walk_sec.setText(walk[1])
        self._total_min.setText(total_minutes)
        self._running_time_cb.setChecked(running_time_only)

    @property
    def can_start(self) -> bool:
        return self._start_btn.isEnabled()

    @property
    def mode_label(self) -> str:
        return self._running_time_cb.text()

    def start_session(self) -> None:
        self._start_btn.click()
