"""Overview screen: saved runs, "Repeat Last Run" and "Add New Run".

Selecting a run (double-click or Enter) emits ``run_requested`` with its
settings; the app window turns that into a session.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QListWidget, QListWidgetItem, QAbstractItemView,
)

from ..database.store import RunStore, RunRecord


class OverviewWidget(QWidget):
    """List of previously configured runs."""

    run_requested = pyqtSignal(object)   # SessionSettings
    new_run_requested = pyqtSignal()

    def __init__(self, store: RunStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._store = store
        self._records: list[RunRecord] = []
        self._build_ui()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        title = QLabel("Ready, Set, Beep!")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-size: 22px; font-weight: 700;")
        layout.addWidget(title)

        btn_row = QHBoxLayout()
        self._repeat_btn = QPushButton("Repeat Last Run")
        self._repeat_btn.setObjectName("primaryButton")
        self._repeat_btn.clicked.connect(self._on_repeat_last)
        self._add_btn = QPushButton("Add New Run")
        self._add_btn.setObjectName("secondaryButton")
        self._add_btn.clicked.connect(self.new_run_requested.emit)
        btn_row.addWidget(self._repeat_btn)
        btn_row.addWidget(self._add_btn)
        layout.addLayout(btn_row)

        self._list = QListWidget(self)
        self._list.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self._list.itemActivated.connect(self._on_item_activated)
        layout.addWidget(self._list)

        self._empty_label = QLabel("No runs saved.")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setStyleSheet("font-size: 16px; font-weight: 600;")
        layout.addWidget(self._empty_label)

        self._delete_btn = QPushButton("Delete")
        self._delete_btn.setObjectName("dangerButton")
        self._delete_btn.clicked.connect(self.delete_selected)
        layout.addWidget(self._delete_btn)

    # ── refresh ───────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Reload the run list from the store."""
        self._records = self._store.runs()
        self._list.clear()
        for record in self._records:
            item = QListWidgetItem(
                f"{record.name}\n{record.created_at.strftime('%b %-d, %Y')}"
            )
            item.setData(Qt.ItemDataRole.UserRole, record.id)
            self._list.addItem(item)

        has_runs = bool(self._records)
        self._list.setVisible(has_runs)
        self._repeat_btn.setVisible(has_runs)
        self._delete_btn.setVisible(has_runs)
        self._empty_label.setVisible(not has_runs)

    # ── slots ─────────────────────────────────────────────────────────

    def _on_repeat_last(self) -> None:
        if self._records:
            self.run_requested.emit(self._records[-1].settings)

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        row = self._list.row(item)
        self.run_requested.emit(self._records[row].settings)

    def delete_selected(self) -> None:
        rows = [self._list.row(item) for item in self._list.selectedItems()]
        if not rows:
            return
        self._store.delete_runs(rows)
        self.refresh()

    # ── accessors ─────────────────────────────────────────────────────

    @property
    def records(self) -> list[RunRecord]:
        return list(self._records)

    @property
    def list_widget(self) -> QListWidget:
        return self._list

    def repeat_last(self) -> None:
        self._repeat_btn.click()
