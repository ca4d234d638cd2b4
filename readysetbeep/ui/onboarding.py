"""Onboarding screen, shown on first launch while no runs are saved."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QSizePolicy,
)

WELCOME_TITLE = "Welcome to Ready, Set, Beep!"
WELCOME_BODY = (
    "Create custom run/walk intervals with clear audio cues, "
    "all without interrupting your music."
)


class OnboardingWidget(QWidget):
    """Welcome message with a single "Get Started" button."""

    dismissed = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 40, 32, 32)
        layout.setSpacing(20)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        layout.addStretch()

        title = QLabel(WELCOME_TITLE, self)
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setWordWrap(True)
        title.setStyleSheet("font-size: 26px; font-weight: 700;")
        layout.addWidget(title)

        body = QLabel(WELCOME_BODY, self)
        body.setAlignment(Qt.AlignmentFlag.AlignCenter)
        body.setWordWrap(True)
        body.setStyleSheet("font-size: 15px;")
        layout.addWidget(body)

        layout.addStretch()

        btn = QPushButton("Get Started", self)
        btn.setObjectName("primaryButton")
        btn.setFixedHeight(48)
        btn.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        btn.clicked.connect(self.dismissed.emit)
        layout.addWidget(btn)
        self._button = btn

    def get_started(self) -> None:
        self._button.click()
