"""Main application window for ReadySetBeep."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QGuiApplication
from PyQt6.QtWidgets import QMainWindow, QStackedWidget, QMessageBox, QDialog

from .audio.beeps import BeepScheduler
from .audio.sounds import (
    SoundPlayer, AudioUnavailableError, SEGMENT_RUN, SEGMENT_WALK, SESSION_COMPLETE,
)
from .database.store import RunStore
from .settings import Settings, load_settings, save_settings
from .timer.background import BackgroundRefresher
from .timer.engine import IntervalEngine
from .timer.plan import SegmentKind, SessionError, SessionSettings
from .ui.new_run_dialog import NewRunDialog
from .ui.onboarding import OnboardingWidget
from .ui.overview import OverviewWidget
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget

log = logging.getLogger("readysetbeep.app")

_SEGMENT_SOUNDS: dict[SegmentKind, str] = {
    SegmentKind.RUN: SEGMENT_RUN,
    SegmentKind.WALK: SEGMENT_WALK,
}


class ReadySetBeepApp(QMainWindow):
    """Main application window.

    Pages: onboarding (first launch only), overview of saved runs, and
    the session screen for whichever run is playing.
    """

    def __init__(
        self,
        *,
        store: RunStore | None = None,
        prefs: Settings | None = None,
        player=None,
        clock_factory=None,
        wake_scheduler=None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Ready, Set, Beep!")
        self.setMinimumSize(380, 640)

        # ── collaborators ─────────────────────────────────────────────
        self._prefs: Settings = prefs if prefs is not None else load_settings()
        self._store = store if store is not None else RunStore()
        self._player = player if player is not None else SoundPlayer(parent=self)
        self._player.set_enabled(self._prefs.sound_enabled)
        self._beeps = BeepScheduler(self._player, self)
        self._clock_factory = clock_factory
        self._wake_scheduler = wake_scheduler

        # ── session (one at a time) ───────────────────────────────────
        self._engine: IntervalEngine | None = None
        self._refresher: BackgroundRefresher | None = None
        self._timer_widget: TimerWidget | None = None

        self.resize(self._prefs.window_width, self._prefs.window_height)
        if self._prefs.window_x is not None and self._prefs.window_y is not None:
            self.move(self._prefs.window_x, self._prefs.window_y)
        self.setStyleSheet(build_stylesheet())

        # ── pages ─────────────────────────────────────────────────────
        self._stack = QStackedWidget(self)
        self.setCentralWidget(self._stack)

        self._onboarding = OnboardingWidget(self._stack)
        self._onboarding.dismissed.connect(self._dismiss_onboarding)
        self._stack.addWidget(self._onboarding)

        self._overview = OverviewWidget(self._store, self._stack)
        self._overview.run_requested.connect(self.start_session)
        self._overview.new_run_requested.connect(self.open_new_run)
        self._stack.addWidget(self._overview)

        if len(self._store) == 0 and not self._prefs.onboarding_seen:
            self._stack.setCurrentWidget(self._onboarding)
        else:
            self._stack.setCurrentWidget(self._overview)

        app = QGuiApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self._on_application_state)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> IntervalEngine | None:
        return self._engine

    @property
    def current_page(self):
        return self._stack.currentWidget()

    @property
    def overview(self) -> OverviewWidget:
        return self._overview

    @property
    def onboarding(self) -> OnboardingWidget:
        return self._onboarding

    def open_new_run(self) -> None:
        dialog = NewRunDialog(self._store, self._prefs, self)
        if dialog.exec() == QDialog.DialogCode.Accepted and dialog.session_settings:
            self._overview.refresh()
            self.start_session(dialog.session_settings)

    def start_session(self, settings: SessionSettings) -> bool:
        """Build an engine for *settings* and show the session screen.

        Returns ``False`` (and stays on the overview) when the settings
        cannot produce a session.
        """
        self._end_session()

        clock = self._clock_factory() if self._clock_factory else None
        try:
            engine = IntervalEngine(settings, self, clock=clock, beeps=self._beeps)
        except SessionError as exc:
            log.warning("Cannot build session: %s", exc)
            QMessageBox.warning(self, "Cannot Start", str(exc))
            return False

        widget = TimerWidget(engine, self._stack)
        if not engine.start():
            widget.deleteLater()
            engine.deleteLater()
            return False

        engine.segment_changed.connect(self._on_segment_changed)
        engine.finished.connect(self._on_finished)
        widget.dismiss_requested.connect(self._show_overview)

        self._engine = engine
        self._timer_widget = widget
        self._refresher = BackgroundRefresher(engine, self, scheduler=self._wake_scheduler)
        self._stack.addWidget(widget)
        self._stack.setCurrentWidget(widget)
        return True

    # ══════════════════════════════════════════════════════════════════
    #  SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _dismiss_onboarding(self) -> None:
        self._prefs.onboarding_seen = True
        save_settings(self._prefs)
        self._stack.setCurrentWidget(self._overview)

    def _show_overview(self) -> None:
        self._end_session()
        self._overview.refresh()
        self._stack.setCurrentWidget(self._overview)

    def _on_segment_changed(self, kind: SegmentKind) -> None:
        self._play(_SEGMENT_SOUNDS[kind])

    def _on_finished(self, completed: bool) -> None:
        if completed:
            self._play(SESSION_COMPLETE)

    def _on_application_state(self, state: Qt.ApplicationState) -> None:
        # Only platforms that suspend the event loop need the coarse wake.
        if state != Qt.ApplicationState.ApplicationSuspended:
            return
        if self._engine is not None and self._engine.is_running and self._refresher:
            self._refresher.schedule()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _play(self, name: str) -> None:
        volume = self._engine.settings.beep_volume if self._engine else None
        try:
            self._player.play(name, volume)
        except AudioUnavailableError as exc:
            log.warning("Sound %s dropped: %s", name, exc)

    def _end_session(self) -> None:
        if self._engine is not None:
            self._engine.stop()
            self._engine.deleteLater()
            self._engine = None
        if self._refresher is not None:
            self._refresher.deleteLater()
            self._refresher = None
        if self._timer_widget is not None:
            self._stack.removeWidget(self._timer_widget)
            self._timer_widget.deleteLater()
            self._timer_widget = None

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._end_session()
        geo = self.geometry()
        self._prefs.window_x = geo.x()
        self._prefs.window_y = geo.y()
        self._prefs.window_width = geo.width()
        self._prefs.window_height = geo.height()
        save_settings(self._prefs)
        super().closeEvent(event)
