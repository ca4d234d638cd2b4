"""Shared pytest fixtures for ReadySetBeep tests."""

import sys
import pytest

from PyQt6.QtWidgets import QApplication

from readysetbeep.database.db import configure_engine, init_db
from readysetbeep.database.store import RunStore
from readysetbeep.settings import Settings

from helpers import FakePlayer, ManualClock, make_engine


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep preference writes out of the real app-support directory."""
    monkeypatch.setattr("readysetbeep.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr(
        "readysetbeep.settings.SETTINGS_PATH", tmp_path / "settings.json",
    )
    yield tmp_path


@pytest.fixture
def store():
    return RunStore()


@pytest.fixture
def prefs():
    return Settings()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def player():
    return FakePlayer()


@pytest.fixture
def engine(qapp, clock):
    """Run 3 s / walk 2 s, 100 s wall-clock total, 1 beep."""
    return make_engine(clock=clock)
