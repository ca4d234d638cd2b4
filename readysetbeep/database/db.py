"""SQLite engine and session handling for the saved-run store.

The engine is built on first use from ``DB_PATH``.  Tests swap it for an
in-memory database with :func:`configure_engine` before touching the
store.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "ReadySetBeep"
DB_PATH = APP_SUPPORT_DIR / "readysetbeep.db"

_engine: Engine | None = None
_factory: sessionmaker | None = None


def _build(url: str) -> Engine:
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if url.endswith(":memory:"):
        # Every session shares the single in-memory connection.
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def _current_engine() -> Engine:
    global _engine
    if _engine is None:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        _engine = _build(f"sqlite:///{DB_PATH}")
    return _engine


def configure_engine(url: str) -> None:
    """Point the store at *url* (e.g. ``sqlite:///:memory:``)."""
    global _engine, _factory
    if _engine is not None:
        _engine.dispose()
    _engine = _build(url)
    _factory = None


def init_db() -> None:
    """Create any missing tables."""
    Base.metadata.create_all(_current_engine())


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield a session that commits on exit and rolls back on error."""
    global _factory
    if _factory is None:
        _factory = sessionmaker(bind=_current_engine(), expire_on_commit=False)
    session = _factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
