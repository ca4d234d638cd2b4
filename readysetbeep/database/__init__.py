"""Database package."""

from .db import get_session, init_db, configure_engine
from .models import Run
from .store import RunStore, RunRecord, DEFAULT_RUN_NAME

__all__ = [
    "get_session", "init_db", "configure_engine",
    "Run", "RunStore", "RunRecord", "DEFAULT_RUN_NAME",
]
