"""Saved runs, kept in the order they were added.

The list is append-only apart from deletes by position, mirroring what
the overview screen shows: newest at the bottom, "Repeat Last Run"
picks the last one.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func

from ..timer.plan import SessionSettings
from .db import get_session
from .models import Run

DEFAULT_RUN_NAME = "Untitled Run"


@dataclass(frozen=True)
class RunRecord:
    """Detached copy of a :class:`Run` row."""

    id: str
    name: str
    created_at: datetime
    settings: SessionSettings


def _to_record(run: Run) -> RunRecord:
    return RunRecord(
        id=run.id,
        name=run.name,
        created_at=run.created_at,
        settings=run.to_settings(),
    )


class RunStore:
    """CRUD over the ``runs`` table."""

    def runs(self) -> list[RunRecord]:
        with get_session() as db:
            rows = db.query(Run).order_by(Run.position).all()
            return [_to_record(r) for r in rows]

    def __len__(self) -> int:
        with get_session() as db:
            return db.query(Run).count()

    def add_run(self, name: str, settings: SessionSettings) -> RunRecord:
        name = name.strip() or DEFAULT_RUN_NAME
        with get_session() as db:
            last = db.query(func.max(Run.position)).scalar()
            run = Run(
                position=0 if last is None else last + 1,
                name=name,
                run_duration=settings.run_duration,
                walk_duration=settings.walk_duration,
                total_duration=settings.total_duration,
                total_is_running_time=settings.total_is_running_time,
                beep_count=settings.beep_count,
                beep_volume=settings.beep_volume,
            )
            db.add(run)
            db.flush()
            return _to_record(run)

    def delete_run(self, index: int) -> None:
        """Delete the run at list position *index*."""
        self.delete_runs([index])

    def delete_runs(self, indexes: Iterable[int]) -> None:
        """Delete several runs by list position.  Raises ``IndexError``
        (and deletes nothing) if any position is out of range."""
        wanted = set(indexes)
        with get_session() as db:
            rows = db.query(Run).order_by(Run.position).all()
            for i in wanted:
                if not -len(rows) <= i < len(rows):
                    raise IndexError(f"run index {i} out of range")
            for run in {rows[i].id: rows[i] for i in wanted}.values():
                db.delete(run)

    def last_run(self) -> RunRecord | None:
        with get_session() as db:
            run = db.query(Run).order_by(Run.position.desc()).first()
            return _to_record(run) if run else None

    def get(self, run_id: str) -> RunRecord | None:
        with get_session() as db:
            run = db.get(Run, run_id)
            return _to_record(run) if run else None
