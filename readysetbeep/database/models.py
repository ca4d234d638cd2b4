"""SQLAlchemy ORM models for ReadySetBeep."""

import uuid
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Float
)
from sqlalchemy.orm import DeclarativeBase

from ..timer.plan import SessionSettings


class Base(DeclarativeBase):
    pass


def _new_id() -> str:
    return str(uuid.uuid4())


class Run(Base):
    """A named set of interval settings the user has started before."""

    __tablename__ = "runs"

    id = Column(String(36), primary_key=True, default=_new_id)
    position = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    run_duration = Column(Float, nullable=False)       # seconds
    walk_duration = Column(Float, nullable=False)
    total_duration = Column(Float, nullable=False)
    total_is_running_time = Column(Boolean, nullable=False, default=False)
    beep_count = Column(Integer, nullable=False, default=3)
    beep_volume = Column(Float, nullable=False, default=0.5)

    def to_settings(self) -> SessionSettings:
        return SessionSettings(
            run_duration=self.run_duration,
            walk_duration=self.walk_duration,
            total_duration=self.total_duration,
            total_is_running_time=self.total_is_running_time,
            beep_count=self.beep_count,
            beep_volume=self.beep_volume,
        )

    def __repr__(self) -> str:
        return (
            f"<Run id={self.id} name={self.name!r} "
            f"position={self.position}>"
        )
