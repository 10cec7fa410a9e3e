"""Athlete-logged training session. Read by the load engine; written by the session-logging flow."""

from datetime import date, datetime
from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from trainup.db.base import Base


class TrainingEntry(Base):
    __tablename__ = "training_entries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    training_type: Mapped[str | None] = mapped_column(String(64), nullable=True)  # Field Training, Gym Training, Match/Game
    effort_level: Mapped[int] = mapped_column(Integer, nullable=False)  # RPE 0-10
    emotional_load: Mapped[int | None] = mapped_column(Integer, nullable=True)
    session_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
