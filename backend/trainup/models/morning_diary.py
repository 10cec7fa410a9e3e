from datetime import date, datetime
from sqlalchemy import Boolean, Date, DateTime, Integer, String, Text
from sqlalchemy.types import JSON
from sqlalchemy.orm import Mapped, mapped_column
from trainup.db.base import Base


class MorningDiary(Base):
    __tablename__ = "morning_diaries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    readiness_score: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0-100
    recovery_level: Mapped[str | None] = mapped_column(String(32), nullable=True)  # poor | average | good
    soreness_map: Mapped[dict | None] = mapped_column(JSON, nullable=True)  # {"hamstrings": true, "_no_soreness": false}
    symptoms: Mapped[list | None] = mapped_column(JSON, nullable=True)
    has_injury: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pain_level: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0-10, only when has_injury
    injury_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
