"""Wellness signals and injury-risk outputs."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DiarySignal(BaseModel):
    """Morning diary entry reduced to what the risk and readiness scorers read."""

    model_config = ConfigDict(frozen=True)

    date: date
    readiness_score: int | None = Field(None, ge=0, le=100)
    recovery_level: str | None = None  # poor | average | good
    sore_areas: frozenset[str] = frozenset()
    symptoms: tuple[str, ...] = ()
    has_injury: bool = False
    pain_intensity: int | None = Field(None, ge=0, le=10)
    injury_note: str | None = None


class RiskAssessment(BaseModel):
    athlete_id: int | None = None
    risk_score: int = Field(0, ge=0, le=100)
    factors: list[str] = Field(default_factory=list)


class AlertType(str, Enum):
    INJURY = "injury"
    SICK = "sick"
    ACWR = "acwr"


class Alert(BaseModel):
    athlete_id: int
    type: AlertType
    note: str
