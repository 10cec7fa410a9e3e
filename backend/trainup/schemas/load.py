"""Load engine value types: session observations, daily totals, ACWR points."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RiskZone(str, Enum):
    UNDERTRAINING = "undertraining"
    OPTIMAL = "optimal"
    INJURY_RISK = "injury_risk"


class LoadObservation(BaseModel):
    """One training session's contribution to load. Validated at construction."""

    model_config = ConfigDict(frozen=True)

    athlete_id: int
    date: date
    effort_level: int = Field(..., ge=0, le=10)
    emotional_load: int | None = Field(None, ge=0, le=10)
    duration_minutes: int | None = Field(None, gt=0)  # None -> LoadParameters.default_duration_minutes
    training_type: str | None = None


class LoadParameters(BaseModel):
    """Tuning knobs for session load. Passed explicitly into the aggregator."""

    model_config = ConfigDict(frozen=True)

    default_duration_minutes: int = Field(60, gt=0)
    emotional_multipliers: dict[int, float] = Field(
        default_factory=lambda: {1: 1.00, 2: 1.05, 3: 1.10, 4: 1.15, 5: 1.20}
    )

    @field_validator("emotional_multipliers")
    @classmethod
    def _non_empty_positive(cls, v: dict[int, float]) -> dict[int, float]:
        if not v:
            raise ValueError("emotional multiplier table must not be empty")
        if any(m <= 0 for m in v.values()):
            raise ValueError("emotional multipliers must be positive")
        return v

    @classmethod
    def from_settings(cls, s=None) -> "LoadParameters":
        if s is None:
            from trainup.config import settings as s
        return cls(
            default_duration_minutes=s.default_session_duration_minutes,
            emotional_multipliers=dict(s.emotional_load_multipliers),
        )


class DailyLoad(BaseModel):
    """Total load for one athlete on one calendar date."""

    model_config = ConfigDict(frozen=True)

    date: date
    total_load: float = 0.0
    athlete_id: int | None = None


class AcwrPoint(BaseModel):
    """Acute/chronic load and ratio on one anchor date. Derived, never persisted."""

    model_config = ConfigDict(frozen=True)

    date: date
    acute_load: float
    chronic_load: float
    ratio: float
    risk_zone: RiskZone
    very_high: bool = False  # ratio above the very-high hint; still injury_risk
    athlete_id: int | None = None


class TrainingLoadPoint(BaseModel):
    """Per-date load with training-type breakdown, as served to load charts."""

    date: date
    load: int
    training_type: str = Field("Total", serialization_alias="trainingType")
    field_training: int = Field(0, serialization_alias="fieldTraining")
    gym_training: int = Field(0, serialization_alias="gymTraining")
    match_game: int = Field(0, serialization_alias="matchGame")
    athlete_id: int | None = Field(None, serialization_alias="athleteId")


class WeeklyLoad(BaseModel):
    week_start: date  # Monday
    load: float
