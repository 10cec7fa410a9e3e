"""Training recommendation outputs: per athlete and per team."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field


class Intensity(str, Enum):
    REST = "Rest"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RecoveryTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class TeamSessionType(str, Enum):
    REST_DAY = "Rest Day"
    RECOVERY = "Recovery"
    MODERATE = "Moderate"
    HIGH_INTENSITY = "High Intensity"


class SymptomFlags(BaseModel):
    pain_intensity: int | None = Field(None, ge=0, le=10)
    injury_note: str | None = None


class IntensityRecommendation(BaseModel):
    athlete_id: int | None = None
    intensity: Intensity
    rpe: int = Field(..., ge=0, le=10)
    risk_level: RiskLevel
    confidence: int = Field(..., ge=0, le=100)
    reason_code: str = "NORMAL"
    reasoning: list[str] = Field(default_factory=list)


class TeamRecommendation(BaseModel):
    date: date
    team_readiness: int
    session_type: TeamSessionType
    participation_rate: int  # percent of athletes not on Rest
    recommendations: list[IntensityRecommendation] = Field(default_factory=list)
    team_reasoning: list[str] = Field(default_factory=list)
