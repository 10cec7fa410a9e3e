"""
Training intensity recommendations.

Layered: readiness sets the starting tier, then ACWR, recovery trend and recent load
adjust it one tier at a time. Reported pain or injury forces Rest regardless of the rest.
"""
import logging
from collections import Counter
from collections.abc import Sequence
from datetime import date

from trainup.config import settings
from trainup.schemas.load import AcwrPoint
from trainup.schemas.recommendation import (
    Intensity,
    IntensityRecommendation,
    RecoveryTrend,
    RiskLevel,
    SymptomFlags,
    TeamRecommendation,
    TeamSessionType,
)
from trainup.schemas.risk import DiarySignal
from trainup.services.injury_risk import round_half_up

logger = logging.getLogger(__name__)

TIERS = [Intensity.REST, Intensity.LOW, Intensity.MODERATE, Intensity.HIGH]
TIER_RPE = {Intensity.REST: 0, Intensity.LOW: 3, Intensity.MODERATE: 5, Intensity.HIGH: 7}
TIER_CONFIDENCE = {Intensity.REST: 85, Intensity.LOW: 80, Intensity.MODERATE: 75, Intensity.HIGH: 85}
TIER_RISK = {
    Intensity.REST: RiskLevel.HIGH,
    Intensity.LOW: RiskLevel.HIGH,
    Intensity.MODERATE: RiskLevel.MEDIUM,
    Intensity.HIGH: RiskLevel.LOW,
}
MAX_UPGRADED_RPE = 8
PAIN_REST_ABOVE = 6
TREND_SAMPLE = 5
TREND_MIN_SAMPLES = 3
TREND_DELTA = 5.0
DEFAULT_TEAM_READINESS = 60


def _down(intensity: Intensity) -> Intensity:
    return TIERS[max(TIERS.index(intensity) - 1, 0)]


def _up(intensity: Intensity) -> Intensity:
    return TIERS[min(TIERS.index(intensity) + 1, len(TIERS) - 1)]


def readiness_tier(readiness_score: float) -> Intensity:
    if readiness_score >= 70:
        return Intensity.HIGH
    if readiness_score >= 50:
        return Intensity.MODERATE
    if readiness_score >= 35:
        return Intensity.LOW
    return Intensity.REST


def recovery_trend(diaries: Sequence[DiarySignal]) -> RecoveryTrend:
    """
    Direction of readiness over the last five diaries. Scores are put in chronological
    order and split into an older half (floor(n/2) entries) and a newer half;
    newer average minus older average above 5 is improving, below -5 declining.
    Fewer than three scores is stable.
    """
    scored = [d for d in diaries if d.readiness_score is not None]
    recent = sorted(scored, key=lambda d: d.date, reverse=True)[:TREND_SAMPLE]
    if len(recent) < TREND_MIN_SAMPLES:
        return RecoveryTrend.STABLE
    scores = [d.readiness_score for d in reversed(recent)]  # oldest first
    split = len(scores) // 2
    older, newer = scores[:split], scores[split:]
    delta = sum(newer) / len(newer) - sum(older) / len(older)
    if delta > TREND_DELTA:
        return RecoveryTrend.IMPROVING
    if delta < -TREND_DELTA:
        return RecoveryTrend.DECLINING
    return RecoveryTrend.STABLE


def _has_health_concern(flags: SymptomFlags | None) -> bool:
    if flags is None:
        return False
    pain = flags.pain_intensity is not None and flags.pain_intensity > PAIN_REST_ABOVE
    return pain or bool((flags.injury_note or "").strip())


def recommend_intensity(
    readiness_score: float,
    acwr: AcwrPoint | float | None,
    trend: RecoveryTrend,
    symptom_flags: SymptomFlags | None = None,
    *,
    recent_load: float | None = None,
    athlete_id: int | None = None,
) -> IntensityRecommendation:
    """
    Recommend intensity, RPE, risk level and confidence for today's session.
    acwr=None means there is not enough history for a ratio; no ACWR adjustment is made.
    """
    reasoning: list[str] = []
    reason_code = "NORMAL"
    readiness = round_half_up(readiness_score)

    intensity = readiness_tier(readiness_score)
    if intensity is Intensity.HIGH:
        reasoning.append(f"Good readiness score ({readiness}%)")
    elif intensity is Intensity.MODERATE:
        reasoning.append(f"Moderate readiness score ({readiness}%)")
    elif intensity is Intensity.LOW:
        reason_code = "POOR_READINESS"
        reasoning.append(f"Poor readiness score ({readiness}%)")
        reasoning.append("Light activity only to promote recovery")
    else:
        reason_code = "LOW_READINESS"
        reasoning.append(f"Very low readiness score ({readiness}%)")
        reasoning.append("Complete rest recommended for recovery")
    rpe = TIER_RPE[intensity]
    risk = TIER_RISK[intensity]
    confidence = TIER_CONFIDENCE[intensity]

    ratio = acwr.ratio if isinstance(acwr, AcwrPoint) else acwr
    if ratio is None:
        reasoning.append("Not enough training history for an ACWR ratio")
    elif ratio > settings.acwr_recommendation_high:
        intensity = _down(intensity)
        rpe = TIER_RPE[intensity]
        risk = RiskLevel.HIGH
        reason_code = "HIGH_ACWR"
        reasoning.append(f"Very high ACWR ratio ({ratio:.2f}) indicates injury risk")
        reasoning.append("Reducing intensity to manage load progression")
        confidence -= 15
    elif ratio < settings.acwr_undertraining_below:
        if readiness_score >= 70:
            if intensity is Intensity.HIGH:
                rpe = min(rpe + 1, MAX_UPGRADED_RPE)
            else:
                intensity = _up(intensity)
                rpe = TIER_RPE[intensity]
            reasoning.append(f"Low ACWR ratio ({ratio:.2f}) suggests potential for increased load")
    elif ratio <= settings.acwr_injury_risk_above:
        reasoning.append(f"ACWR ratio ({ratio:.2f}) is within optimal range")
    else:
        reasoning.append(f"Elevated ACWR ratio ({ratio:.2f}); monitor load progression")

    if trend is RecoveryTrend.DECLINING and intensity is not Intensity.REST:
        intensity = _down(intensity)
        rpe = TIER_RPE[intensity]
        reasoning.append("Declining recovery trend suggests need for reduced intensity")
        confidence -= 10
    elif trend is RecoveryTrend.IMPROVING and readiness_score > 60:
        reasoning.append("Improving recovery trend supports current training approach")
        confidence += 10

    if recent_load is not None and recent_load > settings.recent_load_high_au:
        if intensity is Intensity.HIGH:
            intensity = Intensity.MODERATE
            rpe = TIER_RPE[intensity]
        reasoning.append(f"High recent training load ({round_half_up(recent_load)} AU)")
        reasoning.append("Managing accumulated fatigue")

    if _has_health_concern(symptom_flags):
        intensity = Intensity.REST
        rpe = 0
        risk = RiskLevel.HIGH
        reason_code = "HEALTH_CONCERNS"
        reasoning.append("Health symptoms or injury reported")
        reasoning.append("Complete rest until symptoms resolve")
        confidence = 90

    return IntensityRecommendation(
        athlete_id=athlete_id,
        intensity=intensity,
        rpe=rpe,
        risk_level=risk,
        confidence=max(0, min(100, confidence)),
        reason_code=reason_code,
        reasoning=reasoning,
    )


def default_recommendation(athlete_id: int | None = None) -> IntensityRecommendation:
    """Used when an athlete has no wellness diary to score."""
    return IntensityRecommendation(
        athlete_id=athlete_id,
        intensity=Intensity.MODERATE,
        rpe=5,
        risk_level=RiskLevel.MEDIUM,
        confidence=30,
        reason_code="NO_DATA",
        reasoning=["No recent wellness data available", "Using moderate intensity as default"],
    )


def _team_session_type(recommendations: Sequence[IntensityRecommendation], team_readiness: float) -> TeamSessionType:
    total = len(recommendations)
    if total == 0:
        return TeamSessionType.MODERATE
    counts = Counter(r.intensity for r in recommendations)
    rest_share = counts[Intensity.REST] / total
    low_share = counts[Intensity.LOW] / total
    if rest_share > 0.4:
        return TeamSessionType.REST_DAY
    if rest_share + low_share > 0.5:
        return TeamSessionType.RECOVERY
    if team_readiness > 75 and counts[Intensity.HIGH] > counts[Intensity.LOW]:
        return TeamSessionType.HIGH_INTENSITY
    return TeamSessionType.MODERATE


def recommend_team_session(
    recommendations: Sequence[IntensityRecommendation],
    readiness_scores: Sequence[float],
    *,
    on: date | None = None,
) -> TeamRecommendation:
    """Team session type and reasoning from individual recommendations and latest readiness scores."""
    scores = [s for s in readiness_scores if s > 0]
    team_readiness = sum(scores) / len(scores) if scores else DEFAULT_TEAM_READINESS
    active = [r for r in recommendations if r.intensity is not Intensity.REST]
    participation = len(active) / len(recommendations) * 100 if recommendations else 0.0

    reasoning = [
        f"Team readiness: {team_readiness:.1f}%",
        f"{participation:.0f}% of athletes available for training",
    ]
    high_risk = sum(1 for r in recommendations if r.risk_level is RiskLevel.HIGH)
    if high_risk:
        reasoning.append(f"{high_risk} athlete(s) at high injury risk")
    codes = {r.reason_code for r in recommendations}
    if "HEALTH_CONCERNS" in codes:
        reasoning.append("Some athletes reporting health concerns")
    if "HIGH_ACWR" in codes:
        reasoning.append("Load management needed for some athletes")

    session_type = _team_session_type(recommendations, team_readiness)
    logger.info(
        "Team recommendation: readiness=%.0f participation=%.0f%% session=%s",
        team_readiness,
        participation,
        session_type.value,
    )
    return TeamRecommendation(
        date=on or date.today(),
        team_readiness=round_half_up(team_readiness),
        session_type=session_type,
        participation_rate=round_half_up(participation),
        recommendations=list(recommendations),
        team_reasoning=reasoning,
    )
