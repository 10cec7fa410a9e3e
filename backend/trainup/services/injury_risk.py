"""
Injury-risk score: additive points from wellness and load signals, capped at 100.
Rules are evaluated in a fixed order; factors are listed in that order.
"""
import logging
import math
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from trainup.config import settings
from trainup.schemas.load import AcwrPoint, LoadObservation
from trainup.schemas.risk import DiarySignal, RiskAssessment

logger = logging.getLogger(__name__)

MAX_RISK_SCORE = 100
DIARY_LOOKBACK = 7  # most recent diary entries considered
LOAD_LOOKBACK_DAYS = 7

CURRENT_INJURY_POINTS = 30
POOR_RECOVERY_POINTS = 20
POOR_RECOVERY_MIN_ENTRIES = 3
CHRONIC_SORENESS_POINTS = 15
CHRONIC_SORENESS_MIN_ENTRIES = 3
HIGH_EFFORT_POINTS = 25
HIGH_EFFORT_MIN_SESSIONS = 3
HIGH_ACWR_BASE_POINTS = 10
HIGH_ACWR_POINTS_PER_UNIT = 50

INSUFFICIENT_DATA = "Insufficient data"


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def high_acwr_points(ratio: float, above: float) -> int:
    """10 + round((ratio - above) * 50); not capped here."""
    return HIGH_ACWR_BASE_POINTS + round_half_up((ratio - above) * HIGH_ACWR_POINTS_PER_UNIT)


def most_recent(diaries: Iterable[DiarySignal], limit: int = DIARY_LOOKBACK) -> list[DiarySignal]:
    return sorted(diaries, key=lambda d: d.date, reverse=True)[:limit]


def chronic_sore_areas(diaries: Sequence[DiarySignal], min_entries: int = CHRONIC_SORENESS_MIN_ENTRIES) -> list[str]:
    counts = Counter(area for d in diaries for area in d.sore_areas)
    return sorted(area for area, n in counts.items() if n >= min_entries)


def count_high_effort_sessions(
    history: Iterable[LoadObservation],
    as_of: date,
    *,
    level: int,
    days: int = LOAD_LOOKBACK_DAYS,
) -> int:
    """Sessions with effort >= level in the `days` calendar days ending at as_of."""
    start = as_of - timedelta(days=days - 1)
    return sum(1 for obs in history if start <= obs.date <= as_of and obs.effort_level >= level)


def score_injury_risk(
    history: Sequence[LoadObservation],
    latest_acwr: AcwrPoint | float | None,
    recent_diary_signals: Sequence[DiarySignal],
    *,
    athlete_id: int | None = None,
    as_of: date | None = None,
    high_effort_level: int | None = None,
    acwr_risk_above: float | None = None,
) -> RiskAssessment:
    """
    Combine current injury, poor recovery, chronic soreness, high-effort density and ACWR
    into a 0-100 score. No history and no diaries -> score 0, "Insufficient data".
    """
    if not history and not recent_diary_signals:
        return RiskAssessment(athlete_id=athlete_id, risk_score=0, factors=[INSUFFICIENT_DATA])

    as_of = as_of or date.today()
    level = high_effort_level if high_effort_level is not None else settings.high_effort_level
    above = acwr_risk_above if acwr_risk_above is not None else settings.acwr_injury_risk_above
    ratio = latest_acwr.ratio if isinstance(latest_acwr, AcwrPoint) else latest_acwr

    score = 0
    factors: list[str] = []
    diaries = most_recent(recent_diary_signals)

    if diaries and diaries[0].has_injury:
        score += CURRENT_INJURY_POINTS
        factors.append("Current injury reported")

    poor = sum(1 for d in diaries if (d.recovery_level or "").strip().lower() == "poor")
    if poor >= POOR_RECOVERY_MIN_ENTRIES:
        score += POOR_RECOVERY_POINTS
        factors.append("Chronic poor recovery")

    sore = chronic_sore_areas(diaries)
    if sore:
        score += CHRONIC_SORENESS_POINTS
        factors.append(f"Chronic soreness: {', '.join(sore)}")

    if count_high_effort_sessions(history, as_of, level=level) >= HIGH_EFFORT_MIN_SESSIONS:
        score += HIGH_EFFORT_POINTS
        factors.append("Multiple high-effort sessions in past week")

    if ratio is not None and ratio > above:
        score += high_acwr_points(ratio, above)
        factors.append(f"High ACWR ratio: {ratio:.2f}")

    logger.debug("Injury risk athlete=%s raw=%d factors=%d", athlete_id, score, len(factors))
    return RiskAssessment(athlete_id=athlete_id, risk_score=min(MAX_RISK_SCORE, score), factors=factors)


def rank_injury_risk(assessments: Iterable[RiskAssessment]) -> list[RiskAssessment]:
    """Highest risk first; ties by athlete id."""
    return sorted(
        assessments,
        key=lambda a: (-a.risk_score, a.athlete_id if a.athlete_id is not None else -1),
    )
