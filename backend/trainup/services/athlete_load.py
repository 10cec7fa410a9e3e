"""
Athlete and roster load pipeline: reads training entries and morning diaries for the
given athletes, then runs aggregation, rolling windows and the scorers.
"""
import logging
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trainup.models.morning_diary import MorningDiary
from trainup.models.training_entry import TrainingEntry
from trainup.schemas.load import AcwrPoint, DailyLoad, LoadObservation, LoadParameters, TrainingLoadPoint
from trainup.schemas.recommendation import IntensityRecommendation, SymptomFlags, TeamRecommendation
from trainup.schemas.risk import Alert, DiarySignal, RiskAssessment
from trainup.services.alerts import todays_alerts
from trainup.services.injury_risk import DIARY_LOOKBACK, rank_injury_risk, score_injury_risk
from trainup.services.recommendations import (
    default_recommendation,
    recommend_intensity,
    recommend_team_session,
    recovery_trend,
)
from trainup.services.rolling_window import compute_windows, latest_point
from trainup.services.session_load import aggregate
from trainup.services.training_load import training_load_breakdown

logger = logging.getLogger(__name__)

NO_SORENESS_KEY = "_no_soreness"
RECENT_LOAD_DAYS = 7


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


async def fetch_load_observations(
    session: AsyncSession,
    athlete_id: int,
    *,
    from_date: date | None = None,
    to_date: date | None = None,
) -> list[LoadObservation]:
    """Training entries for one athlete as LoadObservations. Rows failing validation are skipped."""
    stmt = select(
        TrainingEntry.date,
        TrainingEntry.effort_level,
        TrainingEntry.emotional_load,
        TrainingEntry.session_duration,
        TrainingEntry.training_type,
    ).where(TrainingEntry.user_id == athlete_id)
    if from_date is not None:
        stmt = stmt.where(TrainingEntry.date >= from_date)
    if to_date is not None:
        stmt = stmt.where(TrainingEntry.date <= to_date)
    r = await session.execute(stmt)
    observations: list[LoadObservation] = []
    for row in r.all():
        entry_date, effort, emotional, duration, training_type = row
        if entry_date is None or effort is None:
            continue
        try:
            observations.append(
                LoadObservation(
                    athlete_id=athlete_id,
                    date=_as_date(entry_date),
                    effort_level=effort,
                    emotional_load=emotional,
                    duration_minutes=duration or None,
                    training_type=training_type,
                )
            )
        except ValidationError as e:
            logger.warning("Skipping invalid training entry for athlete %s on %s: %s", athlete_id, entry_date, e)
    logger.debug("Fetched %d training entries for athlete %s", len(observations), athlete_id)
    return observations


def _sore_areas(soreness_map: dict | None) -> frozenset[str]:
    if not soreness_map:
        return frozenset()
    return frozenset(k for k, v in soreness_map.items() if v and k != NO_SORENESS_KEY)


async def fetch_diary_signals(
    session: AsyncSession,
    athlete_id: int,
    *,
    limit: int = DIARY_LOOKBACK,
    to_date: date | None = None,
) -> list[DiarySignal]:
    """Most recent morning diaries for one athlete, newest first."""
    stmt = (
        select(
            MorningDiary.date,
            MorningDiary.readiness_score,
            MorningDiary.recovery_level,
            MorningDiary.soreness_map,
            MorningDiary.symptoms,
            MorningDiary.has_injury,
            MorningDiary.pain_level,
            MorningDiary.injury_notes,
        )
        .where(MorningDiary.user_id == athlete_id)
    )
    if to_date is not None:
        stmt = stmt.where(MorningDiary.date <= to_date)
    stmt = stmt.order_by(MorningDiary.date.desc(), MorningDiary.created_at.desc()).limit(limit)
    r = await session.execute(stmt)
    signals: list[DiarySignal] = []
    for row in r.all():
        d, readiness, recovery, soreness, symptoms, has_injury, pain, notes = row
        try:
            signals.append(
                DiarySignal(
                    date=_as_date(d),
                    readiness_score=readiness,
                    recovery_level=recovery,
                    sore_areas=_sore_areas(soreness),
                    symptoms=tuple(symptoms or ()),
                    has_injury=bool(has_injury),
                    pain_intensity=pain if has_injury else None,
                    injury_note=notes if has_injury else None,
                )
            )
        except ValidationError as e:
            logger.warning("Skipping invalid diary for athlete %s on %s: %s", athlete_id, d, e)
    return sorted(signals, key=lambda s: s.date, reverse=True)


async def compute_athlete_acwr(
    session: AsyncSession,
    athlete_id: int,
    *,
    as_of: date | None = None,
    params: LoadParameters | None = None,
) -> list[AcwrPoint]:
    """
    ACWR series for one athlete. With as_of, rest days after the last session up to
    as_of are included. [] when there is less than a full chronic window of history.
    """
    observations = await fetch_load_observations(session, athlete_id, to_date=as_of)
    points = compute_windows(aggregate(observations, params), through=as_of)
    if not points:
        logger.debug("No ACWR for athlete %s: insufficient history", athlete_id)
    return points


async def athlete_training_load(
    session: AsyncSession,
    athlete_id: int,
    *,
    from_date: date | None = None,
    to_date: date | None = None,
    params: LoadParameters | None = None,
) -> list[TrainingLoadPoint]:
    observations = await fetch_load_observations(session, athlete_id, from_date=from_date, to_date=to_date)
    return training_load_breakdown(observations, params, athlete_id=athlete_id)


async def assess_athlete_injury_risk(
    session: AsyncSession,
    athlete_id: int,
    *,
    as_of: date | None = None,
    params: LoadParameters | None = None,
) -> RiskAssessment:
    as_of = as_of or date.today()
    observations = await fetch_load_observations(session, athlete_id, to_date=as_of)
    diaries = await fetch_diary_signals(session, athlete_id, to_date=as_of)
    latest = latest_point(compute_windows(aggregate(observations, params), through=as_of))
    return score_injury_risk(observations, latest, diaries, athlete_id=athlete_id, as_of=as_of)


def _recent_load(daily: Sequence[DailyLoad], as_of: date) -> float:
    start = as_of - timedelta(days=RECENT_LOAD_DAYS - 1)
    return sum(d.total_load for d in daily if start <= d.date <= as_of)


async def recommend_for_athlete(
    session: AsyncSession,
    athlete_id: int,
    *,
    as_of: date | None = None,
    params: LoadParameters | None = None,
) -> IntensityRecommendation:
    """Today's intensity for one athlete; NO_DATA default when there is no scored diary."""
    as_of = as_of or date.today()
    diaries = await fetch_diary_signals(session, athlete_id, to_date=as_of)
    if not diaries or diaries[0].readiness_score is None:
        logger.info("No readiness data for athlete %s, using default recommendation", athlete_id)
        return default_recommendation(athlete_id)
    latest_diary = diaries[0]
    observations = await fetch_load_observations(session, athlete_id, to_date=as_of)
    daily = aggregate(observations, params)
    latest = latest_point(compute_windows(daily, through=as_of))
    return recommend_intensity(
        latest_diary.readiness_score,
        latest,
        recovery_trend(diaries),
        SymptomFlags(pain_intensity=latest_diary.pain_intensity, injury_note=latest_diary.injury_note),
        recent_load=_recent_load(daily, as_of),
        athlete_id=athlete_id,
    )


async def compute_roster_acwr(
    session: AsyncSession,
    athlete_ids: Sequence[int],
    *,
    as_of: date | None = None,
    params: LoadParameters | None = None,
) -> dict[int, list[AcwrPoint]]:
    """ACWR series per athlete, keyed in ascending athlete id order."""
    result: dict[int, list[AcwrPoint]] = {}
    # One AsyncSession cannot run queries concurrently; athletes are processed in turn.
    for athlete_id in sorted(set(athlete_ids)):
        result[athlete_id] = await compute_athlete_acwr(session, athlete_id, as_of=as_of, params=params)
    logger.info(
        "Roster ACWR computed for %d athletes (%d with sufficient history)",
        len(result),
        sum(1 for p in result.values() if p),
    )
    return result


async def roster_injury_risk(
    session: AsyncSession,
    athlete_ids: Sequence[int],
    *,
    as_of: date | None = None,
    params: LoadParameters | None = None,
) -> list[RiskAssessment]:
    """Injury risk for every athlete, highest first."""
    assessments = [
        await assess_athlete_injury_risk(session, athlete_id, as_of=as_of, params=params)
        for athlete_id in sorted(set(athlete_ids))
    ]
    return rank_injury_risk(assessments)


async def team_recommendation(
    session: AsyncSession,
    athlete_ids: Sequence[int],
    *,
    as_of: date | None = None,
    params: LoadParameters | None = None,
) -> TeamRecommendation:
    as_of = as_of or date.today()
    recommendations: list[IntensityRecommendation] = []
    readiness: list[float] = []
    for athlete_id in sorted(set(athlete_ids)):
        recommendations.append(await recommend_for_athlete(session, athlete_id, as_of=as_of, params=params))
        diaries = await fetch_diary_signals(session, athlete_id, limit=1, to_date=as_of)
        if diaries and diaries[0].readiness_score is not None:
            readiness.append(diaries[0].readiness_score)
    return recommend_team_session(recommendations, readiness, on=as_of)


async def roster_alerts(
    session: AsyncSession,
    athlete_ids: Sequence[int],
    *,
    today: date | None = None,
    params: LoadParameters | None = None,
) -> list[Alert]:
    today = today or date.today()
    latest_diaries: dict[int, DiarySignal] = {}
    latest_acwr: dict[int, AcwrPoint | None] = {}
    for athlete_id in sorted(set(athlete_ids)):
        diaries = await fetch_diary_signals(session, athlete_id, limit=1, to_date=today)
        if diaries:
            latest_diaries[athlete_id] = diaries[0]
        latest_acwr[athlete_id] = latest_point(
            await compute_athlete_acwr(session, athlete_id, as_of=today, params=params)
        )
    return todays_alerts(latest_diaries, latest_acwr, today=today)
