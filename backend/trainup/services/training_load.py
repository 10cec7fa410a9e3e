"""Chart-facing shapes: training-load breakdown by type, weekly totals, ACWR serialization."""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from typing import Any

from trainup.schemas.load import AcwrPoint, DailyLoad, LoadObservation, LoadParameters, TrainingLoadPoint, WeeklyLoad
from trainup.services.injury_risk import round_half_up
from trainup.services.session_load import session_load

# Entry labels (and their short forms) -> breakdown column
TRAINING_TYPE_COLUMNS: dict[str, str] = {
    "Field Training": "field_training",
    "Field": "field_training",
    "Gym Training": "gym_training",
    "Gym": "gym_training",
    "Match/Game": "match_game",
    "Match": "match_game",
}


def training_load_breakdown(
    observations: Iterable[LoadObservation],
    params: LoadParameters | None = None,
    *,
    athlete_id: int | None = None,
) -> list[TrainingLoadPoint]:
    """
    Per-date total load with field/gym/match columns. Each session is rounded to whole AU
    before summing. Types without a column still count toward the total.
    """
    params = params or LoadParameters.from_settings()
    by_date: dict[date, dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for obs in observations:
        load = round_half_up(session_load(obs, params))
        row = by_date[obs.date]
        row["load"] += load
        column = TRAINING_TYPE_COLUMNS.get((obs.training_type or "").strip())
        if column:
            row[column] += load
    return [
        TrainingLoadPoint(
            date=d,
            load=row["load"],
            field_training=row["field_training"],
            gym_training=row["gym_training"],
            match_game=row["match_game"],
            athlete_id=athlete_id,
        )
        for d, row in sorted(by_date.items())
    ]


def serialize_training_load(points: Sequence[TrainingLoadPoint]) -> list[dict[str, Any]]:
    return [p.model_dump(mode="json", by_alias=True, exclude_none=True) for p in points]


def weekly_totals(daily: Iterable[DailyLoad]) -> list[WeeklyLoad]:
    """Sum of daily loads per Monday-anchored week, oldest first."""
    weeks: dict[date, float] = defaultdict(float)
    for d in daily:
        weeks[d.date - timedelta(days=d.date.weekday())] += d.total_load
    return [WeeklyLoad(week_start=w, load=round(total, 1)) for w, total in sorted(weeks.items())]


def serialize_acwr(points: Sequence[AcwrPoint]) -> list[dict[str, Any]]:
    """ACWR series as dashboards read it: whole-AU acute/chronic, ratio to 2 dp."""
    out = []
    for p in points:
        item: dict[str, Any] = {
            "date": p.date.isoformat(),
            "acute": round_half_up(p.acute_load),
            "chronic": round_half_up(p.chronic_load),
            "ratio": round(p.ratio, 2),
            "riskZone": p.risk_zone.value,
        }
        if p.athlete_id is not None:
            item["athleteId"] = p.athlete_id
        out.append(item)
    return out
