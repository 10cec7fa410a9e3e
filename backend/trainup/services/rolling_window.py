"""
Rolling acute/chronic windows over a dense daily load series.

Windows are anchored to calendar days: a rest day is a zero-load day inside the
window, never a skipped entry. Points are only emitted once a full chronic window
of history exists.
"""
import logging
from collections.abc import Sequence
from datetime import date, timedelta

from trainup.config import settings
from trainup.schemas.load import AcwrPoint, DailyLoad
from trainup.services.acwr import AcwrThresholds, acwr_ratio, classify, is_very_high

logger = logging.getLogger(__name__)


def _single_athlete(daily: Sequence[DailyLoad]) -> int | None:
    ids = {d.athlete_id for d in daily if d.athlete_id is not None}
    if len(ids) > 1:
        raise ValueError(f"daily loads span {len(ids)} athletes; partition by athlete first")
    return next(iter(ids), None)


def densify(daily: Sequence[DailyLoad], through: date | None = None) -> list[DailyLoad]:
    """
    One entry per calendar date from the first observed date to the last one
    (or to `through` when that is later). Missing dates get total_load 0; duplicate
    dates are summed.
    """
    if not daily:
        return []
    athlete_id = _single_athlete(daily)
    by_date: dict[date, float] = {}
    for d in daily:
        by_date[d.date] = by_date.get(d.date, 0.0) + d.total_load
    start = min(by_date)
    end = max(by_date)
    if through is not None and through > end:
        end = through
    out: list[DailyLoad] = []
    day = start
    while day <= end:
        out.append(DailyLoad(date=day, total_load=by_date.get(day, 0.0), athlete_id=athlete_id))
        day += timedelta(days=1)
    return out


def _resolve_windows(acute_days: int | None, chronic_days: int | None) -> tuple[int, int]:
    acute = acute_days if acute_days is not None else settings.acute_window_days
    chronic = chronic_days if chronic_days is not None else settings.chronic_window_days
    if acute < 1:
        raise ValueError("acute_days must be at least 1")
    if acute > chronic:
        raise ValueError("acute_days must not exceed chronic_days")
    return acute, chronic


def _point(
    day: date,
    acute: float,
    chronic: float,
    athlete_id: int | None,
    thresholds: AcwrThresholds,
) -> AcwrPoint:
    ratio = acwr_ratio(acute, chronic)
    return AcwrPoint(
        date=day,
        acute_load=acute,
        chronic_load=chronic,
        ratio=ratio,
        risk_zone=classify(ratio, thresholds),
        very_high=is_very_high(ratio, thresholds),
        athlete_id=athlete_id,
    )


def compute_windows(
    daily: Sequence[DailyLoad],
    acute_days: int | None = None,
    chronic_days: int | None = None,
    *,
    through: date | None = None,
    thresholds: AcwrThresholds | None = None,
) -> list[AcwrPoint]:
    """
    Acute (mean of last acute_days) and chronic (mean of last chronic_days) load for every
    date with a full chronic window behind it. O(n) sliding sums.
    Returns [] when the dense series is shorter than chronic_days.
    """
    acute_days, chronic_days = _resolve_windows(acute_days, chronic_days)
    thresholds = thresholds or AcwrThresholds.from_settings()
    dense = densify(daily, through=through)
    if len(dense) < chronic_days:
        logger.debug("Insufficient history for ACWR: %d dense days < %d", len(dense), chronic_days)
        return []

    loads = [d.total_load for d in dense]
    acute_sum = sum(loads[chronic_days - acute_days:chronic_days])
    chronic_sum = sum(loads[:chronic_days])
    # Nonzero days per window. An all-rest window sums to exactly 0.0.
    acute_active = sum(1 for x in loads[chronic_days - acute_days:chronic_days] if x)
    chronic_active = sum(1 for x in loads[:chronic_days] if x)
    points: list[AcwrPoint] = []
    for i in range(chronic_days - 1, len(dense)):
        if i >= chronic_days:
            entering, acute_leaving, chronic_leaving = loads[i], loads[i - acute_days], loads[i - chronic_days]
            acute_sum += entering - acute_leaving
            chronic_sum += entering - chronic_leaving
            acute_active += bool(entering) - bool(acute_leaving)
            chronic_active += bool(entering) - bool(chronic_leaving)
            if not acute_active:
                acute_sum = 0.0
            if not chronic_active:
                chronic_sum = 0.0
        points.append(
            _point(
                dense[i].date,
                acute_sum / acute_days,
                chronic_sum / chronic_days,
                dense[i].athlete_id,
                thresholds,
            )
        )
    return points


def brute_force_windows(
    daily: Sequence[DailyLoad],
    acute_days: int | None = None,
    chronic_days: int | None = None,
    *,
    through: date | None = None,
    thresholds: AcwrThresholds | None = None,
) -> list[AcwrPoint]:
    """Reference implementation: re-sums each window from scratch. O(n * window)."""
    acute_days, chronic_days = _resolve_windows(acute_days, chronic_days)
    thresholds = thresholds or AcwrThresholds.from_settings()
    dense = densify(daily, through=through)
    points: list[AcwrPoint] = []
    for i in range(chronic_days - 1, len(dense)):
        acute = sum(d.total_load for d in dense[i - acute_days + 1:i + 1]) / acute_days
        chronic = sum(d.total_load for d in dense[i - chronic_days + 1:i + 1]) / chronic_days
        points.append(_point(dense[i].date, acute, chronic, dense[i].athlete_id, thresholds))
    return points


def latest_point(points: Sequence[AcwrPoint]) -> AcwrPoint | None:
    return points[-1] if points else None
