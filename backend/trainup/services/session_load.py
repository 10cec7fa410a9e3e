"""
Session load (RPE x duration x emotional multiplier) and per-date aggregation.
Gap filling is left to the rolling window engine.
"""
import logging
import math
from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from trainup.schemas.load import DailyLoad, LoadObservation, LoadParameters

logger = logging.getLogger(__name__)


def emotional_multiplier(emotional_load: int | None, table: dict[int, float]) -> float:
    """
    Multiplier for an emotional load level: value of the greatest table key
    not above the level. Missing level or a level below every key -> 1.0.
    """
    if emotional_load is None:
        return 1.0
    eligible = [k for k in table if k <= emotional_load]
    if not eligible:
        return 1.0
    return table[max(eligible)]


def session_load(obs: LoadObservation, params: LoadParameters) -> float:
    """Load of one session in AU."""
    duration = obs.duration_minutes or params.default_duration_minutes
    return obs.effort_level * duration * emotional_multiplier(obs.emotional_load, params.emotional_multipliers)


def aggregate(
    observations: Iterable[LoadObservation],
    params: LoadParameters | None = None,
) -> list[DailyLoad]:
    """
    Sum session loads per (athlete, date). Input may be unordered and mixed across athletes;
    output is sorted by date, then athlete.
    """
    params = params or LoadParameters.from_settings()
    loads: dict[tuple[int, date], list[float]] = defaultdict(list)
    count = 0
    for obs in observations:
        loads[(obs.athlete_id, obs.date)].append(session_load(obs, params))
        count += 1
    logger.debug("Aggregated %d sessions into %d daily loads", count, len(loads))
    # fsum keeps totals independent of input order
    return [
        DailyLoad(date=d, total_load=math.fsum(values), athlete_id=athlete_id)
        for (athlete_id, d), values in sorted(loads.items(), key=lambda kv: (kv[0][1], kv[0][0]))
    ]
