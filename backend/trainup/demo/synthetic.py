"""
Synthetic demo data. For demos and fixtures only: nothing in trainup.services imports this,
and real computations never fall back to it when history is missing.
"""
import random
from datetime import date, timedelta

from trainup.schemas.load import LoadObservation
from trainup.schemas.risk import DiarySignal

TRAINING_TYPES = ["Field Training", "Gym Training", "Match/Game"]
MUSCLE_GROUPS = ["hamstrings", "quadriceps", "calves", "lower_back", "shoulders"]


def generate_observations(
    athlete_id: int,
    start: date,
    days: int,
    *,
    seed: int = 0,
    rest_probability: float = 0.2,
    match_every: int = 7,
) -> list[LoadObservation]:
    """
    One session on most days; every `match_every`-th day is a match, the rest are
    field or gym sessions. Same seed, same data.
    """
    rng = random.Random(seed)
    out: list[LoadObservation] = []
    for i in range(days):
        day = start + timedelta(days=i)
        is_match = match_every > 0 and i % match_every == match_every - 1
        if not is_match and rng.random() < rest_probability:
            continue
        out.append(
            LoadObservation(
                athlete_id=athlete_id,
                date=day,
                effort_level=rng.randint(7, 10) if is_match else rng.randint(3, 8),
                emotional_load=rng.randint(1, 5),
                duration_minutes=90 if is_match else rng.choice([45, 60, 75, 90]),
                training_type="Match/Game" if is_match else rng.choice(TRAINING_TYPES[:2]),
            )
        )
    return out


def generate_diaries(
    start: date,
    days: int,
    *,
    seed: int = 0,
    injury_on: date | None = None,
) -> list[DiarySignal]:
    """Daily morning diaries with readiness around 65, newest first."""
    rng = random.Random(seed)
    out: list[DiarySignal] = []
    for i in range(days):
        day = start + timedelta(days=i)
        readiness = max(0, min(100, int(rng.gauss(65, 12))))
        injured = injury_on is not None and day >= injury_on
        out.append(
            DiarySignal(
                date=day,
                readiness_score=readiness,
                recovery_level="poor" if readiness < 50 else ("good" if readiness >= 75 else "average"),
                sore_areas=frozenset(rng.sample(MUSCLE_GROUPS, k=rng.randint(0, 2))),
                has_injury=injured,
                pain_intensity=rng.randint(2, 8) if injured else None,
                injury_note="Hamstring tightness after sprint drills" if injured else None,
            )
        )
    return sorted(out, key=lambda d: d.date, reverse=True)
