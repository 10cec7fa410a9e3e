"""Shared fixtures: calendar helpers and observation/diary factories."""

from datetime import date, timedelta

import pytest

from trainup.schemas.load import DailyLoad, LoadObservation, LoadParameters
from trainup.schemas.risk import DiarySignal

pytest_plugins = ["pytest_asyncio"]

DAY_ONE = date(2026, 1, 1)


def day(n: int) -> date:
    """Calendar date of day n, day 1 being DAY_ONE."""
    return DAY_ONE + timedelta(days=n - 1)


@pytest.fixture
def params():
    """Default load parameters: 60 min standard duration, 1.00-1.20 emotional table."""
    return LoadParameters()


@pytest.fixture
def make_observation():
    def _make(n: int, effort: int = 5, duration: int | None = 60, emotional: int | None = None, **kw):
        return LoadObservation(
            athlete_id=kw.pop("athlete_id", 1),
            date=day(n),
            effort_level=effort,
            duration_minutes=duration,
            emotional_load=emotional,
            **kw,
        )

    return _make


@pytest.fixture
def daily_series():
    """Daily loads for consecutive days starting at day 1; None entries are left out (rest days)."""

    def _series(loads, athlete_id=1):
        return [
            DailyLoad(date=day(i + 1), total_load=load, athlete_id=athlete_id)
            for i, load in enumerate(loads)
            if load is not None
        ]

    return _series


@pytest.fixture
def make_diary():
    def _make(n: int, **kw):
        return DiarySignal(date=day(n), **kw)

    return _make
