"""Tests for session load and per-date aggregation."""

import random
from datetime import date

import pytest
from pydantic import ValidationError

from trainup.schemas.load import DailyLoad, LoadObservation, LoadParameters
from trainup.services.session_load import aggregate, emotional_multiplier, session_load

TABLE = {1: 1.00, 2: 1.05, 3: 1.10, 4: 1.15, 5: 1.20}


def test_session_load_is_effort_times_duration(make_observation, params):
    """Without emotional load, load = RPE x minutes."""
    assert session_load(make_observation(1, effort=5, duration=60), params) == 300


def test_session_load_uses_configured_default_duration(make_observation):
    """Missing duration falls back to the configured standard, not a literal."""
    obs = make_observation(1, effort=4, duration=None)
    assert session_load(obs, LoadParameters(default_duration_minutes=70)) == 280
    assert session_load(obs, LoadParameters(default_duration_minutes=60)) == 240


def test_session_load_applies_emotional_multiplier(make_observation, params):
    obs = make_observation(1, effort=5, duration=60, emotional=5)
    assert session_load(obs, params) == pytest.approx(360.0)


@pytest.mark.parametrize("level,expected", [
    (None, 1.0),
    (0, 1.0),
    (1, 1.0),
    (2, 1.05),
    (3, 1.10),
    (5, 1.20),
    (9, 1.20),
])
def test_emotional_multiplier_default_table(level, expected):
    """Levels use the greatest key not above them; below the table is 1.0."""
    assert emotional_multiplier(level, TABLE) == pytest.approx(expected)


def test_emotional_multiplier_custom_table():
    table = {1: 1.0, 3: 1.5}
    assert emotional_multiplier(2, table) == 1.0
    assert emotional_multiplier(4, table) == 1.5


def test_aggregate_sums_sessions_on_same_date(make_observation, params):
    obs = [
        make_observation(2, effort=5, duration=60),
        make_observation(1, effort=3, duration=30),
        make_observation(2, effort=4, duration=45),
    ]
    result = aggregate(obs, params)
    assert [d.date for d in result] == [date(2026, 1, 1), date(2026, 1, 2)]
    assert [d.total_load for d in result] == [90, 480]
    assert all(d.athlete_id == 1 for d in result)


def test_aggregate_does_not_fill_gaps(make_observation, params):
    result = aggregate([make_observation(1), make_observation(5)], params)
    assert len(result) == 2


def test_aggregate_partitions_by_athlete(make_observation, params):
    obs = [
        make_observation(1, athlete_id=2),
        make_observation(1, athlete_id=1),
        make_observation(1, athlete_id=1, effort=2),
    ]
    result = aggregate(obs, params)
    assert [(d.athlete_id, d.total_load) for d in result] == [(1, 420), (2, 300)]


def test_aggregate_is_independent_of_input_order(make_observation, params):
    """Shuffled input gives identical output, including float totals."""
    rng = random.Random(7)
    obs = [
        make_observation(rng.randint(1, 20), effort=rng.randint(0, 10), duration=rng.choice([30, 45, 60, 90]),
                         emotional=rng.randint(1, 5))
        for _ in range(80)
    ]
    expected = aggregate(obs, params)
    for seed in range(5):
        shuffled = obs[:]
        random.Random(seed).shuffle(shuffled)
        assert aggregate(shuffled, params) == expected


def test_aggregate_empty(params):
    assert aggregate([], params) == []


def test_aggregate_defaults_to_settings(make_observation):
    """Without explicit parameters the settings-backed defaults are used."""
    assert aggregate([make_observation(1, effort=5, duration=None)]) == [
        DailyLoad(date=date(2026, 1, 1), total_load=300, athlete_id=1)
    ]


@pytest.mark.parametrize("field,value", [
    ("effort_level", -1),
    ("effort_level", 11),
    ("emotional_load", 11),
    ("emotional_load", -2),
    ("duration_minutes", 0),
])
def test_out_of_range_observation_is_rejected(field, value):
    data = {"athlete_id": 1, "date": date(2026, 1, 1), "effort_level": 5, field: value}
    with pytest.raises(ValidationError):
        LoadObservation(**data)


def test_load_parameters_reject_empty_table():
    with pytest.raises(ValidationError):
        LoadParameters(emotional_multipliers={})
