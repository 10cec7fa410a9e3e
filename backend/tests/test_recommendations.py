"""Tests for recovery trend, intensity recommendation and team session type."""

from datetime import date, timedelta

import pytest

from trainup.schemas.recommendation import (
    Intensity,
    IntensityRecommendation,
    RecoveryTrend,
    RiskLevel,
    SymptomFlags,
    TeamSessionType,
)
from trainup.schemas.risk import DiarySignal
from trainup.services.recommendations import (
    default_recommendation,
    readiness_tier,
    recommend_intensity,
    recommend_team_session,
    recovery_trend,
)

TODAY = date(2026, 3, 10)


def _diaries(scores_oldest_first):
    """Diaries on consecutive days ending today, returned newest first."""
    n = len(scores_oldest_first)
    diaries = [
        DiarySignal(date=TODAY - timedelta(days=n - 1 - i), readiness_score=s)
        for i, s in enumerate(scores_oldest_first)
    ]
    return list(reversed(diaries))


def test_recovery_trend_improving_when_readiness_rises():
    """Older half [50, 52] avg 51; newer half [60, 65, 70] avg 65."""
    assert recovery_trend(_diaries([50, 52, 60, 65, 70])) is RecoveryTrend.IMPROVING


def test_recovery_trend_declining_when_readiness_falls():
    assert recovery_trend(_diaries([70, 65, 60, 52, 50])) is RecoveryTrend.DECLINING


def test_recovery_trend_ignores_input_order():
    diaries = _diaries([50, 52, 60, 65, 70])
    assert recovery_trend(list(reversed(diaries))) is RecoveryTrend.IMPROVING


def test_recovery_trend_uses_five_most_recent():
    """Two old very high scores fall outside the sample."""
    assert recovery_trend(_diaries([100, 100, 50, 52, 60, 65, 70])) is RecoveryTrend.IMPROVING


@pytest.mark.parametrize("scores", [[], [40, 90], [60, 62, 61, 64, 63]])
def test_recovery_trend_stable(scores):
    assert recovery_trend(_diaries(scores)) is RecoveryTrend.STABLE


def test_recovery_trend_skips_unscored_diaries():
    diaries = _diaries([50, 52, 60, 65, 70]) + [DiarySignal(date=TODAY - timedelta(days=9))]
    assert recovery_trend(diaries) is RecoveryTrend.IMPROVING


@pytest.mark.parametrize("readiness,tier", [
    (100, Intensity.HIGH),
    (70, Intensity.HIGH),
    (69, Intensity.MODERATE),
    (50, Intensity.MODERATE),
    (49, Intensity.LOW),
    (35, Intensity.LOW),
    (34, Intensity.REST),
    (0, Intensity.REST),
])
def test_readiness_tier(readiness, tier):
    assert readiness_tier(readiness) is tier


@pytest.mark.parametrize("readiness,intensity,rpe,risk,confidence", [
    (80, Intensity.HIGH, 7, RiskLevel.LOW, 85),
    (60, Intensity.MODERATE, 5, RiskLevel.MEDIUM, 75),
    (40, Intensity.LOW, 3, RiskLevel.HIGH, 80),
    (20, Intensity.REST, 0, RiskLevel.HIGH, 85),
])
def test_base_tiers_with_optimal_acwr(readiness, intensity, rpe, risk, confidence):
    rec = recommend_intensity(readiness, 1.0, RecoveryTrend.STABLE)
    assert rec.intensity is intensity
    assert rec.rpe == rpe
    assert rec.risk_level is risk
    assert rec.confidence == confidence
    assert "ACWR ratio (1.00) is within optimal range" in rec.reasoning


def test_very_high_acwr_downgrades_one_tier():
    rec = recommend_intensity(80, 1.9, RecoveryTrend.STABLE)
    assert rec.intensity is Intensity.MODERATE
    assert rec.rpe == 5
    assert rec.risk_level is RiskLevel.HIGH
    assert rec.reason_code == "HIGH_ACWR"
    assert rec.confidence == 70


def test_very_high_acwr_cannot_go_below_rest():
    rec = recommend_intensity(20, 2.2, RecoveryTrend.STABLE)
    assert rec.intensity is Intensity.REST
    assert rec.rpe == 0


def test_acwr_at_1_8_is_not_downgraded():
    rec = recommend_intensity(80, 1.8, RecoveryTrend.STABLE)
    assert rec.intensity is Intensity.HIGH
    assert rec.reason_code == "NORMAL"


def test_low_acwr_with_high_readiness_raises_rpe_at_top_tier():
    rec = recommend_intensity(80, 0.6, RecoveryTrend.STABLE)
    assert rec.intensity is Intensity.HIGH
    assert rec.rpe == 8
    assert rec.confidence == 85
    assert "Low ACWR ratio (0.60) suggests potential for increased load" in rec.reasoning


def test_low_acwr_without_high_readiness_is_not_upgraded():
    rec = recommend_intensity(60, 0.6, RecoveryTrend.STABLE)
    assert rec.intensity is Intensity.MODERATE
    assert rec.rpe == 5


def test_declining_trend_downgrades_one_tier():
    rec = recommend_intensity(80, 1.0, RecoveryTrend.DECLINING)
    assert rec.intensity is Intensity.MODERATE
    assert rec.rpe == 5
    assert rec.confidence == 75


def test_declining_trend_and_high_acwr_stack():
    rec = recommend_intensity(80, 1.9, RecoveryTrend.DECLINING)
    assert rec.intensity is Intensity.LOW
    assert rec.rpe == 3
    assert rec.confidence == 60


def test_declining_trend_leaves_rest_alone():
    rec = recommend_intensity(20, 1.0, RecoveryTrend.DECLINING)
    assert rec.intensity is Intensity.REST
    assert rec.confidence == 85


def test_improving_trend_raises_confidence():
    rec = recommend_intensity(65, 1.0, RecoveryTrend.IMPROVING)
    assert rec.intensity is Intensity.MODERATE
    assert rec.confidence == 85


def test_improving_trend_needs_readiness_above_60():
    assert recommend_intensity(55, 1.0, RecoveryTrend.IMPROVING).confidence == 75


@pytest.mark.parametrize("flags", [
    SymptomFlags(pain_intensity=7),
    SymptomFlags(injury_note="Sharp pain in left knee"),
])
def test_health_concerns_force_rest(flags):
    rec = recommend_intensity(95, 0.6, RecoveryTrend.IMPROVING, flags)
    assert rec.intensity is Intensity.REST
    assert rec.rpe == 0
    assert rec.risk_level is RiskLevel.HIGH
    assert rec.reason_code == "HEALTH_CONCERNS"
    assert rec.confidence == 90
    assert rec.reasoning[-2:] == ["Health symptoms or injury reported", "Complete rest until symptoms resolve"]


@pytest.mark.parametrize("flags", [SymptomFlags(pain_intensity=6), SymptomFlags(injury_note="   "), None])
def test_mild_or_no_symptoms_do_not_force_rest(flags):
    assert recommend_intensity(80, 1.0, RecoveryTrend.STABLE, flags).intensity is Intensity.HIGH


def test_missing_acwr_makes_no_adjustment():
    rec = recommend_intensity(80, None, RecoveryTrend.STABLE)
    assert rec.intensity is Intensity.HIGH
    assert "Not enough training history for an ACWR ratio" in rec.reasoning


def test_high_recent_load_caps_at_moderate():
    rec = recommend_intensity(80, 1.0, RecoveryTrend.STABLE, recent_load=2500)
    assert rec.intensity is Intensity.MODERATE
    assert "High recent training load (2500 AU)" in rec.reasoning


def test_default_recommendation():
    rec = default_recommendation(5)
    assert rec.athlete_id == 5
    assert rec.intensity is Intensity.MODERATE
    assert rec.rpe == 5
    assert rec.reason_code == "NO_DATA"
    assert rec.confidence == 30


def _rec(intensity: Intensity, risk: RiskLevel = RiskLevel.MEDIUM, code: str = "NORMAL") -> IntensityRecommendation:
    return IntensityRecommendation(intensity=intensity, rpe=5, risk_level=risk, confidence=70, reason_code=code)


@pytest.mark.parametrize("intensities,readiness,expected", [
    ([Intensity.REST] * 3 + [Intensity.HIGH] * 2, [70], TeamSessionType.REST_DAY),
    ([Intensity.REST, Intensity.LOW, Intensity.LOW, Intensity.HIGH, Intensity.HIGH], [70], TeamSessionType.RECOVERY),
    ([Intensity.HIGH] * 3 + [Intensity.MODERATE, Intensity.LOW], [80, 85], TeamSessionType.HIGH_INTENSITY),
    ([Intensity.HIGH] * 3 + [Intensity.MODERATE, Intensity.LOW], [70], TeamSessionType.MODERATE),
    ([], [], TeamSessionType.MODERATE),
])
def test_team_session_type(intensities, readiness, expected):
    team = recommend_team_session([_rec(i) for i in intensities], readiness, on=TODAY)
    assert team.session_type is expected


def test_team_readiness_and_participation():
    recs = [
        _rec(Intensity.REST, RiskLevel.HIGH, "HEALTH_CONCERNS"),
        _rec(Intensity.LOW, RiskLevel.HIGH, "HIGH_ACWR"),
        _rec(Intensity.HIGH, RiskLevel.LOW),
        _rec(Intensity.MODERATE),
        _rec(Intensity.HIGH, RiskLevel.LOW),
    ]
    team = recommend_team_session(recs, [80, 70, 0, 90], on=TODAY)
    assert team.date == TODAY
    assert team.team_readiness == 80
    assert team.participation_rate == 80
    assert team.recommendations == recs
    assert team.team_reasoning == [
        "Team readiness: 80.0%",
        "80% of athletes available for training",
        "2 athlete(s) at high injury risk",
        "Some athletes reporting health concerns",
        "Load management needed for some athletes",
    ]


def test_team_readiness_defaults_without_scores():
    team = recommend_team_session([], [], on=TODAY)
    assert team.team_readiness == 60
    assert team.participation_rate == 0
