"""ACWR ratio and risk-zone classification. Pure functions, thresholds from settings."""

from pydantic import BaseModel, ConfigDict

from trainup.schemas.load import RiskZone


class AcwrThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    undertraining_below: float = 0.8
    injury_risk_above: float = 1.3
    very_high_above: float = 1.5

    @classmethod
    def from_settings(cls, s=None) -> "AcwrThresholds":
        if s is None:
            from trainup.config import settings as s
        return cls(
            undertraining_below=s.acwr_undertraining_below,
            injury_risk_above=s.acwr_injury_risk_above,
            very_high_above=s.acwr_very_high_above,
        )


DEFAULT_THRESHOLDS = AcwrThresholds()

ZONE_STATUS: dict[RiskZone, str] = {
    RiskZone.UNDERTRAINING: "Underload - safely increase training gradually",
    RiskZone.OPTIMAL: "Optimal Zone",
    RiskZone.INJURY_RISK: "High Risk Zone",
}


def acwr_ratio(acute_load: float, chronic_load: float) -> float:
    """acute / chronic; 0.0 when chronic load is zero (classified as undertraining)."""
    if chronic_load == 0:
        return 0.0
    return acute_load / chronic_load


def classify(ratio: float, thresholds: AcwrThresholds = DEFAULT_THRESHOLDS) -> RiskZone:
    """
    < 0.8 undertraining, 0.8..1.3 inclusive optimal, > 1.3 injury_risk.
    """
    if ratio < thresholds.undertraining_below:
        return RiskZone.UNDERTRAINING
    if ratio <= thresholds.injury_risk_above:
        return RiskZone.OPTIMAL
    return RiskZone.INJURY_RISK


def is_very_high(ratio: float, thresholds: AcwrThresholds = DEFAULT_THRESHOLDS) -> bool:
    return ratio > thresholds.very_high_above


def describe_zone(zone: RiskZone | None, very_high: bool = False) -> str:
    """Status line for dashboards. None means not enough history."""
    if zone is None:
        return "Insufficient data"
    if zone is RiskZone.INJURY_RISK and very_high:
        return "Very High Risk Zone"
    return ZONE_STATUS[zone]
