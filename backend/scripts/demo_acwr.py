#!/usr/bin/env python3
"""Demo: print the ACWR table, injury risk and today's recommendation for one synthetic athlete.
Usage: python scripts/demo_acwr.py [days] [seed]"""
import logging
import sys
from datetime import date, timedelta

from trainup.config import settings
from trainup.demo.synthetic import generate_diaries, generate_observations
from trainup.schemas.load import LoadParameters
from trainup.schemas.recommendation import SymptomFlags
from trainup.services.acwr import describe_zone
from trainup.services.injury_risk import score_injury_risk
from trainup.services.recommendations import recommend_intensity, recovery_trend
from trainup.services.rolling_window import compute_windows, latest_point
from trainup.services.session_load import aggregate
from trainup.services.training_load import serialize_acwr

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stdout,
)


def main() -> None:
    days = int(sys.argv[1]) if len(sys.argv) > 1 else 60
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else 1
    settings.validate_load_config()
    today = date.today()
    start = today - timedelta(days=days - 1)

    observations = generate_observations(1, start, days, seed=seed)
    diaries = generate_diaries(today - timedelta(days=6), 7, seed=seed)
    params = LoadParameters.from_settings()
    points = compute_windows(aggregate(observations, params), through=today)

    print("=== ACWR (synthetic demo data) ===")
    for row in serialize_acwr(points[-14:]):
        print(f"{row['date']}  acute={row['acute']:>5}  chronic={row['chronic']:>5}  ratio={row['ratio']:.2f}  {row['riskZone']}")
    latest = latest_point(points)
    print("Status:", describe_zone(latest.risk_zone if latest else None, latest.very_high if latest else False))

    risk = score_injury_risk(observations, latest, diaries, athlete_id=1, as_of=today)
    print(f"\n=== Injury risk: {risk.risk_score} ===")
    for factor in risk.factors:
        print(" -", factor)

    rec = recommend_intensity(
        diaries[0].readiness_score or 0,
        latest,
        recovery_trend(diaries),
        SymptomFlags(pain_intensity=diaries[0].pain_intensity, injury_note=diaries[0].injury_note),
        athlete_id=1,
    )
    print(f"\n=== Recommendation: {rec.intensity.value} (RPE {rec.rpe}, confidence {rec.confidence}%) ===")
    for line in rec.reasoning:
        print(" -", line)


if __name__ == "__main__":
    main()
