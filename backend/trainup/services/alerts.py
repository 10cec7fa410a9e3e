"""Coach alerts for today: reported injuries, sickness and high ACWR."""

from collections.abc import Mapping
from datetime import date

from trainup.config import settings
from trainup.schemas.load import AcwrPoint
from trainup.schemas.risk import Alert, AlertType, DiarySignal

NO_SYMPTOMS = {"", "none"}
NO_SYMPTOMS_SENTINEL = "no_symptoms"  # diary form option; suppresses the sick alert


def todays_alerts(
    latest_diaries: Mapping[int, DiarySignal],
    latest_acwr: Mapping[int, AcwrPoint | None],
    *,
    today: date | None = None,
    acwr_above: float | None = None,
) -> list[Alert]:
    """
    latest_diaries: athlete_id -> most recent diary; only diaries dated today raise injury/sick alerts.
    latest_acwr: athlete_id -> latest ACWR point (None when history is insufficient).
    Ordered by athlete id, then injury, sick, acwr.
    """
    today = today or date.today()
    above = acwr_above if acwr_above is not None else settings.acwr_injury_risk_above
    alerts: list[Alert] = []
    for athlete_id in sorted(set(latest_diaries) | set(latest_acwr)):
        diary = latest_diaries.get(athlete_id)
        if diary is not None and diary.date == today:
            if diary.has_injury and (diary.injury_note or "").strip():
                alerts.append(Alert(athlete_id=athlete_id, type=AlertType.INJURY, note=diary.injury_note.strip()))
            reported = [s.strip().lower() for s in diary.symptoms]
            symptoms = [s for s in diary.symptoms if s.strip().lower() not in NO_SYMPTOMS]
            if symptoms and NO_SYMPTOMS_SENTINEL not in reported:
                alerts.append(Alert(athlete_id=athlete_id, type=AlertType.SICK, note=", ".join(symptoms)))
        point = latest_acwr.get(athlete_id)
        if point is not None and point.ratio > above:
            alerts.append(Alert(athlete_id=athlete_id, type=AlertType.ACWR, note=f"ACWR {point.ratio:.2f}"))
    return alerts
