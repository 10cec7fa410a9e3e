from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = "INFO"

    # Session load: RPE x duration x emotional multiplier
    default_session_duration_minutes: int = 60  # used when an entry has no recorded duration
    # Emotional load level -> multiplier. JSON in .env, e.g. {"1": 1.0, "3": 1.1, "5": 1.2}
    emotional_load_multipliers: dict[int, float] = {1: 1.00, 2: 1.05, 3: 1.10, 4: 1.15, 5: 1.20}

    # Rolling windows (calendar days)
    acute_window_days: int = 7
    chronic_window_days: int = 28

    # ACWR zones
    acwr_undertraining_below: float = 0.8
    acwr_injury_risk_above: float = 1.3
    acwr_very_high_above: float = 1.5  # severity hint only, not a zone
    acwr_recommendation_high: float = 1.8  # recommendation engine downgrades above this

    # Injury risk / recommendations
    high_effort_level: int = 8
    recent_load_high_au: float = 2000.0

    def validate_load_config(self) -> None:
        """Raise if thresholds or tables are inconsistent."""
        if self.default_session_duration_minutes <= 0:
            raise RuntimeError("DEFAULT_SESSION_DURATION_MINUTES must be positive")
        if not self.emotional_load_multipliers:
            raise RuntimeError("EMOTIONAL_LOAD_MULTIPLIERS must not be empty")
        if any(m <= 0 for m in self.emotional_load_multipliers.values()):
            raise RuntimeError("EMOTIONAL_LOAD_MULTIPLIERS values must be positive")
        if not 0 < self.acute_window_days <= self.chronic_window_days:
            raise RuntimeError("ACUTE_WINDOW_DAYS must be positive and not exceed CHRONIC_WINDOW_DAYS")
        if self.acwr_undertraining_below > self.acwr_injury_risk_above:
            raise RuntimeError("ACWR_UNDERTRAINING_BELOW must not exceed ACWR_INJURY_RISK_ABOVE")
        if self.acwr_very_high_above < self.acwr_injury_risk_above:
            raise RuntimeError("ACWR_VERY_HIGH_ABOVE must not be below ACWR_INJURY_RISK_ABOVE")


settings = Settings()
