from typing import Dict, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator


class Settings(BaseSettings):
    """Calibration constants for the health-score engine.

    These values are hand-tuned and kept for behavioral compatibility with
    the scores users have already seen. Change them only with product sign-off.
    """

    model_config = SettingsConfigDict(
        env_prefix="VITALSCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Logging
    LOG_LEVEL: str = "INFO"

    # Dynamic weighting
    PILLAR_BASE_WEIGHTS: Dict[str, float] = {"bp": 0.30, "sleep": 0.35, "activity": 0.35}
    NEUTRAL_BASELINE: float = 65.0
    CONFIDENCE_BY_PILLAR_COUNT: Dict[int, float] = {0: 0.0, 1: 0.85, 2: 0.95, 3: 1.0}

    # Cross-metric adjustment clamp
    CROSS_METRIC_MIN_ADJUSTMENT: int = -10
    CROSS_METRIC_MAX_ADJUSTMENT: int = 7

    # Critical floor: pillar minimum below threshold caps the overall score
    CRITICAL_FLOOR_SEVERE_THRESHOLD: float = 30.0
    CRITICAL_FLOOR_SEVERE_CAP: float = 45.0
    CRITICAL_FLOOR_MODERATE_THRESHOLD: float = 40.0
    CRITICAL_FLOOR_MODERATE_CAP: float = 55.0

    # Score projection
    PROJECTION_WINDOW_DAYS: int = 30
    PROJECTION_MIN_POINTS: int = 3
    STALENESS_FRESH_DAYS: int = 3
    STALENESS_RECENT_DAYS: int = 7
    STALENESS_STALE_DAYS: int = 14
    STALENESS_RECENT_BLEND: float = 0.75
    STALENESS_STALE_BLEND: float = 0.5

    # Default training-load engine
    TRAINING_LOAD_WINDOW_DAYS: int = 28
    TRAINING_LOAD_HALF_LIFE_DAYS: float = 7.0
    TRAINING_LOAD_SCALE: float = 10.0
    TRAINING_LOAD_MAINTAINING_AT: float = 15.0
    TRAINING_LOAD_BUILDING_AT: float = 40.0
    TRAINING_LOAD_PEAK_AT: float = 80.0
    TRAINING_LOAD_OVERREACHING_ABOVE: float = 120.0

    # Personalized sleep scoring
    PERSONALIZED_SLEEP_ENABLED: bool = True
    SLEEP_BASELINE_WINDOW_DAYS: int = 30
    SLEEP_BASELINE_MIN_ENTRIES: int = 3

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Optional[str]) -> str:
        if v is None or (isinstance(v, str) and v.strip() == ""):
            return "INFO"
        return str(v).strip().upper()

    @field_validator("PILLAR_BASE_WEIGHTS")
    @classmethod
    def check_pillar_weights(cls, v: Dict[str, float]) -> Dict[str, float]:
        missing = {"bp", "sleep", "activity"} - set(v)
        if missing:
            raise ValueError(f"PILLAR_BASE_WEIGHTS missing pillars: {sorted(missing)}")
        if any(w < 0 for w in v.values()):
            raise ValueError("PILLAR_BASE_WEIGHTS must be non-negative")
        if abs(sum(v.values()) - 1.0) > 1e-6:
            raise ValueError("PILLAR_BASE_WEIGHTS must sum to 1.0")
        return v

    @model_validator(mode="after")
    def _validate_ordering(self) -> "Settings":
        if self.CROSS_METRIC_MIN_ADJUSTMENT > self.CROSS_METRIC_MAX_ADJUSTMENT:
            raise ValueError("CROSS_METRIC_MIN_ADJUSTMENT must not exceed CROSS_METRIC_MAX_ADJUSTMENT")
        if self.CRITICAL_FLOOR_SEVERE_THRESHOLD > self.CRITICAL_FLOOR_MODERATE_THRESHOLD:
            raise ValueError("Severe critical-floor threshold must not exceed the moderate threshold")
        if not (
            self.STALENESS_FRESH_DAYS <= self.STALENESS_RECENT_DAYS <= self.STALENESS_STALE_DAYS
        ):
            raise ValueError("Staleness bands must be non-decreasing")
        if not (
            self.TRAINING_LOAD_MAINTAINING_AT
            <= self.TRAINING_LOAD_BUILDING_AT
            <= self.TRAINING_LOAD_PEAK_AT
            <= self.TRAINING_LOAD_OVERREACHING_ABOVE
        ):
            raise ValueError("Training-load level thresholds must be non-decreasing")
        if self.PROJECTION_MIN_POINTS < 2:
            raise ValueError("PROJECTION_MIN_POINTS must be at least 2 for a regression fit")
        return self

    def confidence_for(self, pillar_count: int) -> float:
        return float(self.CONFIDENCE_BY_PILLAR_COUNT.get(pillar_count, 0.0))


settings = Settings()
