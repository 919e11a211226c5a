import datetime as dt
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ScoringModel(BaseModel):
    """Immutable record; accepts snake_case or camelCase keys, dumps camelCase by alias."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class BPTimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class TrainingLoadLevel(str, Enum):
    DETRAINING = "detraining"
    MAINTAINING = "maintaining"
    BUILDING = "building"
    PEAK = "peak"
    OVERREACHING = "overreaching"


# Input records
class BPReading(ScoringModel):
    date: dt.date
    systolic: int
    diastolic: int
    pulse: Optional[int] = None
    time_of_day: Optional[BPTimeOfDay] = None


class SleepEntry(ScoringModel):
    date: dt.date
    duration_minutes: int
    deep_sleep_pct: Optional[float] = None
    rem_sleep_pct: Optional[float] = None
    resting_hr: Optional[float] = None
    hrv_low: Optional[float] = None
    hrv_high: Optional[float] = None

    @property
    def restorative_pct(self) -> Optional[float]:
        """Deep + REM percentage; a missing half counts as zero."""
        if self.deep_sleep_pct is None and self.rem_sleep_pct is None:
            return None
        return (self.deep_sleep_pct or 0) + (self.rem_sleep_pct or 0)


class Activity(ScoringModel):
    date: dt.date
    duration_minutes: int
    intensity: int
    activity_type: str = "other"


# Collaborator outputs
class TrainingLoad(ScoringModel):
    score: float
    days_since_activity: Optional[int] = None


class PersonalizedSleepScore(ScoringModel):
    overall: Optional[int] = None
    duration: Optional[int] = None
    sleep_quality: Optional[int] = None
    heart_health: Optional[int] = None


# Pillar results
class BPScoreResult(ScoringModel):
    """Blood-pressure pillar. A projected record carries only ``score``."""

    pillar: Literal["bp"] = "bp"
    score: int
    projected: bool = False
    base_score: Optional[int] = None
    variability_penalty: Optional[int] = None
    trend_modifier: Optional[int] = None
    avg_systolic: Optional[int] = None
    avg_diastolic: Optional[int] = None
    category: Optional[str] = None


class SleepScoreResult(ScoringModel):
    """Sleep pillar. A projected record carries only ``score``."""

    pillar: Literal["sleep"] = "sleep"
    score: int
    projected: bool = False
    duration_score: Optional[int] = None
    restorative_score: Optional[int] = None
    heart_score: Optional[int] = None
    consistency_bonus: Optional[int] = None
    avg_duration_minutes: Optional[int] = None
    avg_restorative: Optional[int] = None
    source: Literal["population", "personalized", "projected"] = "population"


class ActivityScoreResult(ScoringModel):
    pillar: Literal["activity"] = "activity"
    score: int
    training_load_score: int
    effort_score: int
    consistency_score: int
    training_load: float
    level: TrainingLoadLevel
    days_since_activity: Optional[int] = None
    active_today: bool


class DailyScore(ScoringModel):
    date: dt.date
    score: int


# Composite stages
class PillarValues(ScoringModel):
    bp: Optional[float] = None
    sleep: Optional[float] = None
    activity: Optional[float] = None

    def present(self) -> Dict[str, float]:
        """Present pillars in canonical order (bp, sleep, activity)."""
        values = {"bp": self.bp, "sleep": self.sleep, "activity": self.activity}
        return {k: v for k, v in values.items() if v is not None}


class PillarWeights(ScoringModel):
    bp: float = 0.0
    sleep: float = 0.0
    activity: float = 0.0


class DynamicWeightResult(ScoringModel):
    weighted_score: float
    confidence_factor: float
    effective_weights: PillarWeights


class CrossMetricResult(ScoringModel):
    adjustment: int = 0
    reasons: List[str] = Field(default_factory=list)


class Insights(ScoringModel):
    primary_driver: str
    primary_detractor: str
    action_item: str


class HealthScoreResult(ScoringModel):
    date: dt.date
    overall: int
    bp_score: Optional[BPScoreResult] = None
    sleep_score: Optional[SleepScoreResult] = None
    activity_score: Optional[ActivityScoreResult] = None
    projected: PillarValues = Field(default_factory=PillarValues)
    cross_metric: CrossMetricResult = Field(default_factory=CrossMetricResult)
    confidence_factor: float
    primary_driver: str
    primary_detractor: str
    action_item: str


class ScoreSeriesItem(ScoringModel):
    date: dt.date
    score: Optional[int] = None
    label: Optional[str] = None
