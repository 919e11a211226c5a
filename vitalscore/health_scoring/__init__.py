"""Health scoring package.

This module contains:
- Pydantic schemas for the input records and every scoring result
- A small, explicit engine of statistics and interpolation primitives
- Pillar scorers for blood pressure, sleep and activity
- Projection, weighting, cross-metric and critical-floor stages
- The ``calculate_health_score`` entry point that ties them together

Everything here is a pure computation over already-fetched records.
"""

from .activity import calculate_activity_pillar_score
from .blood_pressure import calculate_bp_score
from .composite import (
    apply_critical_floor,
    calculate_cross_metric_adjustments,
    calculate_dynamic_weights,
)
from .insights import generate_insights
from .projection import build_daily_scores, project_score
from .schemas import (
    Activity,
    ActivityScoreResult,
    BPReading,
    BPScoreResult,
    DailyScore,
    HealthScoreResult,
    PersonalizedSleepScore,
    PillarValues,
    SleepEntry,
    SleepScoreResult,
    TrainingLoad,
    TrainingLoadLevel,
)
from .services import HealthScoringService, calculate_health_score, get_health_score_label
from .sleep import calculate_sleep_health_score, score_sleep_for_day
from .sleep_baseline import BaselineSleepScorer
from .training_load import DefaultTrainingLoadEngine, TrainingLoadEngine
