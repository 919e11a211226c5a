"""Activity pillar.

Blends training-load status, whether today's effort suits that status,
and weekly consistency. Training-load maths lives behind the injected
``TrainingLoadEngine``.
"""

import datetime as dt
import logging
from typing import Optional, Sequence

from .engine import clamp, interpolate_piecewise, round_stat
from .mappings import (
    ACTIVITY_WEIGHTS,
    CONSISTENCY_MULTIPLIER_ANCHORS,
    DETRAINING_STATUS_ANCHORS,
    EFFORT_APPROPRIATENESS,
    OVERREACHING_STATUS_ANCHORS,
    TRAINING_LOAD_STATUS_SCORES,
)
from .schemas import Activity, ActivityScoreResult, TrainingLoadLevel
from .training_load import DefaultTrainingLoadEngine, TrainingLoadEngine

logger = logging.getLogger(__name__)


def training_load_status_score(level: TrainingLoadLevel, load_score: float) -> float:
    if level == TrainingLoadLevel.DETRAINING:
        return interpolate_piecewise(load_score, DETRAINING_STATUS_ANCHORS)
    if level == TrainingLoadLevel.OVERREACHING:
        return interpolate_piecewise(load_score, OVERREACHING_STATUS_ANCHORS)
    return TRAINING_LOAD_STATUS_SCORES[level.value]


def effort_appropriateness_score(level: TrainingLoadLevel, active_today: bool) -> float:
    """Rest suits a heavy block; movement suits a light one."""
    when_active, when_resting = EFFORT_APPROPRIATENESS[level.value]
    return when_active if active_today else when_resting


def consistency_score(multiplier: float) -> float:
    return interpolate_piecewise(multiplier, CONSISTENCY_MULTIPLIER_ANCHORS)


def calculate_activity_pillar_score(
    date: dt.date,
    activities: Sequence[Activity],
    training_load_engine: Optional[TrainingLoadEngine] = None,
) -> Optional[ActivityScoreResult]:
    """Score the activity pillar for ``date`` from the full activity history.

    Activities dated after ``date`` are not history for that day. Returns
    None when nothing was logged on or before ``date``.
    """
    history = [a for a in activities if a.date <= date]
    if not history:
        return None

    engine = training_load_engine or DefaultTrainingLoadEngine()
    load = engine.calculate_training_load(date, history)
    level = TrainingLoadLevel(engine.get_training_load_level(load.score))
    multiplier = engine.calculate_consistency_multiplier(history, date)
    active_today = any(a.date == date for a in history)

    status = training_load_status_score(level, load.score)
    effort = effort_appropriateness_score(level, active_today)
    consistency = consistency_score(multiplier)

    weighted = (
        status * ACTIVITY_WEIGHTS["training_load"]
        + effort * ACTIVITY_WEIGHTS["effort"]
        + consistency * ACTIVITY_WEIGHTS["consistency"]
    )

    result = ActivityScoreResult(
        score=round_stat(clamp(weighted, 0, 100)),
        training_load_score=round_stat(status),
        effort_score=round_stat(effort),
        consistency_score=round_stat(consistency),
        training_load=round(load.score, 1),
        level=level,
        days_since_activity=load.days_since_activity,
        active_today=active_today,
    )
    logger.debug("Activity score %s on %s (level=%s)", result.score, date, level.value)
    return result
