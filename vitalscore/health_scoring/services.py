import datetime as dt
import logging
from typing import List, Optional, Sequence, Union

from vitalscore.core.config import Settings, settings as default_settings

from .activity import calculate_activity_pillar_score
from .blood_pressure import calculate_bp_score
from .composite import apply_critical_floor, calculate_cross_metric_adjustments, calculate_dynamic_weights
from .insights import generate_insights
from .mappings import HEALTH_SCORE_LABEL_FLOOR, HEALTH_SCORE_LABELS
from .projection import build_daily_scores, project_score
from .schemas import (
    Activity,
    ActivityScoreResult,
    BPReading,
    BPScoreResult,
    HealthScoreResult,
    PillarValues,
    ScoreSeriesItem,
    SleepEntry,
    SleepScoreResult,
)
from .sleep import PersonalizedSleepScorer, score_sleep_for_day
from .sleep_baseline import BaselineSleepScorer
from .training_load import DefaultTrainingLoadEngine, TrainingLoadEngine

logger = logging.getLogger(__name__)

DateLike = Union[dt.date, str]

# Sentinel: build the personalized sleep scorer from settings
DEFAULT = object()


def _to_date(value: Optional[DateLike]) -> dt.date:
    if value is None:
        return dt.date.today()
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(value)


def get_health_score_label(score: float) -> str:
    for at_least, label in HEALTH_SCORE_LABELS:
        if score >= at_least:
            return label
    return HEALTH_SCORE_LABEL_FLOOR


def _resolve_sleep_scorer(personalized_sleep_scorer, cfg: Settings) -> Optional[PersonalizedSleepScorer]:
    if personalized_sleep_scorer is DEFAULT:
        return BaselineSleepScorer(cfg) if cfg.PERSONALIZED_SLEEP_ENABLED else None
    return personalized_sleep_scorer


def _score_activity(
    target: dt.date,
    activities: Sequence[Activity],
    engine: TrainingLoadEngine,
) -> Optional[ActivityScoreResult]:
    try:
        return calculate_activity_pillar_score(target, activities, engine)
    except Exception:
        logger.warning("Training-load engine failed for %s; activity pillar unavailable", target, exc_info=True)
        return None


def calculate_health_score(
    bp_readings: Sequence[BPReading],
    sleep_entries: Sequence[SleepEntry],
    activities: Sequence[Activity],
    target_date: Optional[DateLike] = None,
    *,
    training_load_engine: Optional[TrainingLoadEngine] = None,
    personalized_sleep_scorer=DEFAULT,
    settings: Optional[Settings] = None,
) -> HealthScoreResult:
    """Composite 0-100 health score for one user on one calendar day.

    Args:
        bp_readings: Full blood-pressure history for the user.
        sleep_entries: Full sleep history for the user.
        activities: Full activity history for the user.
        target_date: Day to score (date or YYYY-MM-DD); defaults to today.
            Callers normalize timezones before calling.
        training_load_engine: Strategy behind the activity pillar.
        personalized_sleep_scorer: ``(date, entries) -> PersonalizedSleepScore``;
            None forces population thresholds.
        settings: Calibration overrides.

    Returns:
        HealthScoreResult. Never raises for well-typed input; with no data at
        all, ``overall`` is 0 and every pillar is None.
    """
    cfg = settings or default_settings
    target = _to_date(target_date)
    load_engine = training_load_engine or DefaultTrainingLoadEngine(cfg)
    sleep_scorer = _resolve_sleep_scorer(personalized_sleep_scorer, cfg)

    day_bp = [r for r in bp_readings if r.date == target]
    day_sleep = [e for e in sleep_entries if e.date == target]

    def sleep_pillar(entries: List[SleepEntry]):
        return score_sleep_for_day(entries, sleep_entries, sleep_scorer, cfg.SLEEP_BASELINE_MIN_ENTRIES)

    bp_result = calculate_bp_score(day_bp)
    sleep_result = sleep_pillar(day_sleep)
    activity_result = _score_activity(target, activities, load_engine) if activities else None

    projected_bp = None
    if bp_result is None and bp_readings:
        projected_bp = project_score(target, build_daily_scores(bp_readings, calculate_bp_score, before=target), cfg)
    projected_sleep = None
    if sleep_result is None and sleep_entries:
        projected_sleep = project_score(target, build_daily_scores(sleep_entries, sleep_pillar, before=target), cfg)

    if projected_bp is not None:
        bp_result = BPScoreResult(score=projected_bp, projected=True)
    if projected_sleep is not None:
        sleep_result = SleepScoreResult(score=projected_sleep, projected=True, source="projected")

    pillars = PillarValues(
        bp=bp_result.score if bp_result else None,
        sleep=sleep_result.score if sleep_result else None,
        activity=activity_result.score if activity_result else None,
    )

    weights = calculate_dynamic_weights(pillars, cfg)
    cross_metric = calculate_cross_metric_adjustments(pillars, cfg)
    overall = apply_critical_floor(weights.weighted_score, cross_metric.adjustment, pillars, cfg)
    insights = generate_insights(pillars, bp_result, sleep_result, activity_result, cross_metric)

    logger.debug(
        "Health score %s on %s (pillars=%s confidence=%.2f adjustment=%s)",
        overall, target, pillars.present(), weights.confidence_factor, cross_metric.adjustment,
    )

    return HealthScoreResult(
        date=target,
        overall=overall,
        bp_score=bp_result,
        sleep_score=sleep_result,
        activity_score=activity_result,
        projected=PillarValues(bp=projected_bp, sleep=projected_sleep),
        cross_metric=cross_metric,
        confidence_factor=weights.confidence_factor,
        primary_driver=insights.primary_driver,
        primary_detractor=insights.primary_detractor,
        action_item=insights.action_item,
    )


class HealthScoringService:
    """Health scoring bound to one set of collaborators and settings."""

    def __init__(
        self,
        training_load_engine: Optional[TrainingLoadEngine] = None,
        personalized_sleep_scorer=DEFAULT,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.training_load_engine = training_load_engine or DefaultTrainingLoadEngine(self.settings)
        self.personalized_sleep_scorer = _resolve_sleep_scorer(personalized_sleep_scorer, self.settings)

    def calculate(
        self,
        bp_readings: Sequence[BPReading],
        sleep_entries: Sequence[SleepEntry],
        activities: Sequence[Activity],
        target_date: Optional[DateLike] = None,
    ) -> HealthScoreResult:
        return calculate_health_score(
            bp_readings,
            sleep_entries,
            activities,
            target_date,
            training_load_engine=self.training_load_engine,
            personalized_sleep_scorer=self.personalized_sleep_scorer,
            settings=self.settings,
        )

    def score_series(
        self,
        bp_readings: Sequence[BPReading],
        sleep_entries: Sequence[SleepEntry],
        activities: Sequence[Activity],
        start: DateLike,
        end: DateLike,
    ) -> List[ScoreSeriesItem]:
        """One item per day in [start, end]; days without any same-day data score None."""
        first, last = _to_date(start), _to_date(end)
        logged_days = {r.date for r in bp_readings} | {e.date for e in sleep_entries} | {a.date for a in activities}

        items: List[ScoreSeriesItem] = []
        day = first
        while day <= last:
            if day not in logged_days:
                items.append(ScoreSeriesItem(date=day))
            else:
                result = self.calculate(bp_readings, sleep_entries, activities, day)
                items.append(ScoreSeriesItem(date=day, score=result.overall, label=get_health_score_label(result.overall)))
            day += dt.timedelta(days=1)
        return items
