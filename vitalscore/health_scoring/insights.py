from typing import List, Optional, Tuple, Union

from .composite import negative_cross_metric_reasons
from .mappings import PILLAR_LABELS
from .schemas import (
    ActivityScoreResult,
    BPScoreResult,
    CrossMetricResult,
    Insights,
    PillarValues,
    SleepScoreResult,
    TrainingLoadLevel,
)

PillarResult = Union[BPScoreResult, SleepScoreResult, ActivityScoreResult]

NO_DATA_INSIGHTS = Insights(
    primary_driver="No data available",
    primary_detractor="Add some readings to see insights",
    action_item="Start by logging a BP reading, sleep entry, or activity",
)

PROJECTED_ONLY_ACTION = "Log a fresh reading today to confirm your trend"


def _bp_action(bp: BPScoreResult) -> str:
    if bp.variability_penalty > 10:
        return "Focus on BP consistency - take readings at the same time each day"
    if bp.base_score < 70:
        return "Consider lifestyle changes to lower BP: reduce sodium, increase activity"
    if bp.trend_modifier < 0:
        return "BP trending up - monitor closely and consider stress reduction"
    return "Maintain current habits to keep BP in healthy range"


def _sleep_action(sleep: SleepScoreResult) -> str:
    if sleep.duration_score < 60:
        return "Prioritize more sleep - aim for 7-9 hours per night"
    if sleep.restorative_score < 60:
        return "Improve sleep quality: limit caffeine, maintain consistent bedtime"
    if sleep.consistency_bonus < 0:
        return "Work on sleep consistency - keep a regular sleep schedule"
    return "Maintain current sleep habits"


def _activity_action(activity: ActivityScoreResult) -> str:
    if activity.level == TrainingLoadLevel.DETRAINING:
        return "Get moving - even a short walk today helps rebuild your fitness base"
    if activity.level == TrainingLoadLevel.OVERREACHING:
        return "Training load is very high - schedule a recovery day"
    if activity.consistency_score < 50:
        return "Aim for 3-4 workouts spread across the week"
    if activity.effort_score < 50:
        return "Match today's effort to your training load - rest after hard blocks, move after easy ones"
    return "Maintain your current training rhythm"


def _action_for(kind: str, result: Optional[PillarResult]) -> str:
    if result is None or getattr(result, "projected", False):
        return PROJECTED_ONLY_ACTION
    if kind == "bp":
        return _bp_action(result)
    if kind == "sleep":
        return _sleep_action(result)
    return _activity_action(result)


def generate_insights(
    pillars: PillarValues,
    bp: Optional[BPScoreResult] = None,
    sleep: Optional[SleepScoreResult] = None,
    activity: Optional[ActivityScoreResult] = None,
    cross_metric: Optional[CrossMetricResult] = None,
) -> Insights:
    """Pick the strongest and weakest pillars and an action for the weakest.

    ``pillars`` holds the values that entered the composite, including
    projections; the result objects carry sub-scores for directly scored days.
    """
    factors: List[Tuple[str, float]] = list(pillars.present().items())
    if not factors:
        return NO_DATA_INSIGHTS

    # Stable sort keeps bp, sleep, activity order on ties
    ranked = sorted(factors, key=lambda f: f[1], reverse=True)
    best_kind, best_score = ranked[0]
    worst_kind, worst_score = ranked[-1]
    best_label = PILLAR_LABELS[best_kind]
    worst_label = PILLAR_LABELS[worst_kind]

    if best_score >= 80:
        primary_driver = f"{best_label} is excellent"
    elif best_score >= 65:
        primary_driver = f"{best_label} is your strongest area"
    else:
        primary_driver = f"{best_label} is relatively stable"

    penalties = negative_cross_metric_reasons(cross_metric) if cross_metric and cross_metric.adjustment < 0 else []
    if penalties:
        primary_detractor = penalties[0]
    elif worst_score < 50:
        primary_detractor = f"{worst_label} needs attention"
    elif worst_score < 70:
        primary_detractor = f"{worst_label} could be improved"
    else:
        primary_detractor = "All areas are performing well"

    results = {"bp": bp, "sleep": sleep, "activity": activity}
    action_item = _action_for(worst_kind, results[worst_kind])

    return Insights(
        primary_driver=primary_driver,
        primary_detractor=primary_detractor,
        action_item=action_item,
    )
