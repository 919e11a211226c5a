"""Sleep pillar.

Population-threshold scoring of duration, restorative stages and overnight
heart metrics, with an optional personalized scorer taking precedence.
"""

import datetime as dt
import logging
from typing import Callable, List, Optional, Sequence

from .engine import avg, avg_rounded, ceiling_score, clamp, round_stat, standard_deviation, step_score
from .mappings import (
    HRV_FLOOR,
    HRV_TIERS,
    RESTING_HR_FLOOR,
    RESTING_HR_TIERS,
    RESTORATIVE_FLOOR,
    RESTORATIVE_TIERS,
    SLEEP_CONSISTENCY_BONUS,
    SLEEP_CONSISTENT_STDDEV,
    SLEEP_DURATION_BANDS,
    SLEEP_DURATION_FLOOR,
    SLEEP_INCONSISTENT_STDDEV,
    SLEEP_NEUTRAL_SCORE,
    SLEEP_WEIGHTS,
)
from .schemas import PersonalizedSleepScore, SleepEntry, SleepScoreResult

logger = logging.getLogger(__name__)

PersonalizedSleepScorer = Callable[[dt.date, Sequence[SleepEntry]], Optional[PersonalizedSleepScore]]


def duration_score(entries: Sequence[SleepEntry]) -> float:
    hours = avg([e.duration_minutes for e in entries]) / 60
    for low, high, score in SLEEP_DURATION_BANDS:
        if low <= hours <= high:
            return score
    return SLEEP_DURATION_FLOOR


def restorative_score(entries: Sequence[SleepEntry]) -> float:
    values = [e.restorative_pct for e in entries if e.restorative_pct is not None]
    if not values:
        return SLEEP_NEUTRAL_SCORE
    return step_score(avg(values), RESTORATIVE_TIERS, RESTORATIVE_FLOOR)


def heart_score(entries: Sequence[SleepEntry]) -> float:
    """Mean of the resting-HR and HRV sub-scores that have data."""
    scores: List[float] = []

    rhr_values = [e.resting_hr for e in entries if e.resting_hr is not None]
    if rhr_values:
        scores.append(ceiling_score(avg(rhr_values), RESTING_HR_TIERS, RESTING_HR_FLOOR))

    hrv_values = [e.hrv_high for e in entries if e.hrv_high is not None]
    if hrv_values:
        scores.append(step_score(avg(hrv_values), HRV_TIERS, HRV_FLOOR))

    if not scores:
        return SLEEP_NEUTRAL_SCORE
    return avg(scores)


def consistency_bonus(entries: Sequence[SleepEntry]) -> int:
    if len(entries) < 3:
        return 0
    spread = standard_deviation([e.duration_minutes for e in entries])
    if spread < SLEEP_CONSISTENT_STDDEV:
        return SLEEP_CONSISTENCY_BONUS
    if spread > SLEEP_INCONSISTENT_STDDEV:
        return -SLEEP_CONSISTENCY_BONUS
    return 0


def calculate_sleep_health_score(entries: Sequence[SleepEntry]) -> Optional[SleepScoreResult]:
    """Population-based sleep score, or None without entries."""
    if not entries:
        return None

    duration = duration_score(entries)
    restorative = restorative_score(entries)
    heart = heart_score(entries)
    bonus = consistency_bonus(entries)

    weighted = (
        duration * SLEEP_WEIGHTS["duration"]
        + restorative * SLEEP_WEIGHTS["restorative"]
        + heart * SLEEP_WEIGHTS["heart"]
        + bonus
    )

    restorative_values = [e.restorative_pct for e in entries if e.restorative_pct is not None]
    return SleepScoreResult(
        score=round_stat(clamp(weighted, 0, 100)),
        duration_score=round_stat(duration),
        restorative_score=round_stat(restorative),
        heart_score=round_stat(heart),
        consistency_bonus=bonus,
        avg_duration_minutes=avg_rounded([e.duration_minutes for e in entries]),
        avg_restorative=avg_rounded(restorative_values),
        source="population",
    )


def _from_personalized(entry: SleepEntry, personalized: PersonalizedSleepScore) -> SleepScoreResult:
    """Wrap a personalized score for one night.

    ``avg_restorative`` is that night's deep + REM sum rounded half up, the
    same rounding the population path applies to its average.
    """
    restorative = entry.restorative_pct
    return SleepScoreResult(
        score=personalized.overall,
        duration_score=personalized.duration or 0,
        restorative_score=personalized.sleep_quality or 0,
        heart_score=personalized.heart_health or 0,
        consistency_bonus=0,
        avg_duration_minutes=entry.duration_minutes,
        avg_restorative=round_stat(restorative),
        source="personalized",
    )


def score_sleep_for_day(
    day_entries: Sequence[SleepEntry],
    all_entries: Sequence[SleepEntry],
    personalized_scorer: Optional[PersonalizedSleepScorer] = None,
    min_history: int = 3,
) -> Optional[SleepScoreResult]:
    """Score a day's sleep, preferring the personalized scorer when it has enough history."""
    if not day_entries:
        return None

    if personalized_scorer is not None and len(all_entries) >= min_history:
        day = day_entries[0].date
        try:
            personalized = personalized_scorer(day, all_entries)
        except Exception:
            logger.warning("Personalized sleep scorer failed for %s; using population thresholds", day, exc_info=True)
            personalized = None
        if personalized is not None and personalized.overall is not None:
            return _from_personalized(day_entries[0], personalized)

    return calculate_sleep_health_score(day_entries)
