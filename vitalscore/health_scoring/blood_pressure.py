"""Blood-pressure pillar.

Scores a day's readings from the averaged systolic/diastolic values, then
applies a variability penalty and a trend modifier.
"""

import logging
from typing import List, Optional, Sequence

from .engine import avg, avg_rounded, clamp, interpolate_piecewise, round_stat, standard_deviation
from .mappings import (
    BP_CATEGORIES,
    BP_CATEGORY_FALLBACK,
    BP_SCORE_FLOOR,
    BP_VARIABILITY_PENALTIES,
    DIASTOLIC_ANCHORS,
    SYSTOLIC_ANCHORS,
)
from .schemas import BPReading, BPScoreResult, BPTimeOfDay

logger = logging.getLogger(__name__)

_TIME_OF_DAY_ORDER = {
    None: 0,
    BPTimeOfDay.MORNING: 1,
    BPTimeOfDay.AFTERNOON: 2,
    BPTimeOfDay.EVENING: 3,
}


def systolic_score(systolic: float) -> float:
    return interpolate_piecewise(systolic, SYSTOLIC_ANCHORS, clamp_low=BP_SCORE_FLOOR)


def diastolic_score(diastolic: float) -> float:
    return interpolate_piecewise(diastolic, DIASTOLIC_ANCHORS, clamp_low=BP_SCORE_FLOOR)


def bp_base_score(systolic: float, diastolic: float) -> float:
    # The worse of the two curves drives the score
    return min(systolic_score(systolic), diastolic_score(diastolic))


def bp_category(systolic: float, diastolic: float) -> str:
    for label, sys_below, dia_below in BP_CATEGORIES:
        if systolic < sys_below and diastolic < dia_below:
            return label
    return BP_CATEGORY_FALLBACK


def variability_penalty(systolics: Sequence[float], diastolics: Sequence[float]) -> int:
    """Penalty from the mean coefficient of variation of both pressures."""
    if len(systolics) < 3:
        return 0

    sys_cv = standard_deviation(systolics) / avg(systolics) * 100
    dia_cv = standard_deviation(diastolics) / avg(diastolics) * 100
    avg_cv = (sys_cv + dia_cv) / 2

    for cv_above, penalty in BP_VARIABILITY_PENALTIES:
        if avg_cv > cv_above:
            return penalty
    return 0


def trend_modifier(readings: Sequence[BPReading]) -> int:
    """Compare the recent half of readings against the older half.

    The halves are split by position only, whatever time span they cover.
    """
    if len(readings) < 4:
        return 0

    ordered = sorted(readings, key=lambda r: (r.date, _TIME_OF_DAY_ORDER.get(r.time_of_day, 0)))
    midpoint = len(ordered) // 2
    older, recent = ordered[:midpoint], ordered[midpoint:]

    sys_diff = avg([r.systolic for r in recent]) - avg([r.systolic for r in older])
    dia_diff = avg([r.diastolic for r in recent]) - avg([r.diastolic for r in older])
    avg_diff = (sys_diff + dia_diff) / 2

    # Negative difference means pressure is dropping, which is an improvement
    if avg_diff < -5:
        return 10
    if avg_diff < -2:
        return 5
    if avg_diff > 5:
        return -10
    if avg_diff > 2:
        return -5
    return 0


def calculate_bp_score(readings: Sequence[BPReading]) -> Optional[BPScoreResult]:
    """Score one day's blood-pressure readings, or None when there are none."""
    if not readings:
        return None

    systolics: List[float] = [r.systolic for r in readings]
    diastolics: List[float] = [r.diastolic for r in readings]
    mean_sys = avg(systolics)
    mean_dia = avg(diastolics)

    base = bp_base_score(mean_sys, mean_dia)
    penalty = variability_penalty(systolics, diastolics)
    trend = trend_modifier(readings)
    score = clamp(base - penalty + trend, 0, 100)

    result = BPScoreResult(
        score=round_stat(score),
        base_score=round_stat(base),
        variability_penalty=penalty,
        trend_modifier=trend,
        avg_systolic=avg_rounded(systolics),
        avg_diastolic=avg_rounded(diastolics),
        category=bp_category(mean_sys, mean_dia),
    )
    logger.debug(
        "BP score %s (base=%.1f penalty=%s trend=%s) from %d readings",
        result.score, base, penalty, trend, len(readings),
    )
    return result
