"""Forecast a pillar score for a day that has no direct data.

A linear trend is fitted over the trailing window of daily scores, and is
trusted less the longer it has been since the last real observation.
"""

import datetime as dt
import logging
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from vitalscore.core.config import Settings, settings as default_settings

from .engine import avg, clamp, linear_regression, round_stat
from .schemas import DailyScore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


def build_daily_scores(
    records: Sequence[RecordT],
    scorer: Callable[[List[RecordT]], object],
    before: Optional[dt.date] = None,
) -> List[DailyScore]:
    """Score every day that has direct data, one point per day.

    ``scorer`` is a pillar scorer returning an object with a ``score``
    attribute, or None. Days on or after ``before`` are skipped.
    """
    by_day: Dict[dt.date, List[RecordT]] = defaultdict(list)
    for record in records:
        day = record.date
        if before is not None and day >= before:
            continue
        by_day[day].append(record)

    scores: List[DailyScore] = []
    for day in sorted(by_day):
        result = scorer(by_day[day])
        if result is None:
            continue
        scores.append(DailyScore(date=day, score=result.score))
    return scores


def staleness_blend(days_since_last: int, settings: Settings) -> float:
    """Share of the regression prediction kept; the rest comes from the mean."""
    if days_since_last <= settings.STALENESS_FRESH_DAYS:
        return 1.0
    if days_since_last <= settings.STALENESS_RECENT_DAYS:
        return settings.STALENESS_RECENT_BLEND
    if days_since_last <= settings.STALENESS_STALE_DAYS:
        return settings.STALENESS_STALE_BLEND
    return 0.0


def project_score(
    target_date: dt.date,
    daily_scores: Sequence[DailyScore],
    settings: Optional[Settings] = None,
) -> Optional[int]:
    """Project a 0-100 score for ``target_date`` from earlier daily scores.

    Returns None unless enough points fall inside the trailing window.
    """
    cfg = settings or default_settings
    window_start = target_date - dt.timedelta(days=cfg.PROJECTION_WINDOW_DAYS)
    recent = sorted(
        (s for s in daily_scores if window_start <= s.date < target_date),
        key=lambda s: s.date,
    )
    if len(recent) < cfg.PROJECTION_MIN_POINTS:
        logger.debug("No projection for %s: %d points in window", target_date, len(recent))
        return None

    earliest = recent[0].date
    fit = linear_regression([((s.date - earliest).days, s.score) for s in recent])
    if fit is None:
        return None

    prediction = fit.predict((target_date - earliest).days)
    mean = avg([s.score for s in recent])
    days_since_last = (target_date - recent[-1].date).days
    blend = staleness_blend(days_since_last, cfg)
    projected = prediction * blend + mean * (1 - blend)

    logger.debug(
        "Projected %.1f for %s (prediction=%.1f mean=%.1f stale=%dd)",
        projected, target_date, prediction, mean, days_since_last,
    )
    return round_stat(clamp(projected, 0, 100))
