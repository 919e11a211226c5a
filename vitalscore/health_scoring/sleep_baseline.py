"""Personalized sleep scoring against the user's own rolling baseline.

Each night is compared with the user's previous nights rather than with
population thresholds: a night a standard deviation shorter than usual
scores lower even if it clears seven hours.
"""

import datetime as dt
import logging
from typing import Dict, List, Optional, Sequence

from vitalscore.core.config import Settings, settings as default_settings

from .engine import avg, interpolate_piecewise, round_stat, standard_deviation
from .schemas import PersonalizedSleepScore, SleepEntry

logger = logging.getLogger(__name__)

# z-score relative to baseline -> score; deficits cost more than surpluses
HIGHER_IS_BETTER_ANCHORS = [(-2.5, 30), (-1.5, 55), (-0.5, 80), (0.0, 90), (1.0, 100)]

# Minimum spread so a very regular sleeper is not punished for small noise
MIN_SPREAD = {
    "duration": 20.0,
    "restorative": 3.0,
    "resting_hr": 2.0,
    "hrv_high": 4.0,
}

COMPONENT_WEIGHTS = {"duration": 0.4, "sleep_quality": 0.3, "heart_health": 0.3}


def _z_score(value: float, history: Sequence[float], min_spread: float) -> Optional[float]:
    mean = avg(history)
    if mean is None:
        return None
    return (value - mean) / max(standard_deviation(history), min_spread)


def _score_higher_better(value: Optional[float], history: List[float], key: str) -> Optional[float]:
    if value is None or not history:
        return None
    return interpolate_piecewise(_z_score(value, history, MIN_SPREAD[key]), HIGHER_IS_BETTER_ANCHORS)


def _score_lower_better(value: Optional[float], history: List[float], key: str) -> Optional[float]:
    if value is None or not history:
        return None
    return interpolate_piecewise(-_z_score(value, history, MIN_SPREAD[key]), HIGHER_IS_BETTER_ANCHORS)


class BaselineSleepScorer:
    """Callable personalized sleep scorer: ``scorer(date, all_entries)``."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def baseline(self, date: dt.date, entries: Sequence[SleepEntry]) -> List[SleepEntry]:
        window_start = date - dt.timedelta(days=self.settings.SLEEP_BASELINE_WINDOW_DAYS)
        return [e for e in entries if window_start <= e.date < date]

    def __call__(self, date: dt.date, entries: Sequence[SleepEntry]) -> Optional[PersonalizedSleepScore]:
        night = next((e for e in entries if e.date == date), None)
        if night is None:
            return None
        history = self.baseline(date, entries)
        if len(history) < self.settings.SLEEP_BASELINE_MIN_ENTRIES:
            logger.debug("Sleep baseline for %s has %d nights; not personalizing", date, len(history))
            return None

        duration = _score_higher_better(
            night.duration_minutes, [e.duration_minutes for e in history], "duration"
        )
        quality = _score_higher_better(
            night.restorative_pct,
            [e.restorative_pct for e in history if e.restorative_pct is not None],
            "restorative",
        )
        heart_parts = [
            s
            for s in (
                _score_lower_better(
                    night.resting_hr, [e.resting_hr for e in history if e.resting_hr is not None], "resting_hr"
                ),
                _score_higher_better(
                    night.hrv_high, [e.hrv_high for e in history if e.hrv_high is not None], "hrv_high"
                ),
            )
            if s is not None
        ]
        heart = avg(heart_parts)

        components: Dict[str, Optional[float]] = {
            "duration": duration,
            "sleep_quality": quality,
            "heart_health": heart,
        }
        available = {k: v for k, v in components.items() if v is not None}
        total_weight = sum(COMPONENT_WEIGHTS[k] for k in available)
        overall = sum(v * COMPONENT_WEIGHTS[k] for k, v in available.items()) / total_weight

        return PersonalizedSleepScore(
            overall=round_stat(overall),
            duration=round_stat(duration),
            sleep_quality=round_stat(quality),
            heart_health=round_stat(heart),
        )
