"""Training-load engine used by the activity pillar.

The pillar only depends on the ``TrainingLoadEngine`` protocol; the default
implementation here sums daily effort (duration x intensity, scaled by a
weekly consistency multiplier) with an exponential decay over a trailing
window, in the spirit of an acute-load model.
"""

import datetime as dt
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Protocol, Sequence

from vitalscore.core.config import Settings, settings as default_settings

from .engine import exponential_decay_weight
from .mappings import CONSISTENCY_MULTIPLIER_FLOOR, CONSISTENCY_MULTIPLIERS
from .schemas import Activity, TrainingLoad, TrainingLoadLevel

logger = logging.getLogger(__name__)


class TrainingLoadEngine(Protocol):
    def calculate_training_load(self, date: dt.date, activities: Sequence[Activity]) -> TrainingLoad:
        ...

    def get_training_load_level(self, score: float) -> TrainingLoadLevel:
        ...

    def calculate_consistency_multiplier(self, activities: Sequence[Activity], date: dt.date) -> float:
        ...


class DefaultTrainingLoadEngine:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def calculate_consistency_multiplier(self, activities: Sequence[Activity], date: dt.date) -> float:
        """Multiplier in [0.8, 1.1] from workouts in the 7 days before ``date``."""
        week_start = date - dt.timedelta(days=7)
        workouts = sum(1 for a in activities if week_start <= a.date < date)
        for at_least, multiplier in CONSISTENCY_MULTIPLIERS:
            if workouts >= at_least:
                return multiplier
        return CONSISTENCY_MULTIPLIER_FLOOR

    def daily_loads(self, activities: Sequence[Activity]) -> Dict[dt.date, float]:
        """Effort points per day: sum of duration x intensity, times that day's multiplier."""
        by_day: Dict[dt.date, List[Activity]] = defaultdict(list)
        for activity in activities:
            by_day[activity.date].append(activity)

        loads: Dict[dt.date, float] = {}
        for day, day_activities in by_day.items():
            base = sum(a.duration_minutes * a.intensity for a in day_activities)
            loads[day] = base * self.calculate_consistency_multiplier(activities, day)
        return loads

    def calculate_training_load(self, date: dt.date, activities: Sequence[Activity]) -> TrainingLoad:
        cfg = self.settings
        history = [a for a in activities if a.date <= date]
        if not history:
            return TrainingLoad(score=0.0, days_since_activity=None)

        loads = self.daily_loads(history)
        total = 0.0
        for offset in range(cfg.TRAINING_LOAD_WINDOW_DAYS):
            load = loads.get(date - dt.timedelta(days=offset))
            if load:
                total += load * exponential_decay_weight(offset, cfg.TRAINING_LOAD_HALF_LIFE_DAYS)

        last_active = max(a.date for a in history)
        score = total / cfg.TRAINING_LOAD_SCALE
        logger.debug("Training load on %s: %.1f (last activity %s)", date, score, last_active)
        return TrainingLoad(score=score, days_since_activity=(date - last_active).days)

    def get_training_load_level(self, score: float) -> TrainingLoadLevel:
        cfg = self.settings
        if score < cfg.TRAINING_LOAD_MAINTAINING_AT:
            return TrainingLoadLevel.DETRAINING
        if score < cfg.TRAINING_LOAD_BUILDING_AT:
            return TrainingLoadLevel.MAINTAINING
        if score < cfg.TRAINING_LOAD_PEAK_AT:
            return TrainingLoadLevel.BUILDING
        if score <= cfg.TRAINING_LOAD_OVERREACHING_ABOVE:
            return TrainingLoadLevel.PEAK
        return TrainingLoadLevel.OVERREACHING
