import datetime as dt
from typing import List

import pytest

from vitalscore.health_scoring.schemas import (
    Activity,
    BPReading,
    SleepEntry,
    TrainingLoad,
    TrainingLoadLevel,
)

TARGET = dt.date(2025, 1, 15)


def make_bp(date="2025-01-15", systolic=118, diastolic=75, **overrides) -> BPReading:
    return BPReading(date=date, systolic=systolic, diastolic=diastolic, pulse=overrides.pop("pulse", 70), **overrides)


def make_sleep(date="2025-01-15", **overrides) -> SleepEntry:
    fields = dict(
        date=date,
        duration_minutes=480,
        deep_sleep_pct=20,
        rem_sleep_pct=22,
        resting_hr=55,
        hrv_low=30,
        hrv_high=65,
    )
    fields.update(overrides)
    return SleepEntry(**fields)


def make_activity(date="2025-01-15", duration_minutes=45, intensity=3, activity_type="walking") -> Activity:
    return Activity(date=date, duration_minutes=duration_minutes, intensity=intensity, activity_type=activity_type)


def make_activity_series(count: int, start: str, spacing: int = 1, duration=None, intensity=3) -> List[Activity]:
    first = dt.date.fromisoformat(start)
    return [
        make_activity(
            date=first + dt.timedelta(days=i * spacing),
            duration_minutes=duration if duration is not None else 40 + i * 5,
            intensity=intensity,
        )
        for i in range(count)
    ]


class FakeTrainingLoadEngine:
    """Training-load engine with fixed answers."""

    def __init__(self, score=50.0, level=TrainingLoadLevel.BUILDING, multiplier=1.0, days_since_activity=0):
        self.score = score
        self.level = level
        self.multiplier = multiplier
        self.days_since_activity = days_since_activity

    def calculate_training_load(self, date, activities):
        return TrainingLoad(score=self.score, days_since_activity=self.days_since_activity)

    def get_training_load_level(self, score):
        return self.level

    def calculate_consistency_multiplier(self, activities, date):
        return self.multiplier


class BrokenTrainingLoadEngine(FakeTrainingLoadEngine):
    def calculate_training_load(self, date, activities):
        raise RuntimeError("training-load backend unavailable")


@pytest.fixture
def target():
    return TARGET


@pytest.fixture
def fake_load_engine():
    return FakeTrainingLoadEngine()
