import datetime as dt

import pytest

from vitalscore.core.config import Settings
from vitalscore.health_scoring.activity import (
    calculate_activity_pillar_score,
    consistency_score,
    effort_appropriateness_score,
    training_load_status_score,
)
from vitalscore.health_scoring.schemas import TrainingLoadLevel
from vitalscore.health_scoring.training_load import DefaultTrainingLoadEngine

from conftest import TARGET, FakeTrainingLoadEngine, make_activity, make_activity_series


def test_no_activities_is_none(fake_load_engine):
    assert calculate_activity_pillar_score(TARGET, [], fake_load_engine) is None


def test_status_scores():
    assert training_load_status_score(TrainingLoadLevel.BUILDING, 50) == 90
    assert training_load_status_score(TrainingLoadLevel.PEAK, 100) == 85
    assert training_load_status_score(TrainingLoadLevel.MAINTAINING, 20) == 75
    assert training_load_status_score(TrainingLoadLevel.DETRAINING, 0) == 20
    assert training_load_status_score(TrainingLoadLevel.DETRAINING, 7) == pytest.approx(40)
    assert training_load_status_score(TrainingLoadLevel.OVERREACHING, 160) == pytest.approx(50)
    assert training_load_status_score(TrainingLoadLevel.OVERREACHING, 400) == 40


def test_effort_depends_on_level_and_today():
    assert effort_appropriateness_score(TrainingLoadLevel.DETRAINING, True) == 90
    assert effort_appropriateness_score(TrainingLoadLevel.DETRAINING, False) == 30
    assert effort_appropriateness_score(TrainingLoadLevel.OVERREACHING, True) == 35
    assert effort_appropriateness_score(TrainingLoadLevel.OVERREACHING, False) == 95


def test_consistency_score_range():
    assert consistency_score(0.8) == 30
    assert consistency_score(1.1) == 95
    assert consistency_score(1.0) == pytest.approx(73.333, abs=1e-3)


def test_uses_injected_engine(fake_load_engine):
    result = calculate_activity_pillar_score(TARGET, [make_activity(date=TARGET)], fake_load_engine)
    assert result.level == TrainingLoadLevel.BUILDING
    assert result.active_today is True
    assert result.training_load_score == 90
    assert result.effort_score == 90
    assert result.consistency_score == 73
    assert result.score == 87
    assert result.training_load == 50.0


def test_long_break_scores_low():
    engine = DefaultTrainingLoadEngine(Settings())
    result = calculate_activity_pillar_score(TARGET, [make_activity(date="2024-12-25")], engine)
    assert result.level == TrainingLoadLevel.DETRAINING
    assert result.training_load == pytest.approx(1.4)
    assert result.training_load_score == 24
    assert result.effort_score == 30
    assert result.consistency_score == 30
    assert result.days_since_activity == 21
    assert result.score == 27


def test_rest_day_after_heavy_block():
    engine = DefaultTrainingLoadEngine(Settings())
    activities = make_activity_series(30, "2024-12-16", duration=90, intensity=5)
    target = dt.date(2025, 1, 16)
    result = calculate_activity_pillar_score(target, activities, engine)
    assert result.level == TrainingLoadLevel.OVERREACHING
    assert result.active_today is False
    assert result.training_load_score == 40
    assert result.effort_score == 95
    assert result.consistency_score == 95


def test_level_from_engine_may_be_plain_string():
    engine = FakeTrainingLoadEngine(level="peak")
    result = calculate_activity_pillar_score(TARGET, [make_activity()], engine)
    assert result.level == TrainingLoadLevel.PEAK


def test_only_future_activities_is_none():
    engine = DefaultTrainingLoadEngine(Settings())
    assert calculate_activity_pillar_score(TARGET, [make_activity(date="2025-01-20")], engine) is None


def test_future_activities_are_not_history():
    engine = DefaultTrainingLoadEngine(Settings())
    past = [make_activity(date="2025-01-10")]
    future = [make_activity(date="2025-01-16", duration_minutes=120, intensity=5)]
    with_future = calculate_activity_pillar_score(TARGET, past + future, engine)
    assert with_future == calculate_activity_pillar_score(TARGET, past, engine)
    assert with_future.consistency_score == 30
