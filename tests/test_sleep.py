import logging

import pytest

from vitalscore.health_scoring.schemas import PersonalizedSleepScore
from vitalscore.health_scoring.sleep import (
    calculate_sleep_health_score,
    consistency_bonus,
    duration_score,
    heart_score,
    restorative_score,
    score_sleep_for_day,
)

from conftest import make_sleep


def test_no_entries_is_none():
    assert calculate_sleep_health_score([]) is None


def test_good_night():
    result = calculate_sleep_health_score([make_sleep()])
    assert result.duration_score == 100
    assert result.restorative_score == 90
    assert result.heart_score == 83
    assert result.consistency_bonus == 0
    assert result.score == 92
    assert result.avg_duration_minutes == 480
    assert result.avg_restorative == 42
    assert result.source == "population"


@pytest.mark.parametrize(
    "minutes,expected",
    [(480, 100), (405, 85), (555, 85), (370, 70), (300, 40), (290, 25), (670, 25)],
)
def test_duration_bands(minutes, expected):
    assert duration_score([make_sleep(duration_minutes=minutes)]) == expected


def test_missing_stage_data_is_neutral():
    entry = make_sleep(deep_sleep_pct=None, rem_sleep_pct=None)
    assert entry.restorative_pct is None
    assert restorative_score([entry]) == 70


def test_missing_heart_data_is_neutral():
    entry = make_sleep(resting_hr=None, hrv_low=None, hrv_high=None)
    assert heart_score([entry]) == 70


def test_heart_score_uses_available_metric():
    entry = make_sleep(resting_hr=48, hrv_high=None)
    assert heart_score([entry]) == 100


def test_consistency_bonus():
    steady = [make_sleep(duration_minutes=480) for _ in range(3)]
    erratic = [make_sleep(duration_minutes=m) for m in (300, 480, 600)]
    assert consistency_bonus(steady) == 5
    assert consistency_bonus(erratic) == -5
    assert consistency_bonus(steady[:2]) == 0


def _history():
    return [make_sleep(date=f"2025-01-{d:02d}") for d in range(12, 16)]


def test_personalized_score_takes_precedence():
    entries = _history()
    scorer = lambda date, all_entries: PersonalizedSleepScore(
        overall=77, duration=80, sleep_quality=70, heart_health=75
    )
    result = score_sleep_for_day(entries[-1:], entries, scorer)
    assert result.source == "personalized"
    assert result.score == 77
    assert result.duration_score == 80
    assert result.restorative_score == 70
    assert result.heart_score == 75


def test_personalized_needs_history():
    entries = _history()[-2:]
    scorer = lambda date, all_entries: PersonalizedSleepScore(overall=10)
    result = score_sleep_for_day(entries[-1:], entries, scorer)
    assert result.source == "population"


def test_personalized_without_overall_falls_back():
    entries = _history()
    scorer = lambda date, all_entries: PersonalizedSleepScore()
    assert score_sleep_for_day(entries[-1:], entries, scorer).source == "population"


def test_failing_scorer_falls_back_with_warning(caplog):
    entries = _history()

    def broken(date, all_entries):
        raise ValueError("baseline store offline")

    with caplog.at_level(logging.WARNING):
        result = score_sleep_for_day(entries[-1:], entries, broken)
    assert result.source == "population"
    assert result.score == 92
    assert "Personalized sleep scorer failed" in caplog.text


def test_personalized_restorative_is_rounded_night_value():
    entries = _history()[:-1] + [make_sleep(date="2025-01-15", deep_sleep_pct=20.4, rem_sleep_pct=22.3)]
    scorer = lambda date, all_entries: PersonalizedSleepScore(overall=80)
    result = score_sleep_for_day(entries[-1:], entries, scorer)
    assert result.avg_restorative == 43
    assert result.avg_duration_minutes == 480
