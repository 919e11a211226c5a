import pytest
from pydantic import ValidationError

from vitalscore.core.config import Settings


def test_defaults():
    cfg = Settings()
    assert cfg.PILLAR_BASE_WEIGHTS == {"bp": 0.30, "sleep": 0.35, "activity": 0.35}
    assert cfg.NEUTRAL_BASELINE == 65.0
    assert cfg.confidence_for(1) == 0.85
    assert cfg.confidence_for(3) == 1.0
    assert cfg.confidence_for(7) == 0.0


def test_env_override(monkeypatch):
    monkeypatch.setenv("VITALSCORE_NEUTRAL_BASELINE", "70")
    monkeypatch.setenv("VITALSCORE_LOG_LEVEL", " debug ")
    cfg = Settings()
    assert cfg.NEUTRAL_BASELINE == 70.0
    assert cfg.LOG_LEVEL == "DEBUG"


def test_weights_must_sum_to_one():
    with pytest.raises(ValidationError):
        Settings(PILLAR_BASE_WEIGHTS={"bp": 0.5, "sleep": 0.5, "activity": 0.5})


def test_weights_need_every_pillar():
    with pytest.raises(ValidationError):
        Settings(PILLAR_BASE_WEIGHTS={"bp": 0.5, "sleep": 0.5})


def test_adjustment_bounds_must_be_ordered():
    with pytest.raises(ValidationError):
        Settings(CROSS_METRIC_MIN_ADJUSTMENT=5, CROSS_METRIC_MAX_ADJUSTMENT=-5)


def test_training_load_thresholds_must_be_ordered():
    with pytest.raises(ValidationError):
        Settings(TRAINING_LOAD_BUILDING_AT=100.0)


def test_settings_are_frozen():
    cfg = Settings()
    with pytest.raises(ValidationError):
        cfg.NEUTRAL_BASELINE = 50.0
