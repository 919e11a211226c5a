import pytest

from vitalscore.core.config import Settings
from vitalscore.health_scoring.composite import (
    apply_critical_floor,
    calculate_cross_metric_adjustments,
    calculate_dynamic_weights,
    critical_floor_cap,
    negative_cross_metric_reasons,
)
from vitalscore.health_scoring.schemas import PillarValues


@pytest.fixture
def cfg():
    return Settings()


def test_no_pillars(cfg):
    result = calculate_dynamic_weights(PillarValues(), cfg)
    assert result.weighted_score == 0.0
    assert result.confidence_factor == 0.0
    assert apply_critical_floor(result.weighted_score, 0, PillarValues(), cfg) == 0


def test_single_pillar_pulls_toward_baseline(cfg):
    result = calculate_dynamic_weights(PillarValues(bp=80), cfg)
    assert result.confidence_factor == 0.85
    assert result.weighted_score == pytest.approx(77.75)
    assert result.effective_weights.bp == pytest.approx(1.0)
    assert result.effective_weights.sleep == 0.0


def test_weights_renormalize_over_present_pillars(cfg):
    result = calculate_dynamic_weights(PillarValues(bp=60, sleep=90), cfg)
    weights = result.effective_weights
    assert weights.bp + weights.sleep + weights.activity == pytest.approx(1.0)
    assert weights.bp == pytest.approx(0.30 / 0.65)
    assert result.confidence_factor == 0.95


def test_all_pillars_have_full_confidence(cfg):
    result = calculate_dynamic_weights(PillarValues(bp=70, sleep=70, activity=70), cfg)
    assert result.confidence_factor == 1.0
    assert result.weighted_score == pytest.approx(70)


def test_positive_synergies_are_capped(cfg):
    result = calculate_cross_metric_adjustments(PillarValues(bp=85, sleep=85, activity=80), cfg)
    assert result.adjustment == 7
    assert len(result.reasons) == 3
    assert negative_cross_metric_reasons(result) == []


def test_compounding_penalties_are_capped(cfg):
    result = calculate_cross_metric_adjustments(PillarValues(bp=40, sleep=40, activity=40), cfg)
    assert result.adjustment == -10
    assert result.reasons == [
        "Poor sleep and elevated BP are compounding health risks",
        "Multiple health areas need attention simultaneously",
    ]


def test_rules_skip_absent_pillars(cfg):
    result = calculate_cross_metric_adjustments(PillarValues(sleep=30, activity=90), cfg)
    assert result.adjustment == -3
    assert result.reasons == ["High activity with poor sleep risks overtraining"]


def test_no_rules_fire_for_middling_scores(cfg):
    result = calculate_cross_metric_adjustments(PillarValues(bp=65, sleep=65, activity=65), cfg)
    assert result.adjustment == 0
    assert result.reasons == []


@pytest.mark.parametrize("bp,cap", [(25, 45), (35, 55), (40, 100), (90, 100)])
def test_critical_floor_cap(cfg, bp, cap):
    assert critical_floor_cap(PillarValues(bp=bp, sleep=95, activity=95), cfg) == cap


def test_critical_floor_limits_overall(cfg):
    pillars = PillarValues(bp=20, sleep=100, activity=100)
    assert apply_critical_floor(80.0, 0, pillars, cfg) == 45


def test_overall_rounds_half_up(cfg):
    pillars = PillarValues(bp=100)
    assert apply_critical_floor(94.5, 0, pillars, cfg) == 95
    assert apply_critical_floor(94.4, 0, pillars, cfg) == 94


def test_overall_is_clamped(cfg):
    pillars = PillarValues(bp=100, sleep=100, activity=100)
    assert apply_critical_floor(100.0, 7, pillars, cfg) == 100
