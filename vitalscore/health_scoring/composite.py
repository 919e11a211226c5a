"""Combine pillar scores into one overall value.

Three stages run in order: dynamic weighting with a confidence discount,
a bounded cross-metric adjustment, then the critical-floor cap.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from vitalscore.core.config import Settings, settings as default_settings

from .engine import clamp, round_stat
from .mappings import CROSS_METRIC_REASONS
from .schemas import CrossMetricResult, DynamicWeightResult, PillarValues, PillarWeights

logger = logging.getLogger(__name__)

PILLARS = ("bp", "sleep", "activity")


def calculate_dynamic_weights(
    pillars: PillarValues,
    settings: Optional[Settings] = None,
) -> DynamicWeightResult:
    """Weight the present pillars, pulling toward the neutral baseline as data goes missing."""
    cfg = settings or default_settings
    present = pillars.present()
    if not present:
        return DynamicWeightResult(weighted_score=0.0, confidence_factor=0.0, effective_weights=PillarWeights())

    base = cfg.PILLAR_BASE_WEIGHTS
    total_base = sum(base[name] for name in present)
    effective: Dict[str, float] = {
        name: (base[name] / total_base if name in present else 0.0) for name in PILLARS
    }

    blended = sum(score * effective[name] for name, score in present.items())
    confidence = cfg.confidence_for(len(present))
    weighted = blended * confidence + cfg.NEUTRAL_BASELINE * (1 - confidence)

    return DynamicWeightResult(
        weighted_score=weighted,
        confidence_factor=confidence,
        effective_weights=PillarWeights(**effective),
    )


def _both(a: Optional[float], b: Optional[float], test: Callable[[float, float], bool]) -> bool:
    return a is not None and b is not None and test(a, b)


# Ordered rule table; a rule never fires on an absent pillar
CROSS_METRIC_RULES: List[Tuple[str, Callable[[PillarValues], bool]]] = [
    ("poor_sleep_high_bp", lambda p: _both(p.sleep, p.bp, lambda s, b: s < 50 and b < 50)),
    ("excellent_sleep_bp", lambda p: _both(p.sleep, p.bp, lambda s, b: s >= 80 and b >= 80)),
    ("active_poor_sleep", lambda p: _both(p.activity, p.sleep, lambda a, s: a >= 70 and s < 40)),
    ("active_good_sleep", lambda p: _both(p.activity, p.sleep, lambda a, s: a >= 75 and s >= 75)),
    ("active_good_bp", lambda p: _both(p.activity, p.bp, lambda a, b: a >= 70 and b >= 75)),
    (
        "all_pillars_low",
        lambda p: len(p.present()) == 3 and all(v < 45 for v in p.present().values()),
    ),
]


def calculate_cross_metric_adjustments(
    pillars: PillarValues,
    settings: Optional[Settings] = None,
) -> CrossMetricResult:
    """Sum the triggered interaction rules and clamp the total."""
    cfg = settings or default_settings
    total = 0
    reasons: List[str] = []
    for key, condition in CROSS_METRIC_RULES:
        if condition(pillars):
            reason, adjustment = CROSS_METRIC_REASONS[key]
            total += adjustment
            reasons.append(reason)

    adjustment = int(clamp(total, cfg.CROSS_METRIC_MIN_ADJUSTMENT, cfg.CROSS_METRIC_MAX_ADJUSTMENT))
    return CrossMetricResult(adjustment=adjustment, reasons=reasons)


def negative_cross_metric_reasons(cross_metric: CrossMetricResult) -> List[str]:
    """Reasons from rules that pulled the score down, in rule order."""
    penalties = {reason for reason, adjustment in CROSS_METRIC_REASONS.values() if adjustment < 0}
    return [r for r in cross_metric.reasons if r in penalties]


def critical_floor_cap(pillars: PillarValues, settings: Optional[Settings] = None) -> float:
    """Ceiling on the overall score set by the weakest present pillar."""
    cfg = settings or default_settings
    present = pillars.present()
    if not present:
        return 100.0
    weakest = min(present.values())
    if weakest < cfg.CRITICAL_FLOOR_SEVERE_THRESHOLD:
        return cfg.CRITICAL_FLOOR_SEVERE_CAP
    if weakest < cfg.CRITICAL_FLOOR_MODERATE_THRESHOLD:
        return cfg.CRITICAL_FLOOR_MODERATE_CAP
    return 100.0


def apply_critical_floor(
    weighted_score: float,
    adjustment: int,
    pillars: PillarValues,
    settings: Optional[Settings] = None,
) -> int:
    """Final integer score: adjusted weighted value under the critical-floor cap."""
    if not pillars.present():
        return 0
    cap = critical_floor_cap(pillars, settings)
    if weighted_score + adjustment > cap:
        logger.debug("Critical floor caps overall at %s", cap)
    return int(clamp(round_stat(min(weighted_score + adjustment, cap)), 0, 100))
