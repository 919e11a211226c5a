import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


def avg(values: Sequence[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty sequence."""
    if not values:
        return None
    return sum(values) / len(values)


def round_stat(value: Optional[float]) -> Optional[int]:
    """Round half up, the canonical rounding for every displayed score."""
    if value is None:
        return None
    return int(math.floor(value + 0.5))


def avg_rounded(values: Sequence[float]) -> Optional[int]:
    return round_stat(avg(values))


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation; 0.0 with fewer than two values."""
    if len(values) < 2:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class LinearFit:
    slope: float
    intercept: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


def linear_regression(points: Sequence[Tuple[float, float]]) -> Optional[LinearFit]:
    """Ordinary least-squares fit over (x, y) points.

    Returns None with fewer than two points. When every x is identical the
    slope is undefined, so a flat line at mean y is returned instead.
    """
    n = len(points)
    if n < 2:
        return None
    sum_x = sum(p[0] for p in points)
    sum_y = sum(p[1] for p in points)
    sum_xy = sum(p[0] * p[1] for p in points)
    sum_xx = sum(p[0] * p[0] for p in points)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return LinearFit(slope=0.0, intercept=sum_y / n)

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return LinearFit(slope=slope, intercept=intercept)


def interpolate_piecewise(value: float, anchors: List[Tuple[float, float]], clamp_low: float = 0.0, clamp_high: float = 100.0) -> float:
    """Piecewise linear interpolation. Anchors are sorted by value.

    Values outside the anchor range take the nearest end anchor's score.
    """
    if not anchors:
        return 0.0
    pts = sorted(anchors, key=lambda x: x[0])
    if value <= pts[0][0]:
        return clamp(pts[0][1], clamp_low, clamp_high)
    if value >= pts[-1][0]:
        return clamp(pts[-1][1], clamp_low, clamp_high)
    for i in range(1, len(pts)):
        x0, y0 = pts[i - 1]
        x1, y1 = pts[i]
        if x0 <= value <= x1:
            if x1 == x0:
                return clamp(y1, clamp_low, clamp_high)
            t = (value - x0) / (x1 - x0)
            return clamp(y0 + t * (y1 - y0), clamp_low, clamp_high)
    return clamp(pts[-1][1], clamp_low, clamp_high)


def step_score(value: float, tiers: List[Tuple[float, float]], fallback: float) -> float:
    """First tier whose threshold the value reaches, scanning high to low."""
    for threshold, score in tiers:
        if value >= threshold:
            return score
    return fallback


def ceiling_score(value: float, tiers: List[Tuple[float, float]], fallback: float) -> float:
    """First tier whose threshold the value stays below, scanning low to high."""
    for threshold, score in tiers:
        if value < threshold:
            return score
    return fallback


def exponential_decay_weight(days_since: float, half_life_days: Optional[float]) -> float:
    """Compute exponential decay weight from days since observation to now.
    If half_life_days is None or <= 0, weight is 1.0.
    """
    if not half_life_days or half_life_days <= 0:
        return 1.0
    return pow(0.5, float(days_since) / float(half_life_days))
