"""Small numeric helpers shared by aggregation and scoring."""

import math


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Saturate value to [low, high]; NaN saturates to low."""
    if math.isnan(value):
        return low
    return min(max(value, low), high)


def round_half_up(value: float) -> int:
    """Round to the nearest int with .5 going up (2.5 -> 3, -2.5 -> -2), unlike round()."""
    return int(math.floor(value + 0.5))


def safe_ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    if not denominator:
        return default
    return numerator / denominator
