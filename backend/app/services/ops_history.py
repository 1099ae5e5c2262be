"""
OPS delta and weekly trend from persisted OPS history.
With no usable history, delta is 0 (Stable) and the weekly trend is a jittered
approximation of the current score drawn from an injected random source.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from datetime import datetime, timedelta

from app.core.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from app.schemas.analytics import OpsHistoryPoint, Trend, WeeklyTrendPoint
from app.services.numeric import clamp

MIN_HISTORY_FOR_TREND = 2


def compute_delta(total: int, history: Sequence[OpsHistoryPoint]) -> float:
    """Percentage change of total against the most recent persisted OPS (rounded to 0.1)."""
    if not history:
        return 0.0
    previous = history[-1].total
    if previous <= 0:
        return 0.0
    return round((total - previous) / previous * 100, 1)


def trend_from_delta(delta: float, policy: ScoringPolicy = DEFAULT_POLICY) -> Trend:
    if delta > policy.trend_delta_threshold:
        return Trend.IMPROVING
    if delta < -policy.trend_delta_threshold:
        return Trend.DECLINING
    return Trend.STABLE


def build_weekly_trend(
    total: int,
    history: Sequence[OpsHistoryPoint],
    *,
    as_of: datetime,
    rng: random.Random,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> list[WeeklyTrendPoint]:
    """
    Last N points of history plus the current score when at least two persisted
    points exist; otherwise N synthetic daily points ending at as_of.
    """
    points = policy.weekly_trend_points
    if len(history) >= MIN_HISTORY_FOR_TREND:
        series = [(p.recorded_at.date(), p.total) for p in history]
        series.append((as_of.date(), total))
        return [WeeklyTrendPoint(date=d, ops=ops) for d, ops in series[-points:]]

    jitter = policy.weekly_trend_jitter
    trend = []
    for i in range(points):
        day = as_of.date() - timedelta(days=points - 1 - i)
        offset = rng.randint(-jitter, jitter - 1) if jitter else 0
        trend.append(WeeklyTrendPoint(date=day, ops=int(clamp(total + offset, 0, 100))))
    return trend
