"""Tests for OPS delta, trend classification and the weekly trend series."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from app.schemas.analytics import OpsHistoryPoint, Trend
from app.services.ops_history import build_weekly_trend, compute_delta, trend_from_delta

NOW = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


def _history(*totals):
    start = NOW - timedelta(days=len(totals))
    return [OpsHistoryPoint(total=t, recorded_at=start + timedelta(days=i)) for i, t in enumerate(totals)]


def test_delta_without_history_is_zero():
    assert compute_delta(70, []) == 0.0


def test_delta_with_zero_previous_total_is_zero():
    assert compute_delta(70, _history(0)) == 0.0


def test_delta_is_percent_change_vs_latest_point():
    assert compute_delta(55, _history(10, 50)) == pytest.approx(10.0)
    assert compute_delta(40, _history(50)) == pytest.approx(-20.0)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (0.0, Trend.STABLE),
        (1.0, Trend.STABLE),
        (1.1, Trend.IMPROVING),
        (-1.0, Trend.STABLE),
        (-1.5, Trend.DECLINING),
    ],
)
def test_trend_thresholds_are_strict(delta, expected):
    assert trend_from_delta(delta) == expected


def test_synthetic_weekly_trend_without_history():
    trend = build_weekly_trend(70, [], as_of=NOW, rng=random.Random(42))
    assert len(trend) == 7
    assert trend[-1].date == NOW.date()
    assert trend[0].date == NOW.date() - timedelta(days=6)
    assert all(65 <= p.ops <= 74 for p in trend)


def test_synthetic_weekly_trend_is_reproducible_with_seed():
    a = build_weekly_trend(70, _history(60), as_of=NOW, rng=random.Random(7))
    b = build_weekly_trend(70, _history(60), as_of=NOW, rng=random.Random(7))
    assert a == b


@pytest.mark.parametrize("total", [0, 100])
def test_synthetic_weekly_trend_stays_in_range(total):
    trend = build_weekly_trend(total, [], as_of=NOW, rng=random.Random(1))
    assert all(0 <= p.ops <= 100 for p in trend)


def test_weekly_trend_uses_history_when_available():
    trend = build_weekly_trend(80, _history(60, 70, 75), as_of=NOW, rng=random.Random(0))
    assert [p.ops for p in trend] == [60, 70, 75, 80]
    assert trend[-1].date == NOW.date()


def test_weekly_trend_keeps_last_seven_points():
    history = _history(*range(40, 50))
    trend = build_weekly_trend(90, history, as_of=NOW, rng=random.Random(0))
    assert len(trend) == 7
    assert [p.ops for p in trend] == [44, 45, 46, 47, 48, 49, 90]
