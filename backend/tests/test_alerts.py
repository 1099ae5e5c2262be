"""Tests for alert generation."""

from datetime import datetime, timezone

from app.schemas.analytics import (
    AggregatedAnalytics,
    AggregationMeta,
    AlertLevel,
    BioNode,
    HealthNode,
    ModuleBreakdown,
    ModuleScores,
    NutritionNode,
    OPSScore,
    PerformanceNode,
    SupplementNode,
    TrainingNode,
    Trend,
)
from app.services.alerts import generate_alerts

NOW = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


def _ops(delta=0.0):
    scores = {"health": 0.8, "workout": 0.8, "nutrition": 0.8, "performance": 0.8, "supplements": 1.0, "bio": 0.6}
    return OPSScore(
        total=80,
        trend=Trend.DECLINING if delta < -1 else Trend.STABLE,
        delta=delta,
        breakdown=ModuleBreakdown(**{k: round(v * 100) for k, v in scores.items()}),
        raw_scores=ModuleScores(**scores),
        last_updated=NOW,
    )


def _data(avg_sleep=7.5, pr_count=0):
    return AggregatedAnalytics(
        health=HealthNode(avg_sleep=avg_sleep, health_score=80),
        training=TrainingNode(),
        nutrition=NutritionNode(),
        performance=PerformanceNode(pr_count_monthly=pr_count),
        supplements=SupplementNode(),
        bio=BioNode(),
        meta=AggregationMeta(last_updated=NOW, data_quality_score=92),
    )


def test_no_alerts_for_healthy_stable_user():
    assert generate_alerts(_ops(), _data(), now=NOW) == []


def test_ops_drop_over_ten_percent_is_critical():
    alerts = generate_alerts(_ops(delta=-10.5), _data(), now=NOW)
    assert len(alerts) == 1
    assert alerts[0].level == AlertLevel.CRITICAL
    assert alerts[0].reason == "Performance Score dropped by 10.5%"
    assert alerts[0].suggested_action == "Check Health Module"
    assert alerts[0].is_acknowledged is False


def test_ops_drop_of_exactly_ten_percent_is_not_critical():
    assert generate_alerts(_ops(delta=-10.0), _data(), now=NOW) == []


def test_short_sleep_is_warning():
    alerts = generate_alerts(_ops(), _data(avg_sleep=5.4), now=NOW)
    assert [a.level for a in alerts] == [AlertLevel.WARNING]
    assert alerts[0].metrics_involved == ["sleep"]

    assert generate_alerts(_ops(), _data(avg_sleep=5.5), now=NOW) == []


def test_new_prs_are_info():
    alerts = generate_alerts(_ops(), _data(pr_count=3), now=NOW)
    assert [a.level for a in alerts] == [AlertLevel.INFO]
    assert alerts[0].reason == "3 New PRs this month!"
    assert alerts[0].suggested_action is None


def test_alerts_are_independent_and_ordered_by_rule():
    alerts = generate_alerts(_ops(delta=-25.0), _data(avg_sleep=4, pr_count=1), now=NOW)
    assert [a.level for a in alerts] == [AlertLevel.CRITICAL, AlertLevel.WARNING, AlertLevel.INFO]
    assert len({a.id for a in alerts}) == 3
