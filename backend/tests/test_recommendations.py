"""Tests for recommendation rules: thresholds, priority ordering and the fallback."""

from datetime import datetime, timezone

import pytest

from app.core.scoring_policy import ScoringPolicy
from app.schemas.analytics import (
    AggregatedAnalytics,
    AggregationMeta,
    BioNode,
    HealthNode,
    IntensityTrend,
    ModuleBreakdown,
    ModuleScores,
    NutritionNode,
    OPSScore,
    PerformanceNode,
    SupplementNode,
    TrainingNode,
    Trend,
)
from app.schemas.profile import UserProfile
from app.services.recommendations import generate_recommendations

NOW = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


def _ops(total=70, trend=Trend.STABLE, delta=0.0, **breakdown):
    values = {"health": 75, "workout": 75, "nutrition": 75, "performance": 75, "supplements": 100, "bio": 60}
    values.update(breakdown)
    return OPSScore(
        total=total,
        trend=trend,
        delta=delta,
        breakdown=ModuleBreakdown(**values),
        raw_scores=ModuleScores(**{k: v / 100 for k, v in values.items()}),
        last_updated=NOW,
    )


def _data(avg_sleep=7.5, volume=0.0, intensity=IntensityTrend.LOW, vital=Trend.STABLE):
    return AggregatedAnalytics(
        health=HealthNode(avg_sleep=avg_sleep, vital_trend=vital, health_score=75),
        training=TrainingNode(total_volume_monthly=volume, intensity_trend=intensity),
        nutrition=NutritionNode(),
        performance=PerformanceNode(),
        supplements=SupplementNode(),
        bio=BioNode(),
        meta=AggregationMeta(last_updated=NOW, data_quality_score=92),
    )


def _titles(recs):
    return [r.title for r in recs]


def test_low_sleep_and_health_fires_sleep_debt():
    recs = generate_recommendations(_ops(health=50), UserProfile(), _data(avg_sleep=5), now=NOW)
    assert _titles(recs) == ["Sleep Debt Critical"]
    assert recs[0].priority == 1
    assert recs[0].id == f"rec_sleep_{int(NOW.timestamp() * 1000)}"


@pytest.mark.parametrize(
    "health, avg_sleep, fires",
    [
        (59, 7.0, True),
        (60, 5.99, True),
        (60, 6.0, False),
        (95, 8.0, False),
    ],
)
def test_sleep_debt_thresholds_are_strict(health, avg_sleep, fires):
    recs = generate_recommendations(_ops(health=health), UserProfile(), _data(avg_sleep=avg_sleep), now=NOW)
    assert ("Sleep Debt Critical" in _titles(recs)) is fires


def test_fallback_when_nothing_fires():
    recs = generate_recommendations(_ops(), UserProfile(), _data(), now=NOW)
    assert len(recs) == 1
    assert recs[0].title == "Maintain Momentum"
    assert recs[0].priority == 3
    assert recs[0].confidence_score == 1.0


def test_deload_fires_on_declining_volume_and_vitals():
    recs = generate_recommendations(
        _ops(trend=Trend.DECLINING, delta=-5.0),
        UserProfile(),
        _data(volume=25000, vital=Trend.DECLINING),
        now=NOW,
    )
    deload = [r for r in recs if r.title == "Scheduled Deload"]
    assert len(deload) == 1
    assert deload[0].priority == 1
    assert "Maintain Momentum" not in _titles(recs)


def test_deload_needs_volume_over_threshold():
    recs = generate_recommendations(
        _ops(trend=Trend.DECLINING),
        UserProfile(),
        _data(volume=20000, vital=Trend.DECLINING),
        now=NOW,
    )
    assert "Scheduled Deload" not in _titles(recs)


def test_protein_gap_mentions_target_from_body_weight():
    recs = generate_recommendations(_ops(nutrition=65, workout=85), UserProfile(), _data(), now=NOW)
    assert _titles(recs) == ["Protein Intake Gap"]
    assert "140 g" in recs[0].explanation

    recs = generate_recommendations(
        _ops(nutrition=65, workout=85), UserProfile(current_weight=80), _data(), now=NOW
    )
    assert "160 g" in recs[0].explanation


def test_plateau_requires_stable_high_total_and_moderate_intensity():
    recs = generate_recommendations(
        _ops(total=85), UserProfile(), _data(intensity=IntensityTrend.MODERATE), now=NOW
    )
    assert _titles(recs) == ["Break The Plateau"]
    assert recs[0].priority == 2

    recs = generate_recommendations(
        _ops(total=85), UserProfile(), _data(intensity=IntensityTrend.HIGH), now=NOW
    )
    assert _titles(recs) == ["Maintain Momentum"]


def test_recommendations_sorted_by_priority():
    recs = generate_recommendations(
        _ops(total=85, health=50, nutrition=65, workout=85),
        UserProfile(),
        _data(avg_sleep=5, intensity=IntensityTrend.MODERATE),
        now=NOW,
    )
    assert _titles(recs) == ["Sleep Debt Critical", "Protein Intake Gap", "Break The Plateau"]
    assert [r.priority for r in recs] == [1, 1, 2]


def test_custom_policy_moves_sleep_threshold():
    policy = ScoringPolicy(sleep_debt_avg_sleep=8.0)
    recs = generate_recommendations(_ops(), UserProfile(), _data(avg_sleep=7.5), policy=policy, now=NOW)
    assert _titles(recs) == ["Sleep Debt Critical"]


def test_protein_target_rounds_half_up():
    recs = generate_recommendations(
        _ops(nutrition=65, workout=85), UserProfile(current_weight=70.25), _data(), now=NOW
    )
    assert "141 g" in recs[0].explanation
