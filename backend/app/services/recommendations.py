"""
Deterministic recommendation rules over OPS + aggregated analytics.
Every rule is evaluated independently; the fallback fires only when none did.
Output is sorted by priority (1 = most urgent) and never empty.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from app.core.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from app.schemas.analytics import (
    AggregatedAnalytics,
    IntensityTrend,
    OPSScore,
    Recommendation,
    RecommendationAction,
    Trend,
)
from app.schemas.profile import UserProfile
from app.services.numeric import round_half_up

logger = logging.getLogger(__name__)

PRIORITY_CRITICAL = 1
PRIORITY_HIGH = 2
PRIORITY_NORMAL = 3

Condition = Callable[[OPSScore, AggregatedAnalytics, ScoringPolicy], bool]


@dataclass(frozen=True)
class RecommendationRule:
    key: str
    priority: int
    title: str
    explanation: str
    actions: tuple[RecommendationAction, ...]
    expected_timeframe: str
    confidence_score: float
    related_metrics: tuple[str, ...]
    condition: Condition


def _sleep_debt(ops: OPSScore, data: AggregatedAnalytics, policy: ScoringPolicy) -> bool:
    return (
        ops.breakdown.health < policy.sleep_debt_health_breakdown
        or data.health.avg_sleep < policy.sleep_debt_avg_sleep
    )


def _protein_gap(ops: OPSScore, data: AggregatedAnalytics, policy: ScoringPolicy) -> bool:
    return (
        ops.breakdown.nutrition < policy.protein_gap_nutrition_breakdown
        and ops.breakdown.workout > policy.protein_gap_workout_breakdown
    )


def _plateau(ops: OPSScore, data: AggregatedAnalytics, policy: ScoringPolicy) -> bool:
    return (
        ops.trend == Trend.STABLE
        and ops.total > policy.plateau_total
        and data.training.intensity_trend == IntensityTrend.MODERATE
    )


def _deload(ops: OPSScore, data: AggregatedAnalytics, policy: ScoringPolicy) -> bool:
    return (
        ops.trend == Trend.DECLINING
        and data.training.total_volume_monthly > policy.deload_volume_monthly
        and data.health.vital_trend == Trend.DECLINING
    )


RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        key="sleep",
        priority=PRIORITY_CRITICAL,
        title="Sleep Debt Critical",
        explanation="Your average sleep is below 6 hours, significantly impacting your Health Score.",
        actions=(
            RecommendationAction(label="Sleep Hygiene Plan", type="navigate", params={"view": "HEALTH_HUB"}),
            RecommendationAction(label="Shift Workouts to PM", type="advice"),
        ),
        expected_timeframe="1-2 Weeks",
        confidence_score=0.95,
        related_metrics=("sleepHours", "recoveryIndex"),
        condition=_sleep_debt,
    ),
    RecommendationRule(
        key="protein",
        priority=PRIORITY_CRITICAL,
        title="Protein Intake Gap",
        explanation="Training volume is high but nutrition score is lagging. Recovery may be compromised.",
        actions=(
            RecommendationAction(label="Add Whey Shake", type="supplement_add", params={"id": "sup_1"}),
            RecommendationAction(label="Review Meal Plan", type="navigate", params={"view": "NUTRITION_CENTER"}),
        ),
        expected_timeframe="Immediate",
        confidence_score=0.88,
        related_metrics=("protein", "muscleMass"),
        condition=_protein_gap,
    ),
    RecommendationRule(
        key="plateau",
        priority=PRIORITY_HIGH,
        title="Break The Plateau",
        explanation="Consistency is perfect, but progress has stalled. It's time to increase intensity.",
        actions=(
            RecommendationAction(label="Apply Progressive Overload", type="advice"),
            RecommendationAction(label="Switch Training Split", type="navigate", params={"view": "PLANNER"}),
        ),
        expected_timeframe="4 Weeks",
        confidence_score=0.80,
        related_metrics=("1RM", "volume"),
        condition=_plateau,
    ),
    RecommendationRule(
        key="deload",
        priority=PRIORITY_CRITICAL,
        title="Scheduled Deload",
        explanation=(
            "Performance is dropping while fatigue metrics are rising. "
            "Central Nervous System (CNS) needs a break."
        ),
        actions=(
            RecommendationAction(label="Reduce Volume 50%", type="advice"),
            RecommendationAction(label="Focus on Mobility", type="navigate", params={"view": "TRAINING_CENTER"}),
        ),
        expected_timeframe="1 Week",
        confidence_score=0.92,
        related_metrics=("hrv", "strength"),
        condition=_deload,
    ),
)

FALLBACK_RULE = RecommendationRule(
    key="general",
    priority=PRIORITY_NORMAL,
    title="Maintain Momentum",
    explanation="Your stats are balanced. Keep consistent with your current routine.",
    actions=(RecommendationAction(label="Log Daily", type="navigate", params={"view": "TRACKER"}),),
    expected_timeframe="Ongoing",
    confidence_score=1.0,
    related_metrics=("consistency",),
    condition=lambda ops, data, policy: True,
)


def _protein_target_grams(profile: UserProfile, policy: ScoringPolicy) -> int:
    weight = profile.current_weight or policy.default_body_weight_kg
    return round_half_up(weight * policy.protein_grams_per_kg)


def _build(rule: RecommendationRule, explanation: str, now: datetime) -> Recommendation:
    return Recommendation(
        id=f"rec_{rule.key}_{int(now.timestamp() * 1000)}",
        priority=rule.priority,
        title=rule.title,
        explanation=explanation,
        actions=rule.actions,
        expected_timeframe=rule.expected_timeframe,
        confidence_score=rule.confidence_score,
        related_metrics=rule.related_metrics,
        created_at=now,
    )


def generate_recommendations(
    ops: OPSScore,
    profile: UserProfile,
    data: AggregatedAnalytics,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    now: datetime,
    rules: tuple[RecommendationRule, ...] = RULES,
) -> list[Recommendation]:
    recs: list[Recommendation] = []
    for rule in rules:
        if not rule.condition(ops, data, policy):
            continue
        explanation = rule.explanation
        if rule.key == "protein":
            explanation += f" Aim for about {_protein_target_grams(profile, policy)} g of protein per day."
        recs.append(_build(rule, explanation, now))
        logger.debug("Analytics: recommendation rule fired key=%s", rule.key)

    if not recs:
        recs.append(_build(FALLBACK_RULE, FALLBACK_RULE.explanation, now))

    # sorted() is stable: equal priorities keep rule order
    return sorted(recs, key=lambda r: r.priority)
