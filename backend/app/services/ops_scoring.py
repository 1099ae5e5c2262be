"""
Overall Performance Score (OPS): normalize each analytics node to 0-1,
weight, and combine into a 0-100 total with per-module breakdown.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from app.core.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from app.schemas.analytics import (
    BioNode,
    HealthNode,
    ModuleBreakdown,
    ModuleScores,
    NutritionNode,
    OPSScore,
    OpsHistoryPoint,
    PerformanceNode,
    SupplementNode,
    TrainingNode,
)
from app.services.numeric import clamp, round_half_up
from app.services.ops_history import compute_delta, trend_from_delta


def normalize_health(node: HealthNode, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    return clamp(node.health_score / 100)


def normalize_workout(node: TrainingNode, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    share = policy.workout_frequency_share
    freq_score = clamp(node.workout_frequency_weekly / policy.target_sessions_per_week)
    eff_score = clamp(node.efficiency_rating / 100)
    return freq_score * share + eff_score * (1 - share)


def normalize_nutrition(node: NutritionNode, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    share = policy.nutrition_adherence_share
    adherence = clamp(node.macro_adherence / 100)
    quality = clamp(node.quality_index / 100)
    return adherence * share + quality * (1 - share)


def normalize_performance(node: PerformanceNode, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    share = policy.performance_progression_share
    progression = clamp((node.strength_progression + policy.progression_offset) / policy.progression_span)
    prs = clamp(node.pr_count_monthly / policy.target_prs_per_window)
    return progression * share + prs * (1 - share)


def normalize_supplements(node: SupplementNode, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    return clamp(node.adherence_score / 100)


def normalize_bio(node: BioNode, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    score = policy.adaptation_scores.as_dict().get(node.adaptation_level.value, policy.unknown_adaptation_score)
    return clamp(score)


def weighted_total(raw: ModuleScores, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    scores = raw.model_dump()
    ops_raw = sum(scores[module] * weight for module, weight in policy.weights.as_dict().items())
    return round_half_up(clamp(ops_raw) * 100)


def compute_ops(
    health: HealthNode,
    training: TrainingNode,
    nutrition: NutritionNode,
    performance: PerformanceNode,
    supplements: SupplementNode,
    bio: BioNode,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    history: Sequence[OpsHistoryPoint] = (),
    as_of: datetime | None = None,
) -> OPSScore:
    """
    Weighted OPS. delta/trend compare against the latest persisted point in history;
    with no history they are 0.0/Stable.
    """
    raw = ModuleScores(
        health=normalize_health(health, policy),
        workout=normalize_workout(training, policy),
        nutrition=normalize_nutrition(nutrition, policy),
        performance=normalize_performance(performance, policy),
        supplements=normalize_supplements(supplements, policy),
        bio=normalize_bio(bio, policy),
    )
    total = weighted_total(raw, policy)
    delta = compute_delta(total, history)
    breakdown = ModuleBreakdown(**{k: round_half_up(v * 100) for k, v in raw.model_dump().items()})
    return OPSScore(
        total=total,
        trend=trend_from_delta(delta, policy),
        delta=delta,
        breakdown=breakdown,
        raw_scores=raw,
        last_updated=as_of or datetime.now(timezone.utc),
    )
