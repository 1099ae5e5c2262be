"""
Scoring policy: OPS weights, aggregation windows, rule and alert thresholds.
Immutable; injected into the analytics pipeline at construction time.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

WEIGHT_SUM_TOLERANCE = 1e-6


class OpsWeights(BaseModel):
    """Per-module weight in the Overall Performance Score. Must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    health: float = Field(0.20, ge=0, le=1)
    workout: float = Field(0.25, ge=0, le=1)
    nutrition: float = Field(0.20, ge=0, le=1)
    performance: float = Field(0.20, ge=0, le=1)
    supplements: float = Field(0.05, ge=0, le=1)
    bio: float = Field(0.10, ge=0, le=1)

    @model_validator(mode="after")
    def _check_sum(self) -> "OpsWeights":
        total = sum(self.as_dict().values())
        if not math.isclose(total, 1.0, abs_tol=WEIGHT_SUM_TOLERANCE):
            raise ValueError(f"OPS weights must sum to 1.0, got {total:.4f}")
        return self

    def as_dict(self) -> dict[str, float]:
        return {
            "health": self.health,
            "workout": self.workout,
            "nutrition": self.nutrition,
            "performance": self.performance,
            "supplements": self.supplements,
            "bio": self.bio,
        }


class AdaptationScores(BaseModel):
    """Bio normalization score per adaptation level, each in [0, 1]."""

    model_config = ConfigDict(frozen=True)

    high: float = Field(1.0, ge=0, le=1)
    medium: float = Field(0.6, ge=0, le=1)
    low: float = Field(0.3, ge=0, le=1)

    def as_dict(self) -> dict[str, float]:
        return {"High": self.high, "Medium": self.medium, "Low": self.low}


class ScoringPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    weights: OpsWeights = Field(default_factory=OpsWeights)

    # Aggregation windows
    window_days: int = Field(30, ge=1)  # trailing window for logs, sessions, PRs
    vital_trend_days: int = Field(7, ge=1)
    vital_trend_threshold_hours: float = 2.0
    weeks_per_window: float = Field(4.0, gt=0)

    # Training intensity bands (sessions per week)
    intensity_high_frequency: float = 4.0
    intensity_moderate_frequency: float = 2.0

    # Nutrition
    default_calorie_target: float = 2500.0
    calorie_adherence_low: float = 0.9
    calorie_adherence_high: float = 1.1

    # Supplements
    supplement_window_days: int = Field(30, ge=1)
    supplement_consistency_threshold: float = 80.0

    # Normalization
    target_sessions_per_week: float = Field(4.0, gt=0)
    workout_frequency_share: float = Field(0.6, ge=0, le=1)
    nutrition_adherence_share: float = Field(0.7, ge=0, le=1)
    performance_progression_share: float = Field(0.7, ge=0, le=1)
    progression_offset: float = 5.0  # maps -5%..+5% onto 0..1
    progression_span: float = Field(10.0, gt=0)
    target_prs_per_window: float = Field(2.0, gt=0)
    adaptation_scores: AdaptationScores = Field(default_factory=AdaptationScores)
    unknown_adaptation_score: float = Field(0.5, ge=0, le=1)

    # Trend
    trend_delta_threshold: float = 1.0
    weekly_trend_points: int = Field(7, ge=1)
    weekly_trend_jitter: int = Field(5, ge=0)

    # Recommendation rules
    sleep_debt_health_breakdown: int = 60
    sleep_debt_avg_sleep: float = 6.0
    protein_gap_nutrition_breakdown: int = 70
    protein_gap_workout_breakdown: int = 80
    protein_grams_per_kg: float = 2.0
    default_body_weight_kg: float = 70.0
    plateau_total: int = 80
    deload_volume_monthly: float = 20000.0

    # Alerts
    alert_ops_drop_delta: float = -10.0
    alert_sleep_hours: float = 5.5


DEFAULT_POLICY = ScoringPolicy()
