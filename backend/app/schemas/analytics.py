"""Analytics pipeline output: per-domain nodes, OPS, recommendations, alerts."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Trend(str, Enum):
    IMPROVING = "Improving"
    STABLE = "Stable"
    DECLINING = "Declining"


class IntensityTrend(str, Enum):
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


class CaloricBalance(str, Enum):
    SURPLUS = "Surplus"
    DEFICIT = "Deficit"
    MAINTENANCE = "Maintenance"


class AdaptationLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class AlertLevel(str, Enum):
    CRITICAL = "Critical"
    WARNING = "Warning"
    INFO = "Info"


class HealthNode(BaseModel):
    avg_sleep: float = 0.0
    avg_energy: float = 0.0
    avg_stress: float = 0.0
    vital_trend: Trend = Trend.STABLE
    weight_change_monthly: float = 0.0
    health_score: int = 0  # 0-100


class TrainingNode(BaseModel):
    total_volume_monthly: float = 0.0  # kg
    workout_frequency_weekly: float = 0.0
    intensity_trend: IntensityTrend = IntensityTrend.LOW
    efficiency_rating: int = 0  # 0-100


class NutritionNode(BaseModel):
    avg_daily_calories: int = 0
    macro_adherence: int = 0  # % of days within calorie band
    caloric_balance: CaloricBalance = CaloricBalance.MAINTENANCE
    quality_index: float = 0.0  # 0-100


class PerformanceNode(BaseModel):
    strength_progression: float = 0.0  # % change
    pr_count_monthly: int = 0
    power_index: float = 0.0


class SupplementNode(BaseModel):
    adherence_score: int = 100  # %
    stack_efficiency: float = 0.0
    daily_consistency: bool = True


class BioNode(BaseModel):
    body_fat_trend: float = 0.0  # % points
    muscle_mass_trend: float = 0.0  # kg
    adaptation_level: AdaptationLevel = AdaptationLevel.MEDIUM


class AggregationMeta(BaseModel):
    last_updated: datetime
    data_quality_score: float


class AggregatedAnalytics(BaseModel):
    health: HealthNode
    training: TrainingNode
    nutrition: NutritionNode
    performance: PerformanceNode
    supplements: SupplementNode
    bio: BioNode
    meta: AggregationMeta


class ModuleScores(BaseModel):
    """Per-module scores; 0-1 floats in raw_scores, 0-100 ints in breakdown."""

    health: float
    workout: float
    nutrition: float
    performance: float
    supplements: float
    bio: float


class ModuleBreakdown(BaseModel):
    health: int
    workout: int
    nutrition: int
    performance: int
    supplements: int
    bio: int


class OPSScore(BaseModel):
    total: int = Field(..., ge=0, le=100)
    trend: Trend
    delta: float  # % change vs the previous persisted OPS
    breakdown: ModuleBreakdown
    raw_scores: ModuleScores
    last_updated: datetime


class RecommendationAction(BaseModel):
    """Proposed action for the presentation layer; never executed by the core."""

    model_config = ConfigDict(frozen=True)

    label: str
    type: str  # navigate | supplement_add | advice
    params: dict[str, Any] | None = None


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    priority: int = Field(..., ge=1, le=3)  # 1 = critical, 2 = high, 3 = normal
    title: str
    explanation: str
    actions: tuple[RecommendationAction, ...] = ()
    expected_timeframe: str
    confidence_score: float = Field(..., ge=0, le=1)
    related_metrics: tuple[str, ...] = ()
    created_at: datetime


class Alert(BaseModel):
    id: str
    level: AlertLevel
    reason: str
    metrics_involved: list[str] = Field(default_factory=list)
    timestamp: datetime
    suggested_action: str | None = None
    is_acknowledged: bool = False


class OpsHistoryPoint(BaseModel):
    """A previously persisted OPS value."""

    total: int = Field(..., ge=0, le=100)
    recorded_at: datetime


class WeeklyTrendPoint(BaseModel):
    date: date
    ops: int = Field(..., ge=0, le=100)


class AnalyticsState(BaseModel):
    ops: OPSScore
    recommendations: list[Recommendation]
    alerts: list[Alert]
    weekly_trend: list[WeeklyTrendPoint]


class BodyComposition(BaseModel):
    bmr: int = 0
    tdee: int = 0
    lbm: float = 0.0
    body_fat: float | None = None
    ffmi: float = 0.0
    whr: float | None = None


class OpsSnapshotResponse(BaseModel):
    id: int
    total: int
    trend: Trend
    delta: float
    recorded_at: datetime
