"""Training and nutrition reports over a week, month or year of profile logs."""

import calendar
from datetime import date, timedelta
from enum import Enum

from pydantic import BaseModel, Field


class ReportTimeframe(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    def start(self, as_of: date) -> date:
        """First day included in the report. Month and year steps clamp to the last valid day."""
        if self is ReportTimeframe.WEEK:
            return as_of - timedelta(days=7)
        if self is ReportTimeframe.MONTH:
            year, month = (as_of.year - 1, 12) if as_of.month == 1 else (as_of.year, as_of.month - 1)
        else:
            year, month = as_of.year - 1, as_of.month
        day = min(as_of.day, calendar.monthrange(year, month)[1])
        return date(year, month, day)


class InsightType(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Insight(BaseModel):
    type: InsightType
    metric: str
    message: str


class VolumePoint(BaseModel):
    period: str  # YYYY-MM-DD, or YYYY-MM in the year view
    label: str
    volume: float = 0
    intensity: float = Field(0, description="Mean RPE x 10 (0-100)")
    adherence: int = 0


class MuscleSplit(BaseModel):
    muscle: str
    set_volume: int


class TrainingSummary(BaseModel):
    total_workouts: int = 0
    completion_rate: int = 0
    total_volume: float = 0
    missed_workouts: int = 0
    best_streak: int = 0


class TrainingReport(BaseModel):
    timeframe: ReportTimeframe
    start_date: date
    end_date: date
    timeline: list[VolumePoint] = Field(default_factory=list)
    muscle_stats: list[MuscleSplit] = Field(default_factory=list)
    summary: TrainingSummary = Field(default_factory=TrainingSummary)
    insights: list[Insight] = Field(default_factory=list)


class NutritionTrendPoint(BaseModel):
    date: date
    label: str
    calories: float
    target_calories: float
    protein: float
    carbs: float
    fats: float
    adherence: int


class HeatmapStatus(str, Enum):
    COMPLETED = "completed"
    PARTIAL = "partial"
    MISSED = "missed"


class NutritionHeatmapPoint(BaseModel):
    date: date
    adherence: int
    status: HeatmapStatus


class NutritionSummary(BaseModel):
    avg_adherence: int = 0
    avg_calories: int = 0
    calorie_deviation: int = 0
    avg_protein: int = 0
    best_streak: int = 0


class MacroShare(BaseModel):
    name: str
    value: float


class NutritionReport(BaseModel):
    timeframe: ReportTimeframe
    start_date: date
    end_date: date
    timeline: list[NutritionTrendPoint] = Field(default_factory=list)
    heatmap: list[NutritionHeatmapPoint] = Field(default_factory=list)
    summary: NutritionSummary = Field(default_factory=NutritionSummary)
    macro_distribution: list[MacroShare] = Field(default_factory=list)
    insights: list[Insight] = Field(default_factory=list)
