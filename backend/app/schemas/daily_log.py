"""Pydantic schemas for daily check-in logs (sleep, energy, stress, scores)."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class DailyLog(BaseModel):
    """One calendar day of self-reported data. Missing values count as 0 in averages."""

    model_config = ConfigDict(allow_inf_nan=False)

    date: date
    workout_score: float = Field(0, ge=0, le=100)
    nutrition_score: float = Field(0, ge=0, le=100)
    sleep_hours: float | None = Field(None, ge=0, le=24)
    sleep_quality: float | None = Field(None, ge=0, le=10)
    energy_level: float | None = Field(None, ge=0, le=100)
    stress_index: float | None = Field(None, ge=0, le=100)
    resting_heart_rate: float | None = Field(None, ge=0, le=250)
    water_intake: float | None = Field(None, ge=0)
    steps: int | None = Field(None, ge=0)
    body_weight: float | None = Field(None, gt=0)
    notes: str | None = Field(None, max_length=2000)


class DailyLogPage(BaseModel):
    """One page of daily logs, oldest first."""

    items: list[DailyLog]
    total: int
    limit: int
    offset: int
    has_more: bool
