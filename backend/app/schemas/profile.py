"""Pydantic schemas for the user profile document and its nested logs (input to analytics)."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

MAX_CALORIES = 20000
MAX_MACRO_GRAMS = 2000
MAX_SET_WEIGHT_KG = 1500
MAX_SET_REPS = 1000
MAX_BODY_WEIGHT_KG = 700


class ProfileModel(BaseModel):
    """Base for profile documents: NaN and infinity are rejected on every float field."""

    model_config = ConfigDict(allow_inf_nan=False)


class LogStatus(str, Enum):
    PLANNED = "Planned"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    PARTIAL = "Partial"
    SKIPPED = "Skipped"
    REST = "Rest"


class Macros(ProfileModel):
    calories: float = Field(0, ge=0, le=MAX_CALORIES)
    protein: float = Field(0, ge=0, le=MAX_MACRO_GRAMS)
    carbs: float = Field(0, ge=0, le=MAX_MACRO_GRAMS)
    fats: float = Field(0, ge=0, le=MAX_MACRO_GRAMS)


class LogSet(ProfileModel):
    set_number: int = 1
    target_reps: str | None = None
    target_weight: float | None = None
    performed_reps: int | None = Field(None, ge=0, le=MAX_SET_REPS)
    performed_weight: float | None = Field(None, ge=0, le=MAX_SET_WEIGHT_KG)
    rpe: float | None = Field(None, ge=0, le=10)
    completed: bool = False


class LogExercise(ProfileModel):
    name: str
    completed: bool = False
    sets: list[LogSet] = Field(default_factory=list)


class TrainingLog(ProfileModel):
    id: str
    date: date
    workout_title: str = ""
    status: LogStatus = LogStatus.PLANNED
    exercises: list[LogExercise] = Field(default_factory=list)
    fatigue_level: int | None = None


class NutritionDayLog(ProfileModel):
    id: str
    date: date
    status: str = "Completed"  # Completed | Partial | Missed
    water_intake: float = 0
    total_target_macros: Macros = Field(default_factory=Macros)
    total_consumed_macros: Macros = Field(default_factory=Macros)


class BodyScanStats(ProfileModel):
    body_fat: float | None = Field(None, ge=0, le=100)
    lean_mass: float | None = Field(None, ge=0, le=MAX_BODY_WEIGHT_KG)
    symmetry_score: float | None = None


class BodyScan(ProfileModel):
    id: str
    date: date
    weight: float | None = None
    stats: BodyScanStats | None = None


class Supplement(ProfileModel):
    id: str
    name: str
    type: str = "Other"
    dosage: str = ""
    is_active: bool = True


class SupplementLog(ProfileModel):
    id: str
    supplement_id: str
    date: date
    consumed: bool = False


class PerformanceRecord(ProfileModel):
    id: str
    exercise: str
    value: float
    unit: str = "kg"
    date: date


class BodyMetricLog(ProfileModel):
    id: str
    date: date
    weight: float = Field(..., gt=0, le=MAX_BODY_WEIGHT_KG)
    body_fat: float | None = Field(None, ge=0, le=100)
    muscle_mass: float | None = Field(None, ge=0, le=MAX_BODY_WEIGHT_KG)


class Goal(ProfileModel):
    id: str
    title: str
    type: str = "Primary"  # Primary | Secondary
    status: str = "Active"  # Active | Completed
    target_value: float | None = None
    current_value: float | None = None
    deadline: date | None = None


class UserProfile(ProfileModel):
    """Everything the analytics pipeline reads about a user. Collections default to empty."""

    id: str = ""
    name: str = ""
    email: str | None = None
    goal_type: str | None = None  # fatLoss | muscleGain | ...
    current_weight: float | None = Field(None, gt=0, description="Weight in kg")
    height_cm: float | None = Field(None, gt=0)
    age: int | None = Field(None, ge=0, le=130)
    gender: str | None = None  # male | female | other
    lifestyle_activity: str | None = None
    body_fat: float | None = Field(None, ge=0, le=100)
    waist: float | None = Field(None, gt=0, description="cm")
    neck: float | None = Field(None, gt=0, description="cm")
    hips: float | None = Field(None, gt=0, description="cm")

    training_logs: list[TrainingLog] = Field(default_factory=list)
    nutrition_logs: list[NutritionDayLog] = Field(default_factory=list)
    body_scans: list[BodyScan] = Field(default_factory=list)
    supplements: list[Supplement] = Field(default_factory=list)
    supplement_logs: list[SupplementLog] = Field(default_factory=list)
    performance_records: list[PerformanceRecord] = Field(default_factory=list)
    metrics_history: list[BodyMetricLog] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
