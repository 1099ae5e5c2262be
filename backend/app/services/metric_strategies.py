"""
Pluggable computations for metrics that have no real algorithm yet
(nutrition quality, strength progression, power index, stack efficiency, data quality).
Defaults are constants; swap in a MetricStrategy to upgrade one without touching scoring.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from app.schemas.daily_log import DailyLog
from app.schemas.profile import UserProfile


class MetricStrategy(Protocol):
    def compute(self, profile: UserProfile, logs: Sequence[DailyLog], as_of: datetime) -> float: ...


@dataclass(frozen=True)
class ConstantMetric:
    value: float

    def compute(self, profile: UserProfile, logs: Sequence[DailyLog], as_of: datetime) -> float:
        return self.value


DEFAULT_NUTRITION_QUALITY = 85.0
DEFAULT_STRENGTH_PROGRESSION = 5.2  # % per month
DEFAULT_POWER_INDEX = 72.0
DEFAULT_STACK_EFFICIENCY = 88.0
DEFAULT_DATA_QUALITY = 92.0


@dataclass(frozen=True)
class MetricStrategies:
    nutrition_quality: MetricStrategy = field(default_factory=lambda: ConstantMetric(DEFAULT_NUTRITION_QUALITY))
    strength_progression: MetricStrategy = field(default_factory=lambda: ConstantMetric(DEFAULT_STRENGTH_PROGRESSION))
    power_index: MetricStrategy = field(default_factory=lambda: ConstantMetric(DEFAULT_POWER_INDEX))
    stack_efficiency: MetricStrategy = field(default_factory=lambda: ConstantMetric(DEFAULT_STACK_EFFICIENCY))
    data_quality: MetricStrategy = field(default_factory=lambda: ConstantMetric(DEFAULT_DATA_QUALITY))


DEFAULT_STRATEGIES = MetricStrategies()
