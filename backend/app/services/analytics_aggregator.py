"""
Reduce raw per-domain logs (daily check-ins, training, nutrition, performance,
supplements, body scans) into six fixed-shape analytics nodes.
Sparse or empty input yields neutral/zero nodes; nothing here raises on missing data.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone

from app.core.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from app.schemas.analytics import (
    AdaptationLevel,
    AggregatedAnalytics,
    AggregationMeta,
    BioNode,
    CaloricBalance,
    HealthNode,
    IntensityTrend,
    NutritionNode,
    PerformanceNode,
    SupplementNode,
    TrainingNode,
    Trend,
)
from app.schemas.daily_log import DailyLog
from app.schemas.profile import BodyScan, LogStatus, UserProfile
from app.services.metric_strategies import DEFAULT_STRATEGIES, MetricStrategies
from app.services.numeric import clamp, round_half_up, safe_ratio

GOAL_FAT_LOSS = "fatLoss"
GOAL_MUSCLE_GAIN = "muscleGain"


def _window_start(as_of: datetime, days: int) -> date:
    return as_of.date() - timedelta(days=days)


def _mean(values: list[float]) -> float:
    return safe_ratio(sum(values), len(values))


def aggregate_health(
    profile: UserProfile,
    logs: Sequence[DailyLog],
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    as_of: datetime,
) -> HealthNode:
    recent = list(logs)[-policy.window_days:]
    sleep = [log.sleep_hours or 0.0 for log in recent]
    avg_sleep = _mean(sleep)
    avg_energy = _mean([log.energy_level or 0.0 for log in recent])
    avg_stress = _mean([log.stress_index or 0.0 for log in recent])

    vital_trend = Trend.STABLE
    span = policy.vital_trend_days
    if len(recent) >= span:
        last_week = sum(sleep[-span:])
        prev_week = sum(sleep[-2 * span:-span])
        if last_week > prev_week + policy.vital_trend_threshold_hours:
            vital_trend = Trend.IMPROVING
        elif last_week < prev_week - policy.vital_trend_threshold_hours:
            vital_trend = Trend.DECLINING

    # Latest weight minus the most recent sample at or before the window start
    weight_change = 0.0
    history = sorted(profile.metrics_history, key=lambda m: m.date)
    if len(history) >= 2:
        cutoff = _window_start(as_of, policy.window_days)
        older = [m for m in history if m.date <= cutoff]
        if older:
            weight_change = round(history[-1].weight - older[-1].weight, 1)

    health_score = int(clamp(round_half_up(avg_sleep * 10 + (100 - avg_stress) / 2), 0, 100))
    return HealthNode(
        avg_sleep=avg_sleep,
        avg_energy=avg_energy,
        avg_stress=avg_stress,
        vital_trend=vital_trend,
        weight_change_monthly=weight_change,
        health_score=health_score,
    )


def aggregate_training(
    profile: UserProfile,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    as_of: datetime,
) -> TrainingNode:
    cutoff = _window_start(as_of, policy.window_days)
    recent = [t for t in profile.training_logs if t.date > cutoff]

    total_volume = 0.0
    for session in recent:
        for exercise in session.exercises:
            for s in exercise.sets:
                if s.completed:
                    total_volume += (s.performed_weight or 0) * (s.performed_reps or 0)

    frequency = len(recent) / policy.weeks_per_window
    if frequency > policy.intensity_high_frequency:
        intensity = IntensityTrend.HIGH
    elif frequency > policy.intensity_moderate_frequency:
        intensity = IntensityTrend.MODERATE
    else:
        intensity = IntensityTrend.LOW

    completed = sum(1 for t in recent if t.status == LogStatus.COMPLETED)
    efficiency = round_half_up(safe_ratio(completed, len(recent)) * 100)
    return TrainingNode(
        total_volume_monthly=total_volume,
        workout_frequency_weekly=frequency,
        intensity_trend=intensity,
        efficiency_rating=efficiency,
    )


def aggregate_nutrition(
    profile: UserProfile,
    logs: Sequence[DailyLog],
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    strategies: MetricStrategies = DEFAULT_STRATEGIES,
    as_of: datetime,
) -> NutritionNode:
    recent = sorted(profile.nutrition_logs, key=lambda n: n.date)[-policy.window_days:]
    if not recent:
        return NutritionNode(caloric_balance=CaloricBalance.MAINTENANCE)

    avg_calories = _mean([day.total_consumed_macros.calories for day in recent])

    on_target = 0
    for day in recent:
        target = day.total_target_macros.calories or policy.default_calorie_target
        ratio = day.total_consumed_macros.calories / target
        if policy.calorie_adherence_low <= ratio <= policy.calorie_adherence_high:
            on_target += 1

    if profile.goal_type == GOAL_FAT_LOSS:
        balance = CaloricBalance.DEFICIT
    elif profile.goal_type == GOAL_MUSCLE_GAIN:
        balance = CaloricBalance.SURPLUS
    else:
        balance = CaloricBalance.MAINTENANCE

    return NutritionNode(
        avg_daily_calories=round_half_up(avg_calories),
        macro_adherence=round_half_up(on_target / len(recent) * 100),
        caloric_balance=balance,
        quality_index=strategies.nutrition_quality.compute(profile, logs, as_of),
    )


def aggregate_performance(
    profile: UserProfile,
    logs: Sequence[DailyLog],
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    strategies: MetricStrategies = DEFAULT_STRATEGIES,
    as_of: datetime,
) -> PerformanceNode:
    cutoff = _window_start(as_of, policy.window_days)
    return PerformanceNode(
        strength_progression=strategies.strength_progression.compute(profile, logs, as_of),
        pr_count_monthly=sum(1 for r in profile.performance_records if r.date > cutoff),
        power_index=strategies.power_index.compute(profile, logs, as_of),
    )


def aggregate_supplements(
    profile: UserProfile,
    logs: Sequence[DailyLog],
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    strategies: MetricStrategies = DEFAULT_STRATEGIES,
    as_of: datetime,
) -> SupplementNode:
    active = sum(1 for s in profile.supplements if s.is_active)
    # Last N log entries, not N days
    recent = profile.supplement_logs[-policy.supplement_window_days:]
    consumed = sum(1 for entry in recent if entry.consumed)
    if active > 0:
        expected = active * policy.supplement_window_days
        adherence = int(clamp(round_half_up(consumed / expected * 100), 0, 100))
    else:
        adherence = 100
    return SupplementNode(
        adherence_score=adherence,
        stack_efficiency=strategies.stack_efficiency.compute(profile, logs, as_of),
        daily_consistency=adherence > policy.supplement_consistency_threshold,
    )


def _scan_stat(scan: BodyScan, name: str) -> float:
    if scan.stats is None:
        return 0.0
    return getattr(scan.stats, name) or 0.0


def aggregate_bio(profile: UserProfile) -> BioNode:
    scans = sorted(profile.body_scans, key=lambda s: s.date)
    if len(scans) < 2:
        return BioNode(body_fat_trend=0.0, muscle_mass_trend=0.0, adaptation_level=AdaptationLevel.MEDIUM)
    prev, latest = scans[-2], scans[-1]
    bf_change = _scan_stat(latest, "body_fat") - _scan_stat(prev, "body_fat")
    mm_change = _scan_stat(latest, "lean_mass") - _scan_stat(prev, "lean_mass")
    return BioNode(
        body_fat_trend=round(bf_change, 1),
        muscle_mass_trend=round(mm_change, 1),
        adaptation_level=AdaptationLevel.HIGH if mm_change > 0 else AdaptationLevel.MEDIUM,
    )


def aggregate(
    profile: UserProfile,
    logs: Sequence[DailyLog],
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    strategies: MetricStrategies = DEFAULT_STRATEGIES,
    as_of: datetime | None = None,
) -> AggregatedAnalytics:
    """
    Build all six nodes plus meta. as_of anchors every trailing window (default: now, UTC).
    """
    as_of = as_of or datetime.now(timezone.utc)
    return AggregatedAnalytics(
        health=aggregate_health(profile, logs, policy=policy, as_of=as_of),
        training=aggregate_training(profile, policy=policy, as_of=as_of),
        nutrition=aggregate_nutrition(profile, logs, policy=policy, strategies=strategies, as_of=as_of),
        performance=aggregate_performance(profile, logs, policy=policy, strategies=strategies, as_of=as_of),
        supplements=aggregate_supplements(profile, logs, policy=policy, strategies=strategies, as_of=as_of),
        bio=aggregate_bio(profile),
        meta=AggregationMeta(
            last_updated=as_of,
            data_quality_score=strategies.data_quality.compute(profile, logs, as_of),
        ),
    )
