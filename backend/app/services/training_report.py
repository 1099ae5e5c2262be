"""
Training report: per-day (or per-month for a year) volume, intensity and adherence,
completed sets per muscle group, a summary and plain-language insights.
"""

from collections.abc import Sequence
from datetime import date
from itertools import groupby

from app.schemas.profile import LogStatus, TrainingLog
from app.schemas.reports import (
    Insight,
    InsightType,
    MuscleSplit,
    ReportTimeframe,
    TrainingReport,
    TrainingSummary,
    VolumePoint,
)
from app.services.numeric import round_half_up, safe_ratio

STATUS_ADHERENCE: dict[LogStatus, int] = {
    LogStatus.COMPLETED: 100,
    LogStatus.PARTIAL: 60,
    LogStatus.SKIPPED: 0,
    LogStatus.REST: 100,
    LogStatus.PLANNED: 0,
}

# First match wins, checked in order
MUSCLE_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("Chest", ("bench", "press", "fly")),
    ("Back", ("row", "pull", "deadlift")),
    ("Legs", ("squat", "leg", "lunge")),
    ("Biceps", ("curl",)),
    ("Triceps", ("extension", "pushdown")),
    ("Shoulders", ("raise", "shoulder")),
]
OTHER_MUSCLE = "Other"

VOLUME_RISE_RATIO = 1.1
VOLUME_DROP_RATIO = 0.8
HIGH_COMPLETION_RATE = 90
LOW_COMPLETION_RATE = 60


def muscle_group(exercise_name: str) -> str:
    lower = exercise_name.lower()
    for muscle, keywords in MUSCLE_KEYWORDS:
        if any(k in lower for k in keywords):
            return muscle
    return OTHER_MUSCLE


def log_volume(log: TrainingLog) -> float:
    """Sum of weight x reps over completed sets. Bodyweight sets count 1 per rep."""
    total = 0.0
    for ex in log.exercises:
        if not ex.completed and log.status != LogStatus.COMPLETED:
            continue
        for s in ex.sets:
            if s.completed:
                weight = s.performed_weight if s.performed_weight and s.performed_weight > 0 else 1
                total += weight * (s.performed_reps or 0)
    return total


def log_intensity(log: TrainingLog) -> int:
    rpes = [s.rpe for ex in log.exercises for s in ex.sets if s.completed and s.rpe]
    if not rpes:
        return 0
    return round_half_up(sum(rpes) / len(rpes) * 10)


def _best_streak(logs: Sequence[TrainingLog]) -> int:
    best = current = 0
    for log in logs:
        if log.status in (LogStatus.COMPLETED, LogStatus.REST):
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


def _timeline(logs: Sequence[TrainingLog], timeframe: ReportTimeframe) -> list[VolumePoint]:
    if timeframe is not ReportTimeframe.YEAR:
        return [
            VolumePoint(
                period=log.date.isoformat(),
                label=log.date.strftime("%m/%d"),
                volume=log_volume(log),
                intensity=log_intensity(log),
                adherence=STATUS_ADHERENCE.get(log.status, 0),
            )
            for log in logs
        ]
    points = []
    for month, group in groupby(logs, key=lambda log: log.date.strftime("%Y-%m")):
        group = list(group)
        points.append(
            VolumePoint(
                period=month,
                label=month,
                volume=sum(log_volume(log) for log in group),
                intensity=sum(log_intensity(log) for log in group) / len(group),
                adherence=round_half_up(sum(STATUS_ADHERENCE.get(log.status, 0) for log in group) / len(group)),
            )
        )
    return points


def _muscle_stats(logs: Sequence[TrainingLog]) -> list[MuscleSplit]:
    sets_by_muscle: dict[str, int] = {}
    for log in logs:
        for ex in log.exercises:
            muscle = muscle_group(ex.name)
            sets_by_muscle[muscle] = sets_by_muscle.get(muscle, 0) + sum(1 for s in ex.sets if s.completed)
    ranked = sorted(sets_by_muscle.items(), key=lambda item: item[1], reverse=True)
    return [MuscleSplit(muscle=m, set_volume=n) for m, n in ranked]


def _insights(timeline: list[VolumePoint], summary: TrainingSummary, muscles: list[MuscleSplit]) -> list[Insight]:
    insights = []
    if len(timeline) >= 2:
        half = len(timeline) // 2
        first = sum(p.volume for p in timeline[:half]) / half
        second = sum(p.volume for p in timeline[half:]) / (len(timeline) - half)
        if second > first * VOLUME_RISE_RATIO:
            insights.append(
                Insight(
                    type=InsightType.POSITIVE,
                    metric="Volume",
                    message="Training volume is trending up (10%+ growth).",
                )
            )
        elif second < first * VOLUME_DROP_RATIO:
            insights.append(
                Insight(type=InsightType.NEGATIVE, metric="Volume", message="Training volume is dropping.")
            )

    if summary.completion_rate > HIGH_COMPLETION_RATE:
        insights.append(
            Insight(
                type=InsightType.POSITIVE,
                metric="Consistency",
                message="Outstanding consistency: you have missed almost no sessions.",
            )
        )
    elif summary.completion_rate < LOW_COMPLETION_RATE:
        insights.append(
            Insight(
                type=InsightType.NEGATIVE,
                metric="Consistency",
                message="Training consistency is low. Try fixing your training days.",
            )
        )

    if muscles:
        insights.append(
            Insight(
                type=InsightType.NEUTRAL,
                metric="Focus",
                message=f"Most of your training focused on {muscles[0].muscle}.",
            )
        )
    return insights


def generate_training_report(
    logs: Sequence[TrainingLog],
    timeframe: ReportTimeframe = ReportTimeframe.MONTH,
    *,
    as_of: date,
) -> TrainingReport:
    start = timeframe.start(as_of)
    window = sorted((log for log in logs if start <= log.date <= as_of), key=lambda log: log.date)

    timeline = _timeline(window, timeframe)
    muscles = _muscle_stats(window)
    non_rest = sum(1 for log in window if log.status != LogStatus.REST)
    completed = sum(1 for log in window if log.status == LogStatus.COMPLETED)
    summary = TrainingSummary(
        total_workouts=len(window),
        completion_rate=round_half_up(safe_ratio(completed, non_rest) * 100),
        total_volume=sum(log_volume(log) for log in window),
        missed_workouts=sum(1 for log in window if log.status == LogStatus.SKIPPED),
        best_streak=_best_streak(window),
    )
    return TrainingReport(
        timeframe=timeframe,
        start_date=start,
        end_date=as_of,
        timeline=timeline,
        muscle_stats=muscles,
        summary=summary,
        insights=_insights(timeline, summary, muscles),
    )
