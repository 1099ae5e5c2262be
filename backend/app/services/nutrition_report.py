"""Nutrition report: calorie adherence timeline, heatmap, macro totals and insights."""

from collections.abc import Sequence
from datetime import date

from app.schemas.profile import NutritionDayLog
from app.schemas.reports import (
    HeatmapStatus,
    Insight,
    InsightType,
    MacroShare,
    NutritionHeatmapPoint,
    NutritionReport,
    NutritionSummary,
    NutritionTrendPoint,
    ReportTimeframe,
)
from app.services.numeric import round_half_up, safe_ratio

DEFAULT_CALORIE_TARGET = 2500
STREAK_ADHERENCE = 80
PARTIAL_ADHERENCE = 50
HIGH_AVG_ADHERENCE = 90
LOW_AVG_ADHERENCE = 60
LOW_AVG_PROTEIN = 120


def calorie_adherence(log: NutritionDayLog, default_target: float = DEFAULT_CALORIE_TARGET) -> int:
    """Consumed / target calories as a percentage, capped at 100."""
    target = log.total_target_macros.calories or default_target
    return min(100, round_half_up(log.total_consumed_macros.calories / target * 100))


def _heatmap_status(log: NutritionDayLog, adherence: int) -> HeatmapStatus:
    if log.status == "Completed":
        return HeatmapStatus.COMPLETED
    if adherence > PARTIAL_ADHERENCE:
        return HeatmapStatus.PARTIAL
    return HeatmapStatus.MISSED


def _mean(values: list[float]) -> int:
    return round_half_up(safe_ratio(sum(values), len(values)))


def _insights(summary: NutritionSummary, has_logs: bool) -> list[Insight]:
    insights = []
    if not has_logs:
        return insights
    if summary.avg_adherence > HIGH_AVG_ADHERENCE:
        insights.append(
            Insight(type=InsightType.POSITIVE, metric="Adherence", message="Your diet adherence is excellent!")
        )
    elif summary.avg_adherence < LOW_AVG_ADHERENCE:
        insights.append(
            Insight(
                type=InsightType.NEGATIVE,
                metric="Adherence",
                message="Your calorie intake fluctuates a lot.",
            )
        )
    if summary.avg_protein < LOW_AVG_PROTEIN:
        insights.append(
            Insight(type=InsightType.NEUTRAL, metric="Protein", message="Your protein intake could be higher.")
        )
    return insights


def generate_nutrition_report(
    logs: Sequence[NutritionDayLog],
    timeframe: ReportTimeframe = ReportTimeframe.MONTH,
    *,
    as_of: date,
    default_calorie_target: float = DEFAULT_CALORIE_TARGET,
) -> NutritionReport:
    start = timeframe.start(as_of)
    window = sorted((log for log in logs if start <= log.date <= as_of), key=lambda log: log.date)

    timeline: list[NutritionTrendPoint] = []
    heatmap: list[NutritionHeatmapPoint] = []
    best_streak = streak = 0
    for log in window:
        consumed = log.total_consumed_macros
        target = log.total_target_macros.calories or default_calorie_target
        adherence = calorie_adherence(log, default_calorie_target)
        if adherence > STREAK_ADHERENCE or log.status == "Completed":
            streak += 1
            best_streak = max(best_streak, streak)
        else:
            streak = 0
        timeline.append(
            NutritionTrendPoint(
                date=log.date,
                label=log.date.strftime("%m/%d"),
                calories=consumed.calories,
                target_calories=target,
                protein=consumed.protein,
                carbs=consumed.carbs,
                fats=consumed.fats,
                adherence=adherence,
            )
        )
        heatmap.append(
            NutritionHeatmapPoint(date=log.date, adherence=adherence, status=_heatmap_status(log, adherence))
        )

    summary = NutritionSummary(
        avg_adherence=_mean([p.adherence for p in timeline]),
        avg_calories=_mean([p.calories for p in timeline]),
        calorie_deviation=_mean([p.calories - p.target_calories for p in timeline]),
        avg_protein=_mean([p.protein for p in timeline]),
        best_streak=best_streak,
    )
    macro_distribution = [
        MacroShare(name="Protein", value=sum(p.protein for p in timeline)),
        MacroShare(name="Carbs", value=sum(p.carbs for p in timeline)),
        MacroShare(name="Fats", value=sum(p.fats for p in timeline)),
    ]
    return NutritionReport(
        timeframe=timeframe,
        start_date=start,
        end_date=as_of,
        timeline=timeline,
        heatmap=heatmap,
        summary=summary,
        macro_distribution=macro_distribution,
        insights=_insights(summary, bool(window)),
    )
