"""Reports API: training and nutrition reports over a week, month or year of profile logs."""

import logging
from datetime import date, datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.reports import NutritionReport, ReportTimeframe, TrainingReport
from app.services.analytics_store import load_user_profile
from app.services.nutrition_report import generate_nutrition_report
from app.services.training_report import generate_training_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/reports", tags=["reports"])


def _today() -> date:
    return datetime.now(timezone.utc).date()


@router.get(
    "/training",
    response_model=TrainingReport,
    summary="Training volume, adherence and muscle split report",
    responses={404: {"description": "User not found"}},
)
async def get_training_report(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
    timeframe: ReportTimeframe = Query(default=ReportTimeframe.MONTH),
    as_of: date | None = Query(default=None, description="Last day of the report (default: today, UTC)"),
) -> TrainingReport:
    profile = await load_user_profile(session, user)
    report = generate_training_report(profile.training_logs, timeframe, as_of=as_of or _today())
    logger.info(
        "Training report: user_id=%s timeframe=%s workouts=%s",
        user.id,
        timeframe.value,
        report.summary.total_workouts,
    )
    return report


@router.get(
    "/nutrition",
    response_model=NutritionReport,
    summary="Calorie adherence, macro split and streak report",
    responses={404: {"description": "User not found"}},
)
async def get_nutrition_report(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
    timeframe: ReportTimeframe = Query(default=ReportTimeframe.MONTH),
    as_of: date | None = Query(default=None, description="Last day of the report (default: today, UTC)"),
) -> NutritionReport:
    profile = await load_user_profile(session, user)
    report = generate_nutrition_report(profile.nutrition_logs, timeframe, as_of=as_of or _today())
    logger.info(
        "Nutrition report: user_id=%s timeframe=%s days=%s",
        user.id,
        timeframe.value,
        len(report.timeline),
    )
    return report
