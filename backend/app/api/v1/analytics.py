"""Analytics API: run the OPS pipeline on stored data and list persisted OPS history."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_user
from app.config import settings
from app.core.metrics import ALERTS_RAISED, OPS_TOTAL, PIPELINE_RUNS, RECOMMENDATIONS_FIRED
from app.core.scoring_policy import DEFAULT_POLICY
from app.db.session import get_db
from app.models.user import User
from app.schemas.analytics import AnalyticsState, OpsSnapshotResponse, Trend
from app.services.analytics_pipeline import AnalyticsPipeline
from app.services.analytics_store import (
    list_ops_snapshots,
    load_daily_logs,
    load_ops_history,
    load_user_profile,
    save_ops_snapshot,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/analytics", tags=["analytics"])

pipeline = AnalyticsPipeline(policy=DEFAULT_POLICY)


def get_pipeline() -> AnalyticsPipeline:
    return pipeline


def _record_metrics(state: AnalyticsState) -> None:
    PIPELINE_RUNS.inc()
    OPS_TOTAL.observe(state.ops.total)
    for rec in state.recommendations:
        RECOMMENDATIONS_FIRED.labels(priority=str(rec.priority)).inc()
    for alert in state.alerts:
        ALERTS_RAISED.labels(level=alert.level.value).inc()


@router.get(
    "",
    response_model=AnalyticsState,
    summary="Run analytics pipeline",
    responses={404: {"description": "User not found"}},
)
async def get_analytics(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
    analytics: Annotated[AnalyticsPipeline, Depends(get_pipeline)],
    persist: bool = Query(default=True, description="Append the computed OPS to history"),
) -> AnalyticsState:
    """
    OPS, recommendations, alerts and weekly trend from the stored profile and the
    trailing daily logs. Delta and weekly trend use persisted OPS history when present.
    """
    profile = await load_user_profile(session, user)
    logs = await load_daily_logs(session, user.id, limit=analytics.policy.window_days)
    history = await load_ops_history(session, user.id, limit=settings.analytics_history_points)

    state = analytics.run(profile, logs, history)
    _record_metrics(state)

    if persist and settings.analytics_persist_snapshots:
        await save_ops_snapshot(session, user.id, state.ops)
        await session.commit()
    logger.info(
        "Analytics: user_id=%s ops=%s trend=%s history_points=%s",
        user.id,
        state.ops.total,
        state.ops.trend.value,
        len(history),
    )
    return state


@router.get(
    "/history",
    response_model=list[OpsSnapshotResponse],
    summary="Persisted OPS history (newest first)",
    responses={404: {"description": "User not found"}},
)
async def get_analytics_history(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
    limit: int = Query(default=50, ge=1, le=365),
    offset: int = Query(default=0, ge=0),
) -> list[OpsSnapshotResponse]:
    rows = await list_ops_snapshots(session, user.id, limit=limit, offset=offset)
    return [
        OpsSnapshotResponse(
            id=row.id,
            total=row.total,
            trend=Trend(row.trend),
            delta=row.delta,
            recorded_at=row.recorded_at,
        )
        for row in rows
    ]
