"""Load pipeline inputs (profile, daily logs, OPS history) from the DB and append OPS snapshots."""

import logging
from datetime import timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.athlete_profile import AthleteProfile
from app.models.daily_log import DailyLogEntry
from app.models.ops_snapshot import OpsSnapshot
from app.models.user import User
from app.schemas.analytics import OPSScore, OpsHistoryPoint
from app.schemas.daily_log import DailyLog
from app.schemas.profile import UserProfile

logger = logging.getLogger(__name__)

DAILY_LOG_FIELDS = tuple(DailyLog.model_fields)


def daily_log_from_row(row: DailyLogEntry) -> DailyLog:
    return DailyLog.model_validate({name: getattr(row, name) for name in DAILY_LOG_FIELDS})


async def load_user_profile(session: AsyncSession, user: User) -> UserProfile:
    """Stored profile document, or an empty profile (every collection empty) if none saved yet."""
    r = await session.execute(select(AthleteProfile.data).where(AthleteProfile.user_id == user.id))
    data = r.scalar_one_or_none() or {}
    profile = UserProfile.model_validate(data)
    return profile.model_copy(update={"id": str(user.id), "email": user.email, "name": profile.name or user.name or ""})


async def load_daily_logs(session: AsyncSession, user_id: int, *, limit: int) -> list[DailyLog]:
    """Last `limit` daily logs, oldest first."""
    r = await session.execute(
        select(DailyLogEntry)
        .where(DailyLogEntry.user_id == user_id)
        .order_by(DailyLogEntry.date.desc())
        .limit(limit)
    )
    rows = list(r.scalars().all())
    rows.reverse()
    return [daily_log_from_row(row) for row in rows]


async def load_ops_history(session: AsyncSession, user_id: int, *, limit: int) -> list[OpsHistoryPoint]:
    """Last `limit` persisted OPS points, oldest first."""
    if limit <= 0:
        return []
    r = await session.execute(
        select(OpsSnapshot.total, OpsSnapshot.recorded_at)
        .where(OpsSnapshot.user_id == user_id)
        .order_by(OpsSnapshot.recorded_at.desc(), OpsSnapshot.id.desc())
        .limit(limit)
    )
    points = [OpsHistoryPoint(total=total, recorded_at=recorded_at) for total, recorded_at in r.all()]
    points.reverse()
    return points


async def save_ops_snapshot(session: AsyncSession, user_id: int, ops: OPSScore) -> OpsSnapshot:
    recorded_at = ops.last_updated
    if recorded_at.tzinfo is None:
        recorded_at = recorded_at.replace(tzinfo=timezone.utc)
    snapshot = OpsSnapshot(
        user_id=user_id,
        total=ops.total,
        trend=ops.trend.value,
        delta=ops.delta,
        recorded_at=recorded_at,
    )
    session.add(snapshot)
    await session.flush()
    logger.info("Analytics: stored OPS snapshot user_id=%s total=%s delta=%s", user_id, ops.total, ops.delta)
    return snapshot


async def list_ops_snapshots(
    session: AsyncSession,
    user_id: int,
    *,
    limit: int = 50,
    offset: int = 0,
) -> list[OpsSnapshot]:
    stmt = select(OpsSnapshot).where(OpsSnapshot.user_id == user_id)
    r = await session.execute(stmt.order_by(OpsSnapshot.recorded_at.desc(), OpsSnapshot.id.desc()).offset(offset).limit(limit))
    return list(r.scalars().all())
