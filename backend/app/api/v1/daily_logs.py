"""Daily logs API: user-entered sleep, energy, stress and day scores (one row per date)."""

from datetime import date, timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_user
from app.db.session import get_db
from app.models.daily_log import DailyLogEntry
from app.models.user import User
from app.schemas.daily_log import DailyLog, DailyLogPage
from app.services.analytics_store import DAILY_LOG_FIELDS, daily_log_from_row

router = APIRouter(prefix="/users/{user_id}/daily-logs", tags=["daily-logs"])

WRITABLE_FIELDS = tuple(name for name in DAILY_LOG_FIELDS if name != "date")


@router.get(
    "",
    response_model=DailyLogPage,
    summary="Get daily logs",
    responses={404: {"description": "User not found"}},
)
async def get_daily_logs(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
    from_date: date | None = None,
    to_date: date | None = None,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> DailyLogPage:
    """Return daily logs for date range (default last 30 days), oldest first, paginated."""
    to_date = to_date or date.today()
    from_date = from_date or (to_date - timedelta(days=30))
    base = select(DailyLogEntry).where(
        DailyLogEntry.user_id == user.id,
        DailyLogEntry.date >= from_date,
        DailyLogEntry.date <= to_date,
    ).order_by(DailyLogEntry.date.asc())
    count_q = select(func.count()).select_from(base.subquery())
    total = (await session.execute(count_q)).scalar() or 0
    r = await session.execute(base.offset(offset).limit(limit))
    items = [daily_log_from_row(row) for row in r.scalars().all()]
    return DailyLogPage(
        items=items,
        total=total,
        limit=limit,
        offset=offset,
        has_more=(offset + limit) < total,
    )


@router.put(
    "",
    response_model=DailyLog,
    summary="Create or update daily log",
    responses={404: {"description": "User not found"}},
)
async def upsert_daily_log(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
    body: DailyLog,
) -> DailyLog:
    """Create or update one day. Fields sent explicitly overwrite; omitted fields keep stored values."""
    r = await session.execute(
        select(DailyLogEntry).where(
            DailyLogEntry.user_id == user.id,
            DailyLogEntry.date == body.date,
        )
    )
    row = r.scalar_one_or_none()
    if row:
        for name in body.model_fields_set & set(WRITABLE_FIELDS):
            setattr(row, name, getattr(body, name))
    else:
        row = DailyLogEntry(user_id=user.id, **body.model_dump())
        session.add(row)
    await session.commit()
    await session.refresh(row)
    return daily_log_from_row(row)


@router.delete(
    "/{log_date}",
    status_code=204,
    summary="Delete daily log",
    responses={404: {"description": "User or daily log not found"}},
)
async def delete_daily_log(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
    log_date: date,
) -> Response:
    r = await session.execute(
        select(DailyLogEntry).where(
            DailyLogEntry.user_id == user.id,
            DailyLogEntry.date == log_date,
        )
    )
    row = r.scalar_one_or_none()
    if not row:
        raise HTTPException(status_code=404, detail="Daily log not found")
    await session.delete(row)
    await session.commit()
    return Response(status_code=204)
