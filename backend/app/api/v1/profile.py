"""Profile document: GET/PUT the UserProfile (settings + nested logs) read by analytics."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_user
from app.db.session import get_db
from app.models.athlete_profile import AthleteProfile
from app.models.user import User
from app.schemas.analytics import BodyComposition
from app.schemas.profile import UserProfile
from app.services.analytics_store import load_user_profile
from app.services.body_composition import calculate_body_composition

router = APIRouter(prefix="/users/{user_id}", tags=["profile"])


@router.get(
    "/profile",
    response_model=UserProfile,
    responses={404: {"description": "User not found"}},
)
async def get_profile(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
) -> UserProfile:
    """Return the stored profile; an empty profile if nothing saved yet."""
    return await load_user_profile(session, user)


@router.put(
    "/profile",
    response_model=UserProfile,
    responses={404: {"description": "User not found"}},
)
async def put_profile(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
    body: UserProfile,
) -> UserProfile:
    """Replace the whole profile document (identity fields are taken from the user row)."""
    data = body.model_dump(mode="json", exclude={"id", "email"})
    r = await session.execute(select(AthleteProfile).where(AthleteProfile.user_id == user.id))
    profile = r.scalar_one_or_none()
    if profile:
        profile.data = data
    else:
        session.add(AthleteProfile(user_id=user.id, data=data))
    await session.commit()
    return await load_user_profile(session, user)


@router.get(
    "/body-composition",
    response_model=BodyComposition,
    summary="BMR, TDEE, body fat, LBM, FFMI, WHR from profile measurements",
    responses={404: {"description": "User not found"}},
)
async def get_body_composition(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_user)],
) -> BodyComposition:
    profile = await load_user_profile(session, user)
    return calculate_body_composition(profile)
