"""User endpoints: create and fetch users that own profiles, daily logs and OPS history."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_user
from app.db.session import get_db
from app.models.user import User

router = APIRouter(prefix="/users", tags=["users"])


class UserCreateBody(BaseModel):
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str | None = Field(None, max_length=255)


class UserResponse(BaseModel):
    id: int
    email: str
    name: str | None = None
    created_at: datetime | None = None


def _user_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, email=user.email, name=user.name, created_at=user.created_at)


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    summary="Create user",
    responses={409: {"description": "Email already registered"}},
)
async def create_user(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: UserCreateBody,
) -> UserResponse:
    email = body.email.strip().lower()
    r = await session.execute(select(User.id).where(User.email == email))
    if r.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Email already registered")
    user = User(email=email, name=(body.name or "").strip() or None)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return _user_response(user)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user",
    responses={404: {"description": "User not found"}},
)
async def get_user_by_id(user: Annotated[User, Depends(get_user)]) -> UserResponse:
    return _user_response(user)
