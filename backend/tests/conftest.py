"""Pytest configuration and shared fixtures for API and analytics tests."""

import os
from datetime import date, datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test DB before app imports so config/engine use it
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_fitness.db")
os.environ.setdefault("DEFAULT_RATE_LIMIT", "10000/minute")

from app.db.session import build_engine, build_session_maker, create_tables, get_db
from app.main import app
from app.models.user import User
from app.schemas.daily_log import DailyLog

AS_OF = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def as_of() -> datetime:
    return AS_OF


@pytest.fixture
def make_logs():
    """Build N consecutive daily logs ending at AS_OF with the given values."""

    def _make(n: int, **values) -> list[DailyLog]:
        end = AS_OF.date()
        return [DailyLog(date=end - timedelta(days=n - 1 - i), **values) for i in range(n)]

    return _make


@pytest_asyncio.fixture
async def db_session_maker():
    """Fresh in-memory SQLite database per test."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)
    yield build_session_maker(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session_maker):
    """AsyncClient with get_db bound to the per-test database."""

    async def _get_db():
        async with db_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session_maker):
    """Create a user via DB (committed) and return (user_id, email)."""
    async with db_session_maker() as session:
        user = User(email="test@test.com", name="Test Athlete")
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user.id, user.email


@pytest.fixture
def today() -> date:
    return date.today()
