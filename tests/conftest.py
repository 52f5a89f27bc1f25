"""
Pytest fixtures for test database, client, and identity.

Tables are created and dropped around every test. Each request gets its own
session that commits or rolls back, mirroring the application's get_db.
"""

import os
from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator

# Cache stays off unless a test opts in; must be set before the app is imported
os.environ.setdefault("REDIS_ENABLED", "false")

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from redroute.main import app
from redroute.db.base import Base
from redroute.db.session import get_db
from redroute.core.security import create_session_token, hash_password
from redroute.models.user import User
from redroute.models.hotel import Hotel, HotelImage
from redroute.models.event import Event

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///./test_redroute.db")

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

TEST_PASSWORD = "testpassword123"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with a fresh transactional session per request."""

    async def override_get_db():
        async with TestSessionLocal() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def make_user(db: AsyncSession, email: str, **fields) -> User:
    user = User(email=email, hashed_password=hash_password(TEST_PASSWORD), **fields)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user in the database."""
    return await make_user(db_session, "test@example.com", first_name="Test", last_name="User")


@pytest_asyncio.fixture
async def session_cookie(test_user: User) -> dict:
    """Session cookie for the test user."""
    return {"rr_session": create_session_token(test_user.id)}


@pytest_asyncio.fixture
async def user_headers(test_user: User) -> dict:
    """Trusted identity header for the test user."""
    return {"x-user-id": str(test_user.id)}


@pytest_asyncio.fixture
async def test_hotel(db_session: AsyncSession) -> Hotel:
    """Hotel that sleeps two, with an ordered gallery."""
    hotel = Hotel(
        name="Harbour View",
        city="Lisbon",
        country="Portugal",
        price=120.0,
        capacity=2,
        description="Rooms over the river",
        images=[
            HotelImage(url="https://img.test/2.jpg", alt="Pool", position=1),
            HotelImage(url="https://img.test/1.jpg", alt="Lobby", position=0),
        ],
    )
    db_session.add(hotel)
    await db_session.commit()
    await db_session.refresh(hotel)
    return hotel


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession) -> Event:
    """Event capped at four tickets per booking."""
    event = Event(
        name="Jazz on the Quay",
        description="An evening of live jazz",
        location="Porto",
        starts_at=datetime.now(timezone.utc) + timedelta(days=30),
        price=25.5,
        capacity=4,
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def user_factory(db_session: AsyncSession):
    """Create extra users: `await user_factory("a@example.com")`."""

    async def create(email: str, **fields) -> User:
        return await make_user(db_session, email, **fields)

    return create


@pytest_asyncio.fixture
async def fetch_all(db_session: AsyncSession):
    """Read rows through a fresh session, after requests have committed."""

    async def run(statement) -> list:
        async with TestSessionLocal() as session:
            result = await session.execute(statement)
            return list(result.scalars().all())

    return run
