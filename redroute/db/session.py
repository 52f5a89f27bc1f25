"""
Database engine lifecycle and the per-request session dependency.

One `Database` is built in the application lifespan and stored on
`app.state.database`; it owns the async engine (and its connection pool)
for the whole process and is disposed at shutdown.

Every request gets its own session, and the session is the transaction:
it commits when the handler returns and rolls back on any exception, so
a multi-step flow (check capacity then insert, upsert review then
re-aggregate) is either fully written or not written at all.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from redroute.core.config import Settings
from redroute.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """Process-wide async engine plus session factory."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        kwargs = {"echo": settings.DEBUG, "pool_pre_ping": True}
        if not settings.DATABASE_URL.startswith("sqlite"):
            kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=settings.DB_POOL_RECYCLE,
            )
        return cls(create_async_engine(settings.DATABASE_URL, **kwargs))

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("database_disposed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session bound to one transaction for the request."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
