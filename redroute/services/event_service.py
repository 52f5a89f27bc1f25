"""
Event read operations with text search and capped pagination.
"""

from typing import Optional

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from redroute.models.event import Event
from redroute.core.config import get_settings
from redroute.core.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()


def clamp_take(take: Optional[int]) -> int:
    if take is None:
        return settings.EVENTS_DEFAULT_TAKE
    return max(1, min(take, settings.EVENTS_MAX_TAKE))


async def get_event(db: AsyncSession, event_id: int, for_update: bool = False) -> Event:
    """Get a single event by ID, optionally locking the row for the transaction."""
    query = select(Event).where(Event.id == event_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    event = result.scalar_one_or_none()

    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    return event


async def list_events(
    db: AsyncSession,
    search: Optional[str] = None,
    take: Optional[int] = None,
) -> tuple[list[Event], int]:
    """
    List events ordered by start time.
    `search` matches name, location or description case-insensitively;
    `take` is capped at EVENTS_MAX_TAKE.
    """
    query = select(Event)

    search = (search or "").strip()
    if search:
        query = query.where(
            or_(
                Event.name.icontains(search, autoescape=True),
                Event.location.icontains(search, autoescape=True),
                Event.description.icontains(search, autoescape=True),
            )
        )

    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar()

    # Uses the ix_events_starts_at index
    events_query = query.order_by(Event.starts_at.asc(), Event.id.asc()).limit(clamp_take(take))
    result = await db.execute(events_query)
    events = list(result.scalars().all())

    return events, total
