"""
Hotel favorites: a strict toggle plus an idempotent set-state variant.
A NULL user_id is an anonymous favorite and matches only other NULLs.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.models.favorite import Favorite
from redroute.services.hotel_service import get_hotel
from redroute.core.metrics import record_favorite_toggle
from redroute.core.logging import get_logger

logger = get_logger(__name__)


def _owner_clause(user_id: Optional[int]):
    return Favorite.user_id.is_(None) if user_id is None else Favorite.user_id == user_id


async def find_favorite(db: AsyncSession, hotel_id: int, user_id: Optional[int]) -> Optional[Favorite]:
    result = await db.execute(
        select(Favorite)
        .where(Favorite.hotel_id == hotel_id, _owner_clause(user_id))
        .order_by(Favorite.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def _create(db: AsyncSession, hotel_id: int, user_id: Optional[int]) -> Favorite:
    favorite = Favorite(hotel_id=hotel_id, user_id=user_id)
    db.add(favorite)
    await db.flush()
    await db.refresh(favorite)
    return favorite


async def toggle_favorite(
    db: AsyncSession,
    hotel_id: int,
    user_id: Optional[int],
) -> Optional[Favorite]:
    """
    Flip the favorite state for (hotel, user).
    Returns the new favorite, or None when an existing one was removed.
    """
    await get_hotel(db, hotel_id)
    existing = await find_favorite(db, hotel_id, user_id)

    if existing:
        await db.delete(existing)
        await db.flush()
        logger.info("favorite_removed", hotel_id=hotel_id, user_id=user_id)
        record_favorite_toggle(created=False)
        return None

    favorite = await _create(db, hotel_id, user_id)
    logger.info("favorite_created", favorite_id=favorite.id, hotel_id=hotel_id, user_id=user_id)
    record_favorite_toggle(created=True)
    return favorite


async def set_favorite(
    db: AsyncSession,
    hotel_id: int,
    user_id: Optional[int],
    favorited: bool,
) -> Optional[Favorite]:
    """Bring (hotel, user) to the requested state; repeating the call changes nothing."""
    await get_hotel(db, hotel_id)
    existing = await find_favorite(db, hotel_id, user_id)

    if favorited:
        if existing:
            return existing
        favorite = await _create(db, hotel_id, user_id)
        logger.info("favorite_created", favorite_id=favorite.id, hotel_id=hotel_id, user_id=user_id)
        return favorite

    if existing:
        await db.delete(existing)
        await db.flush()
        logger.info("favorite_removed", hotel_id=hotel_id, user_id=user_id)
    return None


async def list_favorites(db: AsyncSession, user_id: Optional[int] = None) -> list[Favorite]:
    """List favorites newest first, with hotel and images, optionally for one user."""
    query = select(Favorite).options(selectinload(Favorite.hotel))
    if user_id is not None:
        query = query.where(Favorite.user_id == user_id)
    result = await db.execute(query.order_by(Favorite.created_at.desc(), Favorite.id.desc()))
    return list(result.scalars().all())
