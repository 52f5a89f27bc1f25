"""
Hotel read operations.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from redroute.models.hotel import Hotel
from redroute.core.logging import get_logger

logger = get_logger(__name__)


async def get_hotel(db: AsyncSession, hotel_id: int, for_update: bool = False) -> Hotel:
    """
    Get a single hotel by ID.
    With for_update the row stays locked until the request transaction ends,
    serializing bookings and review aggregation on the same hotel.
    """
    query = select(Hotel).where(Hotel.id == hotel_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    hotel = result.scalar_one_or_none()

    if not hotel:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Hotel not found",
        )
    return hotel


async def list_hotels(db: AsyncSession, city: Optional[str] = None) -> list[Hotel]:
    """List hotels newest first, optionally filtered by a case-insensitive city substring."""
    query = select(Hotel)

    city = (city or "").strip()
    if city:
        query = query.where(Hotel.city.icontains(city, autoescape=True))

    result = await db.execute(query.order_by(Hotel.created_at.desc(), Hotel.id.desc()))
    return list(result.scalars().all())
