"""
Operational database checks for the health and debug endpoints.
"""

from sqlalchemy import select, func, inspect, text
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.models import Booking, Event, EventBooking, Favorite, Hotel, HotelImage, User

COUNTED_MODELS = {
    "hotelCount": Hotel,
    "imageCount": HotelImage,
    "bookingCount": Booking,
    "eventCount": Event,
    "eventBookingCount": EventBooking,
    "favoriteCount": Favorite,
    "userCount": User,
}


async def database_status(db: AsyncSession) -> dict:
    """Ping the database and count users. Errors propagate to the caller."""
    await db.execute(text("SELECT 1"))
    user_count = (await db.execute(select(func.count(User.id)))).scalar()
    return {
        "db": "connected",
        "dialect": db.get_bind().dialect.name,
        "userCount": user_count,
    }


async def table_counts(db: AsyncSession) -> dict:
    counts = {}
    for label, model in COUNTED_MODELS.items():
        counts[label] = (await db.execute(select(func.count()).select_from(model))).scalar()
    return counts


async def table_names(db: AsyncSession) -> list[str]:
    connection = await db.connection()
    names = await connection.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    return sorted(names)
