"""
Hotel booking service.

TRANSACTION STRATEGY
====================

Capacity here is a per-booking limit (guests <= hotel.capacity), not an
inventory counter, so there is no seat count to decrement. The check and
the insert still run in one transaction (the request session) and the
hotel row is read with SELECT ... FOR UPDATE, so a concurrent change to
the hotel's capacity cannot slip in between the check and the write.

There is no overlap check across bookings for the same dates: two
bookings for the same hotel and range are both accepted.

Identity:
  Session cookie, then trusted headers, then the body's userId. When none
  resolves and ANONYMOUS_BOOKINGS_ENABLED is on, the booking is attached to
  a placeholder demo user (created on first use) so no row is orphaned.
  With the mode off an anonymous request gets 401.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from redroute.models.booking import Booking
from redroute.models.user import User
from redroute.schemas.booking import HotelBookingCreate
from redroute.services.hotel_service import get_hotel
from redroute.core.config import get_settings
from redroute.core.metrics import record_booking_attempt
from redroute.core.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()

# bcrypt hashes never start with "!", so nobody can log in as the demo user
UNUSABLE_PASSWORD = "!demo"


async def get_or_create_demo_user(db: AsyncSession) -> User:
    result = await db.execute(select(User).where(User.email == settings.DEMO_USER_EMAIL))
    user = result.scalar_one_or_none()
    if user:
        return user

    user = User(
        email=settings.DEMO_USER_EMAIL,
        hashed_password=UNUSABLE_PASSWORD,
        first_name="Demo",
        last_name="User",
    )
    db.add(user)
    await db.flush()
    logger.info("demo_user_created", user_id=user.id, email=user.email)
    return user


async def create_hotel_booking(
    db: AsyncSession,
    booking_data: HotelBookingCreate,
    user: Optional[User],
) -> Booking:
    """
    Validate and persist a hotel booking.
    Dates and guest count are already normalized by the schema.
    """
    hotel = await get_hotel(db, booking_data.hotel_id, for_update=True)

    if booking_data.guests > hotel.capacity:
        logger.warning(
            "booking_failed_capacity",
            hotel_id=hotel.id,
            requested=booking_data.guests,
            capacity=hotel.capacity,
        )
        record_booking_attempt("hotel", "rejected")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Capacity exceeded: this hotel allows up to {hotel.capacity} guests",
        )

    if user is None:
        if not settings.ANONYMOUS_BOOKINGS_ENABLED:
            record_booking_attempt("hotel", "rejected")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Sign in to book",
            )
        user = await get_or_create_demo_user(db)

    booking = Booking(
        user_id=user.id,
        hotel_id=hotel.id,
        start_date=booking_data.start_date,
        end_date=booking_data.end_date,
        guests=booking_data.guests,
        status="confirmed",
        contact_name=booking_data.contact_name or None,
        contact_email=booking_data.contact_email or None,
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    logger.info(
        "booking_created",
        booking_id=booking.id,
        user_id=user.id,
        hotel_id=hotel.id,
        guests=booking.guests,
    )
    record_booking_attempt("hotel", "success")
    return booking


async def cancel_booking(
    db: AsyncSession,
    booking_id: int,
    user_id: int,
) -> Booking:
    """Cancel one of the caller's bookings. The row is kept with status=cancelled."""
    result = await db.execute(
        select(Booking).where(
            Booking.id == booking_id,
            Booking.user_id == user_id,
        )
    )
    booking = result.scalar_one_or_none()

    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )

    if booking.status == "cancelled":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Booking is already cancelled",
        )

    booking.status = "cancelled"
    await db.flush()
    await db.refresh(booking)

    logger.info(
        "booking_cancelled",
        booking_id=booking.id,
        user_id=user_id,
        hotel_id=booking.hotel_id,
    )
    return booking


async def get_user_bookings(db: AsyncSession, user_id: int) -> list[Booking]:
    """Get all hotel bookings for a user."""
    result = await db.execute(
        select(Booking)
        .where(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    return list(result.scalars().all())
