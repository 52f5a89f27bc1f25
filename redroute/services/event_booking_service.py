"""
Event ticket booking service.
"""

import re
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from redroute.models.booking import EventBooking
from redroute.models.user import User
from redroute.schemas.booking import EventBookingCreate
from redroute.services.event_service import get_event
from redroute.core.metrics import record_booking_attempt
from redroute.core.logging import get_logger

logger = get_logger(__name__)

_EMAIL_WORD_SEPARATORS = re.compile(r"[._-]+")


def name_from_email(email: Optional[str]) -> Optional[str]:
    """'jane.doe-smith@x.com' -> 'Jane Doe Smith'."""
    if not email:
        return None
    local = email.split("@")[0]
    words = [word for word in _EMAIL_WORD_SEPARATORS.split(local) if word]
    if not words:
        return None
    return " ".join(word[0].upper() + word[1:] for word in words)


def default_contact_name(user: User) -> Optional[str]:
    return user.full_name or name_from_email(user.email)


async def create_event_booking(
    db: AsyncSession,
    booking_data: EventBookingCreate,
    user: User,
) -> EventBooking:
    """
    Book tickets for an event.
    The quantity is capped per booking by the event's capacity.
    """
    event = await get_event(db, booking_data.event_id)

    if booking_data.quantity > event.capacity:
        logger.warning(
            "event_booking_failed_capacity",
            event_id=event.id,
            requested=booking_data.quantity,
            capacity=event.capacity,
        )
        record_booking_attempt("event", "rejected")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Capacity exceeded: this event allows up to {event.capacity} tickets per booking",
        )

    booking = EventBooking(
        user_id=user.id,
        event_id=event.id,
        quantity=booking_data.quantity,
        total_cost=event.price * booking_data.quantity,
        contact_name=booking_data.contact_name or default_contact_name(user),
        contact_email=booking_data.contact_email or user.email,
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    logger.info(
        "event_booking_created",
        booking_id=booking.id,
        user_id=user.id,
        event_id=event.id,
        quantity=booking.quantity,
        total_cost=booking.total_cost,
    )
    record_booking_attempt("event", "success")
    return booking


async def get_user_event_bookings(db: AsyncSession, user_id: int) -> list[EventBooking]:
    """Get all event bookings for a user."""
    result = await db.execute(
        select(EventBooking)
        .where(EventBooking.user_id == user_id)
        .order_by(EventBooking.created_at.desc(), EventBooking.id.desc())
    )
    return list(result.scalars().all())
