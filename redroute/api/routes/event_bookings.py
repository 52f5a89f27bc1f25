"""
Event ticket booking endpoints. Identity is required (cookie or trusted headers).
"""

import time

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.api.deps import get_current_user
from redroute.db.session import get_db
from redroute.models.user import User
from redroute.schemas.booking import (
    EventBookingCreate,
    EventBookingResponse,
    EventBookingCreatedResponse,
    EventBookingListResponse,
)
from redroute.services.event_booking_service import create_event_booking, get_user_event_bookings
from redroute.core.metrics import booking_latency

router = APIRouter(prefix="/event-bookings", tags=["Event bookings"])


@router.post("", response_model=EventBookingCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_event_booking_endpoint(
    booking_data: EventBookingCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Buy tickets. Total cost is price x quantity; contact fields default from the account."""
    started = time.perf_counter()
    booking = await create_event_booking(db, booking_data, user)
    booking_latency.labels(kind="event").observe(time.perf_counter() - started)
    return EventBookingCreatedResponse(booking=EventBookingResponse.model_validate(booking))


@router.get("", response_model=EventBookingListResponse)
async def list_event_bookings(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    bookings = await get_user_event_bookings(db, user.id)
    return EventBookingListResponse(bookings=[EventBookingResponse.model_validate(b) for b in bookings])
