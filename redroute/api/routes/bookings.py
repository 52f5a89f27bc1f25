"""
Hotel booking endpoints.
"""

import time
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.api.deps import EntityId, get_current_user
from redroute.db.session import get_db
from redroute.models.user import User
from redroute.schemas.booking import (
    HotelBookingCreate,
    BookingResponse,
    BookingCreatedResponse,
    BookingListResponse,
)
from redroute.services.booking_service import create_hotel_booking, cancel_booking, get_user_bookings
from redroute.services.identity_service import resolve_user
from redroute.core.metrics import booking_latency

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: HotelBookingCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    Book a hotel stay.

    The caller is taken from the session cookie, trusted identity headers or
    the body's userId. Anonymous requests fall back to the demo user when
    ANONYMOUS_BOOKINGS_ENABLED is set, otherwise they get 401.
    """
    started = time.perf_counter()
    user: Optional[User] = await resolve_user(db, request, body_user_id=booking_data.user_id)
    booking = await create_hotel_booking(db, booking_data, user)
    booking_latency.labels(kind="hotel").observe(time.perf_counter() - started)
    return BookingCreatedResponse(booking=BookingResponse.model_validate(booking))


@router.get("", response_model=BookingListResponse)
async def list_user_bookings(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get all hotel bookings for the authenticated user."""
    bookings = await get_user_bookings(db, user.id)
    return BookingListResponse(bookings=[BookingResponse.model_validate(b) for b in bookings])


@router.delete("/{booking_id}", response_model=BookingCreatedResponse)
async def cancel_booking_endpoint(
    booking_id: EntityId,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Cancel one of the caller's bookings."""
    booking = await cancel_booking(db, booking_id, user.id)
    return BookingCreatedResponse(booking=BookingResponse.model_validate(booking))
