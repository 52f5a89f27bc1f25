"""
Pydantic schemas for hotel bookings and event ticket bookings.
"""

import math
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from redroute.schemas.common import CamelModel, MAX_ID

DEFAULT_GUESTS = 2


def positive_id(value: Any, field: str) -> int:
    """Accept ints, integral floats and digit strings in 1..MAX_ID."""
    if value is None or value == "":
        raise PydanticCustomError("missing_id", "{field} is required", {"field": field})

    number: Optional[int] = None
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, float) and math.isfinite(value) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        number = int(value.strip())

    if number is None or not 1 <= number <= MAX_ID:
        raise PydanticCustomError("invalid_id", "{field} must be a positive integer", {"field": field})
    return number


def coerce_guests(value: Any) -> int:
    """Omitted -> 2; anything that is not a positive number -> 1; fractions truncate."""
    if value is None:
        return DEFAULT_GUESTS
    if isinstance(value, bool):
        return 1
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(number) or number < 1:
        return 1
    return int(number)


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


class HotelBookingCreate(CamelModel):
    hotel_id: int = Field(default=None, validate_default=True)
    user_id: Optional[int] = None
    start_date: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("startDate", "checkIn", "start_date")
    )
    end_date: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("endDate", "checkOut", "end_date")
    )
    guests: int = DEFAULT_GUESTS
    contact_name: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[str] = Field(None, max_length=255)

    @field_validator("hotel_id", mode="before")
    @classmethod
    def check_hotel_id(cls, value: Any) -> int:
        return positive_id(value, "hotelId")

    @field_validator("contact_name", "contact_email", mode="before")
    @classmethod
    def blank_contact(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("guests", mode="before")
    @classmethod
    def check_guests(cls, value: Any) -> int:
        return coerce_guests(value)

    @field_validator("start_date", "end_date")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def check_date_range(self) -> "HotelBookingCreate":
        if (self.start_date is None) != (self.end_date is None):
            raise PydanticCustomError("invalid_dates", "Both startDate and endDate are required")
        if self.start_date is not None and self.start_date >= self.end_date:
            raise PydanticCustomError("invalid_dates", "startDate must be before endDate")
        return self


class BookingResponse(CamelModel):
    id: int
    user_id: Optional[int] = None
    hotel_id: int
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    guests: int
    status: str
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    created_at: datetime


class BookingCreatedResponse(CamelModel):
    ok: bool = True
    booking: BookingResponse


class BookingListResponse(CamelModel):
    ok: bool = True
    bookings: list[BookingResponse]


class EventBookingCreate(CamelModel):
    event_id: int = Field(default=None, validate_default=True)
    quantity: int = Field(1, validation_alias=AliasChoices("qty", "quantity"))
    contact_name: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[str] = Field(None, max_length=255)

    @field_validator("event_id", mode="before")
    @classmethod
    def check_event_id(cls, value: Any) -> int:
        return positive_id(value, "eventId")

    @field_validator("contact_name", "contact_email", mode="before")
    @classmethod
    def blank_contact(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def check_quantity(cls, value: Any) -> int:
        if value is None:
            return 1
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = float("nan")
        if isinstance(value, bool) or not math.isfinite(number) or number < 1 or number != int(number):
            raise PydanticCustomError("invalid_quantity", "qty must be a positive integer")
        return int(number)


class EventBookingResponse(CamelModel):
    id: int
    user_id: int
    event_id: int
    quantity: int
    total_cost: float
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    created_at: datetime


class EventBookingCreatedResponse(CamelModel):
    ok: bool = True
    booking: EventBookingResponse


class EventBookingListResponse(CamelModel):
    ok: bool = True
    bookings: list[EventBookingResponse]
