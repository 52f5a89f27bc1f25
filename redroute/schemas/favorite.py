"""
Pydantic schemas for hotel favorites.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from redroute.schemas.booking import positive_id
from redroute.schemas.common import CamelModel
from redroute.schemas.hotel import HotelResponse


class FavoriteToggle(CamelModel):
    hotel_id: int = Field(default=None, validate_default=True)
    user_id: Optional[int] = None

    @field_validator("hotel_id", mode="before")
    @classmethod
    def check_hotel_id(cls, value: Any) -> int:
        return positive_id(value, "hotelId")


class FavoriteSet(FavoriteToggle):
    favorited: bool


class FavoriteResponse(CamelModel):
    id: int
    hotel_id: int
    user_id: Optional[int] = None
    created_at: datetime


class FavoriteWithHotel(FavoriteResponse):
    hotel: HotelResponse


class FavoriteListResponse(CamelModel):
    ok: bool = True
    favorites: list[FavoriteWithHotel]


class FavoriteStateResponse(CamelModel):
    ok: bool = True
    favorited: bool
    removed: bool = False
    favorite: Optional[FavoriteResponse] = None
