"""
Pydantic schemas for hotel listings and detail pages.
"""

from datetime import datetime
from typing import Optional

from redroute.schemas.common import CamelModel
from redroute.schemas.review import ReviewResponse


class HotelImageResponse(CamelModel):
    url: str
    alt: Optional[str] = None


class HotelResponse(CamelModel):
    id: int
    name: str
    city: str
    country: Optional[str] = None
    price: float
    capacity: int
    rating: Optional[float] = None
    description: Optional[str] = None
    images: list[HotelImageResponse] = []
    created_at: datetime


class HotelListResponse(CamelModel):
    ok: bool = True
    hotels: list[HotelResponse]
    total: int
    cached: bool = False


class HotelDetailResponse(HotelResponse):
    ok: bool = True
    reviews: list[ReviewResponse] = []
    reviews_avg: Optional[float] = None
    reviews_count: int = 0
