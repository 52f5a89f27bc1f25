"""
Pydantic schemas for event listings and detail pages.
"""

from datetime import datetime
from typing import Optional

from redroute.schemas.common import CamelModel
from redroute.schemas.review import ReviewResponse


class EventResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    starts_at: datetime
    price: float
    capacity: int
    image_url: Optional[str] = None
    image_alt: Optional[str] = None
    rating: Optional[float] = None
    created_at: datetime


class EventListResponse(CamelModel):
    ok: bool = True
    events: list[EventResponse]
    total: int
    take: int
    cached: bool = False


class EventDetailResponse(EventResponse):
    ok: bool = True
    reviews: list[ReviewResponse] = []
    reviews_avg: Optional[float] = None
    reviews_count: int = 0
