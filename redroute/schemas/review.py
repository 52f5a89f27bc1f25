"""
Pydantic schemas for hotel and event reviews.
"""

import math
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from redroute.schemas.common import CamelModel


def parse_rating(value: Any) -> Optional[int]:
    """Coerce a rating to an integer 1..5 (half-up), or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 1 or number > 5:
        return None
    return int(math.floor(number + 0.5))


class ReviewCreate(CamelModel):
    rating: int = Field(default=None, validate_default=True)
    title: Optional[str] = Field(None, max_length=255)
    body: str = Field(default="", validate_default=True)

    @field_validator("rating", mode="before")
    @classmethod
    def check_rating(cls, value: Any) -> int:
        rating = parse_rating(value)
        if rating is None:
            raise PydanticCustomError("invalid_rating", "Rating must be 1–5")
        return rating

    @field_validator("title", mode="before")
    @classmethod
    def blank_title(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("body", mode="before")
    @classmethod
    def check_body(cls, value: Any) -> str:
        text = "" if value is None else str(value).strip()
        if not text:
            raise PydanticCustomError("missing_body", "Review text required")
        return text


class ReviewAuthor(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class ReviewResponse(CamelModel):
    id: int
    user_id: int
    rating: int
    title: Optional[str] = None
    body: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    user: Optional[ReviewAuthor] = None


class ReviewListResponse(CamelModel):
    ok: bool = True
    reviews: list[ReviewResponse]
    reviews_avg: Optional[float] = None
    reviews_count: int = 0


class ReviewUpsertResponse(CamelModel):
    ok: bool = True
    review: ReviewResponse
    reviews_avg: Optional[float] = None
    reviews_count: int = 0
