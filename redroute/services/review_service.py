"""
Review service: one review per (user, entity), plus the denormalized rating.

UPSERT + AGGREGATE
==================

  1. Lock the parent row (hotel or event) with SELECT ... FOR UPDATE
  2. Look up the caller's existing review; update it in place or insert one
  3. Recompute AVG(rating) over the parent's reviews, round half-up to one
     decimal, and write it to the parent's `rating` column

All three steps run in the request transaction. The parent lock serializes
concurrent reviewers of the same entity, so the stored average always
reflects the committed set of reviews and two first-time submissions from
one user cannot both take the insert branch. The unique constraint on
(entity, user) backs this up at the database level.

Hotels and events are handled identically.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.models.event import Event
from redroute.models.hotel import Hotel
from redroute.models.review import EventReview, HotelReview
from redroute.models.user import User
from redroute.schemas.review import ReviewCreate
from redroute.services.event_service import get_event
from redroute.services.hotel_service import get_hotel
from redroute.core.metrics import record_review_write
from redroute.core.logging import get_logger

logger = get_logger(__name__)

DETAIL_REVIEW_LIMIT = 50

ReviewModel = Union[type[HotelReview], type[EventReview]]
Review = Union[HotelReview, EventReview]


@dataclass
class ReviewSummary:
    reviews: list
    average: Optional[float]
    count: int


def round_rating(value: Optional[float]) -> Optional[float]:
    """Round half-up to one decimal: 4.25 -> 4.3."""
    if value is None:
        return None
    return math.floor(float(value) * 10 + 0.5) / 10


def _parent_column(model: ReviewModel):
    return model.hotel_id if model is HotelReview else model.event_id


async def _aggregate(db: AsyncSession, model: ReviewModel, parent_id: int) -> tuple[Optional[float], int]:
    result = await db.execute(
        select(func.avg(model.rating), func.count(model.id)).where(_parent_column(model) == parent_id)
    )
    average, count = result.one()
    return round_rating(average), count or 0


async def _list(db: AsyncSession, model: ReviewModel, parent_id: int, limit: Optional[int]) -> ReviewSummary:
    query = (
        select(model)
        .where(_parent_column(model) == parent_id)
        .order_by(model.created_at.desc(), model.id.desc())
    )
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    reviews = list(result.scalars().all())
    average, count = await _aggregate(db, model, parent_id)
    return ReviewSummary(reviews=reviews, average=average, count=count)


async def _upsert(
    db: AsyncSession,
    model: ReviewModel,
    parent: Union[Hotel, Event],
    user: User,
    review_data: ReviewCreate,
) -> tuple[Review, ReviewSummary]:
    parent_column = _parent_column(model)
    result = await db.execute(
        select(model).where(parent_column == parent.id, model.user_id == user.id)
    )
    review = result.scalar_one_or_none()
    created = review is None

    if created:
        review = model(
            user_id=user.id,
            rating=review_data.rating,
            title=review_data.title,
            body=review_data.body,
        )
        setattr(review, parent_column.key, parent.id)
        db.add(review)
    else:
        review.rating = review_data.rating
        review.title = review_data.title
        review.body = review_data.body
    await db.flush()

    average, count = await _aggregate(db, model, parent.id)
    parent.rating = average
    await db.flush()

    # Reload server-side timestamps and the author relationship
    result = await db.execute(
        select(model).where(model.id == review.id).execution_options(populate_existing=True)
    )
    review = result.scalar_one()

    kind = "hotel" if model is HotelReview else "event"
    logger.info(
        "review_saved",
        kind=kind,
        review_id=review.id,
        parent_id=parent.id,
        user_id=user.id,
        rating=review.rating,
        created=created,
        average=average,
    )
    record_review_write(kind, created)
    return review, ReviewSummary(reviews=[review], average=average, count=count)


async def summarize_hotel_reviews(db: AsyncSession, hotel_id: int, limit: Optional[int] = None) -> ReviewSummary:
    return await _list(db, HotelReview, hotel_id, limit)


async def summarize_event_reviews(db: AsyncSession, event_id: int, limit: Optional[int] = None) -> ReviewSummary:
    return await _list(db, EventReview, event_id, limit)


async def list_hotel_reviews(db: AsyncSession, hotel_id: int) -> ReviewSummary:
    """All reviews for a hotel, newest first. 404 if the hotel does not exist."""
    await get_hotel(db, hotel_id)
    return await summarize_hotel_reviews(db, hotel_id)


async def list_event_reviews(db: AsyncSession, event_id: int) -> ReviewSummary:
    """All reviews for an event, newest first. 404 if the event does not exist."""
    await get_event(db, event_id)
    return await summarize_event_reviews(db, event_id)


async def upsert_hotel_review(
    db: AsyncSession,
    hotel_id: int,
    user: User,
    review_data: ReviewCreate,
) -> tuple[HotelReview, ReviewSummary]:
    hotel = await get_hotel(db, hotel_id, for_update=True)
    return await _upsert(db, HotelReview, hotel, user, review_data)


async def upsert_event_review(
    db: AsyncSession,
    event_id: int,
    user: User,
    review_data: ReviewCreate,
) -> tuple[EventReview, ReviewSummary]:
    event = await get_event(db, event_id, for_update=True)
    return await _upsert(db, EventReview, event, user, review_data)
