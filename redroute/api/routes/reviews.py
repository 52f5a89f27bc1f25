"""
Review endpoints for hotels and events.
POST is an upsert: one review per user per hotel/event.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.api.deps import EntityId, get_current_user
from redroute.db.session import get_db
from redroute.models.user import User
from redroute.schemas.review import ReviewCreate, ReviewResponse, ReviewListResponse, ReviewUpsertResponse
from redroute.services.review_service import (
    ReviewSummary,
    list_hotel_reviews,
    list_event_reviews,
    upsert_hotel_review,
    upsert_event_review,
)
from redroute.services.cache_service import invalidate_list_cache

router = APIRouter(tags=["Reviews"])


def _list_response(summary: ReviewSummary) -> ReviewListResponse:
    return ReviewListResponse(
        reviews=[ReviewResponse.model_validate(review) for review in summary.reviews],
        reviews_avg=summary.average,
        reviews_count=summary.count,
    )


def _upsert_response(review, summary: ReviewSummary) -> ReviewUpsertResponse:
    return ReviewUpsertResponse(
        review=ReviewResponse.model_validate(review),
        reviews_avg=summary.average,
        reviews_count=summary.count,
    )


@router.get("/hotels/{hotel_id}/reviews", response_model=ReviewListResponse)
async def get_hotel_reviews(hotel_id: EntityId, db: AsyncSession = Depends(get_db)):
    return _list_response(await list_hotel_reviews(db, hotel_id))


@router.post("/hotels/{hotel_id}/reviews", response_model=ReviewUpsertResponse)
async def post_hotel_review(
    hotel_id: EntityId,
    review_data: ReviewCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the caller's review and refresh the hotel's rating."""
    review, summary = await upsert_hotel_review(db, hotel_id, user, review_data)
    # Commit first so a concurrent list request cannot re-cache the old rating
    await db.commit()
    await invalidate_list_cache("hotels")
    return _upsert_response(review, summary)


@router.get("/events/{event_id}/reviews", response_model=ReviewListResponse)
async def get_event_reviews(event_id: EntityId, db: AsyncSession = Depends(get_db)):
    return _list_response(await list_event_reviews(db, event_id))


@router.post("/events/{event_id}/reviews", response_model=ReviewUpsertResponse)
async def post_event_review(
    event_id: EntityId,
    review_data: ReviewCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the caller's review and refresh the event's rating."""
    review, summary = await upsert_event_review(db, event_id, user, review_data)
    await db.commit()
    await invalidate_list_cache("events")
    return _upsert_response(review, summary)
