"""
Event endpoints with Redis caching on list operations.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.db.session import get_db
from redroute.api.deps import EntityId
from redroute.schemas.event import EventResponse, EventListResponse, EventDetailResponse
from redroute.schemas.review import ReviewResponse
from redroute.services.event_service import get_event, list_events, clamp_take
from redroute.services.review_service import summarize_event_reviews, DETAIL_REVIEW_LIMIT
from redroute.services.cache_service import get_cached_list, set_cached_list, cache_control_value
from redroute.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=EventListResponse)
async def list_events_endpoint(
    response: Response,
    q: Optional[str] = Query(None, max_length=200),
    take: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
):
    """
    List events ordered by start time.
    `q` searches name, location and description; `take` is capped at 50.
    Results are cached in Redis for REDIS_CACHE_TTL seconds.
    """
    response.headers["Cache-Control"] = cache_control_value()
    take = clamp_take(take)

    # Try cache first
    cached = await get_cached_list("events", q=q, take=take)
    if cached:
        logger.info("events_list_cache_hit", q=q, take=take)
        cached["cached"] = True
        return EventListResponse.model_validate(cached)

    # Cache miss - query database
    events, total = await list_events(db, q, take)
    payload = EventListResponse(
        events=[EventResponse.model_validate(event) for event in events],
        total=total,
        take=take,
    )

    # Store in cache for next request
    await set_cached_list("events", payload.model_dump(mode="json", by_alias=True), q=q, take=take)
    return payload


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event_endpoint(
    event_id: EntityId,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Event detail with the latest reviews and the live review average."""
    event = await get_event(db, event_id)
    summary = await summarize_event_reviews(db, event_id, limit=DETAIL_REVIEW_LIMIT)

    response.headers["Cache-Control"] = cache_control_value()
    return EventDetailResponse(
        **EventResponse.model_validate(event).model_dump(),
        reviews=[ReviewResponse.model_validate(review) for review in summary.reviews],
        reviews_avg=summary.average,
        reviews_count=summary.count,
    )
