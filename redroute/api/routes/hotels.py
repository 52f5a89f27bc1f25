"""
Hotel endpoints with Redis caching on the list operation.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.db.session import get_db
from redroute.api.deps import EntityId
from redroute.schemas.hotel import HotelResponse, HotelListResponse, HotelDetailResponse
from redroute.schemas.review import ReviewResponse
from redroute.services.hotel_service import get_hotel, list_hotels
from redroute.services.review_service import summarize_hotel_reviews, DETAIL_REVIEW_LIMIT
from redroute.services.cache_service import get_cached_list, set_cached_list, cache_control_value
from redroute.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/hotels", tags=["Hotels"])


@router.get("", response_model=HotelListResponse)
async def list_hotels_endpoint(
    response: Response,
    city: Optional[str] = Query(None, max_length=120),
    db: AsyncSession = Depends(get_db),
):
    """
    List hotels with their images, newest first.
    `city` is a case-insensitive substring filter.
    Results are cached in Redis; the cache is dropped when a review moves a rating.
    """
    response.headers["Cache-Control"] = cache_control_value()

    cached = await get_cached_list("hotels", city=city)
    if cached:
        logger.info("hotels_list_cache_hit", city=city)
        cached["cached"] = True
        return HotelListResponse.model_validate(cached)

    hotels = await list_hotels(db, city)
    payload = HotelListResponse(
        hotels=[HotelResponse.model_validate(hotel) for hotel in hotels],
        total=len(hotels),
    )

    await set_cached_list("hotels", payload.model_dump(mode="json", by_alias=True), city=city)
    return payload


@router.get("/{hotel_id}", response_model=HotelDetailResponse)
async def get_hotel_endpoint(
    hotel_id: EntityId,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Hotel detail with images, the latest reviews and the live review average."""
    hotel = await get_hotel(db, hotel_id)
    summary = await summarize_hotel_reviews(db, hotel_id, limit=DETAIL_REVIEW_LIMIT)

    response.headers["Cache-Control"] = cache_control_value()
    return HotelDetailResponse(
        **HotelResponse.model_validate(hotel).model_dump(),
        reviews=[ReviewResponse.model_validate(review) for review in summary.reviews],
        reviews_avg=summary.average,
        reviews_count=summary.count,
    )
