"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from redroute.api.routes import auth, hotels, events, bookings, event_bookings, reviews, favorites, health
from redroute.schemas.common import ErrorResponse

# Every error leaves through redroute.api.errors in this shape
api_router = APIRouter(
    prefix="/api",
    responses={code: {"model": ErrorResponse} for code in (400, 401, 404, 409, 500)},
)
api_router.include_router(auth.router)
api_router.include_router(hotels.router)
api_router.include_router(events.router)
api_router.include_router(reviews.router)
api_router.include_router(bookings.router)
api_router.include_router(event_bookings.router)
api_router.include_router(favorites.router)
api_router.include_router(health.router)
