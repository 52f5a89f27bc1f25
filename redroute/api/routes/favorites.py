"""
Favorite endpoints: list, strict toggle (POST) and explicit state (PUT).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.db.session import get_db
from redroute.schemas.common import MAX_ID
from redroute.schemas.favorite import (
    FavoriteToggle,
    FavoriteSet,
    FavoriteResponse,
    FavoriteWithHotel,
    FavoriteListResponse,
    FavoriteStateResponse,
)
from redroute.services.favorite_service import toggle_favorite, set_favorite, list_favorites
from redroute.services.identity_service import resolve_user

router = APIRouter(prefix="/favorites", tags=["Favorites"])


async def _owner_id(db: AsyncSession, request: Request, body_user_id: Optional[int]) -> Optional[int]:
    user = await resolve_user(db, request, body_user_id=body_user_id)
    return user.id if user else None


@router.get("", response_model=FavoriteListResponse)
async def list_favorites_endpoint(
    user_id: Optional[int] = Query(None, alias="userId", ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    favorites = await list_favorites(db, user_id)
    return FavoriteListResponse(favorites=[FavoriteWithHotel.model_validate(f) for f in favorites])


@router.post(
    "",
    response_model=FavoriteStateResponse,
    responses={201: {"model": FavoriteStateResponse}},
)
async def toggle_favorite_endpoint(
    favorite_data: FavoriteToggle,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    Toggle a hotel favorite. Not idempotent: repeating the call alternates
    between 201 (created) and 200 (removed). Use PUT to set a state.
    """
    owner_id = await _owner_id(db, request, favorite_data.user_id)
    favorite = await toggle_favorite(db, favorite_data.hotel_id, owner_id)

    if favorite is None:
        body = FavoriteStateResponse(favorited=False, removed=True)
        return JSONResponse(status_code=200, content=body.model_dump(mode="json", by_alias=True))

    body = FavoriteStateResponse(favorited=True, favorite=FavoriteResponse.model_validate(favorite))
    return JSONResponse(status_code=201, content=body.model_dump(mode="json", by_alias=True))


@router.put("", response_model=FavoriteStateResponse)
async def set_favorite_endpoint(
    favorite_data: FavoriteSet,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Set the favorite state explicitly; safe to repeat."""
    owner_id = await _owner_id(db, request, favorite_data.user_id)
    favorite = await set_favorite(db, favorite_data.hotel_id, owner_id, favorite_data.favorited)
    return FavoriteStateResponse(
        favorited=favorite is not None,
        favorite=FavoriteResponse.model_validate(favorite) if favorite else None,
    )
