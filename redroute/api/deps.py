"""
Shared request dependencies: caller identity and path ids.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.db.session import get_db
from redroute.schemas.common import MAX_ID
from redroute.models.user import User
from redroute.services.identity_service import resolve_user

EntityId = Annotated[int, Path(ge=1, le=MAX_ID)]


async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Caller resolved from cookie or trusted headers, or None."""
    return await resolve_user(db, request)


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user
