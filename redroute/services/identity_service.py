"""
Caller identity resolution.

Precedence:
  1. Signed session cookie (JWT `sub` claim)
  2. X-User-Id / X-User-Email headers, when TRUST_IDENTITY_HEADERS is on
  3. A user id carried in the request body (booking and favorite flows)

A source that yields nothing (missing cookie, bad signature, expired token,
unknown id) falls through to the next one. Only database errors escape.
"""

from typing import Optional

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.models.user import User
from redroute.schemas.common import MAX_ID
from redroute.core.config import get_settings
from redroute.core.security import decode_session_token
from redroute.core.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()

USER_ID_HEADER = "x-user-id"
USER_EMAIL_HEADER = "x-user-email"


async def get_user_by_id(db: AsyncSession, user_id: Optional[int]) -> Optional[User]:
    # Ids outside the int4 key range cannot match a row
    if user_id is None or not 1 <= user_id <= MAX_ID:
        return None
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: Optional[str]) -> Optional[User]:
    if not email:
        return None
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


def read_session_user_id(request: Request) -> Optional[int]:
    token = request.cookies.get(settings.SESSION_COOKIE)
    if not token:
        return None
    return decode_session_token(token)


def _parse_user_id(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


async def get_session_user(db: AsyncSession, request: Request) -> Optional[User]:
    """Resolve the caller from the session cookie only."""
    return await get_user_by_id(db, read_session_user_id(request))


async def resolve_user(
    db: AsyncSession,
    request: Request,
    body_user_id: Optional[int] = None,
) -> Optional[User]:
    """Resolve the caller through every identity source, in precedence order."""
    user = await get_session_user(db, request)
    if user:
        return user

    if settings.TRUST_IDENTITY_HEADERS:
        user = await get_user_by_id(db, _parse_user_id(request.headers.get(USER_ID_HEADER)))
        if user:
            logger.debug("identity_from_header", user_id=user.id, source=USER_ID_HEADER)
            return user
        user = await get_user_by_email(db, request.headers.get(USER_EMAIL_HEADER))
        if user:
            logger.debug("identity_from_header", user_id=user.id, source=USER_EMAIL_HEADER)
            return user

    if body_user_id is not None:
        user = await get_user_by_id(db, body_user_id)
        if user:
            return user

    return None
