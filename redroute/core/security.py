"""
Password hashing and session tokens.

Passwords are stored as bcrypt hashes. Hashing is CPU-bound, so the async
helpers push it onto the thread pool.

Sessions are HS256 JWTs carrying the user id in the `sub` claim, delivered
in an HTTP-only cookie. Token lifetime and cookie Max-Age always match.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Response
from starlette.concurrency import run_in_threadpool

from redroute.core.config import get_settings

settings = get_settings()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash (e.g. the placeholder demo user)
        return False


async def hash_password_async(password: str) -> str:
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(password: str, hashed_password: str) -> bool:
    return await run_in_threadpool(verify_password, password, hashed_password)


def session_lifetime(remember: bool = False) -> timedelta:
    days = settings.REMEMBER_TTL_DAYS if remember else settings.SESSION_TTL_DAYS
    return timedelta(days=days)


def create_session_token(user_id: int, remember: bool = False) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + session_lifetime(remember),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: str) -> Optional[int]:
    """Return the user id from a valid token, or None for anything else."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        return None

    sub = payload.get("sub")
    try:
        return int(sub)
    except (TypeError, ValueError):
        return None


def set_session_cookie(response: Response, token: str, remember: bool = False) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE,
        value=token,
        max_age=int(session_lifetime(remember).total_seconds()),
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )
