"""
Authentication service handling user registration and login.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from redroute.models.user import User
from redroute.schemas.user import UserCreate, UserLogin
from redroute.core.security import hash_password_async, verify_password_async
from redroute.core.metrics import record_auth_attempt
from redroute.core.logging import get_logger

logger = get_logger(__name__)

EMAIL_TAKEN = "Email already in use"
INVALID_CREDENTIALS = "Invalid email or password"


async def register_user(db: AsyncSession, user_data: UserCreate) -> User:
    """
    Register a new user with hashed password.
    Email arrives already trimmed and lowercased by the schema.
    Raises 409 if the email already exists, including when a concurrent
    registration wins the race to the unique index.
    """
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar_one_or_none():
        logger.warning("registration_failed", reason="email_exists", email=user_data.email)
        record_auth_attempt("register", "conflict")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=EMAIL_TAKEN)

    user = User(
        email=user_data.email,
        hashed_password=await hash_password_async(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        dob=user_data.dob,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        logger.warning("registration_failed", reason="unique_violation", email=user_data.email)
        record_auth_attempt("register", "conflict")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=EMAIL_TAKEN)
    await db.refresh(user)

    logger.info("user_registered", user_id=user.id, email=user.email)
    record_auth_attempt("register", "success")
    return user


async def authenticate_user(db: AsyncSession, login_data: UserLogin) -> User:
    """
    Check credentials and return the user.
    Raises 401 if credentials are invalid.
    """
    result = await db.execute(select(User).where(User.email == login_data.email))
    user = result.scalar_one_or_none()

    if not user or not await verify_password_async(login_data.password, user.hashed_password):
        logger.warning("login_failed", email=login_data.email)
        record_auth_attempt("login", "invalid")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )

    logger.info("user_logged_in", user_id=user.id)
    record_auth_attempt("login", "success")
    return user
