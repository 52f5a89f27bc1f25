"""
Authentication endpoints: register, login, current user, logout.
The session travels in an HTTP-only cookie; see redroute.core.security.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.db.session import get_db
from redroute.schemas.common import OkResponse
from redroute.schemas.user import UserCreate, UserLogin, UserResponse, AuthResponse
from redroute.services.auth_service import register_user, authenticate_user
from redroute.services.identity_service import get_session_user
from redroute.core.security import create_session_token, set_session_cookie, clear_session_cookie

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, response: Response, db: AsyncSession = Depends(get_db)):
    """Register a new account and start a session."""
    user = await register_user(db, user_data)
    set_session_cookie(response, create_session_token(user.id, user_data.remember), user_data.remember)
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(login_data: UserLogin, response: Response, db: AsyncSession = Depends(get_db)):
    """Check credentials and set the session cookie (30 days with `remember`)."""
    user = await authenticate_user(db, login_data)
    set_session_cookie(response, create_session_token(user.id, login_data.remember), login_data.remember)
    return AuthResponse(user=UserResponse.model_validate(user))


@router.get("/me", response_model=AuthResponse)
async def me(request: Request, db: AsyncSession = Depends(get_db)):
    """Return the user behind the session cookie."""
    user = await get_session_user(db, request)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=OkResponse)
async def logout(response: Response):
    clear_session_cookie(response)
    return OkResponse()
