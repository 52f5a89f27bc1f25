"""
Pydantic schemas for user-related request/response validation.
"""

import re
from datetime import date, datetime
from typing import Any, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from redroute.schemas.common import CamelModel

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72


def normalize_email(value: str) -> str:
    return value.strip().lower()


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class UserCreate(CamelModel):
    email: str
    password: str
    remember: bool = False
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    dob: Optional[date] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        value = normalize_email(value)
        if not EMAIL_PATTERN.match(value):
            raise PydanticCustomError("invalid_email", "Invalid email")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least {min_length} characters",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        # bcrypt only takes the first 72 bytes and refuses longer input
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "password_too_long",
                "Password must be at most {max_bytes} bytes",
                {"max_bytes": MAX_PASSWORD_BYTES},
            )
        return value

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def strip_names(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("dob", mode="before")
    @classmethod
    def parse_dob(cls, value: Any) -> Optional[date]:
        # Unparseable dates are dropped rather than rejected
        value = _blank_to_none(value)
        if value is None or isinstance(value, date):
            return value
        if not isinstance(value, str):
            return None
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            return None


class UserLogin(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    remember: bool = False

    @model_validator(mode="after")
    def check_credentials(self) -> "UserLogin":
        if not self.email or not self.password:
            raise PydanticCustomError("missing_credentials", "Missing email/password")
        self.email = normalize_email(self.email)
        return self


class UserResponse(CamelModel):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    dob: Optional[date] = None
    created_at: datetime


class AuthResponse(CamelModel):
    ok: bool = True
    user: UserResponse
