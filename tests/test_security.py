"""
Unit tests for password hashing, session tokens and cache keys.
"""

from datetime import datetime, timedelta, timezone

import jwt

from redroute.core.config import get_settings
from redroute.core.security import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
    session_lifetime,
)
from redroute.services.cache_service import make_list_key
from redroute.services.event_booking_service import name_from_email

settings = get_settings()


def test_password_roundtrip():
    hashed = hash_password("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_verify_against_unusable_hash():
    assert verify_password("anything", "!demo") is False


def test_session_token_carries_user_id():
    assert decode_session_token(create_session_token(42)) == 42


def test_session_lifetimes():
    assert session_lifetime(False) == timedelta(days=1)
    assert session_lifetime(True) == timedelta(days=30)


def test_expired_token_is_rejected():
    past = datetime.now(timezone.utc) - timedelta(days=2)
    token = jwt.encode(
        {"sub": "1", "iat": past, "exp": past + timedelta(days=1)},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )
    assert decode_session_token(token) is None


def test_foreign_signature_is_rejected():
    token = jwt.encode({"sub": "1"}, "some-other-secret", algorithm="HS256")
    assert decode_session_token(token) is None


def test_garbage_token_is_rejected():
    assert decode_session_token("not-a-jwt") is None


def test_non_numeric_subject_is_rejected():
    token = jwt.encode({"sub": "abc"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    assert decode_session_token(token) is None


def test_list_cache_key_is_stable():
    assert make_list_key("events", take=20, q=" Jazz ") == "events:list:q=jazz&take=20"
    assert make_list_key("hotels", city=None) == "hotels:list:"


def test_name_from_email():
    assert name_from_email("jane.doe-smith@example.com") == "Jane Doe Smith"
    assert name_from_email("x@example.com") == "X"
    assert name_from_email(None) is None
