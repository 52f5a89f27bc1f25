"""
Tests for hotel booking: capacity, dates, guest coercion and identity fallbacks.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from redroute.core.config import get_settings
from redroute.models.booking import Booking
from redroute.models.user import User

settings = get_settings()

STAY = {"startDate": "2026-11-01", "endDate": "2026-11-04"}


@pytest.mark.asyncio
async def test_book_hotel(client: AsyncClient, user_headers, test_user, test_hotel):
    """Booking within capacity is stored as confirmed for the caller."""
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, "guests": 2, **STAY},
        headers=user_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["ok"] is True
    booking = data["booking"]
    assert booking["hotelId"] == test_hotel.id
    assert booking["userId"] == test_user.id
    assert booking["guests"] == 2
    assert booking["status"] == "confirmed"


@pytest.mark.asyncio
async def test_book_hotel_over_capacity(client: AsyncClient, user_headers, test_hotel, fetch_all):
    """Too many guests returns 400 and writes nothing."""
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, "guests": 3, **STAY},
        headers=user_headers,
    )
    assert response.status_code == 400
    assert response.json() == {
        "ok": False,
        "error": "Capacity exceeded: this hotel allows up to 2 guests",
    }
    assert await fetch_all(select(Booking)) == []


@pytest.mark.asyncio
async def test_book_unknown_hotel(client: AsyncClient, user_headers):
    response = await client.post(
        "/api/bookings",
        json={"hotelId": 9999, **STAY},
        headers=user_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Hotel not found"


@pytest.mark.asyncio
async def test_book_missing_hotel_id(client: AsyncClient, user_headers):
    response = await client.post("/api/bookings", json=STAY, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "hotelId is required"


@pytest.mark.asyncio
async def test_book_end_before_start(client: AsyncClient, user_headers, test_hotel):
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, "startDate": "2026-11-04", "endDate": "2026-11-01"},
        headers=user_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "startDate must be before endDate"


@pytest.mark.asyncio
async def test_book_accepts_check_in_aliases(client: AsyncClient, user_headers, test_hotel):
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, "checkIn": "2026-11-01", "checkOut": "2026-11-02"},
        headers=user_headers,
    )
    assert response.status_code == 201
    assert response.json()["booking"]["startDate"].startswith("2026-11-01")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "guests, expected",
    [(None, 2), ("abc", 1), (0, 1), (-3, 1), (1.9, 1), ("2", 2)],
)
async def test_guest_coercion(client: AsyncClient, user_headers, test_hotel, guests, expected):
    """Missing guests default to 2; junk becomes 1; fractions truncate."""
    payload = {"hotelId": test_hotel.id, **STAY}
    if guests is not None:
        payload["guests"] = guests
    response = await client.post("/api/bookings", json=payload, headers=user_headers)
    assert response.status_code == 201
    assert response.json()["booking"]["guests"] == expected


@pytest.mark.asyncio
async def test_book_with_body_user_id(client: AsyncClient, test_user, test_hotel):
    """Without cookie or headers the body userId identifies the caller."""
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, "userId": test_user.id, **STAY},
    )
    assert response.status_code == 201
    assert response.json()["booking"]["userId"] == test_user.id


@pytest.mark.asyncio
async def test_session_cookie_beats_headers(client: AsyncClient, session_cookie, test_user, user_factory, test_hotel):
    other = await user_factory("other@example.com")
    client.cookies.set(settings.SESSION_COOKIE, session_cookie[settings.SESSION_COOKIE])
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, **STAY},
        headers={"x-user-id": str(other.id)},
    )
    assert response.status_code == 201
    assert response.json()["booking"]["userId"] == test_user.id


@pytest.mark.asyncio
async def test_email_header_identifies_caller(client: AsyncClient, test_user, test_hotel):
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, **STAY},
        headers={"x-user-email": "TEST@Example.com"},
    )
    assert response.status_code == 201
    assert response.json()["booking"]["userId"] == test_user.id


@pytest.mark.asyncio
async def test_anonymous_booking_uses_demo_user(client: AsyncClient, test_hotel, fetch_all):
    """Anonymous bookings attach to a single demo user created on first use."""
    for _ in range(2):
        response = await client.post("/api/bookings", json={"hotelId": test_hotel.id, **STAY})
        assert response.status_code == 201

    demo_users = await fetch_all(select(User).where(User.email == settings.DEMO_USER_EMAIL))
    assert len(demo_users) == 1
    bookings = await fetch_all(select(Booking))
    assert {b.user_id for b in bookings} == {demo_users[0].id}


@pytest.mark.asyncio
async def test_anonymous_booking_rejected_when_disabled(client: AsyncClient, test_hotel, monkeypatch, fetch_all):
    monkeypatch.setattr(settings, "ANONYMOUS_BOOKINGS_ENABLED", False)
    response = await client.post("/api/bookings", json={"hotelId": test_hotel.id, **STAY})
    assert response.status_code == 401
    assert response.json()["error"] == "Sign in to book"
    assert await fetch_all(select(Booking)) == []


@pytest.mark.asyncio
async def test_contact_fields_blank_as_absent(client: AsyncClient, user_headers, test_hotel):
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, "contactName": "", "contactEmail": "ana@example.com", **STAY},
        headers=user_headers,
    )
    booking = response.json()["booking"]
    assert booking["contactName"] is None
    assert booking["contactEmail"] == "ana@example.com"


@pytest.mark.asyncio
async def test_list_and_cancel_bookings(client: AsyncClient, user_headers, test_hotel):
    created = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, **STAY},
        headers=user_headers,
    )
    booking_id = created.json()["booking"]["id"]

    listed = await client.get("/api/bookings", headers=user_headers)
    assert [b["id"] for b in listed.json()["bookings"]] == [booking_id]

    cancelled = await client.delete(f"/api/bookings/{booking_id}", headers=user_headers)
    assert cancelled.status_code == 200
    assert cancelled.json()["booking"]["status"] == "cancelled"

    again = await client.delete(f"/api/bookings/{booking_id}", headers=user_headers)
    assert again.status_code == 400


@pytest.mark.asyncio
async def test_list_bookings_requires_identity(client: AsyncClient, db_session):
    response = await client.get("/api/bookings")
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "dates",
    [
        {"startDate": "2026-11-01"},
        {"endDate": "2026-11-04"},
        {"startDate": "next tuesday", "endDate": "2026-11-04"},
    ],
)
async def test_book_incomplete_or_bad_dates(client: AsyncClient, user_headers, test_hotel, dates, fetch_all):
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, **dates},
        headers=user_headers,
    )
    assert response.status_code == 400
    assert response.json()["ok"] is False
    assert await fetch_all(select(Booking)) == []


@pytest.mark.asyncio
async def test_book_without_dates(client: AsyncClient, user_headers, test_hotel):
    response = await client.post("/api/bookings", json={"hotelId": test_hotel.id}, headers=user_headers)
    assert response.status_code == 201
    assert response.json()["booking"]["startDate"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("hotel_id", [10**19, 2**31, "12345678901234567890", 0, 1.5, "٣"])
async def test_book_out_of_range_hotel_id(client: AsyncClient, user_headers, hotel_id):
    """Ids that cannot be a key are rejected before touching the database."""
    response = await client.post(
        "/api/bookings",
        json={"hotelId": hotel_id, **STAY},
        headers=user_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "hotelId must be a positive integer"


@pytest.mark.asyncio
@pytest.mark.parametrize("as_type", [str, float])
async def test_book_accepts_integral_hotel_id(client: AsyncClient, user_headers, test_hotel, as_type):
    response = await client.post(
        "/api/bookings",
        json={"hotelId": as_type(test_hotel.id), **STAY},
        headers=user_headers,
    )
    assert response.status_code == 201
    assert response.json()["booking"]["hotelId"] == test_hotel.id


@pytest.mark.asyncio
async def test_out_of_range_identity_is_ignored(client: AsyncClient, test_hotel, monkeypatch):
    """Huge header or body user ids are treated as no identity."""
    monkeypatch.setattr(settings, "ANONYMOUS_BOOKINGS_ENABLED", False)
    response = await client.post(
        "/api/bookings",
        json={"hotelId": test_hotel.id, "userId": 10**19, **STAY},
        headers={"x-user-id": str(10**19)},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_cancel_out_of_range_booking(client: AsyncClient, user_headers):
    response = await client.delete(f"/api/bookings/{10**19}", headers=user_headers)
    assert response.status_code == 400
