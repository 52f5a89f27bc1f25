"""
Tests for the favorite toggle and the explicit set-state endpoint.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from redroute.models.favorite import Favorite


@pytest.mark.asyncio
async def test_toggle_alternates(client: AsyncClient, user_headers, test_user, test_hotel, fetch_all):
    """POST flips the state: created (201), removed (200), created again."""
    payload = {"hotelId": test_hotel.id}

    first = await client.post("/api/favorites", json=payload, headers=user_headers)
    assert first.status_code == 201
    assert first.json()["favorited"] is True
    assert first.json()["favorite"]["userId"] == test_user.id

    second = await client.post("/api/favorites", json=payload, headers=user_headers)
    assert second.status_code == 200
    assert second.json()["favorited"] is False
    assert second.json()["removed"] is True
    assert await fetch_all(select(Favorite)) == []

    third = await client.post("/api/favorites", json=payload, headers=user_headers)
    assert third.status_code == 201


@pytest.mark.asyncio
async def test_anonymous_favorites_are_separate(client: AsyncClient, user_headers, test_hotel, fetch_all):
    await client.post("/api/favorites", json={"hotelId": test_hotel.id}, headers=user_headers)
    anonymous = await client.post("/api/favorites", json={"hotelId": test_hotel.id})
    assert anonymous.status_code == 201
    assert anonymous.json()["favorite"]["userId"] is None
    assert len(await fetch_all(select(Favorite))) == 2


@pytest.mark.asyncio
async def test_set_favorite_is_idempotent(client: AsyncClient, user_headers, test_hotel, fetch_all):
    payload = {"hotelId": test_hotel.id, "favorited": True}
    for _ in range(2):
        response = await client.put("/api/favorites", json=payload, headers=user_headers)
        assert response.status_code == 200
        assert response.json()["favorited"] is True
    assert len(await fetch_all(select(Favorite))) == 1

    for _ in range(2):
        response = await client.put(
            "/api/favorites",
            json={"hotelId": test_hotel.id, "favorited": False},
            headers=user_headers,
        )
        assert response.status_code == 200
        assert response.json()["favorited"] is False
    assert await fetch_all(select(Favorite)) == []


@pytest.mark.asyncio
async def test_favorite_unknown_hotel(client: AsyncClient, user_headers):
    response = await client.post("/api/favorites", json={"hotelId": 555}, headers=user_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_favorite_invalid_hotel_id(client: AsyncClient, user_headers):
    response = await client.post("/api/favorites", json={"hotelId": "abc"}, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "hotelId must be a positive integer"


@pytest.mark.asyncio
async def test_list_favorites_with_hotel(client: AsyncClient, user_headers, test_user, test_hotel):
    await client.post("/api/favorites", json={"hotelId": test_hotel.id}, headers=user_headers)
    await client.post("/api/favorites", json={"hotelId": test_hotel.id})

    response = await client.get("/api/favorites", params={"userId": test_user.id})
    assert response.status_code == 200
    favorites = response.json()["favorites"]
    assert len(favorites) == 1
    assert favorites[0]["hotel"]["name"] == "Harbour View"
    assert len(favorites[0]["hotel"]["images"]) == 2

    everyone = await client.get("/api/favorites")
    assert len(everyone.json()["favorites"]) == 2
