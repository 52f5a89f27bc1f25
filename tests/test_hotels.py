"""
Tests for hotel listing and detail.
"""

import pytest
from httpx import AsyncClient

from redroute.models.hotel import Hotel


@pytest.mark.asyncio
async def test_list_hotels(client: AsyncClient, test_hotel):
    response = await client.get("/api/hotels")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["total"] == 1
    assert data["cached"] is False
    hotel = data["hotels"][0]
    assert hotel["name"] == "Harbour View"
    # Gallery comes back in position order
    assert [image["alt"] for image in hotel["images"]] == ["Lobby", "Pool"]
    assert response.headers["cache-control"].startswith("public")


@pytest.mark.asyncio
async def test_filter_hotels_by_city(client: AsyncClient, db_session, test_hotel):
    db_session.add(Hotel(name="Canal House", city="Amsterdam", price=150, capacity=3))
    await db_session.commit()

    response = await client.get("/api/hotels", params={"city": "LIS"})
    assert [h["name"] for h in response.json()["hotels"]] == ["Harbour View"]

    response = await client.get("/api/hotels", params={"city": "  "})
    assert response.json()["total"] == 2


@pytest.mark.asyncio
async def test_get_hotel(client: AsyncClient, test_hotel):
    response = await client.get(f"/api/hotels/{test_hotel.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == test_hotel.id
    assert data["capacity"] == 2
    assert len(data["images"]) == 2
    assert data["reviewsCount"] == 0


@pytest.mark.asyncio
async def test_get_hotel_not_found(client: AsyncClient, db_session):
    response = await client.get("/api/hotels/12345")
    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": "Hotel not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/hotels/{id}", "/api/hotels/{id}/reviews", "/api/events/{id}", "/api/events/{id}/reviews"])
@pytest.mark.parametrize("entity_id", [10**19, 2**31, 0])
async def test_out_of_range_path_id(client: AsyncClient, db_session, path, entity_id):
    response = await client.get(path.format(id=entity_id))
    assert response.status_code == 400
    assert response.json()["ok"] is False


@pytest.mark.asyncio
async def test_largest_key_is_a_plain_miss(client: AsyncClient, db_session):
    response = await client.get(f"/api/hotels/{2**31 - 1}")
    assert response.status_code == 404
