"""
Tests for event listing, search and detail.
"""

from datetime import datetime, timezone, timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient

from redroute.models.event import Event
from redroute.services.event_service import clamp_take


@pytest_asyncio.fixture
async def many_events(db_session) -> list[Event]:
    base = datetime.now(timezone.utc) + timedelta(days=1)
    events = [
        Event(name="Fado Night", location="Lisbon", starts_at=base + timedelta(days=3), price=30, capacity=10),
        Event(name="Street Food Fair", location="Porto", starts_at=base + timedelta(days=1), price=0, capacity=50,
              description="Jazz bands and food trucks"),
        Event(name="Jazz Brunch", location="Braga", starts_at=base + timedelta(days=2), price=18, capacity=8),
        Event(name="100% Techno", location="Faro", starts_at=base + timedelta(days=4), price=40, capacity=100),
    ]
    db_session.add_all(events)
    await db_session.commit()
    return events


@pytest.mark.asyncio
async def test_list_events_ordered_by_start(client: AsyncClient, many_events):
    response = await client.get("/api/events")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["total"] == 4
    assert data["take"] == 20
    assert [e["name"] for e in data["events"]] == [
        "Street Food Fair", "Jazz Brunch", "Fado Night", "100% Techno",
    ]
    assert "max-age=60" in response.headers["cache-control"]


@pytest.mark.asyncio
async def test_search_events(client: AsyncClient, many_events):
    """Search covers name, location and description, case-insensitively."""
    response = await client.get("/api/events", params={"q": "JAZZ"})
    names = [e["name"] for e in response.json()["events"]]
    assert names == ["Street Food Fair", "Jazz Brunch"]

    response = await client.get("/api/events", params={"q": "lisbon"})
    assert [e["name"] for e in response.json()["events"]] == ["Fado Night"]


@pytest.mark.asyncio
async def test_search_escapes_wildcards(client: AsyncClient, many_events):
    response = await client.get("/api/events", params={"q": "100%"})
    assert [e["name"] for e in response.json()["events"]] == ["100% Techno"]


@pytest.mark.asyncio
async def test_take_limits_page_not_total(client: AsyncClient, many_events):
    response = await client.get("/api/events", params={"take": 1})
    data = response.json()
    assert len(data["events"]) == 1
    assert data["total"] == 4
    assert data["take"] == 1


@pytest.mark.asyncio
async def test_take_is_capped(client: AsyncClient, many_events):
    response = await client.get("/api/events", params={"take": 500})
    assert response.status_code == 200
    assert response.json()["take"] == 50


def test_clamp_take():
    assert clamp_take(None) == 20
    assert clamp_take(7) == 7
    assert clamp_take(51) == 50
    assert clamp_take(0) == 1


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, test_event):
    response = await client.get(f"/api/events/{test_event.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Jazz on the Quay"
    assert data["capacity"] == 4
    assert data["reviews"] == []
    assert data["reviewsAvg"] is None
    assert data["reviewsCount"] == 0


@pytest.mark.asyncio
async def test_get_event_not_found(client: AsyncClient, db_session):
    response = await client.get("/api/events/99999")
    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": "Event not found"}


@pytest.mark.asyncio
async def test_get_event_bad_id(client: AsyncClient, db_session):
    response = await client.get("/api/events/not-a-number")
    assert response.status_code == 400
    assert response.json()["ok"] is False
