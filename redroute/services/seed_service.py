"""
Demo data seeding for local and preview environments.
Idempotent: does nothing once any hotel exists.
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.models.event import Event
from redroute.models.hotel import Hotel, HotelImage
from redroute.core.logging import get_logger

logger = get_logger(__name__)

HOTELS = [
    {
        "name": "Skyline Luxe Hotel", "city": "Doha", "country": "Qatar", "price": 189,
        "capacity": 2, "rating": 4.9,
        "description": "Glass-and-steel views with an infinity pool on the 30th.",
        "images": [("/images/featured_hotel.avif", "Skyline Luxe")],
    },
    {
        "name": "Coastal Escape Villa", "city": "Bali", "country": "Indonesia", "price": 259,
        "capacity": 2, "rating": 4.8,
        "description": "Private beach access, sunset deck and outdoor cinema.",
        "images": [("/images/featured_villa.jpeg", "Coastal Villa")],
    },
    {
        "name": "Downtown Creative Loft", "city": "Barcelona", "country": "Spain", "price": 139,
        "capacity": 2, "rating": 4.7,
        "description": "Industrial-chic loft with skyline terrace.",
        "images": [("/images/featured_loft.avif", "Loft")],
    },
    {
        "name": "Marina View Suites", "city": "Dubai", "country": "UAE", "price": 210,
        "capacity": 4, "rating": 4.6,
        "description": "Two-bedroom suites over the marina promenade.",
        "images": [("/images/marina_view.jpg", "Marina View Suites")],
    },
    {
        "name": "Left Bank Boutique", "city": "Paris", "country": "France", "price": 240,
        "capacity": 2, "rating": 4.7,
        "description": "Boutique rooms a short walk from the Seine.",
        "images": [("/images/left_bank.jpg", "Left Bank Boutique")],
    },
    {
        "name": "Bosphorus Heritage Hotel", "city": "Istanbul", "country": "Turkey", "price": 160,
        "capacity": 3, "rating": 4.5,
        "description": "Restored Ottoman mansion on the waterfront.",
        "images": [("/images/bosphorus.jpg", "Bosphorus Heritage")],
    },
    {
        "name": "Midtown Signature", "city": "New York", "country": "USA", "price": 320,
        "capacity": 5, "rating": 4.6,
        "description": "Family suites steps from the theatres.",
        "images": [("/images/midtown.jpg", "Midtown Signature")],
    },
    {
        "name": "Alpine Panorama Lodge", "city": "Zurich", "country": "Switzerland", "price": 230,
        "capacity": 6, "rating": 4.8,
        "description": "Chalet lodge with lake and mountain views.",
        "images": [("/images/alpine.jpg", "Alpine Panorama Lodge")],
    },
]

EVENTS = [
    {
        "name": "Harbour Lights Jazz Night", "location": "Sydney",
        "description": "Open-air jazz on the harbour.", "days_ahead": 14,
        "price": 45, "capacity": 200, "image_url": "/images/events/jazz.jpg",
    },
    {
        "name": "City Concert Live", "location": "London",
        "description": "Stadium concert with guest headliners.", "days_ahead": 30,
        "price": 89, "capacity": 500, "image_url": "/images/events/concert.jpg",
    },
    {
        "name": "Street Food Festival", "location": "Barcelona",
        "description": "Three days of street food and music.", "days_ahead": 45,
        "price": 15, "capacity": 1000, "image_url": "/images/events/food.jpg",
    },
]


async def seed_demo_data(db: AsyncSession) -> bool:
    """Insert demo hotels and events. Returns False if data was already present."""
    existing = (await db.execute(select(func.count(Hotel.id)))).scalar()
    if existing:
        logger.info("seed_skipped", hotels=existing)
        return False

    for spec in HOTELS:
        fields = {key: value for key, value in spec.items() if key != "images"}
        hotel = Hotel(**fields)
        hotel.images = [
            HotelImage(url=url, alt=alt, position=position)
            for position, (url, alt) in enumerate(spec["images"])
        ]
        db.add(hotel)

    now = datetime.now(timezone.utc)
    for spec in EVENTS:
        fields = {key: value for key, value in spec.items() if key != "days_ahead"}
        db.add(Event(
            **fields,
            image_alt=spec["name"],
            starts_at=now + timedelta(days=spec["days_ahead"]),
        ))

    await db.flush()
    logger.info("seed_completed", hotels=len(HOTELS), events=len(EVENTS))
    return True
