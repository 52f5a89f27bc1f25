"""
Event model.

Key design decisions:
- `capacity` caps the ticket quantity of a single booking
- `rating` is denormalized from event_reviews, same as hotels
- Index on `starts_at` since listings are ordered by start time
"""

from sqlalchemy import Column, Integer, String, DateTime, Float, Text, Index, CheckConstraint
from sqlalchemy.orm import relationship

from redroute.db.base import Base, TimestampMixin


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    starts_at = Column(DateTime(timezone=True), nullable=False)
    price = Column(Float, nullable=False)
    capacity = Column(Integer, nullable=False)
    image_url = Column(String(1024), nullable=True)
    image_alt = Column(String(255), nullable=True)
    rating = Column(Float, nullable=True)

    # Relationships
    bookings = relationship("EventBooking", back_populates="event")
    reviews = relationship("EventReview", back_populates="event", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_event_capacity_positive"),
        Index("ix_events_starts_at", "starts_at"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name}, capacity={self.capacity})>"
