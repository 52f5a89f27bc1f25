"""
Review models for hotels and events.

One review per (user, hotel) and per (user, event): the unique constraints
back the upsert in the review service.
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from redroute.db.base import Base, TimestampMixin


class HotelReview(Base, TimestampMixin):
    __tablename__ = "hotel_reviews"

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    title = Column(String(255), nullable=True)
    body = Column(Text, nullable=False)

    hotel = relationship("Hotel", back_populates="reviews")
    user = relationship("User", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("hotel_id", "user_id", name="uq_hotel_review_user"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="check_hotel_review_rating"),
    )

    def __repr__(self) -> str:
        return f"<HotelReview(id={self.id}, hotel={self.hotel_id}, user={self.user_id}, rating={self.rating})>"


class EventReview(Base, TimestampMixin):
    __tablename__ = "event_reviews"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    title = Column(String(255), nullable=True)
    body = Column(Text, nullable=False)

    event = relationship("Event", back_populates="reviews")
    user = relationship("User", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_review_user"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="check_event_review_rating"),
    )

    def __repr__(self) -> str:
        return f"<EventReview(id={self.id}, event={self.event_id}, user={self.user_id}, rating={self.rating})>"
