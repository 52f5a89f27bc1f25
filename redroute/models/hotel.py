"""
Hotel model with an ordered image gallery.

Key design decisions:
- `rating` is a denormalized average of hotel_reviews.rating, rewritten by
  the review service after every review upsert
- `capacity` is the maximum guest count a single booking may request
- Index on `city` for the list filter
"""

from sqlalchemy import Column, Float, ForeignKey, Index, Integer, String, Text, CheckConstraint
from sqlalchemy.orm import relationship

from redroute.db.base import Base, TimestampMixin


class Hotel(Base, TimestampMixin):
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    city = Column(String(120), nullable=False)
    country = Column(String(120), nullable=True)
    price = Column(Float, nullable=False)
    capacity = Column(Integer, nullable=False, default=2)
    rating = Column(Float, nullable=True)
    description = Column(Text, nullable=True)

    # Relationships
    images = relationship(
        "HotelImage",
        back_populates="hotel",
        lazy="selectin",
        order_by=lambda: [HotelImage.position, HotelImage.id],
        cascade="all, delete-orphan",
    )
    reviews = relationship("HotelReview", back_populates="hotel", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="hotel")

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_hotel_capacity_positive"),
        Index("ix_hotels_city", "city"),
    )

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, name={self.name}, city={self.city})>"


class HotelImage(Base, TimestampMixin):
    __tablename__ = "hotel_images"

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(1024), nullable=False)
    alt = Column(String(255), nullable=True)
    position = Column(Integer, nullable=False, default=0)

    hotel = relationship("Hotel", back_populates="images")

    def __repr__(self) -> str:
        return f"<HotelImage(id={self.id}, hotel={self.hotel_id}, url={self.url})>"
