"""
Booking models: hotel stays and event tickets.

Key design decisions:
- Booking.user_id is nullable so anonymous demo flows can still write rows
- Status field allows cancellation without deleting records
- EventBooking.total_cost is computed once at write time (price * quantity)
"""

from sqlalchemy import Column, DateTime, Float, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from redroute.db.base import Base, TimestampMixin


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False, index=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    guests = Column(Integer, nullable=False, default=2)
    status = Column(String(20), nullable=False, default="confirmed")  # confirmed, cancelled
    contact_name = Column(String(255), nullable=True)
    contact_email = Column(String(255), nullable=True)

    # Relationships
    user = relationship("User", back_populates="bookings")
    hotel = relationship("Hotel", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("guests > 0", name="check_booking_guests_positive"),
        CheckConstraint("status IN ('confirmed', 'cancelled')", name="check_booking_status"),
        CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR start_date < end_date",
            name="check_booking_date_order",
        ),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user={self.user_id}, hotel={self.hotel_id}, status={self.status})>"


class EventBooking(Base, TimestampMixin):
    __tablename__ = "event_bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    total_cost = Column(Float, nullable=False)
    contact_name = Column(String(255), nullable=True)
    contact_email = Column(String(255), nullable=True)

    # Relationships
    user = relationship("User", back_populates="event_bookings")
    event = relationship("Event", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="check_event_booking_quantity_positive"),
    )

    def __repr__(self) -> str:
        return f"<EventBooking(id={self.id}, user={self.user_id}, event={self.event_id}, qty={self.quantity})>"
