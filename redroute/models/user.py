"""
User model with secure password storage.
"""

from sqlalchemy import Column, Date, Integer, String
from sqlalchemy.orm import relationship

from redroute.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Always stored trimmed and lowercased
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    dob = Column(Date, nullable=True)

    # Relationships
    bookings = relationship("Booking", back_populates="user")
    event_bookings = relationship("EventBooking", back_populates="user")

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part).strip()

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
