"""
Favorite model: a hotel bookmarked by a user, or anonymously when user_id is NULL.
Existence of the row is the favorited state.
"""

from sqlalchemy import Column, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship

from redroute.db.base import Base, TimestampMixin


class Favorite(Base, TimestampMixin):
    __tablename__ = "favorites"

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    hotel = relationship("Hotel")

    __table_args__ = (
        Index("ix_favorites_hotel_user", "hotel_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Favorite(id={self.id}, hotel={self.hotel_id}, user={self.user_id})>"
