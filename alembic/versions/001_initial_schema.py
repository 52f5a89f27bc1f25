"""Initial schema: users, hotels, events, bookings, reviews, favorites.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Hotels and their gallery
    op.create_table(
        "hotels",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("city", sa.String(120), nullable=False),
        sa.Column("country", sa.String(120), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default=sa.text("2")),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("capacity > 0", name="check_hotel_capacity_positive"),
    )
    op.create_index("ix_hotels_id", "hotels", ["id"])
    # City filter on the list endpoint
    op.create_index("ix_hotels_city", "hotels", ["city"])

    op.create_table(
        "hotel_images",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("hotel_id", sa.Integer(), sa.ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False),
        sa.Column("url", sa.String(1024), nullable=False),
        sa.Column("alt", sa.String(255), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
    )
    op.create_index("ix_hotel_images_id", "hotel_images", ["id"])
    op.create_index("ix_hotel_images_hotel_id", "hotel_images", ["hotel_id"])

    # Events table
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("image_url", sa.String(1024), nullable=True),
        sa.Column("image_alt", sa.String(255), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("capacity > 0", name="check_event_capacity_positive"),
    )
    op.create_index("ix_events_id", "events", ["id"])
    # Listings are ordered by start time
    op.create_index("ix_events_starts_at", "events", ["starts_at"])

    # Hotel bookings
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("hotel_id", sa.Integer(), sa.ForeignKey("hotels.id"), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("guests", sa.Integer(), nullable=False, server_default=sa.text("2")),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'confirmed'")),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("guests > 0", name="check_booking_guests_positive"),
        sa.CheckConstraint("status IN ('confirmed', 'cancelled')", name="check_booking_status"),
        sa.CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR start_date < end_date",
            name="check_booking_date_order",
        ),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_hotel_id", "bookings", ["hotel_id"])

    # Event ticket bookings
    op.create_table(
        "event_bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("total_cost", sa.Float(), nullable=False),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("quantity > 0", name="check_event_booking_quantity_positive"),
    )
    op.create_index("ix_event_bookings_id", "event_bookings", ["id"])
    op.create_index("ix_event_bookings_user_id", "event_bookings", ["user_id"])
    op.create_index("ix_event_bookings_event_id", "event_bookings", ["event_id"])

    # Reviews: one per user per hotel / event
    op.create_table(
        "hotel_reviews",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("hotel_id", sa.Integer(), sa.ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("hotel_id", "user_id", name="uq_hotel_review_user"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="check_hotel_review_rating"),
    )
    op.create_index("ix_hotel_reviews_id", "hotel_reviews", ["id"])
    op.create_index("ix_hotel_reviews_hotel_id", "hotel_reviews", ["hotel_id"])
    op.create_index("ix_hotel_reviews_user_id", "hotel_reviews", ["user_id"])

    op.create_table(
        "event_reviews",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_review_user"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="check_event_review_rating"),
    )
    op.create_index("ix_event_reviews_id", "event_reviews", ["id"])
    op.create_index("ix_event_reviews_event_id", "event_reviews", ["event_id"])
    op.create_index("ix_event_reviews_user_id", "event_reviews", ["user_id"])

    # Favorites: user_id NULL marks an anonymous favorite
    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("hotel_id", sa.Integer(), sa.ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_favorites_id", "favorites", ["id"])
    op.create_index("ix_favorites_hotel_user", "favorites", ["hotel_id", "user_id"])


def downgrade() -> None:
    op.drop_table("favorites")
    op.drop_table("event_reviews")
    op.drop_table("hotel_reviews")
    op.drop_table("event_bookings")
    op.drop_table("bookings")
    op.drop_table("events")
    op.drop_table("hotel_images")
    op.drop_table("hotels")
    op.drop_table("users")
