from redroute.schemas.common import CamelModel, OkResponse, ErrorResponse
from redroute.schemas.user import UserCreate, UserLogin, UserResponse, AuthResponse
from redroute.schemas.hotel import HotelResponse, HotelListResponse, HotelDetailResponse
from redroute.schemas.event import EventResponse, EventListResponse, EventDetailResponse
from redroute.schemas.review import ReviewCreate, ReviewResponse, ReviewListResponse, ReviewUpsertResponse
from redroute.schemas.booking import (
    HotelBookingCreate, BookingResponse, BookingCreatedResponse, BookingListResponse,
    EventBookingCreate, EventBookingResponse, EventBookingCreatedResponse, EventBookingListResponse,
)
from redroute.schemas.favorite import (
    FavoriteToggle, FavoriteSet, FavoriteResponse, FavoriteListResponse, FavoriteStateResponse,
)

__all__ = [
    "CamelModel", "OkResponse", "ErrorResponse",
    "UserCreate", "UserLogin", "UserResponse", "AuthResponse",
    "HotelResponse", "HotelListResponse", "HotelDetailResponse",
    "EventResponse", "EventListResponse", "EventDetailResponse",
    "ReviewCreate", "ReviewResponse", "ReviewListResponse", "ReviewUpsertResponse",
    "HotelBookingCreate", "BookingResponse", "BookingCreatedResponse", "BookingListResponse",
    "EventBookingCreate", "EventBookingResponse", "EventBookingCreatedResponse", "EventBookingListResponse",
    "FavoriteToggle", "FavoriteSet", "FavoriteResponse", "FavoriteListResponse", "FavoriteStateResponse",
]
