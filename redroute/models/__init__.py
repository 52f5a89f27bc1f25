from redroute.models.user import User
from redroute.models.hotel import Hotel, HotelImage
from redroute.models.event import Event
from redroute.models.booking import Booking, EventBooking
from redroute.models.review import HotelReview, EventReview
from redroute.models.favorite import Favorite

__all__ = [
    "User", "Hotel", "HotelImage", "Event",
    "Booking", "EventBooking", "HotelReview", "EventReview", "Favorite",
]
