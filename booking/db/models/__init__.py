from booking.db.models.location import Location
from booking.db.models.booking import Booking
from booking.db.models.policy_override import PolicyOverride

__all__ = ["Location", "Booking", "PolicyOverride"]
