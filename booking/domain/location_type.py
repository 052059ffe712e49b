from enum import Enum


class LocationType(str, Enum):
    """Known location type tags. Persisted as plain strings on locations."""

    HOTEL = "hotel"
    VENUE = "venue"
