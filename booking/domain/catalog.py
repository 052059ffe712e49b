"""Default policy sets per location type.

Extending the catalog is a code change: add a ``LocationType`` member and its
ordered default policies below.
"""

from __future__ import annotations

from datetime import time, timedelta

from booking.domain.location_type import LocationType
from booking.domain.policies import (
    AdvanceNoticePolicy,
    BookingPolicy,
    GapPolicy,
    MaxDurationPolicy,
    NoOverlapPolicy,
    OpeningHoursPolicy,
)
from booking.errors import UnknownLocationTypeError


class PolicyCatalog:
    def __init__(self, defaults: dict[LocationType, tuple[BookingPolicy, ...]]):
        self._defaults = dict(defaults)

    def defaults_for(self, location_type: LocationType | str) -> list[BookingPolicy]:
        """Return the ordered default policies of ``location_type``.

        Raises:
            UnknownLocationTypeError: If the type has no registered defaults
        """
        try:
            key = LocationType(location_type)
        except ValueError as e:
            raise UnknownLocationTypeError(
                f"Unknown location type: {location_type!r}"
            ) from e
        if key not in self._defaults:
            raise UnknownLocationTypeError(
                f"No default policies registered for location type {key.value!r}"
            )
        return list(self._defaults[key])


policy_catalog = PolicyCatalog(
    {
        LocationType.HOTEL: (
            AdvanceNoticePolicy(advance_time=timedelta(days=2)),
            GapPolicy(gap_time=timedelta(days=1)),
            NoOverlapPolicy(),
        ),
        LocationType.VENUE: (
            NoOverlapPolicy(),
            OpeningHoursPolicy(open_time=time(8, 0), close_time=time(18, 0)),
            MaxDurationPolicy(max_duration=timedelta(days=7)),
            AdvanceNoticePolicy(advance_time=timedelta(hours=1)),
            GapPolicy(gap_time=timedelta(hours=1)),
        ),
    }
)
