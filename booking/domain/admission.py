"""Booking admission: evaluate the effective policies and append on success.

A proposed booking is either admitted (appended to ``location.bookings``) or
rejected with ``PolicyViolationError``; a rejection leaves the location's
bookings exactly as they were.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from booking.domain.clock import utc_now
from booking.domain.policies import BookingPolicy
from booking.domain.resolver import EffectivePolicyResolver
from booking.errors import (
    DomainValidationError,
    LocationInactiveError,
    PolicyViolationError,
)

logger = logging.getLogger(__name__)


def find_violations(
    location,
    proposed,
    policies: Iterable[BookingPolicy],
    *,
    now: datetime,
) -> list[str]:
    """Return the keys of every policy that rejects ``proposed``, in evaluation order."""
    existing = list(location.bookings)
    return [
        policy.key.value
        for policy in policies
        if not policy.can_book(location, existing, proposed, now=now)
    ]


def admit(
    location,
    proposed,
    policies: Iterable[BookingPolicy],
    *,
    now: datetime,
):
    violations = find_violations(location, proposed, policies, now=now)
    if violations:
        logger.info(
            "Booking %s-%s rejected for location %s: %s",
            proposed.start_time,
            proposed.end_time,
            location.id,
            ", ".join(violations),
        )
        raise PolicyViolationError(violations)

    location.bookings.append(proposed)
    logger.info(
        "Booking %s-%s admitted for location %s",
        proposed.start_time,
        proposed.end_time,
        location.id,
    )
    return proposed


class BookingAdmission:
    def __init__(self, resolver: EffectivePolicyResolver | None = None):
        self.resolver = resolver or EffectivePolicyResolver()

    def book(self, location, proposed, *, now: datetime | None = None):
        """
        Admit ``proposed`` into ``location`` or refuse it.

        - Refuses inactive locations (LocationInactiveError)
        - Refuses empty or inverted intervals (DomainValidationError)
        - Resolves the effective policies; configuration errors propagate
        - Appends the booking only if every policy accepts it

        Raises:
            PolicyViolationError: If any effective policy rejects the booking
        """
        if not location.is_active:
            raise LocationInactiveError(f"Location {location.id} is not active")
        if proposed.start_time >= proposed.end_time:
            raise DomainValidationError(
                f"Start time ({proposed.start_time}) must precede end time ({proposed.end_time})"
            )

        policies = self.resolver.resolve(location)
        return admit(
            location,
            proposed,
            policies,
            now=now if now is not None else utc_now(),
        )
