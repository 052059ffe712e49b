"""Built-in booking policies.

A policy decides whether a location accepts a proposed booking given the
bookings it already holds. Bookings are half-open intervals
``[start_time, end_time)``; any object exposing those two attributes works,
so policies evaluate ORM rows and plain values alike.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from datetime import datetime, time, timedelta
from typing import Any, ClassVar

from booking.domain.operating_hours import OperatingHours
from booking.domain.policy_key import PolicyKey


class BookingPolicy(ABC):
    """A single admission rule. Implementations are immutable and side-effect free."""

    __slots__ = ()

    key: ClassVar[PolicyKey]

    @abstractmethod
    def can_book(
        self,
        location: Any,
        bookings: Sequence[Any],
        proposed: Any,
        *,
        now: datetime,
    ) -> bool:
        """Return True when ``proposed`` is acceptable alongside ``bookings``."""

    @classmethod
    @abstractmethod
    def from_settings(cls, settings: Any) -> "BookingPolicy":
        """Build a policy from an already validated settings model."""

    def parameters(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class NoOverlapPolicy(BookingPolicy):
    """Rejects bookings that share any instant with an existing booking.

    Touching endpoints are allowed: a booking may start exactly when another ends.
    """

    key: ClassVar[PolicyKey] = PolicyKey.NO_OVERLAP

    def can_book(self, location, bookings, proposed, *, now):
        return all(
            proposed.end_time <= existing.start_time
            or proposed.start_time >= existing.end_time
            for existing in bookings
        )

    @classmethod
    def from_settings(cls, settings) -> "NoOverlapPolicy":
        return cls()


@dataclass(frozen=True, slots=True)
class GapPolicy(BookingPolicy):
    """Requires ``gap_time`` of idle time after the most recent prior booking.

    The reference booking is the one with the latest end among those ending at
    or before the proposed end, so a booking ending inside the proposed interval
    leaves a negative gap. With no such booking the proposal is accepted.
    """

    key: ClassVar[PolicyKey] = PolicyKey.GAP

    gap_time: timedelta

    def can_book(self, location, bookings, proposed, *, now):
        prior_ends = [
            existing.end_time
            for existing in bookings
            if existing.end_time <= proposed.end_time
        ]
        if not prior_ends:
            return True
        return proposed.start_time - max(prior_ends) >= self.gap_time

    @classmethod
    def from_settings(cls, settings) -> "GapPolicy":
        return cls(gap_time=settings.gap_time)


@dataclass(frozen=True, slots=True)
class MaxDurationPolicy(BookingPolicy):
    key: ClassVar[PolicyKey] = PolicyKey.MAX_DURATION

    max_duration: timedelta

    def can_book(self, location, bookings, proposed, *, now):
        return proposed.end_time - proposed.start_time <= self.max_duration

    @classmethod
    def from_settings(cls, settings) -> "MaxDurationPolicy":
        return cls(max_duration=settings.max_duration)


@dataclass(frozen=True, slots=True)
class AdvanceNoticePolicy(BookingPolicy):
    """Requires the booking to start at least ``advance_time`` after ``now``.

    ``now`` is the evaluation clock supplied on every call, never stored.
    """

    key: ClassVar[PolicyKey] = PolicyKey.ADVANCE_NOTICE

    advance_time: timedelta

    def can_book(self, location, bookings, proposed, *, now):
        return proposed.start_time - now >= self.advance_time

    @classmethod
    def from_settings(cls, settings) -> "AdvanceNoticePolicy":
        return cls(advance_time=settings.advance_time)


@dataclass(frozen=True, slots=True)
class OpeningHoursPolicy(BookingPolicy):
    """Accepts bookings whose start and end times of day fall inside the window.

    Only the two endpoints are checked; a multi-day booking whose endpoints are
    inside the window is accepted. Windows with ``open_time > close_time`` wrap
    midnight, following ``OperatingHours``.
    """

    key: ClassVar[PolicyKey] = PolicyKey.OPENING_HOURS

    open_time: time
    close_time: time

    def can_book(self, location, bookings, proposed, *, now):
        window = OperatingHours(open_time=self.open_time, close_time=self.close_time)
        return window.contains(proposed.start_time.time()) and window.contains(
            proposed.end_time.time()
        )

    @classmethod
    def from_settings(cls, settings) -> "OpeningHoursPolicy":
        return cls(open_time=settings.open, close_time=settings.close)
