import logging
from datetime import datetime

from sqlalchemy.orm import Session

import booking.repositories.booking as booking_repo
import booking.repositories.location as location_repo
from booking.db.models.booking import Booking as BookingModel
from booking.domain.admission import BookingAdmission
from booking.domain.clock import as_utc
from booking.errors import DomainError, NotFoundError

logger = logging.getLogger(__name__)


def book_location(
    db: Session,
    location_id: int,
    start_time: datetime,
    end_time: datetime,
    now: datetime | None = None,
    admission: BookingAdmission | None = None,
) -> BookingModel:
    """
    Book a location for the half-open interval [start_time, end_time).

    - Locks the location row so concurrent admissions for it are serialized
    - Validates location exists and is active
    - Evaluates the location's effective policies (overrides + type defaults)
    - Persists the booking only if every policy accepts it

    Raises:
        NotFoundError: If location doesn't exist
        LocationInactiveError: If location has not been activated
        DomainValidationError: If start_time does not precede end_time
        PolicyViolationError: If any effective policy rejects the booking
        ConfigurationError: If the location's policy configuration is broken
    """
    location = location_repo.get_location_for_update(db, location_id)
    if not location:
        raise NotFoundError(f"Location with id {location_id} not found")

    # Not attached to the location yet: admission appends it only on success.
    proposed = BookingModel(
        location_id=location.id,
        start_time=as_utc(start_time),
        end_time=as_utc(end_time),
    )

    try:
        (admission or BookingAdmission()).book(
            location, proposed, now=as_utc(now) if now is not None else None
        )
    except DomainError:
        # Release the row lock; nothing was changed.
        db.rollback()
        raise

    db.commit()
    db.refresh(proposed)
    logger.info("Created booking %s for location %s", proposed.id, location_id)
    return proposed


def list_bookings(db: Session, location_id: int) -> list[BookingModel]:
    """
    List bookings of a location, earliest first.

    Raises:
        NotFoundError: If location doesn't exist
    """
    if not location_repo.get_location_by_id(db, location_id):
        raise NotFoundError(f"Location with id {location_id} not found")
    return booking_repo.get_bookings_by_location_id(db, location_id)
