from datetime import datetime, time

from sqlalchemy.orm import Session

import booking.repositories.location as location_repo
from booking.db.models.location import Location as LocationModel
from booking.domain.catalog import policy_catalog
from booking.domain.clock import as_utc, utc_now
from booking.domain.location_type import LocationType
from booking.domain.resolver import EffectivePolicyResolver, ResolvedPolicy
from booking.errors import DomainValidationError, NotFoundError, UnknownLocationTypeError


def get_location(db: Session, location_id: int) -> LocationModel:
    """
    Get a location or fail.

    Raises:
        NotFoundError: If location doesn't exist
    """
    location = location_repo.get_location_by_id(db, location_id)
    if not location:
        raise NotFoundError(f"Location with id {location_id} not found")
    return location


def _validate_location_type(location_type: str) -> str:
    """Only types with a registered default policy set can be assigned to a location."""
    try:
        policy_catalog.defaults_for(location_type)
    except UnknownLocationTypeError as e:
        raise DomainValidationError(str(e)) from e
    return LocationType(location_type).value


def list_locations(
    db: Session,
    page: int = 1,
    page_size: int = 100,
    location_type: str | None = None,
    available_now: bool = False,
    now: datetime | None = None,
) -> tuple[list[LocationModel], int]:
    """
    List locations with optional filters.

    - available_now: only active locations open at the current time of day
      (OperatingHours defines "open", including windows that wrap midnight)
    """
    available_at = None
    if available_now:
        available_at = as_utc(now) if now is not None else utc_now()
    return location_repo.get_all_locations_paginated(
        db,
        page=page,
        page_size=page_size,
        location_type=location_type,
        available_at=available_at,
    )


def create_location(
    db: Session,
    name: str,
    address: str,
    capacity: int,
    open_time: time,
    close_time: time,
    location_type: str,
    description: str = "",
) -> LocationModel:
    """
    Create a location with domain validation.

    - Validates the location type has default policies
    - Locations start inactive; they must be activated before accepting bookings

    Raises:
        DomainValidationError: If the location type is unknown
    """
    location_type = _validate_location_type(location_type)
    return location_repo.create_location(
        db,
        name=name,
        address=address,
        description=description,
        capacity=capacity,
        open_time=open_time,
        close_time=close_time,
        location_type=location_type,
    )


def update_location(db: Session, location_id: int, **update_fields) -> LocationModel:
    """
    Update a location with domain validation.

    - Validates location exists
    - Validates the new location type, if provided

    Only fields explicitly provided in update_fields will be updated.
    """
    get_location(db, location_id)

    if update_fields.get("location_type") is not None:
        update_fields["location_type"] = _validate_location_type(
            update_fields["location_type"]
        )

    update_dict = {k: v for k, v in update_fields.items() if v is not None}
    return location_repo.update_location(db, location_id=location_id, **update_dict)


def set_location_availability(
    db: Session, location_id: int, is_active: bool
) -> LocationModel:
    """Activate or deactivate a location."""
    get_location(db, location_id)
    return location_repo.update_location(db, location_id=location_id, is_active=is_active)


def get_effective_policies(db: Session, location_id: int) -> list[ResolvedPolicy]:
    """
    Resolve the policies a booking for this location is evaluated against.

    Configuration errors (bad override settings, unknown location type) propagate.
    """
    location = get_location(db, location_id)
    return EffectivePolicyResolver().resolve_detailed(location)
