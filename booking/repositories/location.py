from datetime import datetime, time

from sqlalchemy.orm import Session

from booking.db.models.location import Location as LocationModel
from booking.domain.operating_hours import OperatingHours
from booking.errors import NotFoundError


def get_location_by_id(db: Session, location_id: int) -> LocationModel | None:
    """Get a location by ID."""
    return db.query(LocationModel).filter(LocationModel.id == location_id).first()


def get_location_for_update(db: Session, location_id: int) -> LocationModel | None:
    """
    Get a location by ID and lock its row until the transaction ends.

    Used to serialize booking admissions per location. SQLite ignores the lock.
    """
    return (
        db.query(LocationModel)
        .filter(LocationModel.id == location_id)
        .with_for_update()
        .first()
    )


def get_all_locations_paginated(
    db: Session,
    page: int = 1,
    page_size: int = 100,
    location_type: str | None = None,
    available_at: datetime | None = None,
) -> tuple[list[LocationModel], int]:
    """
    Get all locations with pagination and optional filters.

    Args:
        page: Page number (1-indexed)
        page_size: Number of items per page
        location_type: Optional filter by location type tag
        available_at: Optional moment; keeps only active locations whose operating
                      hours contain its time of day (rule centralized in OperatingHours)

    Returns:
        Tuple of (list of locations, total count)
    """
    query = db.query(LocationModel)

    if location_type is not None:
        query = query.filter(LocationModel.location_type == location_type)

    if available_at is not None:
        query = query.filter(
            LocationModel.is_active.is_(True),
            OperatingHours.sqlalchemy_open_predicate(
                open_col=LocationModel.open_time,
                close_col=LocationModel.close_time,
                time_of_day=available_at.time(),
            ),
        )

    total = query.count()
    skip = (page - 1) * page_size
    locations = query.order_by(LocationModel.id).offset(skip).limit(page_size).all()
    return locations, total


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
    """Create a new, inactive location in the database. Pure data access - no business logic."""
    db_location = LocationModel(
        name=name,
        address=address,
        description=description,
        capacity=capacity,
        open_time=open_time,
        close_time=close_time,
        location_type=location_type,
        is_active=False,
    )
    db.add(db_location)
    db.commit()
    db.refresh(db_location)
    return db_location


def update_location(db: Session, location_id: int, **kwargs) -> LocationModel:
    """
    Update a location. Only updates fields that are explicitly provided.

    Fields not provided are not updated.
    """
    location = get_location_by_id(db, location_id)
    if not location:
        raise NotFoundError("Location not found")

    for field in (
        "name",
        "address",
        "description",
        "capacity",
        "open_time",
        "close_time",
        "location_type",
        "is_active",
    ):
        if field in kwargs:
            setattr(location, field, kwargs[field])

    db.commit()
    db.refresh(location)
    return location
