from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from booking.api.deps import get_db
from booking.domain.location_type import LocationType
from booking.schemas.location import (
    Location,
    LocationAvailabilityUpdate,
    LocationCreate,
    LocationUpdate,
)
from booking.schemas.pagination import PaginatedResponse
from booking.schemas.policy import EffectivePolicy
from booking.services.location import (
    create_location,
    get_effective_policies,
    get_location,
    list_locations,
    set_location_availability,
    update_location,
)

router = APIRouter(prefix="/locations", tags=["locations"])


@router.post("", response_model=Location, status_code=status.HTTP_201_CREATED)
def create_new_location(
    location_data: LocationCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new location. Locations start inactive and must be activated
    before they accept bookings.
    """
    location = create_location(
        db,
        name=location_data.name,
        address=location_data.address,
        description=location_data.description,
        capacity=location_data.capacity,
        open_time=location_data.open_time,
        close_time=location_data.close_time,
        location_type=location_data.location_type.value,
    )
    return Location.model_validate(location)


@router.get("", response_model=PaginatedResponse[Location])
def get_all_locations(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(100, ge=1, le=1000, description="Number of items per page"),
    location_type: LocationType | None = Query(
        None, description="Filter locations by type"
    ),
    available_now: bool = Query(
        False, description="Only active locations open at the current time"
    ),
    db: Session = Depends(get_db),
):
    """
    Get all locations with pagination and optional filters.
    """
    locations, total = list_locations(
        db,
        page=page,
        page_size=page_size,
        location_type=location_type.value if location_type else None,
        available_now=available_now,
    )
    return PaginatedResponse(
        items=[Location.model_validate(location) for location in locations],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{location_id}", response_model=Location)
def get_location_by_id(
    location_id: int,
    db: Session = Depends(get_db),
):
    """
    Get a location by ID.
    """
    return Location.model_validate(get_location(db, location_id))


@router.put("/{location_id}", response_model=Location)
def update_location_by_id(
    location_id: int,
    location_data: LocationUpdate,
    db: Session = Depends(get_db),
):
    """
    Update a location. Fields not included in the request are not updated.
    """
    update_data = location_data.model_dump(exclude_unset=True)
    if update_data.get("location_type") is not None:
        update_data["location_type"] = update_data["location_type"].value
    location = update_location(db, location_id=location_id, **update_data)
    return Location.model_validate(location)


@router.put("/{location_id}/availability", response_model=Location)
def update_location_availability(
    location_id: int,
    availability: LocationAvailabilityUpdate,
    db: Session = Depends(get_db),
):
    """
    Activate or deactivate a location.
    """
    location = set_location_availability(
        db, location_id=location_id, is_active=availability.is_active
    )
    return Location.model_validate(location)


@router.get("/{location_id}/policies", response_model=list[EffectivePolicy])
def get_location_policies(
    location_id: int,
    db: Session = Depends(get_db),
):
    """
    Get the effective booking policies of a location: its overrides first,
    then every default of its type that is not overridden.
    """
    return [
        EffectivePolicy(
            key=item.key,
            source="custom" if item.is_custom else "default",
            parameters=item.policy.parameters(),
        )
        for item in get_effective_policies(db, location_id)
    ]
