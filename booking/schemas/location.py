from datetime import datetime, time

from pydantic import BaseModel, ConfigDict, Field

from booking.domain.location_type import LocationType


class Location(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    description: str
    capacity: int
    is_active: bool
    open_time: time
    close_time: time
    location_type: str
    created_at: datetime
    updated_at: datetime


class LocationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    capacity: int = Field(..., gt=0, description="Capacity must be greater than 0")
    open_time: time
    close_time: time = Field(
        ..., description="May be earlier than open_time for locations open through midnight"
    )
    location_type: LocationType = LocationType.HOTEL


class LocationUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    address: str | None = Field(None, min_length=1, max_length=300)
    description: str | None = None
    capacity: int | None = Field(None, gt=0, description="Capacity must be greater than 0")
    open_time: time | None = None
    close_time: time | None = None
    location_type: LocationType | None = None


class LocationAvailabilityUpdate(BaseModel):
    is_active: bool
