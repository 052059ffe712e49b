from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator

from booking.domain.clock import as_utc


class Booking(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    start_time: datetime
    end_time: datetime
    created_at: datetime
    updated_at: datetime


class BookingCreate(BaseModel):
    """Half-open interval [start_time, end_time). Naive datetimes are read as UTC."""

    start_time: datetime
    end_time: datetime

    @model_validator(mode="after")
    def validate_start_before_end(self):
        """Ensure the interval is not empty."""
        if as_utc(self.end_time) <= as_utc(self.start_time):
            raise ValueError(
                f"end_time ({self.end_time}) must be after start_time ({self.start_time})"
            )
        return self
