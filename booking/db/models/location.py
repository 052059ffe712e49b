from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, Time
from sqlalchemy.orm import relationship

from booking.db.base import Base
from booking.domain.clock import as_utc, utc_now
from booking.domain.operating_hours import OperatingHours


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(300), nullable=False)
    description = Column(Text, nullable=False, default="")
    capacity = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)
    open_time = Column(Time, nullable=False)
    close_time = Column(Time, nullable=False)
    location_type = Column(String(50), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    # Relationships
    bookings = relationship(
        "Booking",
        backref="location",
        order_by="Booking.start_time",
        cascade="all, delete-orphan",
    )
    policy_overrides = relationship(
        "PolicyOverride",
        backref="location",
        order_by="PolicyOverride.id",
        cascade="all, delete-orphan",
    )

    @property
    def operating_hours(self) -> OperatingHours:
        return OperatingHours(open_time=self.open_time, close_time=self.close_time)

    def is_available_at(self, moment: datetime) -> bool:
        if not self.is_active:
            return False
        return self.operating_hours.contains(as_utc(moment).time())
