from sqlalchemy.orm import Session

from booking.db.models.booking import Booking as BookingModel


def get_bookings_by_location_id(db: Session, location_id: int) -> list[BookingModel]:
    """Get all bookings for a specific location, earliest first."""
    return (
        db.query(BookingModel)
        .filter(BookingModel.location_id == location_id)
        .order_by(BookingModel.start_time, BookingModel.id)
        .all()
    )
