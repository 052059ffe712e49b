from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from booking.api.deps import get_booking_admission, get_db
from booking.domain.admission import BookingAdmission
from booking.schemas.booking import Booking, BookingCreate
from booking.schemas.error import ErrorResponse
from booking.services.booking import book_location, list_bookings

router = APIRouter(prefix="/locations/{location_id}/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=Booking,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
def create_booking(
    location_id: int,
    booking_data: BookingCreate,
    db: Session = Depends(get_db),
    admission: BookingAdmission = Depends(get_booking_admission),
):
    """
    Book a location for [start_time, end_time).

    The booking is accepted only if every effective policy of the location
    accepts it; otherwise a 409 lists the violated policy keys.
    """
    booking = book_location(
        db,
        location_id=location_id,
        start_time=booking_data.start_time,
        end_time=booking_data.end_time,
        admission=admission,
    )
    return Booking.model_validate(booking)


@router.get("", response_model=list[Booking])
def get_location_bookings(
    location_id: int,
    db: Session = Depends(get_db),
):
    """
    Get the bookings of a location, earliest first.
    """
    return [Booking.model_validate(b) for b in list_bookings(db, location_id)]
