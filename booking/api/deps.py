from booking.db import SessionLocal
from booking.domain.admission import BookingAdmission


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_booking_admission() -> BookingAdmission:
    """Admission workflow with the static policy registry and default catalog."""
    return BookingAdmission()
