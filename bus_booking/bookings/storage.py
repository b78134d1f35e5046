from typing import List
from sqlalchemy.orm import sessionmaker

from bus_booking.models import BookingRecord
from bus_booking.bookings.schemas import Booking

class BookingStore:
    """SQLAlchemy-backed persistence for the reservation ledger.

    The ledger keeps the authoritative state in memory; the store only
    loads it once at startup and receives the whole list after every
    mutation.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def load(self) -> List[Booking]:
        """Load all bookings in storage order"""
        with self.session_factory() as db:
            records = db.query(BookingRecord).order_by(BookingRecord.position).all()
            return [Booking.model_validate(record) for record in records]

    def save(self, bookings: List[Booking]) -> None:
        """Replace the stored bookings with ``bookings`` in one transaction"""
        with self.session_factory() as db:
            with db.begin():
                db.query(BookingRecord).delete()
                db.add_all([
                    BookingRecord(
                        booking_id=booking.booking_id,
                        position=position,
                        travel_date=booking.travel_date,
                        mobile_number=booking.mobile_number,
                        seats=list(booking.seats),
                        is_boarded=booking.is_boarded,
                        created_at=booking.created_at,
                        updated_at=booking.updated_at
                    )
                    for position, booking in enumerate(bookings)
                ])
