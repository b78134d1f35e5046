import logging
import re
import secrets
import threading
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from bus_booking.bookings.exceptions import NotFoundError, ValidationError
from bus_booking.bookings.schemas import (
    Booking, BookingConfirmation, SeatInfo, SeatMap, SeatStatus
)
from bus_booking.bookings.seats import (
    MAX_SEATS_PER_BOOKING, get_all_seats, get_seat_position, is_valid_seat
)
from bus_booking.bookings.storage import BookingStore

logger = logging.getLogger(__name__)

_MOBILE_PATTERN = re.compile(r"[0-9]{10}")

Subscriber = Callable[[Tuple[Booking, ...]], None]

class ReservationLedger:
    """Authoritative in-memory set of bookings for the bus.

    Every write is validated against the seat-conflict and daily-quota
    rules before it is applied, then handed to the store and announced to
    subscribers. One ledger is created per process by the application
    factory; request handlers share it from the threadpool, so writes run
    one at a time under the ledger lock.
    """

    def __init__(
        self,
        store: Optional[BookingStore] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.store = store
        self._clock = clock
        self._bookings: List[Booking] = []
        self._subscribers: List[Subscriber] = []
        self.last_save_failed = False
        # held across validate, mutate and save of every write
        self._lock = threading.RLock()
        self._load()

    # ================================
    # Storage handling
    # ================================

    def _load(self):
        if self.store is None:
            return
        try:
            self._bookings = self.store.load()
        except SQLAlchemyError as e:
            logger.error("Failed to load bookings: %s", e, exc_info=True)
            self._bookings = []
        logger.info("Loaded %d bookings", len(self._bookings))

    def _save(self) -> bool:
        """Persist the current state; failures are logged and reported, never raised"""
        if self.store is None:
            return True
        try:
            self.store.save(self._bookings)
        except SQLAlchemyError as e:
            logger.error("Failed to save bookings: %s", e, exc_info=True)
            self.last_save_failed = True
            return False
        self.last_save_failed = False
        return True

    def _commit(self) -> bool:
        persisted = self._save()
        self._notify()
        return persisted

    # ================================
    # Change notification
    # ================================

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback receiving a snapshot after every committed change.

        Returns a function that removes the callback again.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self):
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Booking subscriber %r failed", callback)

    def snapshot(self) -> Tuple[Booking, ...]:
        """Read-only copy of all bookings in storage order"""
        with self._lock:
            return tuple(b.model_copy(deep=True) for b in self._bookings)

    # ================================
    # Helpers
    # ================================

    def _today(self) -> date:
        return self._clock().date()

    def _generate_booking_id(self) -> str:
        existing = {b.booking_id for b in self._bookings}
        while True:
            millis = int(self._clock().timestamp() * 1000)
            booking_id = f"BK{millis}{secrets.randbelow(10000)}"
            if booking_id not in existing:
                return booking_id

    @staticmethod
    def _confirmation(booking: Booking, persisted: bool) -> BookingConfirmation:
        return BookingConfirmation(
            booking_id=booking.booking_id,
            travel_date=booking.travel_date,
            mobile_number=booking.mobile_number,
            seats=list(booking.seats),
            persisted=persisted
        )

    # ================================
    # Queries
    # ================================

    # Queries hand out copies; stored bookings only change through the
    # validated writes below.

    def _find(self, booking_id: str) -> Optional[Booking]:
        for booking in self._bookings:
            if booking.booking_id == booking_id:
                return booking
        return None

    def get_seat_ownership(self, travel_date: date) -> Dict[str, str]:
        """Seat id -> booking id for every occupied seat on a date"""
        ownership = {}
        with self._lock:
            for booking in self._bookings:
                if booking.travel_date == travel_date:
                    for seat in booking.seats:
                        ownership[seat] = booking.booking_id
        return ownership

    def get_seat_count_for_mobile(
        self,
        mobile_number: str,
        travel_date: date,
        exclude_booking_id: Optional[str] = None
    ) -> int:
        with self._lock:
            return sum(
                len(b.seats) for b in self._bookings
                if b.mobile_number == mobile_number
                and b.travel_date == travel_date
                and b.booking_id != exclude_booking_id
            )

    def get_bookings_for_date(self, travel_date: date) -> List[Booking]:
        with self._lock:
            return [b.model_copy(deep=True) for b in self._bookings if b.travel_date == travel_date]

    def get_bookings_for_mobile(self, mobile_number: str) -> List[Booking]:
        with self._lock:
            return [b.model_copy(deep=True) for b in self._bookings if b.mobile_number == mobile_number]

    def get_booking_by_id(self, booking_id: str) -> Optional[Booking]:
        with self._lock:
            booking = self._find(booking_id)
            return booking.model_copy(deep=True) if booking else None

    def get_seat_map(
        self,
        travel_date: date,
        editing_booking_id: Optional[str] = None
    ) -> SeatMap:
        """Occupancy of every seat on a date.

        Seats held by ``editing_booking_id`` are shown as available so the
        booking being edited can re-select them.
        """
        ownership = self.get_seat_ownership(travel_date)
        seats = []
        for seat_id in get_all_seats():
            owner = ownership.get(seat_id)
            if owner is not None and owner != editing_booking_id:
                seats.append(SeatInfo(
                    seat_id=seat_id,
                    position=get_seat_position(seat_id),
                    status=SeatStatus.OCCUPIED,
                    booking_id=owner,
                    title=f"Seat {seat_id} - Already Booked (Ref: {owner})"
                ))
            else:
                seats.append(SeatInfo(
                    seat_id=seat_id,
                    position=get_seat_position(seat_id),
                    status=SeatStatus.AVAILABLE,
                    title=f"Seat {seat_id} - Available"
                ))

        occupied = sum(1 for s in seats if s.status == SeatStatus.OCCUPIED)
        return SeatMap(
            travel_date=travel_date,
            seats=seats,
            available_count=len(seats) - occupied,
            occupied_count=occupied
        )

    # ================================
    # Validation (ownership aware)
    # ================================

    def validate_booking(
        self,
        mobile_number: str,
        travel_date: date,
        seats: List[str],
        existing_booking_id: Optional[str] = None
    ) -> Optional[str]:
        """Return the message of the first rule the request breaks, or None"""

        if not seats:
            return "Please select at least one seat"

        if len(seats) > MAX_SEATS_PER_BOOKING:
            return f"Maximum {MAX_SEATS_PER_BOOKING} seats allowed"

        if travel_date < self._today():
            return "Please select a future date"

        if not isinstance(mobile_number, str) or not _MOBILE_PATTERN.fullmatch(mobile_number):
            return "Invalid mobile number"

        already_booked = self.get_seat_count_for_mobile(
            mobile_number, travel_date, existing_booking_id
        )
        if already_booked + len(seats) > MAX_SEATS_PER_BOOKING:
            return f"You can book only {MAX_SEATS_PER_BOOKING} seats per day"

        ownership = self.get_seat_ownership(travel_date)
        conflicts = []
        owners = []
        for seat in seats:
            owner = ownership.get(seat)
            if owner is None or owner == existing_booking_id or seat in conflicts:
                continue
            conflicts.append(seat)
            if owner not in owners:
                owners.append(owner)
        if conflicts:
            return f"Seat(s) {', '.join(conflicts)} already booked (Ref: {', '.join(owners)})"

        invalid = [seat for seat in seats if not is_valid_seat(seat)]
        if invalid:
            return f"Invalid seat(s) {', '.join(map(str, invalid))}"

        duplicates = sorted({seat for seat in seats if seats.count(seat) > 1})
        if duplicates:
            return f"Duplicate seat(s) {', '.join(duplicates)}"

        return None

    # ================================
    # CRUD operations
    # ================================

    def create_booking(
        self,
        mobile_number: str,
        travel_date: date,
        seats: List[str]
    ) -> BookingConfirmation:
        """Reserve seats for a mobile number on a date"""

        with self._lock:
            error = self.validate_booking(mobile_number, travel_date, seats)
            if error:
                logger.info("Booking rejected for %s on %s: %s", mobile_number, travel_date, error)
                raise ValidationError(error)

            now = self._clock()
            booking = Booking(
                booking_id=self._generate_booking_id(),
                travel_date=travel_date,
                mobile_number=mobile_number,
                seats=sorted(seats),
                is_boarded=False,
                created_at=now,
                updated_at=now
            )
            self._bookings.append(booking)
            logger.info(
                "Created booking %s for %s on %s: %s",
                booking.booking_id, mobile_number, travel_date, ", ".join(booking.seats)
            )

            persisted = self._commit()
            return self._confirmation(booking, persisted)

    def update_booking(self, booking_id: str, seats: List[str]) -> BookingConfirmation:
        """Replace the seats of a booking; mobile number and date stay fixed"""

        with self._lock:
            booking = self._find(booking_id)
            if not booking:
                raise NotFoundError(booking_id)

            error = self.validate_booking(
                booking.mobile_number,
                booking.travel_date,
                seats,
                booking_id
            )
            if error:
                logger.info("Update of booking %s rejected: %s", booking_id, error)
                raise ValidationError(error)

            booking.seats = sorted(seats)
            booking.updated_at = self._clock()
            logger.info("Updated booking %s: %s", booking_id, ", ".join(booking.seats))

            persisted = self._commit()
            return self._confirmation(booking, persisted)

    def delete_booking(self, booking_id: str) -> None:
        """Remove a booking; unknown ids are ignored"""
        with self._lock:
            remaining = [b for b in self._bookings if b.booking_id != booking_id]
            if len(remaining) == len(self._bookings):
                logger.debug("Delete of unknown booking %s ignored", booking_id)
                return

            self._bookings = remaining
            logger.info("Deleted booking %s", booking_id)
            self._commit()

    def set_boarded(self, booking_id: str, boarded: bool) -> Optional[Booking]:
        """Set the boarding flag; returns None when the booking doesn't exist"""
        with self._lock:
            booking = self._find(booking_id)
            if not booking:
                logger.warning("Boarding status change for unknown booking %s ignored", booking_id)
                return None

            booking.is_boarded = boarded
            booking.updated_at = self._clock()
            logger.info("Booking %s marked as %s", booking_id, "boarded" if boarded else "pending")

            self._commit()
            return booking.model_copy(deep=True)

    def clear_all_bookings(self) -> None:
        with self._lock:
            self._bookings = []
            logger.info("Cleared all bookings")
            self._commit()
