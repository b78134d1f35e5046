"""
Seat Booking Module

This module holds the reservation ledger of the bus. It includes:

- Seat layout (15 rows A-O, 4 seats per row)
- Seat ownership and occupancy per travel date
- Per-mobile daily quota of 6 seats
- Validated create, edit and cancel of bookings
- Boarding status tracking
- Persistence of the ledger through SQLAlchemy

Key Components:
- seats.py: Seat identifiers and their linear positions
- ledger_service.py: Reservation ledger with ownership-aware validation
- storage.py: Database load/save of the ledger
- router.py: FastAPI endpoints for seats and bookings
- schemas.py: Pydantic models for booking data structures
- exceptions.py: Validation and not-found errors
"""

from .router import router
from .ledger_service import ReservationLedger
from .storage import BookingStore
from .exceptions import BookingError, ValidationError, NotFoundError
from .schemas import (
    Booking, BookingConfirmation, BookingCreateRequest, BookingUpdateRequest,
    BoardingStatusUpdate, SeatMap, SeatInfo, SeatStatus
)

__all__ = [
    "router",
    "ReservationLedger",
    "BookingStore",
    "BookingError",
    "ValidationError",
    "NotFoundError",
    "Booking",
    "BookingConfirmation",
    "BookingCreateRequest",
    "BookingUpdateRequest",
    "BoardingStatusUpdate",
    "SeatMap",
    "SeatInfo",
    "SeatStatus"
]
