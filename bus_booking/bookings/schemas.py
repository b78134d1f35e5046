from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict
from datetime import datetime, date
from enum import Enum

class SeatStatus(str, Enum):
    """Seat status on the seat map"""
    AVAILABLE = "available"
    OCCUPIED = "occupied"

# Core booking entity
class Booking(BaseModel):
    """A reservation of 1-6 seats for one mobile number on one travel date"""
    booking_id: str
    travel_date: date
    mobile_number: str
    seats: List[str]
    is_boarded: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class BookingConfirmation(BaseModel):
    """Reservation receipt returned after create/update"""
    booking_id: str
    travel_date: date
    mobile_number: str
    seats: List[str]
    # False when the write could not be saved to the store
    persisted: bool = True

# Request models
# Field rules are enforced by the ledger so callers always get the first
# violated rule, in a fixed order.
class BookingCreateRequest(BaseModel):
    """Request to reserve seats"""
    travel_date: date
    mobile_number: str
    seats: List[str] = Field(default_factory=list)

class BookingUpdateRequest(BaseModel):
    """Request to replace the seats of a booking"""
    seats: List[str] = Field(default_factory=list)

class BoardingStatusUpdate(BaseModel):
    is_boarded: bool

# Seat query models
class SeatLayout(BaseModel):
    total_rows: int
    seats_per_row: int
    total_seats: int
    max_seats_per_booking: int
    rows: Dict[str, List[str]]

class SeatInfo(BaseModel):
    seat_id: str
    position: int
    status: SeatStatus
    booking_id: Optional[str] = None
    title: str

class SeatMap(BaseModel):
    """Occupancy of every seat for one travel date"""
    travel_date: date
    seats: List[SeatInfo]
    available_count: int
    occupied_count: int

class SeatOwnership(BaseModel):
    travel_date: date
    ownership: Dict[str, str]

class MobileQuota(BaseModel):
    mobile_number: str
    travel_date: date
    booked_seats: int
    remaining_seats: int
