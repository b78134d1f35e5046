from pydantic import BaseModel
from typing import List
from datetime import date

from bus_booking.bookings.schemas import Booking

class BoardingSequenceEntry(BaseModel):
    """Position of one booking in the boarding order"""
    sequence: int
    booking: Booking
    seat_depth: int
    estimated_boarding_time: int

class BoardingProgress(BaseModel):
    total_passengers: int
    boarded_passengers: int
    boarding_progress: float

class BoardingSummary(BaseModel):
    """Boarding order and timing metrics for one travel date"""
    travel_date: date
    sequence: List[BoardingSequenceEntry]
    total_boarding_time: int
    sequential_boarding_time: int
    time_saved: int
    efficiency: int
    total_boarding_time_display: str
    sequential_boarding_time_display: str
    time_saved_display: str
    progress: BoardingProgress
