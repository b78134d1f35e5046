"""
Farthest-seat-first boarding sequencer.

Each booking boards as one group that needs a fixed settle time. Groups are
called in order of decreasing depth (the farthest seat they have to reach),
so a group never has to pass one that is still settling in front of it and
all groups are modelled as seated within a single settle interval.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence

from bus_booking.bookings.schemas import Booking
from bus_booking.bookings.seats import get_farthest_seat_position
from bus_booking.boarding.schemas import (
    BoardingSequenceEntry, BoardingProgress, BoardingSummary
)

BOARDING_TIME_PER_PASSENGER = 60  # seconds

def calculate_optimal_boarding_sequence(bookings: Sequence[Booking]) -> List[BoardingSequenceEntry]:
    """Order bookings back to front; ties keep their input order"""
    depths = [get_farthest_seat_position(b.seats) for b in bookings]
    # sorted() is stable, so equal depths stay in input order
    order = sorted(range(len(bookings)), key=lambda i: depths[i], reverse=True)
    return [
        BoardingSequenceEntry(
            sequence=rank,
            booking=bookings[i],
            seat_depth=depths[i],
            estimated_boarding_time=BOARDING_TIME_PER_PASSENGER
        )
        for rank, i in enumerate(order, start=1)
    ]

def calculate_total_boarding_time(bookings: Sequence[Booking]) -> int:
    return BOARDING_TIME_PER_PASSENGER if bookings else 0

def calculate_sequential_boarding_time(bookings: Sequence[Booking]) -> int:
    """Baseline where one group boards at a time"""
    return len(bookings) * BOARDING_TIME_PER_PASSENGER

def calculate_time_saved(bookings: Sequence[Booking]) -> int:
    return calculate_sequential_boarding_time(bookings) - calculate_total_boarding_time(bookings)

def calculate_efficiency(bookings: Sequence[Booking]) -> int:
    """Percentage of the sequential time saved, rounded half up"""
    sequential = calculate_sequential_boarding_time(bookings)
    if sequential == 0:
        return 0
    optimal = calculate_total_boarding_time(bookings)
    percentage = Decimal(sequential - optimal) * 100 / Decimal(sequential)
    return int(percentage.quantize(Decimal('1'), rounding=ROUND_HALF_UP))

def calculate_boarding_progress(bookings: Sequence[Booking]) -> BoardingProgress:
    total = len(bookings)
    boarded = sum(1 for b in bookings if b.is_boarded)
    return BoardingProgress(
        total_passengers=total,
        boarded_passengers=boarded,
        boarding_progress=(boarded / total) * 100 if total > 0 else 0.0
    )

def format_duration(seconds: int) -> str:
    """Format seconds as '45s', '2m' or '2m 30s'"""
    if seconds < 60:
        return f"{seconds}s"
    minutes, remaining_seconds = divmod(seconds, 60)
    return f"{minutes}m {remaining_seconds}s" if remaining_seconds > 0 else f"{minutes}m"

def build_boarding_summary(travel_date: date, bookings: Sequence[Booking]) -> BoardingSummary:
    total = calculate_total_boarding_time(bookings)
    sequential = calculate_sequential_boarding_time(bookings)
    saved = sequential - total
    return BoardingSummary(
        travel_date=travel_date,
        sequence=calculate_optimal_boarding_sequence(bookings),
        total_boarding_time=total,
        sequential_boarding_time=sequential,
        time_saved=saved,
        efficiency=calculate_efficiency(bookings),
        total_boarding_time_display=format_duration(total),
        sequential_boarding_time_display=format_duration(sequential),
        time_saved_display=format_duration(saved),
        progress=calculate_boarding_progress(bookings)
    )
