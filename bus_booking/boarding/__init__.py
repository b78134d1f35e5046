"""
Boarding Module

Computes the order in which the groups booked for a date should board and
the timing figures shown on the boarding screen.

Key Components:
- service.py: Farthest-seat-first sequencing and timing metrics
- router.py: FastAPI endpoint for the boarding sequence
- schemas.py: Pydantic models for the sequence and summary
"""

from .router import router
from .service import (
    BOARDING_TIME_PER_PASSENGER,
    calculate_optimal_boarding_sequence,
    calculate_total_boarding_time,
    calculate_sequential_boarding_time,
    calculate_efficiency,
    build_boarding_summary
)
from .schemas import BoardingSequenceEntry, BoardingSummary

__all__ = [
    "router",
    "BOARDING_TIME_PER_PASSENGER",
    "calculate_optimal_boarding_sequence",
    "calculate_total_boarding_time",
    "calculate_sequential_boarding_time",
    "calculate_efficiency",
    "build_boarding_summary",
    "BoardingSequenceEntry",
    "BoardingSummary"
]
