from fastapi import APIRouter, Depends, Query
from datetime import date

from bus_booking.dependencies import get_ledger
from bus_booking.bookings.ledger_service import ReservationLedger
from bus_booking.boarding.schemas import BoardingSummary
from bus_booking.boarding.service import build_boarding_summary

router = APIRouter()

@router.get("/sequence", response_model=BoardingSummary)
def get_boarding_sequence(
    travel_date: date = Query(..., description="Travel date"),
    ledger: ReservationLedger = Depends(get_ledger)
):
    """Get the back-to-front boarding order and timing for a date"""
    bookings = ledger.get_bookings_for_date(travel_date)
    return build_boarding_summary(travel_date, bookings)
