from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from typing import List, Optional
from datetime import date

from bus_booking.dependencies import get_ledger
from bus_booking.bookings.ledger_service import ReservationLedger
from bus_booking.bookings.schemas import (
    Booking, BookingConfirmation, BookingCreateRequest, BookingUpdateRequest,
    BoardingStatusUpdate, SeatLayout, SeatMap, SeatOwnership, MobileQuota
)
from bus_booking.bookings.seats import (
    TOTAL_ROWS, SEATS_PER_ROW, TOTAL_SEATS, MAX_SEATS_PER_BOOKING, seat_rows
)

router = APIRouter()

# Seat Endpoints
@router.get("/seats", response_model=SeatLayout)
def get_seat_layout():
    """Get the seat layout of the bus"""
    return SeatLayout(
        total_rows=TOTAL_ROWS,
        seats_per_row=SEATS_PER_ROW,
        total_seats=TOTAL_SEATS,
        max_seats_per_booking=MAX_SEATS_PER_BOOKING,
        rows=seat_rows()
    )

@router.get("/seat-map", response_model=SeatMap)
def get_seat_map(
    travel_date: date = Query(..., description="Travel date"),
    editing_booking_id: Optional[str] = Query(None, description="Booking being edited; its seats show as available"),
    ledger: ReservationLedger = Depends(get_ledger)
):
    """Get occupancy of every seat for a date"""
    return ledger.get_seat_map(travel_date, editing_booking_id)

@router.get("/ownership", response_model=SeatOwnership)
def get_seat_ownership(
    travel_date: date = Query(..., description="Travel date"),
    ledger: ReservationLedger = Depends(get_ledger)
):
    """Get which booking holds each occupied seat"""
    return SeatOwnership(
        travel_date=travel_date,
        ownership=ledger.get_seat_ownership(travel_date)
    )

@router.get("/quota", response_model=MobileQuota)
def get_mobile_quota(
    mobile_number: str = Query(..., description="10 digit mobile number"),
    travel_date: date = Query(..., description="Travel date"),
    exclude_booking_id: Optional[str] = Query(None, description="Booking to leave out of the count"),
    ledger: ReservationLedger = Depends(get_ledger)
):
    """Get how many seats a mobile number holds on a date"""
    booked = ledger.get_seat_count_for_mobile(mobile_number, travel_date, exclude_booking_id)
    return MobileQuota(
        mobile_number=mobile_number,
        travel_date=travel_date,
        booked_seats=booked,
        remaining_seats=max(MAX_SEATS_PER_BOOKING - booked, 0)
    )

# Booking Management Endpoints
@router.get("", response_model=List[Booking])
def list_bookings(
    travel_date: Optional[date] = Query(None, description="Filter by travel date"),
    mobile_number: Optional[str] = Query(None, description="Filter by mobile number"),
    ledger: ReservationLedger = Depends(get_ledger)
):
    """List bookings, optionally for one date and/or one mobile number"""
    if travel_date is not None:
        bookings = ledger.get_bookings_for_date(travel_date)
    elif mobile_number is not None:
        bookings = ledger.get_bookings_for_mobile(mobile_number)
    else:
        bookings = list(ledger.snapshot())

    if travel_date is not None and mobile_number is not None:
        bookings = [b for b in bookings if b.mobile_number == mobile_number]

    return bookings

@router.post("", response_model=BookingConfirmation, status_code=status.HTTP_201_CREATED)
def create_booking(
    request: BookingCreateRequest,
    ledger: ReservationLedger = Depends(get_ledger)
):
    """Reserve seats for a mobile number on a date"""
    return ledger.create_booking(request.mobile_number, request.travel_date, request.seats)

@router.get("/{booking_id}", response_model=Booking)
def get_booking(
    booking_id: str,
    ledger: ReservationLedger = Depends(get_ledger)
):
    """Get booking details by ID"""
    booking = ledger.get_booking_by_id(booking_id)

    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found"
        )

    return booking

@router.put("/{booking_id}", response_model=BookingConfirmation)
def update_booking(
    booking_id: str,
    request: BookingUpdateRequest,
    ledger: ReservationLedger = Depends(get_ledger)
):
    """Replace the seats of a booking"""
    return ledger.update_booking(booking_id, request.seats)

@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(
    booking_id: str,
    ledger: ReservationLedger = Depends(get_ledger)
):
    """Cancel a booking; cancelling an unknown booking succeeds"""
    ledger.delete_booking(booking_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.patch("/{booking_id}/boarding", response_model=Booking)
def set_boarding_status(
    booking_id: str,
    request: BoardingStatusUpdate,
    ledger: ReservationLedger = Depends(get_ledger)
):
    """Mark a booking as boarded or pending"""
    booking = ledger.set_boarded(booking_id, request.is_boarded)

    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found"
        )

    return booking
