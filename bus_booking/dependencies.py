from fastapi import Request

from bus_booking.bookings.ledger_service import ReservationLedger

def get_ledger(request: Request) -> ReservationLedger:
    """The process-wide ledger created by the application factory"""
    return request.app.state.ledger
