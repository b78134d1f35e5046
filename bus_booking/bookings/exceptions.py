class BookingError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(BookingError):
    """A booking request broke one of the seat, date, mobile or quota rules"""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class NotFoundError(BookingError):
    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__("Booking not found", status_code=404)
