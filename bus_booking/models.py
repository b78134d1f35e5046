from sqlalchemy import Column, Integer, String, Boolean, DateTime, Date, JSON
from bus_booking.database import Base

# ================================
# Bookings
# ================================
class BookingRecord(Base):
    __tablename__ = "bookings"
    
    booking_id = Column(String(32), primary_key=True, index=True)
    # storage order of the ledger
    position = Column(Integer, nullable=False, index=True)
    travel_date = Column(Date, nullable=False, index=True)
    mobile_number = Column(String(10), nullable=False, index=True)
    seats = Column(JSON, nullable=False)
    is_boarded = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
