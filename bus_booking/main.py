"""
Application entry point.

The app is built by a factory so importing this module opens no database:

    uvicorn bus_booking.main:create_app --factory
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bus_booking.config import settings
from bus_booking.database import make_engine, make_session_factory, init_db
from bus_booking.bookings import router as bookings_router
from bus_booking.bookings.exceptions import BookingError
from bus_booking.bookings.ledger_service import ReservationLedger
from bus_booking.bookings.storage import BookingStore
from bus_booking.boarding import router as boarding_router

logger = logging.getLogger(__name__)

def create_ledger(database_url: Optional[str] = None) -> ReservationLedger:
    """Build the ledger on top of the configured database"""
    engine = make_engine(database_url)
    init_db(engine)
    return ReservationLedger(store=BookingStore(make_session_factory(engine)))

def create_app(ledger: Optional[ReservationLedger] = None) -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Bus seat reservation and boarding sequence API",
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # one ledger per process
    app.state.ledger = ledger if ledger is not None else create_ledger()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        bookings_router,
        prefix=f"{settings.API_V1_STR}/bookings",
        tags=["Seat Booking"]
    )

    app.include_router(
        boarding_router,
        prefix=f"{settings.API_V1_STR}/boarding",
        tags=["Boarding"]
    )

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, ex: BookingError):
        return JSONResponse(status_code=ex.status_code, content={"detail": ex.message})

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        ledger_state = app.state.ledger
        return {
            "status": "degraded" if ledger_state.last_save_failed else "healthy",
            "bookings": len(ledger_state.snapshot())
        }

    logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
    return app

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bus_booking.main:create_app", factory=True, host="0.0.0.0", port=8000)
