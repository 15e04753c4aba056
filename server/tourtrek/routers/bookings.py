"""Booking router for booking operations."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.database import encode_document, get_db
from ..core.dependencies import ensure_owner, get_current_user
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..schemas.booking import BookingCreatedResponse, CreateBookingRequest, UpdateBookingStatusRequest
from ..schemas.common import PROBLEM_RESPONSES
from ..schemas.results import UpdateResult
from ..services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings"], responses=PROBLEM_RESPONSES)

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)
AUTH_DEPENDENCY = Depends(get_current_user)


@router.post("/bookings", response_model=BookingCreatedResponse)
async def create_booking(
    request: CreateBookingRequest,
    current_user: dict[str, Any] = AUTH_DEPENDENCY,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """
    Create a booking and count it against its tour package.

    Returns ``{"bookingResult": ..., "packageUpdateResult": ...}``. The
    booking is kept even when the count update fails.
    """
    booking_service = BookingService(db)

    try:
        result = await booking_service.create_booking(request)

        logger.info(
            "Booking created successfully",
            extra={
                "booking_id": result.booking_result.inserted_id,
                "tour_id": request.tour_id,
                "package_matched": result.package_update_result.matched_count,
            }
        )

        return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in booking creation",
            extra={
                "tour_id": request.tour_id,
                "buyer_email": request.buyer_email,
                "caller": current_user.get("email"),
                "error": str(e)
            },
            exc_info=True
        )
        raise InternalServerError(detail=str(e)) from e


@router.get("/my-bookings/{email}")
async def list_my_bookings(
    email: str,
    current_user: dict[str, Any] = AUTH_DEPENDENCY,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """Bookings made by the caller."""
    ensure_owner(current_user, email)
    booking_service = BookingService(db)

    try:
        bookings = await booking_service.list_buyer_bookings(email)
        return JSONResponse(status_code=200, content=encode_document(bookings))

    except Exception as e:
        logger.error(
            "Unexpected error listing bookings",
            extra={"buyer_email": email, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail=str(e)) from e


@router.patch("/my-bookings/{email}/{booking_id}", response_model=UpdateResult)
async def update_my_booking_status(
    email: str,
    booking_id: str,
    request: UpdateBookingStatusRequest,
    current_user: dict[str, Any] = AUTH_DEPENDENCY,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """Change the status of one of the caller's own bookings."""
    ensure_owner(current_user, email)
    return await _update_status(db, booking_id, request.status, buyer_email=email)


@router.patch("/bookings/{booking_id}", response_model=UpdateResult)
async def update_booking_status(
    booking_id: str,
    request: UpdateBookingStatusRequest,
    current_user: dict[str, Any] = AUTH_DEPENDENCY,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """Change the status of any booking, e.g. a guide confirming or cancelling."""
    return await _update_status(db, booking_id, request.status)


async def _update_status(
    db: AsyncIOMotorDatabase,
    booking_id: str,
    status: str,
    buyer_email: str | None = None,
) -> JSONResponse:
    booking_service = BookingService(db)

    try:
        result = await booking_service.update_status(booking_id, status, buyer_email=buyer_email)
        return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))

    except Exception as e:
        logger.error(
            "Unexpected error updating booking status",
            extra={"booking_id": booking_id, "status": status, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail=str(e)) from e
