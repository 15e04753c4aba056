"""Booking service for business logic operations."""

import logging
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.database import BOOKINGS_COLLECTION, parse_object_id
from ..core.observability import metrics_collector
from ..schemas.booking import BookingCreatedResponse, CreateBookingRequest
from ..schemas.results import InsertResult, UpdateResult
from .package_service import PackageService

logger = logging.getLogger(__name__)


class BookingService:
    """Service for booking-related operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[BOOKINGS_COLLECTION]
        self.package_service = PackageService(db)

    async def create_booking(self, request: CreateBookingRequest) -> BookingCreatedResponse:
        """
        Insert a booking, then bump the booked package's ``bookingCount``.

        The two writes are independent. The insert always happens first and
        is never rolled back: if the increment matches no package the
        booking stays with an unchanged count, and if the increment raises
        the error propagates with the booking already persisted.

        Args:
            request: Booking payload with ``tour_id`` and ``buyer_email``

        Returns:
            Both write results
        """
        document = request.model_dump()
        insert_result = await self.collection.insert_one(document)
        metrics_collector.record_booking_created()
        booking_id = str(insert_result.inserted_id)

        logger.info(
            "Booking inserted",
            extra={
                "booking_id": booking_id,
                "tour_id": request.tour_id,
                "buyer_email": request.buyer_email,
            }
        )

        try:
            package_result = await self.package_service.increment_booking_count(request.tour_id)
        except Exception as e:
            logger.error(
                "Booking count increment failed, booking kept",
                extra={"booking_id": booking_id, "tour_id": request.tour_id, "error": str(e)}
            )
            raise

        if package_result.matched_count == 0:
            metrics_collector.record_booking_count_miss()
            logger.warning(
                "Booking references unknown package",
                extra={"booking_id": booking_id, "tour_id": request.tour_id}
            )

        return BookingCreatedResponse(
            booking_result=InsertResult.from_pymongo(insert_result),
            package_update_result=package_result,
        )

    async def list_buyer_bookings(self, buyer_email: str) -> list[dict[str, Any]]:
        """List bookings made by the given buyer."""
        return await self.collection.find({"buyer_email": buyer_email}).to_list(length=None)

    async def update_status(
        self,
        booking_id: str,
        status: str,
        buyer_email: Optional[str] = None,
    ) -> UpdateResult:
        """
        Set the status of a booking.

        Args:
            booking_id: Booking to update
            status: New status
            buyer_email: When given, only a booking owned by this buyer matches

        Returns:
            Update result, ``matchedCount`` is 0 when nothing matched
        """
        query: dict[str, Any] = {"_id": parse_object_id(booking_id)}
        if buyer_email is not None:
            query["buyer_email"] = buyer_email

        result = await self.collection.update_one(query, {"$set": {"status": status}})

        logger.info(
            "Booking status updated",
            extra={
                "booking_id": booking_id,
                "status": status,
                "matched_count": result.matched_count,
            }
        )
        return UpdateResult.from_pymongo(result)
