"""Booking-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .results import InsertResult, UpdateResult


class CreateBookingRequest(BaseModel):
    """Booking posted by a buyer. Trip details beyond the references are stored as sent."""

    model_config = ConfigDict(extra="allow")

    tour_id: str = Field(..., description="Id of the booked tour package")
    buyer_email: str = Field(..., description="Email of the buyer")


class UpdateBookingStatusRequest(BaseModel):
    """Request schema for a booking status transition."""

    status: str = Field(..., description="New booking status, e.g. confirmed or cancelled")


class BookingCreatedResponse(BaseModel):
    """Results of both writes made when a booking is created."""

    booking_result: InsertResult = Field(..., serialization_alias="bookingResult")
    package_update_result: UpdateResult = Field(..., serialization_alias="packageUpdateResult")
