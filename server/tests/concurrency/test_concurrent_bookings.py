"""Concurrency tests for booking creation."""

import asyncio

import pytest

from tourtrek.schemas.booking import CreateBookingRequest
from tourtrek.services.booking_service import BookingService
from tourtrek.services.package_service import PackageService


@pytest.mark.asyncio
async def test_concurrent_bookings_each_count_once(test_db, sample_package_data):
    """Simultaneous bookings against one package increment its count once each."""
    package = await PackageService(test_db).create_package(sample_package_data)
    service = BookingService(test_db)
    num_bookings = 25

    async def book(i: int):
        return await service.create_booking(
            CreateBookingRequest(tour_id=package.inserted_id, buyer_email=f"buyer{i}@x.com")
        )

    results = await asyncio.gather(*(book(i) for i in range(num_bookings)))

    assert all(r.package_update_result.matched_count == 1 for r in results)
    assert len({r.booking_result.inserted_id for r in results}) == num_bookings
    assert await test_db["bookings"].count_documents({"tour_id": package.inserted_id}) == num_bookings

    stored = await PackageService(test_db).get_package(package.inserted_id)
    assert stored["bookingCount"] == num_bookings


@pytest.mark.asyncio
async def test_concurrent_requests_over_http(test_client, auth_headers, sample_package_data):
    """Concurrent POST /bookings calls leave bookingCount equal to the number of bookings."""
    response = await test_client.post("/packages", json=sample_package_data, headers=auth_headers("guide@x.com"))
    package_id = response.json()["insertedId"]

    async def book(i: int):
        email = f"buyer{i}@x.com"
        return await test_client.post(
            "/bookings",
            json={"tour_id": package_id, "buyer_email": email},
            headers=auth_headers(email),
        )

    responses = await asyncio.gather(*(book(i) for i in range(10)))

    assert [r.status_code for r in responses] == [200] * 10
    package = (await test_client.get(f"/packages/{package_id}")).json()
    assert package["bookingCount"] == 10
