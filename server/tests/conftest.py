"""Test configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from tourtrek.core.database import get_db
from tourtrek.core.security import create_access_token


@pytest.fixture
def test_db():
    """In-memory MongoDB database standing in for tourDB."""
    client = AsyncMongoMockClient()
    return client["tourDB"]


@pytest_asyncio.fixture(scope="function")
async def test_app(test_db):
    """Create a test FastAPI application."""
    from fastapi import FastAPI

    from tourtrek.main import register_routes

    # Simplified test app without lifespan or middleware
    app = FastAPI(title="TourTrek API (Test)", version="1.0.0-test")
    register_routes(app)

    app.dependency_overrides[get_db] = lambda: test_db

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    """Factory for Authorization headers carrying a token for the given email."""
    def _headers(email: str = "a@x.com", **claims) -> dict:
        token = create_access_token({"email": email, **claims})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def sample_package_data():
    """Sample tour package for testing."""
    return {
        "tour_name": "Sundarbans Mangrove Safari",
        "image": "https://img.example/sundarbans.jpg",
        "duration": "3 days",
        "price": 250,
        "departure_date": "2025-12-15",
        "departure_location": "Khulna",
        "destination": "Sundarbans",
        "package_details": "Boat safari through the mangrove forest",
        "guide_email": "guide@x.com",
        "guide_contact_no": "+8801700000000",
    }


@pytest.fixture
def sample_booking_data():
    """Sample booking payload, tour_id filled in by the test."""
    return {
        "buyer_email": "a@x.com",
        "buyer_name": "Ayesha",
        "travel_date": "2025-12-15",
        "status": "pending",
    }
