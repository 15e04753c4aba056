"""API tests against the fully configured app, without a database."""

import pytest
from httpx import ASGITransport, AsyncClient

from tourtrek.main import create_app


@pytest.mark.asyncio
async def test_liveness_and_health_endpoints():
    """Test the liveness string and health endpoint."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/")
        assert response.status_code == 200
        assert response.text == "Tour Package Server is running!"
        assert response.headers["content-type"].startswith("text/plain")

        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data


@pytest.mark.asyncio
async def test_request_id_is_echoed():
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

        response = await client.get("/")
        assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_metrics_endpoint():
    """Test the metrics endpoint."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await client.get("/")
        response = await client.get("/metrics")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "http_requests_total" in response.text
        assert "bookings_created_total" in response.text


@pytest.mark.asyncio
async def test_protected_route_rejects_before_touching_database():
    """No token means 401 even though no database is attached."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/my-bookings/a@x.com")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_unhandled_error_becomes_problem_details():
    app = create_app()
    app.debug = False

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret failure")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")
        assert response.status_code == 500
        data = response.json()
        assert data["title"] == "Internal Server Error"
        assert data["error_id"]
        assert "secret failure" not in response.text
