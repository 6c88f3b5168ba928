import pytest
from httpx import AsyncClient, ASGITransport


@pytest.mark.asyncio
async def test_health_ok(test_app):
    """
    Test the basic service health endpoint.

    This test verifies that:
    - The `/health` endpoint responds with HTTP 200.
    - The response body contains a `status` field with value `ok`.
    - The response names the forecasting service.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/health")

    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "akvamanas"


@pytest.mark.asyncio
async def test_health_db_ok(test_app):
    """
    The `/health/db` endpoint executes a query through the overridden session.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/health/db")

    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["db"] == "ok"
