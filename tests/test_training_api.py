from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient, ASGITransport

from akvamanas.repositories.regression_model_repository import RegressionModelRepository
from akvamanas.services.regression_model import RegressionModel

PRIOR = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]


def history(code, levels):
    start = datetime(2026, 4, 1)
    return [
        {"station_code": code, "date": (start + timedelta(days=i)).isoformat(), "water_level_cm": level, "air_temp_c": "4,0"}
        for i, level in enumerate(levels)
    ]


@pytest.mark.asyncio
async def test_training_stores_coefficients(test_app):
    """
    A station with enough history gets coefficients that `GET /model` returns.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post("/training", json={"records": history("ST1", [100 + 2 * i for i in range(8)])})
        assert r.status_code == 200
        data = r.json()
        assert data["trainedAt"] is not None
        assert data["stations"] == 1
        assert data["updated"] == ["ST1"]
        assert data["skipped"] == []

        r = await ac.get("/model")

    assert r.status_code == 200
    model = r.json()
    assert model["trainedAt"] is not None
    assert len(model["stations"]["ST1"]["coef"]) == 8


@pytest.mark.asyncio
async def test_short_history_keeps_previous_model(test_app, db_session):
    await RegressionModelRepository(db_session).save(RegressionModel(stations={"ST2": list(PRIOR)}))

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post("/training", json={"records": history("ST2", [50, 51, 52])})
        assert r.status_code == 200
        assert r.json()["skipped"] == ["ST2"]

        r = await ac.get("/model")

    model = r.json()
    assert model["stations"]["ST2"]["coef"] == PRIOR
    assert model["trainedAt"] is not None


@pytest.mark.asyncio
async def test_empty_training_request_is_rejected(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post("/training", json={"records": []})

    assert r.status_code == 400


@pytest.mark.asyncio
async def test_model_before_training_is_empty(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/model")

    assert r.status_code == 200
    assert r.json() == {"trainedAt": None, "stations": {}}


@pytest.mark.asyncio
async def test_trained_at_survives_storage(db_session):
    repo = RegressionModelRepository(db_session)
    trained_at = datetime(2026, 5, 1, 12, tzinfo=timezone.utc)

    await repo.save(RegressionModel(trained_at=trained_at, stations={"ST1": list(PRIOR)}))
    model = await repo.load()

    assert model.trained_at == trained_at
    assert model.stations == {"ST1": PRIOR}
