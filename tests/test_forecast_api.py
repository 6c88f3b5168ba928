from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient, ASGITransport

from akvamanas.models.regression import StationCoefficients

ISSUED_AT = "2026-05-01T06:00:00Z"

NETWORK = {
    "reaches": [{"from": "A", "to": "B", "length_km": 10, "slope": 0.001}],
    "rating_curves": [{"station_code": "A"}, {"station_code": "B", "h0": 5}],
    "basins": [{"basin_name": "Upper", "runoff_coeff": 0.2}],
}


@pytest.mark.asyncio
async def test_forecast_without_water_levels_is_rejected(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post("/forecast", json={"issued_at": ISSUED_AT, "water_levels": []})

    assert r.status_code == 400
    assert "water-level" in r.json()["detail"]


@pytest.mark.asyncio
async def test_forecast_uses_stored_station_settings(test_app):
    """
    Without a `stations` list the stored datum offset and range apply.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        await ac.put(
            "/stations",
            json={"items": [{"station_code": "ST1", "river_name": "Gauja", "datum_offset_cm": 10, "min_level_cm": 0, "max_level_cm": 1000}]},
        )
        r = await ac.post(
            "/forecast",
            json={"issued_at": ISSUED_AT, "water_levels": [{"station_code": "st1", "water_level_cm": 50}]},
        )

    assert r.status_code == 200
    data = r.json()
    assert data["method"] == "regression"
    assert len(data["hourly"]) == 72
    daily = data["daily"][0]
    assert daily["river"] == "Gauja"
    assert (daily["day1_cm"], daily["day2_cm"], daily["day3_cm"]) == (60.0, 60.0, 60.0)


@pytest.mark.asyncio
async def test_forecast_uses_trained_model(test_app):
    start = datetime(2026, 4, 1)
    records = [
        {"station_code": "ST1", "timestamp": (start + timedelta(days=i)).isoformat(), "water_level_cm": 100 + 3 * i}
        for i in range(10)
    ]

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post("/training", json={"records": records})
        assert r.status_code == 200

        r = await ac.post(
            "/forecast",
            json={
                "issued_at": ISSUED_AT,
                "stations": [{"station_code": "ST1"}],
                "water_levels": [{"station_code": "ST1", "water_level_cm": 130}],
            },
        )

    assert r.status_code == 200
    daily = r.json()["daily"][0]
    assert daily["day1_cm"] == pytest.approx(133.0, abs=0.2)
    assert daily["day3_cm"] < daily["day2_cm"] < daily["day1_cm"]


@pytest.mark.asyncio
async def test_forecast_runs_routing_model(test_app):
    payload = {
        "issued_at": ISSUED_AT,
        "stations": [
            {"station_code": "A", "station_name": "Upstream", "river_name": "Venta", "basin_name": "Upper"},
            {"station_code": "B", "station_name": "Downstream", "river_name": "Venta", "basin_name": "Upper"},
        ],
        "water_levels": [
            {"station_code": "A", "water_level_cm": 100},
            {"station_code": "B", "water_level_cm": 80},
        ],
        "precipitation": [{"basin_name": "Upper", "precipitation_mm": 3}],
        **NETWORK,
    }

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post("/forecast", json=payload)

    assert r.status_code == 200
    data = r.json()
    assert data["method"] == "hydrologic"
    assert len(data["hourly"]) == 144
    assert len(data["daily"]) == 2
    assert set(data["series"]) == {"A", "B"}
    assert len(data["series"]["B"]) == 73
    assert data["hourly"][0]["station_code"] == "A"


@pytest.mark.asyncio
async def test_corrupt_stored_model_fails_the_forecast(test_app, db_session):
    db_session.add(StationCoefficients(station_code="ST1", coef=[1.0, 2.0]))
    await db_session.commit()

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post(
            "/forecast",
            json={"issued_at": ISSUED_AT, "water_levels": [{"station_code": "ST1", "water_level_cm": 50}]},
        )

    assert r.status_code == 500
    assert r.json()["detail"].startswith("Forecast failed")


@pytest.mark.asyncio
async def test_forecast_docs_describe_daily_row_shape(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/openapi.json")

    description = r.json()["paths"]["/forecast"]["post"]["description"]
    assert "one row per station" in description
    assert "day3_cm" in description
