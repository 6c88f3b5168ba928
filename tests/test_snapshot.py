from datetime import datetime, timezone

import pytest

from akvamanas.core.exceptions import MissingInputError
from akvamanas.schemas.observations import (
    AirTemperatureReading,
    PrecipitationReading,
    WaterLevelReading,
)
from akvamanas.schemas.stations import StationIn
from akvamanas.services.snapshot import build_forecast_inputs, latest_by_station


def level(code, ts, value, **kw):
    return WaterLevelReading(station_code=code, timestamp=ts, water_level_cm=value, **kw)


def test_no_water_levels_is_rejected():
    with pytest.raises(MissingInputError):
        build_forecast_inputs(stations=[], water_levels=[])

    with pytest.raises(MissingInputError):
        build_forecast_inputs(stations=[], water_levels=[level("", "2026-05-01T06:00Z", 10)])


def test_latest_reading_wins():
    readings = [
        level("ST1", "2026-05-01T06:00Z", 120),
        level("st1", "2026-05-01T05:00Z", 110),
        level("ST1", "2026-05-01T06:00Z", 125),
    ]

    latest = latest_by_station(readings)

    assert list(latest) == ["st1"]
    assert latest["st1"].water_level_cm == 125.0


def test_readings_and_metadata_are_merged():
    inputs = build_forecast_inputs(
        stations=[StationIn(station_code="st1", station_name="Rīga", river_name="Daugava", basin_name="Lower", roughness_n=0.03)],
        water_levels=[level("ST1", "2026-05-01T06:40:00Z", 120)],
        precipitation=[
            PrecipitationReading(station_code="ST1", precipitation_mm="2,5"),
            PrecipitationReading(basin_name="Upper", precipitation_mm=9),
        ],
        air_temperature=[AirTemperatureReading(station_code="st1", air_temp_c=4, wind_speed_mps=3)],
    )

    obs = inputs.now_by_code["st1"]
    assert obs.station_code == "ST1"
    assert obs.station_name == "Rīga"
    assert obs.river_name == "Daugava"
    assert obs.basin_name == "Lower"
    assert obs.precipitation_mm == 2.5
    assert obs.air_temp_c == 4.0
    assert obs.wind_speed_mps == 3.0
    assert obs.roughness_n == 0.03
    assert inputs.basin_precipitation == [("Upper", 9.0)]
    assert inputs.issued_at == datetime(2026, 5, 1, 6, tzinfo=timezone.utc)


def test_reading_names_override_station_settings():
    inputs = build_forecast_inputs(
        stations=[StationIn(station_code="ST1", station_name="Old", river_name="Gauja")],
        water_levels=[level("ST1", None, 50, station_name="New")],
        issued_at=datetime(2026, 5, 1, 6, tzinfo=timezone.utc),
    )

    obs = inputs.now_by_code["st1"]
    assert obs.station_name == "New"
    assert obs.river_name == "Gauja"
    assert obs.precipitation_mm is None
    assert inputs.issued_at == datetime(2026, 5, 1, 6, tzinfo=timezone.utc)
