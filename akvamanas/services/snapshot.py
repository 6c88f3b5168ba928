"""
Merge the current readings into one observation record per station.

This is the single place where station metadata is joined onto the
readings; the engine only ever sees the merged `ObservationRecord`s.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, TypeVar

from akvamanas.core.exceptions import MissingInputError
from akvamanas.schemas.fields import code_key
from akvamanas.schemas.hydrology import BasinParamsIn, RatingCurveIn, ReachIn
from akvamanas.schemas.observations import (
    AirTemperatureReading,
    ObservationRecord,
    PrecipitationReading,
    WaterLevelReading,
)
from akvamanas.schemas.stations import StationIn

R = TypeVar("R", WaterLevelReading, PrecipitationReading, AirTemperatureReading)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class ForecastInputs:
    """Everything one forecast run reads, already merged and keyed."""

    issued_at: datetime
    stations: dict[str, StationIn]
    now_by_code: dict[str, ObservationRecord]
    basin_precipitation: list[tuple[str, Optional[float]]] = field(default_factory=list)
    reaches: list[ReachIn] = field(default_factory=list)
    rating_curves: list[RatingCurveIn] = field(default_factory=list)
    basins: list[BasinParamsIn] = field(default_factory=list)


def latest_by_station(readings: list[R]) -> dict[str, R]:
    """Latest reading per station key; on equal timestamps the later row wins."""
    latest: dict[str, R] = {}
    for reading in readings:
        key = code_key(reading.station_code)
        if not key:
            continue
        current = latest.get(key)
        if current is None or (reading.timestamp or _EPOCH) >= (current.timestamp or _EPOCH):
            latest[key] = reading
    return latest


def default_issued_at(observations: dict[str, ObservationRecord]) -> datetime:
    """Latest observation time truncated to the hour, else the current UTC hour."""
    stamps = [o.timestamp for o in observations.values() if o.timestamp is not None]
    base = max(stamps) if stamps else datetime.now(timezone.utc)
    return base.replace(minute=0, second=0, microsecond=0)


def build_forecast_inputs(
    stations: list[StationIn],
    water_levels: list[WaterLevelReading],
    precipitation: Optional[list[PrecipitationReading]] = None,
    air_temperature: Optional[list[AirTemperatureReading]] = None,
    reaches: Optional[list[ReachIn]] = None,
    rating_curves: Optional[list[RatingCurveIn]] = None,
    basins: Optional[list[BasinParamsIn]] = None,
    issued_at: Optional[datetime] = None,
) -> ForecastInputs:
    """
    Join readings and station metadata into the inputs of one run.

    Raises:
        MissingInputError: no water-level reading carries a station code.
    """
    levels = latest_by_station(water_levels)
    if not levels:
        raise MissingInputError("No current water-level observations were provided")

    precipitation = precipitation or []
    station_precip = latest_by_station([p for p in precipitation if p.station_code])
    basin_only = [(p.basin_name, p.precipitation_mm) for p in precipitation if not p.station_code and p.basin_name]
    air = latest_by_station(air_temperature or [])
    meta = {code_key(s.station_code): s for s in stations if s.station_code}

    now_by_code: dict[str, ObservationRecord] = {}
    for key, level in levels.items():
        station = meta.get(key)
        precip = station_precip.get(key)
        weather = air.get(key)
        now_by_code[key] = ObservationRecord(
            station_code=level.station_code,
            station_name=level.station_name or (station.station_name if station else ""),
            river_name=level.river_name or (station.river_name if station else ""),
            basin_name=station.basin_name if station else "",
            timestamp=level.timestamp,
            water_level_cm=level.water_level_cm,
            precipitation_mm=precip.precipitation_mm if precip else None,
            air_temp_c=weather.air_temp_c if weather else None,
            wind_speed_mps=weather.wind_speed_mps if weather else None,
            wind_dir_deg=weather.wind_dir_deg if weather else None,
            rh_pct=weather.rh_pct if weather else None,
            roughness_n=station.roughness_n if station else None,
        )

    return ForecastInputs(
        issued_at=issued_at or default_issued_at(now_by_code),
        stations=meta,
        now_by_code=now_by_code,
        basin_precipitation=basin_only,
        reaches=reaches or [],
        rating_curves=rating_curves or [],
        basins=basins or [],
    )
