"""
Lateral inflow entering the network at each station from its basin.

Catchments are not delineated: a station without its own precipitation
reading takes the wettest reading of its basin for the current snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from akvamanas.schemas.fields import normalize_text
from akvamanas.schemas.hydrology import BasinParamsIn


@dataclass(frozen=True)
class BasinParams:
    runoff_coeff: float = 0.2
    baseflow: float = 0.0

    @classmethod
    def from_record(cls, record: BasinParamsIn) -> "BasinParams":
        default = cls()
        return cls(
            runoff_coeff=record.runoff_coeff if record.runoff_coeff is not None else default.runoff_coeff,
            baseflow=record.baseflow if record.baseflow is not None else default.baseflow,
        )


DEFAULT_BASIN_PARAMS = BasinParams()


def basin_key(name: Optional[str]) -> str:
    return normalize_text(name).lower()


def build_basin_map(records: list[BasinParamsIn]) -> dict[str, BasinParams]:
    basins: dict[str, BasinParams] = {}
    for record in records:
        key = basin_key(record.basin_name)
        if key:
            basins[key] = BasinParams.from_record(record)
    return basins


def aggregate_basin_precipitation(
    readings: Iterable[tuple[str, Optional[float]]],
) -> dict[str, float]:
    """
    Maximum precipitation per basin from (basin_name, precipitation_mm) pairs.

    Pairs without a basin or without a value are ignored.
    """
    by_basin: dict[str, float] = {}
    for basin_name, precip in readings:
        key = basin_key(basin_name)
        if not key or precip is None:
            continue
        by_basin[key] = precip if key not in by_basin else max(by_basin[key], precip)
    return by_basin


def resolve_precipitation(
    station_precip: Optional[float],
    basin_name: Optional[str],
    basin_precip: Mapping[str, float],
) -> float:
    if station_precip is not None:
        return station_precip
    return basin_precip.get(basin_key(basin_name), 0.0)


def lateral_inflow(
    station_precip: Optional[float],
    basin_name: Optional[str],
    basins: Mapping[str, BasinParams],
    basin_precip: Mapping[str, float],
) -> float:
    """Baseflow plus runoff share of precipitation for one station."""
    params = basins.get(basin_key(basin_name), DEFAULT_BASIN_PARAMS)
    precip = resolve_precipitation(station_precip, basin_name, basin_precip)
    return params.baseflow + max(precip, 0.0) * params.runoff_coeff
