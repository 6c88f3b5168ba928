import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field

from akvamanas.schemas.fields import Timestamp
from akvamanas.schemas.hydrology import BasinParamsIn, RatingCurveIn, ReachIn
from akvamanas.schemas.observations import (
    AirTemperatureReading,
    PrecipitationReading,
    WaterLevelReading,
)
from akvamanas.schemas.stations import StationIn


class ForecastRequest(BaseModel):
    """
    Request body for a forecast run.

    Notes:
    - `stations` may be omitted to use the station settings stored in the database.
    - The routing model runs only when `reaches`, `rating_curves` and `basins`
      are all non-empty; otherwise the regression fallback is used.
    """

    issued_at: Timestamp = Field(
        default=None,
        description="Forecast start (defaults to the latest observation, truncated to the hour).",
        examples=["2026-05-01T06:00:00Z"],
    )
    stations: Optional[list[StationIn]] = None
    water_levels: list[WaterLevelReading] = Field(default_factory=list)
    precipitation: list[PrecipitationReading] = Field(default_factory=list)
    air_temperature: list[AirTemperatureReading] = Field(default_factory=list)
    reaches: list[ReachIn] = Field(default_factory=list)
    rating_curves: list[RatingCurveIn] = Field(default_factory=list)
    basins: list[BasinParamsIn] = Field(default_factory=list)


class HourlyForecastRow(BaseModel):
    date: dt.date = Field(..., description="Local forecast date")
    timestamp: dt.datetime = Field(..., description="Forecast hour (UTC)")
    station_code: str
    station_name: str = ""
    river_name: str = ""
    water_level_cm: float


class DailyForecastRow(BaseModel):
    river: str = ""
    station: str = ""
    station_code: str
    date: dt.date = Field(..., description="Local date of the run start (day +1)")
    day1_cm: Optional[float] = None
    day2_cm: Optional[float] = None
    day3_cm: Optional[float] = None


class SeriesPoint(BaseModel):
    timestamp: dt.datetime
    label: str = Field(..., description="Local hour label, e.g. '23:00'")
    water_level_cm: float
    river_name: str = ""
    station_name: str = ""


class ForecastResponse(BaseModel):
    """
    Response payload for a forecast run.
    """

    method: Literal["hydrologic", "regression"]
    issued_at: dt.datetime
    hourly: list[HourlyForecastRow] = Field(default_factory=list)
    daily: list[DailyForecastRow] = Field(default_factory=list)
    series: dict[str, list[SeriesPoint]] = Field(default_factory=dict)
