from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from akvamanas.schemas.fields import Numeric, StationCode, Text, Timestamp

_TIMESTAMP_ALIASES = AliasChoices("timestamp", "datetime_utc", "date")


class WaterLevelReading(BaseModel):
    """
    Current water level at a station (water_levels sheet).
    """

    model_config = ConfigDict(extra="ignore")

    station_code: StationCode
    station_name: Text = ""
    river_name: Text = ""
    timestamp: Timestamp = Field(default=None, validation_alias=_TIMESTAMP_ALIASES)
    water_level_cm: Numeric = None


class PrecipitationReading(BaseModel):
    """
    Current precipitation, either at a station or for a whole basin.

    Rows without a station code but with a basin name feed the basin
    aggregate used for stations that have no reading of their own.
    """

    model_config = ConfigDict(extra="ignore")

    station_code: StationCode = ""
    basin_name: Text = ""
    timestamp: Timestamp = Field(default=None, validation_alias=_TIMESTAMP_ALIASES)
    precipitation_mm: Numeric = None


class AirTemperatureReading(BaseModel):
    """
    Current air temperature at a station plus optional wind and humidity.
    """

    model_config = ConfigDict(extra="ignore")

    station_code: StationCode
    timestamp: Timestamp = Field(default=None, validation_alias=_TIMESTAMP_ALIASES)
    air_temp_c: Numeric = None
    wind_speed_mps: Numeric = None
    wind_dir_deg: Numeric = None
    rh_pct: Numeric = None


class ObservationRecord(BaseModel):
    """
    The "now" snapshot of one station, merged from the current readings.

    This is the only shape the forecast engine reads observations from.
    """

    station_code: str
    station_name: str = ""
    river_name: str = ""
    basin_name: str = ""
    timestamp: Timestamp = None
    water_level_cm: Numeric = None
    precipitation_mm: Numeric = None
    air_temp_c: Numeric = None
    wind_speed_mps: Numeric = None
    wind_dir_deg: Numeric = None
    rh_pct: Numeric = None
    roughness_n: Numeric = None


class HistoricalRecord(BaseModel):
    """
    One row of a station's historical series, used only for training.
    """

    model_config = ConfigDict(extra="ignore")

    station_code: StationCode = ""
    timestamp: Timestamp = Field(default=None, validation_alias=_TIMESTAMP_ALIASES)
    water_level_cm: Numeric = None
    precipitation_mm: Numeric = None
    air_temp_c: Numeric = None
    discharge_m3s: Numeric = None
    wind_speed_mps: Numeric = None
    wind_dir_deg: Numeric = None
    rh_pct: Numeric = None
    roughness_n: Numeric = None
