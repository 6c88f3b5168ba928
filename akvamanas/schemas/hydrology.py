from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from akvamanas.schemas.fields import Numeric, StationCode, Text


class ReachIn(BaseModel):
    """
    River reach between two stations (network sheet).

    Omitted geometry falls back to the channel defaults of the router.
    """

    model_config = ConfigDict(extra="ignore")

    from_station: StationCode = Field(
        default="", validation_alias=AliasChoices("from_station", "from_code", "from")
    )
    to_station: StationCode = Field(
        default="", validation_alias=AliasChoices("to_station", "to_code", "to")
    )
    length_km: Numeric = None
    slope: Numeric = None
    manning_n: Numeric = None
    width_m: Numeric = None
    depth_m: Numeric = None


class RatingCurveIn(BaseModel):
    """
    Stage-discharge power law of one station: Q = a * max(h - h0, 0) ** b.
    """

    model_config = ConfigDict(extra="ignore")

    station_code: StationCode
    h0: Numeric = None
    a: Numeric = None
    b: Numeric = None


class BasinParamsIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    basin_name: Text
    runoff_coeff: Numeric = None
    baseflow: Numeric = None
