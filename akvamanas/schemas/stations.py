from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from akvamanas.schemas.fields import Numeric, StationCode, Text


class StationIn(BaseModel):
    """
    Monitoring station metadata (one row of the stations sheet).

    `datum_offset_cm` is added to regression predictions; the level range
    clamps them. Missing values leave the prediction unshifted/unbounded.
    """

    model_config = ConfigDict(extra="ignore")

    station_code: StationCode = Field(..., description="Unique station code (trimmed)")
    station_name: Text = ""
    river_name: Text = ""
    basin_name: Text = ""
    x: Numeric = None
    y: Numeric = None
    datum_offset_cm: Numeric = None
    min_level_cm: Numeric = None
    max_level_cm: Numeric = None
    roughness_n: Numeric = None


class StationOut(StationIn):
    """
    Public representation of a stored station.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int


class StationListResponse(BaseModel):
    """
    Response payload for listing stations with pagination.
    """

    items: list[StationOut] = Field(default_factory=list)
    total: int


class StationUpsertRequest(BaseModel):
    """
    Request body replacing station settings (upsert by station code).
    """

    items: list[StationIn] = Field(default_factory=list)


class StationUpsertResponse(BaseModel):
    updated: int
    total: int
    updated_at: datetime
