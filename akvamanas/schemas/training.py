import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from akvamanas.schemas.observations import HistoricalRecord


class TrainingRequest(BaseModel):
    """
    Request body for a training run: the historical series of one or
    more stations, in any order.
    """

    records: list[HistoricalRecord] = Field(default_factory=list)


class TrainingResponse(BaseModel):
    """
    Response payload for a training run.
    """

    model_config = ConfigDict(populate_by_name=True)

    trained_at: Optional[dt.datetime] = Field(default=None, alias="trainedAt")
    stations: int = Field(..., description="Stations with coefficients in the stored model")
    updated: list[str] = Field(default_factory=list, description="Stations refitted by this run")
    skipped: list[str] = Field(
        default_factory=list,
        description="Stations without enough valid history (previous coefficients kept)",
    )


class StationCoefficientsOut(BaseModel):
    coef: list[float]


class RegressionModelOut(BaseModel):
    """
    Serialized regression model: `{trainedAt, stations: {code: {coef}}}`.
    """

    model_config = ConfigDict(populate_by_name=True)

    trained_at: Optional[dt.datetime] = Field(default=None, alias="trainedAt")
    stations: dict[str, StationCoefficientsOut] = Field(default_factory=dict)
