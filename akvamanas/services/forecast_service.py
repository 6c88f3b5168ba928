from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from akvamanas.core.config import Settings, settings as default_settings
from akvamanas.repositories.regression_model_repository import RegressionModelRepository
from akvamanas.repositories.station_repository import StationRepository
from akvamanas.schemas.forecast import ForecastRequest, ForecastResponse
from akvamanas.schemas.stations import StationIn
from akvamanas.services.forecast_orchestrator import ForecastOrchestrator
from akvamanas.services.snapshot import build_forecast_inputs


class ForecastService:
    """
    Runs a forecast from a request body, the stored station settings and
    the stored regression model. Read-only with respect to the database.
    """

    def __init__(self, db: AsyncSession, settings: Settings = default_settings):
        self.db = db
        self.station_repo = StationRepository(db)
        self.model_repo = RegressionModelRepository(db)
        self.orchestrator = ForecastOrchestrator(
            horizon_hours=settings.forecast_horizon_hours,
            timezone_name=settings.forecast_timezone,
            snapshot_hour=settings.daily_snapshot_hour,
            self_carry=settings.routing_self_carry,
            muskingum_x=settings.muskingum_x,
            fallback_decay=settings.fallback_decay,
            fallback_air_temp_gain=settings.fallback_air_temp_gain,
        )

    async def _stations(self, request: ForecastRequest) -> list[StationIn]:
        if request.stations is not None:
            return request.stations
        stored = await self.station_repo.list_stations(limit=100_000)
        return [StationIn.model_validate(s, from_attributes=True) for s in stored]

    async def forecast(self, request: ForecastRequest) -> ForecastResponse:
        """
        Raises:
            MissingInputError: the request has no water-level observations.
            CorruptModelError: the stored model is invalid.
        """
        inputs = build_forecast_inputs(
            stations=await self._stations(request),
            water_levels=request.water_levels,
            precipitation=request.precipitation,
            air_temperature=request.air_temperature,
            reaches=request.reaches,
            rating_curves=request.rating_curves,
            basins=request.basins,
            issued_at=request.issued_at,
        )
        model = await self.model_repo.load()
        result = self.orchestrator.run(inputs, model)

        return ForecastResponse(
            method=result.method,
            issued_at=result.issued_at,
            hourly=result.hourly,
            daily=result.daily,
            series=result.series,
        )
