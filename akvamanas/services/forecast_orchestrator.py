"""
Forecast orchestration: picks the routing model or the regression
fallback for a run and assembles the hourly, daily and chart outputs.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from akvamanas.schemas.fields import code_key
from akvamanas.schemas.forecast import DailyForecastRow, HourlyForecastRow, SeriesPoint
from akvamanas.schemas.observations import ObservationRecord
from akvamanas.schemas.stations import StationIn
from akvamanas.services.hydrology.basin_inflow import (
    aggregate_basin_precipitation,
    build_basin_map,
    lateral_inflow,
)
from akvamanas.services.hydrology.muskingum import DT_SECONDS, MuskingumRouter, update_node
from akvamanas.services.hydrology.rating_curve import (
    build_curve_map,
    curve_for,
    discharge_to_stage,
    stage_to_discharge,
)
from akvamanas.services.hydrology.river_network import RiverNetworkGraph
from akvamanas.services.regression_model import RegressionModel, design_row, dot
from akvamanas.services.snapshot import ForecastInputs

logger = logging.getLogger(__name__)

FORECAST_DAYS = 3


def round1(value: float) -> float:
    """Round to 0.1, halves away from zero; non-finite values pass through."""
    if not math.isfinite(value):
        return value
    return math.copysign(math.floor(abs(value) * 10.0 + 0.5) / 10.0, value)


def clamp(value: float, lo: Optional[float], hi: Optional[float]) -> float:
    if lo is not None and value < lo:
        value = lo
    if hi is not None and value > hi:
        value = hi
    return value


@dataclass
class ForecastResult:
    method: str
    issued_at: datetime
    hourly: list[HourlyForecastRow] = field(default_factory=list)
    daily: list[DailyForecastRow] = field(default_factory=list)
    series: dict[str, list[SeriesPoint]] = field(default_factory=dict)


class ForecastOrchestrator:
    """
    Runs one forecast over an explicit set of inputs and a regression model.

    The routing branch is taken only when reaches, rating curves and basin
    parameters are all present. Identical inputs give identical outputs.
    """

    def __init__(
        self,
        *,
        horizon_hours: int = 72,
        timezone_name: str = "UTC",
        snapshot_hour: int = 23,
        self_carry: float = 0.2,
        muskingum_x: float = 0.2,
        fallback_decay: float = 0.98,
        fallback_air_temp_gain: float = 0.1,
        dt_seconds: float = DT_SECONDS,
    ):
        self.horizon_hours = horizon_hours
        self.tz = ZoneInfo(timezone_name)
        self.snapshot_hour = snapshot_hour
        self.self_carry = self_carry
        self.muskingum_x = muskingum_x
        self.fallback_decay = fallback_decay
        self.fallback_air_temp_gain = fallback_air_temp_gain
        self.dt_seconds = dt_seconds

    @staticmethod
    def use_routing(inputs: ForecastInputs) -> bool:
        return bool(inputs.reaches) and bool(inputs.rating_curves) and bool(inputs.basins)

    def run(self, inputs: ForecastInputs, model: RegressionModel) -> ForecastResult:
        if self.use_routing(inputs):
            logger.info("Forecast %s: hydrologic routing over %d reach(es)", inputs.issued_at, len(inputs.reaches))
            result = self._run_routing(inputs)
        else:
            logger.info("Forecast %s: regression fallback for %d station(s)", inputs.issued_at, len(inputs.now_by_code))
            result = self._run_regression(inputs, model)

        result.hourly.sort(key=lambda r: (r.station_code, r.timestamp))
        result.daily.sort(key=lambda r: (r.river, r.station))
        return result

    # ------------------------------------------------------------------
    # Branch A: hydrologic routing
    # ------------------------------------------------------------------

    def _run_routing(self, inputs: ForecastInputs) -> ForecastResult:
        graph = RiverNetworkGraph(inputs.reaches)
        curves = build_curve_map(inputs.rating_curves)
        basins = build_basin_map(inputs.basins)

        # Observed stations outside the network and rating data are left out
        observed = {
            key: obs
            for key, obs in inputs.now_by_code.items()
            if obs.station_code in graph or key in curves
        }

        codes = list(graph.nodes)
        index = {code_key(code): i for i, code in enumerate(codes)}
        for key, obs in observed.items():
            if key not in index:
                index[key] = len(codes)
                codes.append(obs.station_code)

        node_curves = [curve_for(code, curves) for code in codes]
        basin_precip = aggregate_basin_precipitation(
            [(obs.basin_name, obs.precipitation_mm) for obs in inputs.now_by_code.values()]
            + list(inputs.basin_precipitation)
        )

        discharge = [0.0] * len(codes)
        lateral = [0.0] * len(codes)
        for i, code in enumerate(codes):
            obs = observed.get(code_key(code))
            if obs is not None:
                discharge[i] = stage_to_discharge(obs.water_level_cm or 0.0, node_curves[i])
                lateral[i] = lateral_inflow(obs.precipitation_mm, obs.basin_name, basins, basin_precip)
            else:
                station = inputs.stations.get(code_key(code))
                lateral[i] = lateral_inflow(None, station.basin_name if station else "", basins, basin_precip)

        router = MuskingumRouter(
            graph.edge_endpoints(),
            graph.routing_params(self.muskingum_x),
            graph.traversal_order(),
            self.dt_seconds,
        )
        router.seed(discharge)

        result = ForecastResult(method="hydrologic", issued_at=inputs.issued_at)
        start_day = inputs.issued_at.astimezone(self.tz).date()
        daily: dict[str, list[Optional[float]]] = {key: [None] * FORECAST_DAYS for key in observed}

        for key, obs in observed.items():
            stage = obs.water_level_cm or 0.0
            self._emit_point(result, obs, inputs.issued_at, stage)
            self._snapshot(daily[key], inputs.issued_at, start_day, stage)

        for step in range(1, self.horizon_hours + 1):
            routed = router.step(discharge)
            discharge = [
                update_node(discharge[i], routed[i], lateral[i], self.self_carry)
                for i in range(len(codes))
            ]
            ts = inputs.issued_at + timedelta(hours=step)
            for key, obs in observed.items():
                i = index[key]
                stage = discharge_to_stage(discharge[i], node_curves[i])
                self._emit_hour(result, obs, ts, stage)
                self._snapshot(daily[key], ts, start_day, stage)
            logger.debug("Step %d routed %d reach(es)", step, len(graph.edges))

        for key, obs in observed.items():
            result.daily.append(self._daily_row(obs, start_day, daily[key]))
        return result

    def _snapshot(self, days: list[Optional[float]], ts: datetime, start_day: date, stage: float) -> None:
        local = ts.astimezone(self.tz)
        day_idx = (local.date() - start_day).days
        if local.hour == self.snapshot_hour and 0 <= day_idx < FORECAST_DAYS:
            days[day_idx] = stage

    # ------------------------------------------------------------------
    # Branch B: regression fallback
    # ------------------------------------------------------------------

    def _run_regression(self, inputs: ForecastInputs, model: RegressionModel) -> ForecastResult:
        result = ForecastResult(method="regression", issued_at=inputs.issued_at)
        start_day = inputs.issued_at.astimezone(self.tz).date()
        midnight = datetime.combine(start_day, time(0), tzinfo=self.tz).astimezone(timezone.utc)

        for key, obs in inputs.now_by_code.items():
            preds = self.regression_days(obs, inputs.stations.get(key), model)
            for hour in range(FORECAST_DAYS * 24):
                ts = midnight + timedelta(hours=hour)
                self._emit_hour(result, obs, ts, preds[hour // 24])
            result.daily.append(self._daily_row(obs, start_day, preds))
        return result

    def regression_days(
        self,
        obs: ObservationRecord,
        station: Optional[StationIn],
        model: RegressionModel,
    ) -> list[float]:
        """Day +1/+2/+3 stages of one station; datum offset applied inside each clamp."""
        offset = (station.datum_offset_cm if station else None) or 0.0
        lo = station.min_level_cm if station else None
        hi = station.max_level_cm if station else None

        coef = model.coefficients(obs.station_code)
        if coef is None:
            flat = clamp((obs.water_level_cm or 0.0) + offset, lo, hi)
            return [flat] * FORECAST_DAYS

        p1 = dot(coef, design_row(obs))
        p2 = p1 * self.fallback_decay + (obs.air_temp_c or 0.0) * self.fallback_air_temp_gain
        p3 = p2 * self.fallback_decay
        return [clamp(p + offset, lo, hi) for p in (p1, p2, p3)]

    # ------------------------------------------------------------------
    # Output rows
    # ------------------------------------------------------------------

    def _emit_point(self, result: ForecastResult, obs: ObservationRecord, ts: datetime, stage: float) -> None:
        local = ts.astimezone(self.tz)
        result.series.setdefault(obs.station_code, []).append(
            SeriesPoint(
                timestamp=ts.astimezone(timezone.utc),
                label=local.strftime("%H:%M"),
                water_level_cm=round1(stage),
                river_name=obs.river_name,
                station_name=obs.station_name,
            )
        )

    def _emit_hour(self, result: ForecastResult, obs: ObservationRecord, ts: datetime, stage: float) -> None:
        result.hourly.append(
            HourlyForecastRow(
                date=ts.astimezone(self.tz).date(),
                timestamp=ts.astimezone(timezone.utc),
                station_code=obs.station_code,
                station_name=obs.station_name,
                river_name=obs.river_name,
                water_level_cm=round1(stage),
            )
        )
        self._emit_point(result, obs, ts, stage)

    @staticmethod
    def _daily_row(obs: ObservationRecord, start_day: date, days: list[Optional[float]]) -> DailyForecastRow:
        day1, day2, day3 = (None if v is None else round1(v) for v in days)
        return DailyForecastRow(
            river=obs.river_name,
            station=obs.station_name,
            station_code=obs.station_code,
            date=start_day,
            day1_cm=day1,
            day2_cm=day2,
            day3_cm=day3,
        )
