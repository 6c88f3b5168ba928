"""
Stage-discharge conversion through a per-station power-law rating curve.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional

from akvamanas.schemas.hydrology import RatingCurveIn
from akvamanas.schemas.fields import code_key


@dataclass(frozen=True)
class RatingCurve:
    h0: float = 0.0
    a: float = 0.03
    b: float = 1.6

    @classmethod
    def from_record(cls, record: RatingCurveIn) -> "RatingCurve":
        default = cls()
        return cls(
            h0=record.h0 if record.h0 is not None else default.h0,
            a=record.a if record.a is not None else default.a,
            b=record.b if record.b is not None else default.b,
        )


DEFAULT_RATING_CURVE = RatingCurve()


def stage_to_discharge(stage_cm: float, curve: Optional[RatingCurve]) -> float:
    """
    Discharge (m3/s) for a stage (cm).

    0 when there is no curve, when a <= 0 or b <= 0, or when the stage is
    at or below h0. Results too large for a float become `math.inf`.
    """
    if curve is None or curve.a <= 0 or curve.b <= 0:
        return 0.0
    depth = max(stage_cm - curve.h0, 0.0)
    if depth == 0.0:
        return 0.0
    try:
        return curve.a * depth ** curve.b
    except OverflowError:
        return math.inf


def discharge_to_stage(discharge: float, curve: Optional[RatingCurve]) -> float:
    """
    Invert the rating curve.

    A curve with a <= 0 or b <= 0 cannot be inverted and pins the stage
    at h0 whatever the discharge.
    """
    if curve is None:
        return 0.0
    if curve.a <= 0 or curve.b <= 0:
        return curve.h0
    try:
        return curve.h0 + (max(discharge, 0.0) / curve.a) ** (1.0 / curve.b)
    except OverflowError:
        return math.inf


def build_curve_map(records: list[RatingCurveIn]) -> dict[str, RatingCurve]:
    curves: dict[str, RatingCurve] = {}
    for record in records:
        key = code_key(record.station_code)
        if key:
            curves[key] = RatingCurve.from_record(record)
    return curves


def curve_for(station_code: str, curves: Mapping[str, RatingCurve]) -> RatingCurve:
    return curves.get(code_key(station_code), DEFAULT_RATING_CURVE)
