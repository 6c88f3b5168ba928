"""
Per-station linear predictor of tomorrow's water level.

The model is a plain value: training returns a new one and the caller
persists it. Its serialized form is

    {"trainedAt": "<ISO-8601>" | null, "stations": {"<code>": {"coef": [8 floats]}}}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

from akvamanas.core.exceptions import CorruptModelError
from akvamanas.schemas.fields import code_key, parse_timestamp

FEATURES = (
    "intercept",
    "water_level_cm",
    "precipitation_mm",
    "air_temp_c",
    "wind_speed_mps",
    "wind_dir_deg",
    "rh_pct",
    "roughness_n",
)
N_FEATURES = len(FEATURES)


def design_row(record: Any) -> list[float]:
    """Feature vector of a record; missing attributes or values count as 0."""
    row = [1.0]
    for name in FEATURES[1:]:
        value = getattr(record, name, None)
        row.append(0.0 if value is None else float(value))
    return row


def dot(coef: Sequence[float], features: Sequence[float]) -> float:
    return sum(c * f for c, f in zip(coef, features))


@dataclass
class RegressionModel:
    trained_at: Optional[datetime] = None
    stations: dict[str, list[float]] = field(default_factory=dict)

    def coefficients(self, station_code: str) -> Optional[list[float]]:
        key = code_key(station_code)
        for code, coef in self.stations.items():
            if code_key(code) == key:
                return coef
        return None

    def copy(self) -> "RegressionModel":
        return RegressionModel(
            trained_at=self.trained_at,
            stations={code: list(coef) for code, coef in self.stations.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "trainedAt": self.trained_at.isoformat() if self.trained_at else None,
            "stations": {code: {"coef": list(coef)} for code, coef in self.stations.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegressionModel":
        if not isinstance(data, dict) or not isinstance(data.get("stations", {}), dict):
            raise CorruptModelError("Model must be an object with a 'stations' mapping")

        raw_trained_at = data.get("trainedAt")
        trained_at = parse_timestamp(raw_trained_at)
        if raw_trained_at is not None and trained_at is None:
            raise CorruptModelError(f"Invalid trainedAt value: {raw_trained_at!r}")

        stations: dict[str, list[float]] = {}
        for code, entry in (data.get("stations") or {}).items():
            coef = entry.get("coef") if isinstance(entry, dict) else None
            stations[code] = validate_coefficients(code, coef)
        return cls(trained_at=trained_at, stations=stations)


def validate_coefficients(code: str, coef: Any) -> list[float]:
    if not isinstance(coef, (list, tuple)) or len(coef) != N_FEATURES:
        raise CorruptModelError(f"Station {code!r} must have {N_FEATURES} coefficients")
    try:
        return [float(c) for c in coef]
    except (TypeError, ValueError) as e:
        raise CorruptModelError(f"Station {code!r} has non-numeric coefficients") from e
