from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

import numpy as np

from akvamanas.schemas.fields import code_key
from akvamanas.schemas.observations import HistoricalRecord
from akvamanas.services.regression_model import RegressionModel, design_row

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class TrainingReport:
    model: RegressionModel
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def solve_ridge(
    X: np.ndarray,
    y: np.ndarray,
    lam: float,
    jitter: float = 0.0,
) -> Optional[np.ndarray]:
    """
    Solve beta = (X^T X + (lam + jitter) I)^-1 X^T y.

    Returns None when the normal matrix cannot be inverted or the
    solution is not finite.
    """
    XT = X.T
    A = XT @ X + (lam + jitter) * np.eye(X.shape[1])
    try:
        inv = np.linalg.inv(A)
    except np.linalg.LinAlgError:
        return None
    beta = inv @ (XT @ y)
    if not np.all(np.isfinite(beta)):
        return None
    return beta


def training_pairs(rows: list[HistoricalRecord]) -> tuple[list[list[float]], list[float]]:
    """
    (today, tomorrow) pairs of one station's series.

    Rows are sorted by timestamp (stable, undated rows first); a pair is
    kept only when tomorrow has a water level.
    """
    ordered = sorted(rows, key=lambda r: (r.timestamp is not None, r.timestamp or _EPOCH))
    X: list[list[float]] = []
    y: list[float] = []
    for today, tomorrow in zip(ordered, ordered[1:]):
        if code_key(today.station_code) != code_key(tomorrow.station_code):
            continue
        if tomorrow.water_level_cm is None:
            continue
        X.append(design_row(today))
        y.append(tomorrow.water_level_cm)
    return X, y


class RidgeRegressionTrainer:
    """
    Fits one ridge regression per station from its historical series.

    Stations with too little history keep their previous coefficients.
    """

    def __init__(self, lam: float = 0.001, jitter: float = 1e-6, min_pairs: int = 5):
        self.lam = lam
        self.jitter = jitter
        self.min_pairs = min_pairs

    def fit_station(self, rows: list[HistoricalRecord]) -> Optional[list[float]]:
        X, y = training_pairs(rows)
        if len(X) < self.min_pairs:
            return None

        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y, dtype=float)
        beta = solve_ridge(X_arr, y_arr, self.lam)
        if beta is None:
            beta = solve_ridge(X_arr, y_arr, self.lam, self.jitter)
        return None if beta is None else [float(b) for b in beta]

    def train(
        self,
        model: RegressionModel,
        records: Iterable[HistoricalRecord],
        trained_at: Optional[datetime] = None,
    ) -> TrainingReport:
        """
        Return an updated copy of `model`.

        `trained_at` is advanced even when no station qualified.
        """
        updated_model = model.copy()
        known_codes = {code_key(code): code for code in updated_model.stations}

        by_station: dict[str, list[HistoricalRecord]] = {}
        for record in records:
            key = code_key(record.station_code)
            if not key:
                continue
            by_station.setdefault(key, []).append(record)

        report = TrainingReport(model=updated_model)
        for key, rows in by_station.items():
            coef = self.fit_station(rows)
            code = known_codes.get(key, rows[0].station_code)
            if coef is None:
                logger.warning("Station %s skipped: not enough valid history or singular matrix", code)
                report.skipped.append(code)
                continue
            updated_model.stations[code] = coef
            report.updated.append(code)

        updated_model.trained_at = trained_at or datetime.now(timezone.utc)
        logger.info(
            "Training finished: %d station(s) updated, %d skipped",
            len(report.updated),
            len(report.skipped),
        )
        return report
