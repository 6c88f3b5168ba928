from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from akvamanas.core.config import Settings, settings as default_settings
from akvamanas.core.exceptions import MissingInputError
from akvamanas.repositories.regression_model_repository import RegressionModelRepository
from akvamanas.schemas.observations import HistoricalRecord
from akvamanas.schemas.training import TrainingResponse
from akvamanas.services.ridge_trainer import RidgeRegressionTrainer

logger = logging.getLogger(__name__)


class TrainingService:
    """
    Load the stored model, train it on historical records and save it.

    Nothing is written unless the trainer returned a complete model.
    """

    def __init__(self, db: AsyncSession, settings: Settings = default_settings):
        self.db = db
        self.model_repo = RegressionModelRepository(db)
        self.trainer = RidgeRegressionTrainer(
            lam=settings.ridge_lambda,
            jitter=settings.ridge_jitter,
            min_pairs=settings.min_training_pairs,
        )

    async def train(self, records: list[HistoricalRecord]) -> TrainingResponse:
        if not records:
            raise MissingInputError("No historical records were provided for training")

        model = await self.model_repo.load()
        report = self.trainer.train(model, records)
        await self.model_repo.save(report.model)

        logger.info("Model saved with %d station(s)", len(report.model.stations))
        return TrainingResponse(
            trained_at=report.model.trained_at,
            stations=len(report.model.stations),
            updated=report.updated,
            skipped=report.skipped,
        )
