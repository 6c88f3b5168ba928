from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from akvamanas.models.regression import ModelState, StationCoefficients
from akvamanas.schemas.fields import parse_timestamp
from akvamanas.services.regression_model import RegressionModel, validate_coefficients

MODEL_STATE_ID = 1


class RegressionModelRepository:
    """
    Loads and saves the persisted regression model.

    The model is read into a `RegressionModel` value; saving writes every
    station's coefficients back (insert or overwrite, never delete).
    Concurrent saves are not coordinated: the last writer wins.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load(self) -> RegressionModel:
        """
        Return the stored model, or an empty one if nothing was trained yet.

        Raises:
            CorruptModelError: a stored coefficient vector is invalid.
        """
        state = await self.db.get(ModelState, MODEL_STATE_ID)
        rows = (await self.db.execute(select(StationCoefficients))).scalars().all()

        return RegressionModel(
            # SQLite drops the timezone of stored datetimes
            trained_at=parse_timestamp(state.trained_at) if state else None,
            stations={row.station_code: validate_coefficients(row.station_code, row.coef) for row in rows},
        )

    async def save(self, model: RegressionModel) -> None:
        """
        Upsert the model's coefficients and trained timestamp, then commit.
        """
        now = datetime.now(timezone.utc)
        existing = {
            row.station_code: row
            for row in (await self.db.execute(select(StationCoefficients))).scalars().all()
        }

        for code, coef in model.stations.items():
            row = existing.get(code)
            if row:
                if row.coef != coef:
                    row.coef = list(coef)
                    row.updated_at = now
            else:
                self.db.add(StationCoefficients(station_code=code, coef=list(coef), updated_at=now))

        state = await self.db.get(ModelState, MODEL_STATE_ID)
        if state:
            state.trained_at = model.trained_at
        else:
            self.db.add(ModelState(id=MODEL_STATE_ID, trained_at=model.trained_at))

        await self.db.flush()
        await self.db.commit()
