import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from akvamanas.core.db import get_db
from akvamanas.core.exceptions import MissingInputError
from akvamanas.repositories.regression_model_repository import RegressionModelRepository
from akvamanas.schemas.training import RegressionModelOut, TrainingRequest, TrainingResponse
from akvamanas.services.training_service import TrainingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Training"])


@router.post(
    "/training",
    response_model=TrainingResponse,
    summary="Train the per-station regression model",
    description=(
        "Fits a ridge regression of tomorrow's water level for every station "
        "with at least five consecutive (today, tomorrow) pairs.\n\n"
        "- Stations with less history keep their previous coefficients.\n"
        "- `trainedAt` is advanced on every run.\n"
        "- An empty `records` list is rejected with HTTP 400."
    ),
)
async def train(payload: TrainingRequest, db: AsyncSession = Depends(get_db)):
    try:
        service = TrainingService(db=db)
        return await service.train(payload.records)
    except MissingInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Training failed")
        raise HTTPException(status_code=500, detail=f"Training failed: {e}")


@router.get(
    "/model",
    response_model=RegressionModelOut,
    summary="Show the stored regression model",
)
async def get_model(db: AsyncSession = Depends(get_db)):
    try:
        model = await RegressionModelRepository(db).load()
    except Exception as e:
        logger.exception("Loading the model failed")
        raise HTTPException(status_code=500, detail=f"Loading the model failed: {e}")
    return RegressionModelOut.model_validate(model.to_dict())
