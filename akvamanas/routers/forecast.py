import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from akvamanas.core.db import get_db
from akvamanas.core.exceptions import MissingInputError
from akvamanas.schemas.forecast import ForecastRequest, ForecastResponse
from akvamanas.services.forecast_service import ForecastService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forecast", tags=["Forecast"])


@router.post(
    "",
    response_model=ForecastResponse,
    summary="Calculate the 72-hour water-level forecast",
    description=(
        "Runs the routing model when reaches, rating curves and basin parameters "
        "are supplied, otherwise the per-station regression fallback.\n\n"
        "- Hourly rows are sorted by station code and time.\n"
        "- Daily output is one row per station carrying `day1_cm`, `day2_cm` and "
        "`day3_cm` (the local 23:00 stage of days +1/+2/+3), sorted by river and station.\n"
        "- A request without water-level observations is rejected with HTTP 400."
    ),
)
async def forecast(payload: ForecastRequest, db: AsyncSession = Depends(get_db)):
    try:
        service = ForecastService(db=db)
        return await service.forecast(payload)
    except MissingInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Forecast failed")
        raise HTTPException(status_code=500, detail=f"Forecast failed: {e}")
