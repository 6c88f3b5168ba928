from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from akvamanas.core.config import settings
from akvamanas.core.db import get_db

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    summary="Service health check",
    description=(
        "Checks whether the forecasting service is running. "
        "This endpoint **does not** verify database connectivity."
    ),
    response_description="Service status",
)
def health():
    """
    **Returns:**
    - `status`: Always `ok` if the service is running
    - `service`: Service name (configured via `APP_NAME`)
    - `environment`: Current environment (configured via `ENVIRONMENT`)
    """
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
    }


@router.get(
    "/health/db",
    summary="Database health check",
    description=(
        "Executes `SELECT 1` against the database holding station settings "
        "and the regression model."
    ),
    response_description="Database connection status",
)
async def health_db(db: AsyncSession = Depends(get_db)):
    await db.execute(text("SELECT 1"))
    return {"status": "ok", "db": "ok"}
