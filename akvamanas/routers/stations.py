from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from akvamanas.core.db import get_db
from akvamanas.repositories.station_repository import StationRepository
from akvamanas.schemas.stations import (
    StationListResponse,
    StationOut,
    StationUpsertRequest,
    StationUpsertResponse,
)

router = APIRouter(prefix="/stations", tags=["Stations"])


@router.get(
    "",
    response_model=StationListResponse,
    summary="List station settings",
    description="Returns the stored station settings, optionally filtered by river.",
)
async def list_stations(
    river: Optional[str] = Query(default=None, description="Filter by river name"),
    limit: int = Query(default=200, ge=1, le=5000),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> StationListResponse:
    repo = StationRepository(db)

    items = await repo.list_stations(river=river, limit=limit, offset=offset)
    total = await repo.count(river=river)

    return StationListResponse(
        items=[StationOut.model_validate(x) for x in items],
        total=total,
    )


@router.put(
    "",
    response_model=StationUpsertResponse,
    summary="Replace station settings",
    description=(
        "Upserts station settings by station code. Stations not listed in the "
        "body are kept. Forecast requests without a `stations` list use these."
    ),
)
async def upsert_stations(payload: StationUpsertRequest, db: AsyncSession = Depends(get_db)):
    items = [s for s in payload.items if s.station_code]
    if not items:
        raise HTTPException(status_code=400, detail="Provide at least one station with a station_code")

    repo = StationRepository(db)
    for item in items:
        await repo.upsert(item)
    await db.commit()

    return StationUpsertResponse(
        updated=len(items),
        total=await repo.count(),
        updated_at=datetime.now(timezone.utc),
    )
