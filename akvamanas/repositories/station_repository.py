from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from akvamanas.models.station import Station
from akvamanas.schemas.stations import StationIn


class StationRepository:
    """
    Repository for station settings.

    Encapsulates the SQLAlchemy queries on `Station` so that services and
    routers never touch the session directly.
    """

    def __init__(self, db: AsyncSession):
        """
        Args:
            db: Asynchronous SQLAlchemy session.
        """
        self.db = db

    async def get_by_code(self, station_code: str) -> Optional[Station]:
        """
        Return a station by code (case-insensitive), or None if not found.
        """
        stmt = select(Station).where(func.lower(Station.station_code) == station_code.strip().lower())
        res = await self.db.execute(stmt)
        return res.scalar_one_or_none()

    async def upsert(self, data: StationIn) -> Station:
        """
        Insert or update the settings of one station.

        The station code is the natural key; every other column is
        overwritten with the incoming values.

        Returns:
            The existing or newly created `Station` instance.
        """
        values = data.model_dump()
        station = await self.get_by_code(data.station_code)

        if station:
            for name, value in values.items():
                setattr(station, name, value)
            await self.db.flush()
            return station

        station = Station(**values)
        self.db.add(station)

        # Flush to obtain the generated primary key without committing
        await self.db.flush()

        return station

    async def list_stations(
        self,
        river: Optional[str] = None,
        limit: int = 1000,
        offset: int = 0,
    ) -> List[Station]:
        """
        List stations ordered by code, optionally filtered by river name.
        """
        stmt = select(Station).order_by(Station.station_code.asc()).limit(limit).offset(offset)
        if river:
            stmt = stmt.where(Station.river_name == river)

        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def count(self, river: Optional[str] = None) -> int:
        stmt = select(func.count(Station.id))
        if river:
            stmt = stmt.where(Station.river_name == river)
        return int((await self.db.execute(stmt)).scalar_one())
