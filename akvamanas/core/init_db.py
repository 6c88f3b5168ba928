from akvamanas.core.db import engine
from akvamanas.models import Base


async def init_db() -> None:
    """
    Create the station and regression-model tables if they do not exist.

    Notes:
    - `Base.metadata.create_all` never drops or alters existing tables,
      so a stored model survives restarts.
    - Schema migrations are out of scope for this service.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
