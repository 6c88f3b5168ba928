from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from akvamanas.core.config import settings


# ---------------------------------------------------------------------
# Database engine
# ---------------------------------------------------------------------

# Holds station settings and the persisted regression model.
engine: AsyncEngine = create_async_engine(
    settings.database_url,
    pool_pre_ping=True,
)


# ---------------------------------------------------------------------
# Database session factory
# ---------------------------------------------------------------------

# `expire_on_commit=False` keeps ORM rows readable after the training
# commit, when the response is built from them.
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------
# Dependency injection
# ---------------------------------------------------------------------

async def get_db() -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency that provides an asynchronous database session.

    One session per request; training and station updates commit it
    explicitly, forecasts only read from it.
    """
    async with AsyncSessionLocal() as session:
        yield session
