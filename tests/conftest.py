import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy import text

from akvamanas.core.db import get_db
from akvamanas.models import Base
from akvamanas.main import app

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    Create an in-memory SQLite async engine with all tables.
    """
    engine = create_async_engine(TEST_DB_URL, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine):
    """
    Provide a fresh AsyncSession for each test.
    """
    TestingSessionLocal = sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with TestingSessionLocal() as session:
        yield session


@pytest_asyncio.fixture
async def clean_db(db_session):
    """
    Ensure the test starts with empty station and model tables.
    """
    await db_session.execute(text("DELETE FROM station_coefficients"))
    await db_session.execute(text("DELETE FROM model_state"))
    await db_session.execute(text("DELETE FROM stations"))
    await db_session.commit()
    yield


@pytest.fixture
def test_app(db_session, clean_db):
    """
    Return the FastAPI app with get_db overridden to use the test session.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()
