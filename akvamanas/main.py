from contextlib import asynccontextmanager

from fastapi import FastAPI

from akvamanas.core.config import settings
from akvamanas.core.init_db import init_db
from akvamanas.core.logging_config import configure_logging
from akvamanas.routers.forecast import router as forecast_router
from akvamanas.routers.health import router as health_router
from akvamanas.routers.stations import router as stations_router
from akvamanas.routers.training import router as training_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create the database tables on startup; nothing to release on shutdown.
    """
    await init_db()
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Water-level forecasting: model training, 72-hour forecasts and station settings",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Register API routers
    app.include_router(health_router)
    app.include_router(stations_router)
    app.include_router(training_router)
    app.include_router(forecast_router)

    return app


# Application entry point
app = create_app()
