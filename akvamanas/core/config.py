from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings.

    This class loads configuration values from environment variables
    and optionally from a `.env` file. It uses Pydantic Settings
    to provide type validation and default values.

    Environment variables take precedence over `.env` values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------
    # Application settings
    # ---------------------------------------------------------------------

    app_name: str = Field(
        default="akvamanas",
        alias="APP_NAME",
        description="Application name displayed in logs and API documentation",
    )

    environment: str = Field(
        default="local",
        alias="ENVIRONMENT",
        description="Runtime environment (local, dev, prod)",
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # ---------------------------------------------------------------------
    # Database settings
    # ---------------------------------------------------------------------

    database_url: str = Field(
        default="sqlite+aiosqlite:///./akvamanas.db",
        alias="DATABASE_URL",
        description="Async SQLAlchemy connection URL (SQLite or PostgreSQL)",
    )

    # ---------------------------------------------------------------------
    # Forecast engine
    # ---------------------------------------------------------------------

    forecast_timezone: str = Field(
        default="UTC",
        alias="FORECAST_TIMEZONE",
        description="IANA timezone used for local days, daily snapshots and chart labels",
    )

    forecast_horizon_hours: int = Field(
        default=72,
        alias="FORECAST_HORIZON_HOURS",
        ge=1,
        description="Number of hourly steps simulated by the routing model",
    )

    daily_snapshot_hour: int = Field(
        default=23,
        alias="DAILY_SNAPSHOT_HOUR",
        ge=0,
        le=23,
        description="Local hour whose routed stage becomes the daily value",
    )

    routing_self_carry: float = Field(
        default=0.2,
        alias="ROUTING_SELF_CARRY",
        description="Share of the previous station discharge carried into the next hour",
    )

    muskingum_x: float = Field(
        default=0.2,
        alias="MUSKINGUM_X",
        description="Muskingum weighting factor X applied to every reach",
    )

    fallback_decay: float = Field(
        default=0.98,
        alias="FALLBACK_DECAY",
        description="Day-over-day decay of the regression fallback",
    )

    fallback_air_temp_gain: float = Field(
        default=0.1,
        alias="FALLBACK_AIR_TEMP_GAIN",
        description="Air temperature nudge (cm per degree C) applied on day +2",
    )

    # ---------------------------------------------------------------------
    # Regression training
    # ---------------------------------------------------------------------

    ridge_lambda: float = Field(
        default=0.001,
        alias="RIDGE_LAMBDA",
        description="L2 penalty of the per-station ridge regression",
    )

    ridge_jitter: float = Field(
        default=1e-6,
        alias="RIDGE_JITTER",
        description="Diagonal jitter added when the normal matrix is singular",
    )

    min_training_pairs: int = Field(
        default=5,
        alias="MIN_TRAINING_PAIRS",
        ge=1,
        description="Minimum (today, tomorrow) pairs needed to fit a station",
    )


# Singleton settings instance
settings = Settings()
