from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from akvamanas.models.base import Base


class ModelState(Base):
    """
    Global state of the persisted regression model (a single row).
    """

    __tablename__ = "model_state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    trained_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="End of the last training run (UTC)",
    )


class StationCoefficients(Base):
    """
    Ridge-regression coefficients of one station.

    `coef` holds [intercept, water_level, precip, air_temp, wind_speed,
    wind_dir, rh, roughness]. Rows are only ever inserted or overwritten.
    """

    __tablename__ = "station_coefficients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    station_code: Mapped[str] = mapped_column(String(64), nullable=False)

    coef: Mapped[list] = mapped_column(JSON, nullable=False)

    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("station_code", name="uq_coef_station_code"),
    )
