from typing import Optional

from sqlalchemy import Float, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from akvamanas.models.base import Base


class Station(Base):
    """
    Monitoring station settings.

    Stores the metadata a forecast needs when the request does not carry
    its own station list: names, basin, datum offset, valid level range
    and roughness.
    """

    __tablename__ = "stations"

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Internal unique identifier for the station",
    )

    station_code: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Station code used to join observations, curves and reaches",
    )

    station_name: Mapped[str] = mapped_column(String(256), nullable=False, default="")

    river_name: Mapped[str] = mapped_column(String(256), nullable=False, default="")

    basin_name: Mapped[str] = mapped_column(String(256), nullable=False, default="")

    x: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    y: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    datum_offset_cm: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        comment="Offset added to regression predictions (cm)",
    )

    min_level_cm: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    max_level_cm: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    roughness_n: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        comment="Manning roughness of the station cross-section",
    )

    # ------------------------------------------------------------------
    # Constraints
    # ------------------------------------------------------------------

    __table_args__ = (
        UniqueConstraint("station_code", name="uq_station_code"),
    )
