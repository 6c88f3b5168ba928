from akvamanas.models.base import Base
from akvamanas.models.regression import ModelState, StationCoefficients
from akvamanas.models.station import Station

__all__ = ["Base", "ModelState", "Station", "StationCoefficients"]
