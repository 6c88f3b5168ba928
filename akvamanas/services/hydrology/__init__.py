from akvamanas.services.hydrology.basin_inflow import BasinParams, lateral_inflow
from akvamanas.services.hydrology.muskingum import EdgeState, MuskingumRouter, route_step
from akvamanas.services.hydrology.rating_curve import RatingCurve, discharge_to_stage, stage_to_discharge
from akvamanas.services.hydrology.river_network import Reach, ReachParams, RiverNetworkGraph

__all__ = [
    "BasinParams",
    "EdgeState",
    "MuskingumRouter",
    "RatingCurve",
    "Reach",
    "ReachParams",
    "RiverNetworkGraph",
    "discharge_to_stage",
    "lateral_inflow",
    "route_step",
    "stage_to_discharge",
]
