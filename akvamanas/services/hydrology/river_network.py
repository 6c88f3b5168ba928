"""
Directed river network built from reach records.

Stations are indices into an arena; each node keeps the indices of its
outgoing edges in input order. The routing order is computed once per run.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from akvamanas.schemas.fields import code_key
from akvamanas.schemas.hydrology import ReachIn

logger = logging.getLogger(__name__)

GRAVITY = 9.81
MIN_CELERITY = 0.1  # m/s
MIN_TRAVEL_TIME = 3600.0  # s

DEFAULT_WIDTH_M = 40.0
DEFAULT_DEPTH_M = 3.0
DEFAULT_MANNING_N = 0.035
DEFAULT_SLOPE = 1e-4
MIN_SLOPE = 1e-6


@dataclass(frozen=True)
class Reach:
    """Reach geometry with defaults applied."""

    from_code: str
    to_code: str
    length_m: float = 0.0
    slope: float = DEFAULT_SLOPE
    manning_n: float = DEFAULT_MANNING_N
    width_m: float = DEFAULT_WIDTH_M
    depth_m: float = DEFAULT_DEPTH_M

    @classmethod
    def from_record(cls, record: ReachIn) -> "Reach":
        slope = record.slope if record.slope is not None else DEFAULT_SLOPE
        n = record.manning_n if record.manning_n and record.manning_n > 0 else DEFAULT_MANNING_N
        width = record.width_m if record.width_m and record.width_m > 0 else DEFAULT_WIDTH_M
        depth = record.depth_m if record.depth_m and record.depth_m > 0 else DEFAULT_DEPTH_M
        return cls(
            from_code=record.from_station,
            to_code=record.to_station,
            length_m=max(record.length_km or 0.0, 0.0) * 1000.0,
            slope=max(slope, MIN_SLOPE),
            manning_n=n,
            width_m=width,
            depth_m=depth,
        )


@dataclass(frozen=True)
class ReachParams:
    """Muskingum parameters of one reach: travel time K (s) and weight X."""

    k: float
    x: float


def hydraulic_radius(width_m: float, depth_m: float) -> float:
    return (width_m * depth_m) / (width_m + 2.0 * depth_m)


def manning_velocity(radius_m: float, slope: float, n: float) -> float:
    return (1.0 / n) * radius_m ** (2.0 / 3.0) * math.sqrt(slope)


def wave_celerity(reach: Reach) -> float:
    radius = hydraulic_radius(reach.width_m, reach.depth_m)
    celerity = manning_velocity(radius, reach.slope, reach.manning_n) + math.sqrt(GRAVITY * reach.depth_m)
    return max(celerity, MIN_CELERITY)


def reach_params(reach: Reach, x: float = 0.2) -> ReachParams:
    k = max(reach.length_m / wave_celerity(reach), MIN_TRAVEL_TIME)
    return ReachParams(k=k, x=x)


class RiverNetworkGraph:
    """
    Edge list over an arena of station nodes.

    Attributes:
        nodes: station codes in first-appearance order.
        edges: reaches with both endpoints present.
        outgoing: per node, indices into `edges`.
    """

    def __init__(self, reaches: list[ReachIn]):
        self.nodes: list[str] = []
        self.edges: list[Reach] = []
        self.outgoing: list[list[int]] = []
        self._index: dict[str, int] = {}
        self._incoming: list[int] = []

        for record in reaches:
            if not record.from_station or not record.to_station:
                logger.warning("Skipping reach with missing endpoint: %r -> %r", record.from_station, record.to_station)
                continue
            reach = Reach.from_record(record)
            src = self._add_node(reach.from_code)
            dst = self._add_node(reach.to_code)
            self.outgoing[src].append(len(self.edges))
            self._incoming[dst] += 1
            self.edges.append(reach)

    def _add_node(self, code: str) -> int:
        key = code_key(code)
        if key not in self._index:
            self._index[key] = len(self.nodes)
            self.nodes.append(code)
            self.outgoing.append([])
            self._incoming.append(0)
        return self._index[key]

    def __contains__(self, code: str) -> bool:
        return code_key(code) in self._index

    def node_index(self, code: str) -> int:
        return self._index[code_key(code)]

    def sources(self) -> list[int]:
        return [i for i, count in enumerate(self._incoming) if count == 0]

    def traversal_order(self) -> list[int]:
        """
        Edge indices in approximate upstream-to-downstream order.

        Depth-first from every source node; edges left unvisited (cycles
        without a source) are appended in input order.
        """
        visited = [False] * len(self.edges)
        order: list[int] = []

        for source in self.sources():
            stack = list(reversed(self.outgoing[source]))
            while stack:
                edge_idx = stack.pop()
                if visited[edge_idx]:
                    continue
                visited[edge_idx] = True
                order.append(edge_idx)
                downstream = self._index[code_key(self.edges[edge_idx].to_code)]
                stack.extend(reversed(self.outgoing[downstream]))

        leftovers = [i for i, seen in enumerate(visited) if not seen]
        if leftovers:
            logger.warning("River network has %d edge(s) unreachable from a source (cycle?)", len(leftovers))
        order.extend(leftovers)
        return order

    def edge_endpoints(self) -> list[tuple[int, int]]:
        return [(self.node_index(e.from_code), self.node_index(e.to_code)) for e in self.edges]

    def routing_params(self, x: float = 0.2) -> list[ReachParams]:
        return [reach_params(reach, x) for reach in self.edges]
