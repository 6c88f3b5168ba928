"""
Linear Muskingum routing of one reach, one timestep at a time.
"""
from __future__ import annotations

from dataclasses import dataclass

from akvamanas.services.hydrology.river_network import ReachParams

DT_SECONDS = 3600.0


@dataclass(frozen=True)
class EdgeState:
    """Inflow and outflow (m3/s) of a reach at the end of the last step."""

    inflow: float = 0.0
    outflow: float = 0.0


def muskingum_coefficients(k: float, x: float, dt: float = DT_SECONDS) -> tuple[float, float, float]:
    denom = k - k * x + 0.5 * dt
    c0 = (-k * x + 0.5 * dt) / denom
    c1 = (k * x + 0.5 * dt) / denom
    c2 = (k - k * x - 0.5 * dt) / denom
    return c0, c1, c2


def route_step(q_in: float, prev: EdgeState, params: ReachParams, dt: float = DT_SECONDS) -> EdgeState:
    """Route `q_in` through the reach and return the new reach state."""
    c0, c1, c2 = muskingum_coefficients(params.k, params.x, dt)
    q_out = max(c0 * q_in + c1 * prev.inflow + c2 * prev.outflow, 0.0)
    return EdgeState(inflow=q_in, outflow=q_out)


def update_node(q_prev: float, routed_inflow: float, lateral: float, self_carry: float = 0.2) -> float:
    """
    Station discharge for the next step.

    `self_carry * q_prev` is a simplified memory term, not a continuity
    equation; the routed and lateral inflows are added on top of it.
    """
    return max(0.0, self_carry * q_prev + routed_inflow + lateral)


class MuskingumRouter:
    """
    Routes every reach of a network once per timestep.

    Each reach delivers the outflow it held at the end of the previous
    step to its downstream node, then routes the current discharge of its
    upstream node. With K >= dt, flow that enters a reach reaches the next
    station one step later at the earliest.

    A step reads only the discharges and reach states of the previous
    step, so the result does not depend on `order`.
    """

    def __init__(
        self,
        edges: list[tuple[int, int]],
        params: list[ReachParams],
        order: list[int],
        dt: float = DT_SECONDS,
    ):
        self.edges = edges
        self.params = params
        self.order = order
        self.dt = dt
        self.states = [EdgeState() for _ in edges]

    def seed(self, discharge: list[float]) -> None:
        """Start every reach empty, with the upstream discharge as last inflow."""
        self.states = [EdgeState(inflow=discharge[src], outflow=0.0) for src, _ in self.edges]

    def step(self, discharge: list[float]) -> list[float]:
        """Return the routed inflow accumulated per node for this step."""
        routed = [0.0] * len(discharge)
        for edge_idx in self.order:
            src, dst = self.edges[edge_idx]
            prev = self.states[edge_idx]
            routed[dst] += prev.outflow
            self.states[edge_idx] = route_step(discharge[src], prev, self.params[edge_idx], self.dt)
        return routed
