import pytest

from akvamanas.services.hydrology.muskingum import (
    EdgeState,
    MuskingumRouter,
    muskingum_coefficients,
    route_step,
    update_node,
)
from akvamanas.services.hydrology.river_network import ReachParams


@pytest.mark.parametrize("k,x", [(3600.0, 0.2), (14000.0, 0.0), (7200.0, 0.5)])
def test_coefficients_sum_to_one(k, x):
    assert sum(muskingum_coefficients(k, x)) == pytest.approx(1.0)


def test_steady_flow_passes_unchanged():
    out = route_step(10.0, EdgeState(10.0, 10.0), ReachParams(k=3600.0, x=0.2))
    assert out.outflow == pytest.approx(10.0)
    assert out.inflow == 10.0


def test_near_zero_travel_time_passes_inflow_through():
    out = route_step(7.0, EdgeState(5.0, 5.0), ReachParams(k=1e-9, x=0.0))
    assert out.outflow == pytest.approx(7.0, rel=1e-6)


def test_outflow_is_never_negative():
    out = route_step(0.0, EdgeState(0.0, 10.0), ReachParams(k=0.0, x=0.0))
    assert out.outflow == 0.0


def test_node_update():
    assert update_node(10.0, 3.0, 1.0) == pytest.approx(6.0)
    assert update_node(10.0, 3.0, 1.0, self_carry=0.5) == pytest.approx(9.0)
    assert update_node(0.0, 0.0, -2.0) == 0.0


def test_router_delivers_flow_one_step_later():
    router = MuskingumRouter(
        edges=[(0, 1)],
        params=[ReachParams(k=3600.0, x=0.2)],
        order=[0],
    )
    router.seed([100.0, 0.0])

    first = router.step([100.0, 0.0])
    second = router.step([100.0, 0.0])

    c0, c1, _ = muskingum_coefficients(3600.0, 0.2)
    assert first == [0.0, 0.0]
    assert second[1] == pytest.approx((c0 + c1) * 100.0)
    assert second[0] == 0.0


def test_router_accumulates_confluence():
    router = MuskingumRouter(
        edges=[(0, 2), (1, 2)],
        params=[ReachParams(k=3600.0, x=0.0)] * 2,
        order=[0, 1],
    )
    router.seed([10.0, 20.0, 0.0])

    router.step([10.0, 20.0, 0.0])
    routed = router.step([10.0, 20.0, 0.0])

    c0, c1, _ = muskingum_coefficients(3600.0, 0.0)
    assert routed[2] == pytest.approx((c0 + c1) * 30.0)


def test_router_result_does_not_depend_on_order():
    edges = [(0, 1), (1, 2)]
    params = [ReachParams(k=3600.0, x=0.2), ReachParams(k=7200.0, x=0.1)]
    discharge = [40.0, 10.0, 5.0]
    results = []
    for order in ([0, 1], [1, 0]):
        router = MuskingumRouter(edges=edges, params=params, order=order)
        router.seed(discharge)
        results.append([router.step(discharge) for _ in range(3)])

    assert results[0] == results[1]
