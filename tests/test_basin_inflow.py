import pytest

from akvamanas.schemas.hydrology import BasinParamsIn
from akvamanas.services.hydrology.basin_inflow import (
    BasinParams,
    aggregate_basin_precipitation,
    build_basin_map,
    lateral_inflow,
)


@pytest.fixture
def basins():
    return build_basin_map([
        BasinParamsIn(basin_name="Daugava", runoff_coeff=0.2, baseflow=1.0),
        BasinParamsIn(basin_name="Gauja", runoff_coeff=None, baseflow=None),
    ])


def test_station_reading_takes_priority(basins):
    q = lateral_inflow(5.0, "Daugava", basins, {"daugava": 50.0})
    assert q == pytest.approx(1.0 + 5.0 * 0.2)


def test_station_without_reading_uses_basin_maximum(basins):
    agg = aggregate_basin_precipitation([
        ("Daugava", 3.0),
        (" daugava ", 7.0),
        ("Gauja", None),
        ("", 9.0),
    ])

    assert agg == {"daugava": 7.0}
    assert lateral_inflow(None, "DAUGAVA", basins, agg) == pytest.approx(1.0 + 7.0 * 0.2)


def test_no_precipitation_anywhere_leaves_baseflow(basins):
    assert lateral_inflow(None, "Daugava", basins, {}) == pytest.approx(1.0)


def test_negative_precipitation_is_ignored(basins):
    assert lateral_inflow(-4.0, "Daugava", basins, {}) == pytest.approx(1.0)


def test_unknown_basin_uses_defaults(basins):
    assert basins["gauja"] == BasinParams()
    assert lateral_inflow(10.0, "Venta", basins, {}) == pytest.approx(10.0 * 0.2)
