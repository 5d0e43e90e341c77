import numpy as np
import pytest

from yee2d.core import (
    SPEED_OF_LIGHT,
    Bound,
    InvalidConfiguration,
    SimulationConfig,
    courant_number,
    discretize,
)


def test_default_geometry_discretization():
    d = discretize(Bound(3e-6, 10e-6, 1e-12), 120, 400)
    assert d.dx == pytest.approx(2.5e-8, rel=1e-12)
    assert d.dy == pytest.approx(2.5e-8, rel=1e-12)

    expected_dt = 2.5e-8 / (SPEED_OF_LIGHT * np.sqrt(2.0))
    assert d.dt == pytest.approx(expected_dt, rel=1e-12)
    assert d.dt == pytest.approx(5.9e-17, rel=2e-3)

    assert d.nt == round(1e-12 / d.dt)
    assert 16950 <= d.nt <= 16975


@pytest.mark.parametrize("nx,ny", [(2, 2), (7, 3), (120, 400), (50, 11)])
def test_courant_bound_holds(nx, ny):
    d = discretize(Bound(1e-6, 2.5e-6, 1e-14), nx, ny)
    assert courant_number(d) <= 1.0 + 1e-12
    assert courant_number(d) == pytest.approx(1.0, rel=1e-12)
    assert d.nt >= 0


def test_cell_positions():
    d = discretize(Bound(1.0, 2.0, 1e-9), 10, 20)
    x, y = d.x(), d.y()
    assert x[0] == pytest.approx(0.1)
    assert x[-1] == pytest.approx(1.0)
    assert y[0] == pytest.approx(0.1)
    assert y[-1] == pytest.approx(2.0)
    X, Y = d.mesh()
    assert X.shape == Y.shape == (10, 20)


@pytest.mark.parametrize("nx,ny", [(1, 10), (10, 1), (0, 0)])
def test_too_few_cells_rejected(nx, ny):
    with pytest.raises(InvalidConfiguration):
        discretize(Bound(1.0, 1.0, 1.0), nx, ny)


@pytest.mark.parametrize("extents", [(0.0, 1.0, 1.0), (1.0, -1.0, 1.0), (1.0, 1.0, 0.0)])
def test_non_positive_bound_rejected(extents):
    with pytest.raises(InvalidConfiguration):
        Bound(*extents)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"nx": 1},
        {"ny": 2.5},
        {"max_y": 0.0},
        {"wavelength": 0.0},
        {"n": -1},
        {"r": -1e-7},
        {"mu": 0.0},
        {"wavelength": float("nan")},
        {"wavelength": float("inf")},
        {"r": float("nan")},
        {"r": float("inf")},
        {"mu": float("nan")},
        {"mu": float("inf")},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(InvalidConfiguration):
        SimulationConfig(**kwargs)


def test_invalid_configuration_is_value_error():
    assert issubclass(InvalidConfiguration, ValueError)


@pytest.mark.parametrize("nx,ny", [(2.0, 10), (10, 12.0), (True, 10)])
def test_non_integer_cell_counts_rejected(nx, ny):
    # same integer rule as SimulationConfig
    with pytest.raises(InvalidConfiguration):
        discretize(Bound(1.0, 1.0, 1.0), nx, ny)
    with pytest.raises(InvalidConfiguration):
        SimulationConfig(nx=nx, ny=ny)


def test_numpy_integer_cell_counts_accepted():
    d = discretize(Bound(1.0, 1.0, 1.0), np.int64(4), np.int32(5))
    assert (d.nx, d.ny) == (4, 5)
    assert isinstance(d.nx, int)
