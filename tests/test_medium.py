import numpy as np
import pytest

from yee2d.core import (
    BACKGROUND_PERMITTIVITY,
    SPEED_OF_LIGHT,
    Bound,
    Inclusion,
    InvalidConfiguration,
    discretize,
    permittivity_from_inclusions,
    random_inclusions,
    random_permittivity,
    uniform_permeability,
)


def _expected_eps(inclusions, d):
    eps = np.full((d.nx, d.ny), 9.0)
    for i in range(d.nx):
        for j in range(d.ny):
            px, py = (i + 1) * d.dx, (j + 1) * d.dy
            for inc in inclusions:
                if np.sqrt((px - inc.x) ** 2 + (py - inc.y) ** 2) < inc.radius:
                    eps[i, j] = 1.0
    return eps


def test_no_inclusions_is_uniform_background():
    b = Bound(3e-6, 10e-6, 1e-12)
    d = discretize(b, 30, 100)
    field = random_permittivity(0, 0.45e-6, b, d, np.random.default_rng(0))
    assert np.all(field.eps == BACKGROUND_PERMITTIVITY)
    assert field.inclusions == ()


def test_known_disc():
    b = Bound(1.0, 1.0, 1e-9)
    d = discretize(b, 10, 10)
    inc = Inclusion(x=0.5, y=0.5, radius=0.25)
    field = permittivity_from_inclusions([inc], d)

    np.testing.assert_array_equal(field.eps, _expected_eps([inc], d))
    # cell (4, 4) sits exactly on the centre, cell (0, 0) far outside
    assert field.eps[4, 4] == 1.0
    assert field.eps[0, 0] == 9.0
    assert field.eps[9, 9] == 9.0


def test_overlapping_discs_union():
    b = Bound(1.0, 1.0, 1e-9)
    d = discretize(b, 20, 20)
    a = Inclusion(0.4, 0.5, 0.2)
    c = Inclusion(0.6, 0.5, 0.2)
    ab = permittivity_from_inclusions([a, c], d).eps
    ba = permittivity_from_inclusions([c, a], d).eps
    np.testing.assert_array_equal(ab, ba)
    only_a = permittivity_from_inclusions([a], d).eps
    only_c = permittivity_from_inclusions([c], d).eps
    np.testing.assert_array_equal(ab == 1.0, (only_a == 1.0) | (only_c == 1.0))


def test_random_inclusion_containment():
    b = Bound(3e-6, 10e-6, 1e-12)
    d = discretize(b, 30, 100)
    field = random_permittivity(4, 1.5e-6, b, d, np.random.default_rng(42))
    assert len(field.inclusions) == 4
    np.testing.assert_array_equal(field.eps, _expected_eps(field.inclusions, d))
    assert set(np.unique(field.eps)) <= {1.0, 9.0}


def test_random_inclusions_within_ranges():
    b = Bound(2.0, 3.0, 1.0)
    incs = random_inclusions(50, 0.5, b, np.random.default_rng(1))
    xs = np.array([i.x for i in incs])
    ys = np.array([i.y for i in incs])
    rs = np.array([i.radius for i in incs])
    assert np.all((0 <= xs) & (xs <= 2.0))
    assert np.all((0 <= ys) & (ys <= 3.0))
    assert np.all((0 <= rs) & (rs <= 0.5))


def test_same_seed_same_medium():
    b = Bound(3e-6, 10e-6, 1e-12)
    d = discretize(b, 30, 100)
    f1 = random_permittivity(3, 1e-6, b, d, np.random.default_rng(7))
    f2 = random_permittivity(3, 1e-6, b, d, np.random.default_rng(7))
    np.testing.assert_array_equal(f1.eps, f2.eps)
    np.testing.assert_array_equal(f1.eps_x, f2.eps_x)
    np.testing.assert_array_equal(f1.eps_y, f2.eps_y)


def test_update_coefficients():
    b = Bound(1.0, 2.0, 1e-9)
    d = discretize(b, 10, 10)
    field = permittivity_from_inclusions([Inclusion(0.5, 1.0, 0.3)], d)
    np.testing.assert_allclose(field.eps_x, SPEED_OF_LIGHT * d.dt / d.dx / field.eps)
    np.testing.assert_allclose(field.eps_y, SPEED_OF_LIGHT * d.dt / d.dy / field.eps)


def test_permittivity_is_read_only():
    d = discretize(Bound(1.0, 1.0, 1e-9), 5, 5)
    field = permittivity_from_inclusions([], d)
    with pytest.raises(ValueError):
        field.eps[0, 0] = 3.0


@pytest.mark.parametrize(
    "n,r",
    [(-1, 0.1), (1.5, 0.1), (2.0, 0.1), (2, -0.1), (2, float("nan")), (2, float("inf"))],
)
def test_invalid_inclusion_parameters(n, r):
    with pytest.raises(InvalidConfiguration):
        random_inclusions(n, r, Bound(1.0, 1.0, 1.0), np.random.default_rng(0))


def test_uniform_permeability():
    d = discretize(Bound(1.0, 2.0, 1e-9), 10, 10)
    p = uniform_permeability(2.0, d)
    assert p.mu_x == pytest.approx(SPEED_OF_LIGHT * d.dt / d.dx / 2.0)
    assert p.mu_y == pytest.approx(SPEED_OF_LIGHT * d.dt / d.dy / 2.0)
    for bad in (0.0, -1.0, float("nan"), float("inf")):
        with pytest.raises(InvalidConfiguration):
            uniform_permeability(bad, d)
