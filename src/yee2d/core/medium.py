from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .config import (
    BACKGROUND_PERMITTIVITY,
    INCLUSION_PERMITTIVITY,
    SPEED_OF_LIGHT,
    Bound,
    InvalidConfiguration,
    is_finite,
    is_int,
)
from .grid import Discretizer


@dataclass(frozen=True)
class Inclusion:
    """One circular low-index disc, in physical coordinates."""
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class PermittivityField:
    """
    Relative permittivity map and its two update-coefficient maps:

        eps_x = c*dt/dx / eps,   eps_y = c*dt/dy / eps

    All arrays are (nx, ny) and read-only.
    """
    eps: np.ndarray
    eps_x: np.ndarray
    eps_y: np.ndarray
    inclusions: Tuple[Inclusion, ...] = ()


@dataclass(frozen=True)
class PermeabilityField:
    mu: float
    mu_x: float
    mu_y: float


def _readonly(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


def random_inclusions(
    n: int,
    r: float,
    bound: Bound,
    rng: np.random.Generator,
) -> Tuple[Inclusion, ...]:
    """
    Draw n discs: centres uniform in [0, max_x] x [0, max_y], radii uniform in [0, r].

    Draw order is all x, then all y, then all radii.
    """
    if not is_int(n) or n < 0:
        raise InvalidConfiguration(f"n must be a non-negative integer, got {n!r}.")
    if not is_finite(r) or float(r) < 0.0:
        raise InvalidConfiguration("r must be finite and >= 0.")
    n = int(n)

    xs = bound.max_x * rng.random(n)
    ys = bound.max_y * rng.random(n)
    rs = float(r) * rng.random(n)

    return tuple(Inclusion(float(x), float(y), float(rr)) for x, y, rr in zip(xs, ys, rs))


def permittivity_from_inclusions(
    inclusions: Sequence[Inclusion],
    d: Discretizer,
    *,
    background: float = BACKGROUND_PERMITTIVITY,
    inside: float = INCLUSION_PERMITTIVITY,
) -> PermittivityField:
    """
    Rasterize discs onto the grid.

    A cell is set to `inside` when its position lies strictly inside any disc;
    overlapping discs simply union. Cost is O(len(inclusions) * nx * ny), fine
    for a handful of discs. A spatial index would be needed for many.
    """
    X, Y = d.mesh()
    in_any = np.zeros(d.shape, dtype=bool)
    for inc in inclusions:
        in_any |= np.hypot(X - inc.x, Y - inc.y) < inc.radius

    eps = np.full(d.shape, float(background), dtype=float)
    eps[in_any] = float(inside)

    eps_x = SPEED_OF_LIGHT * d.dt / d.dx / eps
    eps_y = SPEED_OF_LIGHT * d.dt / d.dy / eps

    return PermittivityField(
        eps=_readonly(eps),
        eps_x=_readonly(eps_x),
        eps_y=_readonly(eps_y),
        inclusions=tuple(inclusions),
    )


def random_permittivity(
    n: int,
    r: float,
    bound: Bound,
    d: Discretizer,
    rng: Optional[np.random.Generator] = None,
) -> PermittivityField:
    """Background medium (eps=9) pierced by n random vacuum discs (eps=1)."""
    if rng is None:
        rng = np.random.default_rng()
    inclusions = random_inclusions(n, r, bound, rng)
    return permittivity_from_inclusions(inclusions, d)


def uniform_permeability(mu: float, d: Discretizer) -> PermeabilityField:
    mu = float(mu)
    if not is_finite(mu) or mu <= 0.0:
        raise InvalidConfiguration("mu must be finite and > 0.")
    mu_x = SPEED_OF_LIGHT * d.dt / d.dx / mu
    mu_y = SPEED_OF_LIGHT * d.dt / d.dy / mu
    return PermeabilityField(mu=mu, mu_x=float(mu_x), mu_y=float(mu_y))
