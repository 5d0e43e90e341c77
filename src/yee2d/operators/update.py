# operators/update.py
from __future__ import annotations

from typing import Union

import numpy as np


Coefficient = Union[float, np.ndarray]


def _interior(c: Coefficient) -> Coefficient:
    """Restrict a (nx, ny) coefficient map to the interior; scalars pass through."""
    if np.ndim(c) == 2:
        return c[1:-1, 1:-1]
    return c


def update_h(
    ez: np.ndarray,
    hx: np.ndarray,
    hy: np.ndarray,
    mu_x: Coefficient,
    mu_y: Coefficient,
) -> None:
    """
    Magnetic half of the leap-frog step, in place, interior cells only:

        Hx[x,y] += -mu_x * (Ez[x,y] - Ez[x,y-1])
        Hy[x,y] +=  mu_y * (Ez[x,y] - Ez[x-1,y])

    Reads Ez only, so every interior cell can be updated at once.
    The one-cell halo of Hx/Hy is never written.
    """
    core = ez[1:-1, 1:-1]
    hx[1:-1, 1:-1] -= _interior(mu_x) * (core - ez[1:-1, :-2])
    hy[1:-1, 1:-1] += _interior(mu_y) * (core - ez[:-2, 1:-1])


def update_e(
    ez: np.ndarray,
    hx: np.ndarray,
    hy: np.ndarray,
    eps_x: Coefficient,
    eps_y: Coefficient,
) -> None:
    """
    Electric half of the leap-frog step, in place, interior cells only:

        Ez[x,y] += eps_x[x,y] * (Hy[x+1,y] - Hy[x,y]) - eps_y[x,y] * (Hx[x,y+1] - Hx[x,y])

    Must run after update_h of the same step.
    """
    dhy = hy[2:, 1:-1] - hy[1:-1, 1:-1]
    dhx = hx[1:-1, 2:] - hx[1:-1, 1:-1]
    ez[1:-1, 1:-1] += _interior(eps_x) * dhy - _interior(eps_y) * dhx


def yee_step(
    ez: np.ndarray,
    hx: np.ndarray,
    hy: np.ndarray,
    *,
    mu_x: Coefficient,
    mu_y: Coefficient,
    eps_x: Coefficient,
    eps_y: Coefficient,
) -> None:
    """One full leap-frog update (H from Ez, then Ez from the new H), no source."""
    if not (ez.shape == hx.shape == hy.shape):
        raise ValueError(f"Field shapes differ: ez={ez.shape}, hx={hx.shape}, hy={hy.shape}")
    update_h(ez, hx, hy, mu_x, mu_y)
    update_e(ez, hx, hy, eps_x, eps_y)


def field_energy(ez: np.ndarray, hx: np.ndarray, hy: np.ndarray) -> float:
    """Sum of squared field samples; a cheap blow-up indicator, not a physical energy."""
    return float(np.sum(ez**2) + np.sum(hx**2) + np.sum(hy**2))
