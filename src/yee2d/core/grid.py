# core/grid.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import numpy as np

from .config import Bound, InvalidConfiguration, SPEED_OF_LIGHT, is_int


@dataclass(frozen=True)
class Discretizer:
    """
    Uniform cell-centred discretization of a Bound.

    Cell (i, j) (0-based) sits at physical position ((i+1)*dx, (j+1)*dy),
    so the last cell touches max_x / max_y.
    """
    nx: int
    ny: int
    dx: float
    dy: float
    dt: float
    nt: int

    def x(self) -> np.ndarray:
        return self.dx * np.arange(1, self.nx + 1, dtype=float)

    def y(self) -> np.ndarray:
        return self.dy * np.arange(1, self.ny + 1, dtype=float)

    def mesh(self) -> Tuple[np.ndarray, np.ndarray]:
        return np.meshgrid(self.x(), self.y(), indexing="ij")

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.nx, self.ny)


def cfl_time_step(dx: float, dy: float) -> float:
    """Largest stable explicit 2D Yee step: dt = 1 / (c * sqrt(1/dx^2 + 1/dy^2))."""
    return 1.0 / (SPEED_OF_LIGHT * np.sqrt(1.0 / dx**2 + 1.0 / dy**2))


def discretize(bound: Bound, nx: int, ny: int) -> Discretizer:
    """
    Derive cell sizes from the requested cell counts, then the time step
    from the Courant limit and the number of steps covering bound.max_t.
    """
    if not is_int(nx) or not is_int(ny):
        raise InvalidConfiguration("nx and ny must be integers.")
    nx = int(nx)
    ny = int(ny)
    if nx < 2 or ny < 2:
        raise InvalidConfiguration(f"Discretizer requires nx, ny >= 2, got nx={nx}, ny={ny}.")

    dx = float(bound.max_x) / nx
    dy = float(bound.max_y) / ny
    dt = float(cfl_time_step(dx, dy))
    nt = int(round(float(bound.max_t) / dt))

    return Discretizer(nx=nx, ny=ny, dx=dx, dy=dy, dt=dt, nt=nt)


def courant_number(d: Discretizer) -> float:
    """c * dt * sqrt(1/dx^2 + 1/dy^2); the scheme is stable for values <= 1."""
    return float(SPEED_OF_LIGHT * d.dt * np.sqrt(1.0 / d.dx**2 + 1.0 / d.dy**2))
