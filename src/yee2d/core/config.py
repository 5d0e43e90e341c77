from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.constants import speed_of_light


SPEED_OF_LIGHT: float = float(speed_of_light)  # m/s (exact SI value)

BACKGROUND_PERMITTIVITY: float = 9.0
INCLUSION_PERMITTIVITY: float = 1.0


class InvalidConfiguration(ValueError):
    """Raised once, at construction, for out-of-domain simulation parameters."""


def is_int(v) -> bool:
    """Plain or numpy integer; bools and integral floats do not count."""
    return isinstance(v, (int, np.integer)) and not isinstance(v, bool)


def is_finite(v) -> bool:
    return bool(np.isfinite(float(v)))


@dataclass(frozen=True)
class Bound:
    """Physical extents of the domain: x in [0, max_x], y in [0, max_y], t in [0, max_t]."""
    max_x: float
    max_y: float
    max_t: float

    def __post_init__(self) -> None:
        for name in ("max_x", "max_y", "max_t"):
            v = float(getattr(self, name))
            if not np.isfinite(v) or v <= 0.0:
                raise InvalidConfiguration(f"Bound requires {name} > 0, got {v!r}.")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Configuration bundle for one simulation.

    Defaults describe a 3 µm × 10 µm slab simulated for 1 ps on a
    120 × 400 grid, driven at λ = 2.04 µm.

    n=None means "draw the inclusion count uniformly from 1..5" when the
    simulator is built. seed is only used when no generator is injected.
    """
    max_x: float = 3e-6
    max_y: float = 10e-6
    max_t: float = 1e-12
    nx: int = 120
    ny: int = 400
    wavelength: float = 2.04e-6
    n: Optional[int] = None
    r: float = 0.45e-6
    mu: float = 1.0
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        # Bound checks its own extents
        self.bound()

        if not is_int(self.nx) or not is_int(self.ny):
            raise InvalidConfiguration("nx and ny must be integers.")
        if int(self.nx) < 2 or int(self.ny) < 2:
            raise InvalidConfiguration(f"nx, ny must be >= 2, got nx={self.nx}, ny={self.ny}.")
        if not is_finite(self.wavelength) or float(self.wavelength) <= 0.0:
            raise InvalidConfiguration("wavelength must be finite and > 0.")
        if self.n is not None and (not is_int(self.n) or int(self.n) < 0):
            raise InvalidConfiguration(f"n must be a non-negative integer, got {self.n!r}.")
        if not is_finite(self.r) or float(self.r) < 0.0:
            raise InvalidConfiguration("r must be finite and >= 0.")
        if not is_finite(self.mu) or float(self.mu) <= 0.0:
            raise InvalidConfiguration("mu must be finite and > 0.")

    def bound(self) -> Bound:
        return Bound(max_x=float(self.max_x), max_y=float(self.max_y), max_t=float(self.max_t))
