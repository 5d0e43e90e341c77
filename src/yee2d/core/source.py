from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .config import SPEED_OF_LIGHT, Bound, InvalidConfiguration, is_finite
from .grid import Discretizer


SOURCE_AMPLITUDE: float = 0.1

# Ez[SOURCE_ROWS, SOURCE_COLUMN] is driven by the line source.
SOURCE_COLUMN: int = 0
SOURCE_ROWS = slice(1, None)


@dataclass(frozen=True)
class Light:
    """Monochromatic source: wavelength in metres, wavenumber derived."""
    wavelength: float

    def __post_init__(self) -> None:
        if not is_finite(self.wavelength) or float(self.wavelength) <= 0.0:
            raise InvalidConfiguration("wavelength must be finite and > 0.")

    @property
    def k(self) -> float:
        return 2.0 * np.pi / float(self.wavelength)


def source_profile(bound: Bound, d: Discretizer) -> np.ndarray:
    """
    Transverse Gaussian envelope of the line source, one value per seeded row.

    Row x (0-based, x = 1..nx-1) gets
        A * exp(-(dx * (x + 1 - nx/2))^2 / (max_x/4)^2)
    which centres the beam on the middle of the x extent.
    """
    rows = np.arange(2, d.nx + 1, dtype=float)
    return SOURCE_AMPLITUDE * np.exp(-(d.dx * (rows - d.nx / 2.0)) ** 2 / (bound.max_x / 4.0) ** 2)


def source_phase(light: Light, d: Discretizer, t: float) -> float:
    """sin(k * c * dt * t): temporal modulation of the line source at step t."""
    return float(np.sin(light.k * SPEED_OF_LIGHT * d.dt * t))
