"""
Top-level package for the project.

2D TM-mode Yee FDTD on random dielectric media. Three sibling subpackages:
- core: bounds, discretization, media, source
- operators: the leap-frog H/E update passes
- algorithm: the simulator and batch dataset generation

diagnostics holds the plotting and storage helpers.
"""

from .core import (
    Bound,
    Discretizer,
    InvalidConfiguration,
    Light,
    PermeabilityField,
    PermittivityField,
    SimulationConfig,
    discretize,
)
from .algorithm import Simulator

__all__ = [
    "core",
    "operators",
    "algorithm",
    "Bound",
    "Discretizer",
    "InvalidConfiguration",
    "Light",
    "PermeabilityField",
    "PermittivityField",
    "SimulationConfig",
    "Simulator",
    "discretize",
]
