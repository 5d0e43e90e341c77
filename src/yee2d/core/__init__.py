"""
Core: problem definition (bounds, discretization, media, source).
"""

from .config import (
    SPEED_OF_LIGHT,
    BACKGROUND_PERMITTIVITY,
    INCLUSION_PERMITTIVITY,
    InvalidConfiguration,
    Bound,
    SimulationConfig,
)
from .grid import Discretizer, discretize, cfl_time_step, courant_number
from .medium import (
    Inclusion,
    PermittivityField,
    PermeabilityField,
    random_inclusions,
    permittivity_from_inclusions,
    random_permittivity,
    uniform_permeability,
)
from .source import Light, source_profile, source_phase, SOURCE_COLUMN, SOURCE_ROWS

__all__ = [
    "SPEED_OF_LIGHT",
    "BACKGROUND_PERMITTIVITY",
    "INCLUSION_PERMITTIVITY",
    "InvalidConfiguration",
    "Bound",
    "SimulationConfig",
    "Discretizer",
    "discretize",
    "cfl_time_step",
    "courant_number",
    "Inclusion",
    "PermittivityField",
    "PermeabilityField",
    "random_inclusions",
    "permittivity_from_inclusions",
    "random_permittivity",
    "uniform_permeability",
    "Light",
    "source_profile",
    "source_phase",
    "SOURCE_COLUMN",
    "SOURCE_ROWS",
]
