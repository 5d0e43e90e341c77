"""
Algorithms: the time-stepping simulator and batch dataset generation.
"""

from .simulator import Simulator
from .dataset import (
    simulate_one_sample,
    save_sample_npz,
    generate_random_media,
)

__all__ = [
    # simulator.py
    "Simulator",
    # dataset.py
    "simulate_one_sample",
    "save_sample_npz",
    "generate_random_media",
]
