"""
Operators: the Yee leap-frog update passes.

Public API:
- update_h, update_e: the two in-place half steps
- yee_step: H pass followed by E pass
- field_energy: blow-up diagnostic
"""

from .update import update_h, update_e, yee_step, field_energy

__all__ = [
    "update_h",
    "update_e",
    "yee_step",
    "field_energy",
]
