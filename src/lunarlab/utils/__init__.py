"""Utility functions for LunarLab simulations."""

from .io import history_to_frame, save_simulation_history
from .units import FEET_PER_MILE, SECONDS_PER_HOUR, miles_to_feet, to_mph
from .validation import (
    MAX_BURN_RATE,
    MIN_BURN_RATE,
    validate_burn_rate,
    validate_finite,
    validate_initial_mass,
    validate_non_negative,
    validate_positive,
)

__all__ = [
    "save_simulation_history",
    "history_to_frame",
    "FEET_PER_MILE",
    "SECONDS_PER_HOUR",
    "to_mph",
    "miles_to_feet",
    "MIN_BURN_RATE",
    "MAX_BURN_RATE",
    "validate_positive",
    "validate_non_negative",
    "validate_finite",
    "validate_burn_rate",
    "validate_initial_mass",
]
