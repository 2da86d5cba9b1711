"""
Validation utilities for physical parameters and pilot commands.

Configuration errors raise ValueError at construction time. Soft limits
(burn rate above the advertised maximum, long intervals) only warn.
"""
from __future__ import annotations

import math
import warnings

# Advertised throttle range of the descent engine [lb/s]
MIN_BURN_RATE = 0.0
MAX_BURN_RATE = 200.0


def validate_positive(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a scalar value is positive.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise ValueError. If False, issue warning.

    Raises
    ------
    ValueError
        If strict=True and value <= 0
    """
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        if strict:
            raise ValueError(msg)
        else:
            warnings.warn(msg, RuntimeWarning, stacklevel=2)


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a value is non-negative."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_finite(value: float, name: str) -> None:
    """Validate that a value is a finite real number."""
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")


def validate_burn_rate(burn_rate: float) -> None:
    """
    Validate a commanded burn rate.

    Parameters
    ----------
    burn_rate : float
        Fuel consumption [lb/s]

    Raises
    ------
    ValueError
        If the burn rate is negative or not finite

    Notes
    -----
    Values above MAX_BURN_RATE are physically usable by the integrator,
    so they only produce a RuntimeWarning.
    """
    validate_finite(burn_rate, "burn_rate")
    validate_non_negative(burn_rate, "burn_rate")
    if burn_rate > MAX_BURN_RATE:
        warnings.warn(
            f"Burn rate {burn_rate} exceeds the engine maximum of "
            f"{MAX_BURN_RATE} lb/s.",
            RuntimeWarning,
            stacklevel=2
        )


def validate_initial_mass(mass: float, dry_mass: float) -> None:
    """
    Validate initial vehicle mass against the dry-mass threshold.

    Raises
    ------
    ValueError
        If the vehicle would start below its own dry mass
    """
    validate_positive(mass, "mass")
    if mass < dry_mass:
        raise ValueError(
            f"Initial mass {mass} lb is below the dry mass {dry_mass} lb."
        )
