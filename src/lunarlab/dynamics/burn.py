"""
Closed-form burn integration for the 1-D descent model.

The capsule obeys the rocket equation with constant gravity along a single
radial axis (positive velocity = descending):

    dv/dt =  G - Z * k / m(t)
    dd/dt = -v
    dm/dt = -k

with burn rate k. The exact solution contains Z*ln(1 - q), q = k*t/m, which is
evaluated here as a five-term power series.

Physical units (original LEM game):
- Distance: miles [mi]
- Velocity: miles per second [mi/s]
- Mass: pounds [lb]
- Time: seconds [s]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lunarlab.utils.validation import validate_positive

if TYPE_CHECKING:
    from lunarlab.dynamics.state import SimulationState


@dataclass(frozen=True)
class PhysicalConstants:
    """
    Immutable physical setup of a mission.

    Parameters
    ----------
    gravity : float
        Gravitational acceleration G [mi/s²]. Lunar surface: 0.001
    dry_mass : float
        Capsule mass with no fuel left N [lb]. Default 16500
    exhaust_coefficient : float
        Exhaust velocity coefficient Z [mi/s]. Default 1.8

    Examples
    --------
    >>> low_g = PhysicalConstants(gravity=0.0005)
    >>> low_g.dry_mass
    16500.0
    """

    gravity: float = 0.001
    dry_mass: float = 16_500.0
    exhaust_coefficient: float = 1.8

    def __post_init__(self) -> None:
        validate_positive(self.gravity, "gravity")
        validate_positive(self.dry_mass, "dry_mass")
        validate_positive(self.exhaust_coefficient, "exhaust_coefficient")


LUNAR_CONSTANTS = PhysicalConstants()


def integrate_burn(
    state: SimulationState,
    duration: float,
    burn_rate: float,
    constants: PhysicalConstants = LUNAR_CONSTANTS,
) -> tuple[float, float]:
    """
    Project distance and velocity after burning for a given duration.

    Parameters
    ----------
    state : SimulationState
        Current state (read only)
    duration : float
        Burn duration [s], >= 0
    burn_rate : float
        Fuel consumption [lb/s], >= 0. Zero means free fall.
    constants : PhysicalConstants
        Gravity, dry mass and exhaust coefficient

    Returns
    -------
    tuple[float, float]
        (new_distance, new_velocity)

    Notes
    -----
    The series is truncated after the fifth power of q on purpose; the
    trajectories of the original game depend on that truncation.

    The second velocity term is q²/2, the true ln(1 - q) coefficient as in the
    BASIC game. The Rust port of the game uses q² there; its trajectories
    differ from these after any burn.
    """
    g = constants.gravity
    z = constants.exhaust_coefficient
    q = duration * burn_rate / state.mass

    new_velocity = (
        state.velocity
        + g * duration
        + z * (-q - q**2 / 2 - q**3 / 3 - q**4 / 4 - q**5 / 5)
    )
    new_distance = (
        state.distance
        - g * duration**2 / 2
        - state.velocity * duration
        + z * duration * (q / 2 + q**2 / 6 + q**3 / 12 + q**4 / 20 + q**5 / 30)
    )
    return new_distance, new_velocity
