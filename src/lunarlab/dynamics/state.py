"""
Mission state record and its single writer.

SimulationState is owned by one Mission and handed by reference to the solver.
Only commit() writes to it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from lunarlab.dynamics.burn import LUNAR_CONSTANTS, PhysicalConstants
from lunarlab.utils.units import miles_to_feet, to_mph

# Original game start condition
INITIAL_DISTANCE = 120.0  # [mi]
INITIAL_VELOCITY = 1.0  # [mi/s]
INITIAL_MASS = 33_000.0  # [lb], capsule + fuel


@dataclass
class SimulationState:
    """
    Scalar state of the descending capsule.

    Attributes
    ----------
    elapsed_seconds : float
        Total mission time [s]
    distance : float
        Distance to the surface [mi]. <= 0 means contact.
    velocity : float
        Descent rate [mi/s]. Positive = descending.
    mass : float
        Capsule + remaining fuel [lb]
    remaining_interval_time : float
        Countdown within the current decision interval [s]
    """

    elapsed_seconds: float = 0.0
    distance: float = INITIAL_DISTANCE
    velocity: float = INITIAL_VELOCITY
    mass: float = INITIAL_MASS
    remaining_interval_time: float = 0.0

    def fuel_remaining(self, constants: PhysicalConstants = LUNAR_CONSTANTS) -> float:
        """Usable fuel left [lb]."""
        return self.mass - constants.dry_mass

    def as_dict(self) -> dict[str, float]:
        return {
            "t": self.elapsed_seconds,
            "distance": self.distance,
            "velocity": self.velocity,
            "mass": self.mass,
        }


class StatusLine(NamedTuple):
    """Per-interval status surfaced to the presentation layer."""

    elapsed_seconds: float
    distance_miles: int
    distance_feet: int
    velocity_mph: float
    fuel_remaining: float

    def format(self) -> str:
        """Row under the SEC / MI + FT / MPH / LB FUEL header."""
        return (
            f"{self.elapsed_seconds:<9.2f} {self.distance_miles:<3} "
            f"{self.distance_feet:<4} {self.velocity_mph:<10.2f} "
            f"{self.fuel_remaining:<8.2f}  "
        )


def commit(
    state: SimulationState,
    duration: float,
    burn_rate: float,
    new_distance: float,
    new_velocity: float,
) -> None:
    """
    Advance the state by one integration step.

    No validation is done here; the solver guarantees duration and the
    resulting mass are within bounds.
    """
    state.elapsed_seconds += duration
    state.remaining_interval_time -= duration
    state.mass -= duration * burn_rate
    state.distance = new_distance
    state.velocity = new_velocity


def status_line(
    state: SimulationState,
    constants: PhysicalConstants = LUNAR_CONSTANTS,
) -> StatusLine:
    """Convert the state to display units (mi + ft, mph, lb of fuel)."""
    whole = math.floor(state.distance)
    return StatusLine(
        elapsed_seconds=state.elapsed_seconds,
        distance_miles=int(whole),
        distance_feet=int(math.floor(miles_to_feet(state.distance - whole))),
        velocity_mph=to_mph(state.velocity),
        fuel_remaining=state.fuel_remaining(constants),
    )
