"""
Landing outcome classification.

Outcomes depend only on the impact velocity in miles per hour:

    v <= 1.2          PERFECT
    1.2 < v <= 10     GOOD
    10 < v <= 60      DAMAGED  (survivable, crew stranded)
    v > 60            CRASHED  (crater depth = 0.227 ft per mph)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

PERFECT_LIMIT = 1.2  # [mph]
GOOD_LIMIT = 10.0  # [mph]
DAMAGE_LIMIT = 60.0  # [mph]
CRATER_DEPTH_PER_MPH = 0.227  # [ft/mph]


class LandingOutcome(Enum):
    PERFECT = "perfect"
    GOOD = "good"
    DAMAGED = "damaged"
    CRASHED = "crashed"

    @property
    def survivable(self) -> bool:
        return self is not LandingOutcome.CRASHED


def classify_impact(impact_velocity_mph: float) -> LandingOutcome:
    """
    Classify an impact velocity.

    Parameters
    ----------
    impact_velocity_mph : float
        Descent rate at contact [mph]

    Returns
    -------
    LandingOutcome

    Examples
    --------
    >>> classify_impact(1.2)
    <LandingOutcome.PERFECT: 'perfect'>
    >>> classify_impact(60.01)
    <LandingOutcome.CRASHED: 'crashed'>
    """
    if impact_velocity_mph <= PERFECT_LIMIT:
        return LandingOutcome.PERFECT
    if impact_velocity_mph <= GOOD_LIMIT:
        return LandingOutcome.GOOD
    if impact_velocity_mph <= DAMAGE_LIMIT:
        return LandingOutcome.DAMAGED
    return LandingOutcome.CRASHED


def crater_depth(impact_velocity_mph: float) -> float:
    """Depth of the crater blasted by a fatal impact [ft]."""
    return impact_velocity_mph * CRATER_DEPTH_PER_MPH


@dataclass(frozen=True)
class MissionResult:
    """
    Final report of a mission.

    Attributes
    ----------
    elapsed_seconds : float
        Mission time at touchdown [s]
    impact_velocity_mph : float
        Descent rate at touchdown [mph]
    outcome : LandingOutcome
        Classification of the impact velocity
    crater_depth_ft : float | None
        Crater depth for CRASHED outcomes, else None
    fuel_out : bool
        True if the mission ended on fuel exhaustion rather than resolved contact
    fuel_out_seconds : float | None
        Mission time at which the fuel ran out [s]
    intervals : int
        Number of decision intervals flown
    """

    elapsed_seconds: float
    impact_velocity_mph: float
    outcome: LandingOutcome
    crater_depth_ft: float | None = None
    fuel_out: bool = False
    fuel_out_seconds: float | None = None
    intervals: int = 0

    @classmethod
    def from_impact(
        cls,
        elapsed_seconds: float,
        impact_velocity_mph: float,
        fuel_out_seconds: float | None = None,
        intervals: int = 0,
    ) -> MissionResult:
        outcome = classify_impact(impact_velocity_mph)
        return cls(
            elapsed_seconds=elapsed_seconds,
            impact_velocity_mph=impact_velocity_mph,
            outcome=outcome,
            crater_depth_ft=(
                crater_depth(impact_velocity_mph)
                if outcome is LandingOutcome.CRASHED else None
            ),
            fuel_out=fuel_out_seconds is not None,
            fuel_out_seconds=fuel_out_seconds,
            intervals=intervals,
        )
