"""
LunarLab Outcome Models.

Models that interpret a finished trajectory:
- Landing classification (perfect / good / damaged / crashed)
- Crater depth for fatal impacts
- Final mission report

These are separate from the solver in core/solver.py.
The solver produces the impact; models decide what it means.
"""

from .outcome import (
    CRATER_DEPTH_PER_MPH,
    DAMAGE_LIMIT,
    GOOD_LIMIT,
    PERFECT_LIMIT,
    LandingOutcome,
    MissionResult,
    classify_impact,
    crater_depth,
)

__all__ = [
    "LandingOutcome",
    "MissionResult",
    "classify_impact",
    "crater_depth",
    "PERFECT_LIMIT",
    "GOOD_LIMIT",
    "DAMAGE_LIMIT",
    "CRATER_DEPTH_PER_MPH",
]
