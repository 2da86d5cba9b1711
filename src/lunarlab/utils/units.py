"""Display-unit conversions used by status lines and landing reports."""
from __future__ import annotations

FEET_PER_MILE = 5280.0
SECONDS_PER_HOUR = 3600.0


def to_mph(velocity: float) -> float:
    """Miles per second -> miles per hour."""
    return SECONDS_PER_HOUR * velocity


def miles_to_feet(distance: float) -> float:
    return FEET_PER_MILE * distance
