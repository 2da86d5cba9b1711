"""
Verification Test Suite for LunarLab.

These tests compare the truncated-series burn integrator and the full
mission against analytical solutions and a high-accuracy ODE reference.

Test Categories:
- Kinematic: Free fall, constant burn against the exact rocket equation
- Reference: scipy solve_ivp on the descent ODE
- Accounting: Mass, fuel and clock bookkeeping over whole missions
"""

import pytest

from lunarlab.dynamics.burn import PhysicalConstants
from lunarlab.dynamics.reference import ReferenceIntegrator
from lunarlab.dynamics.state import SimulationState


# -----------------------------------------------------------------------------
# Common Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def lunar():
    return PhysicalConstants()


@pytest.fixture
def full_tank():
    """Start of the mission: 120 mi out, 1 mi/s, 16500 lb of fuel."""
    return SimulationState(distance=120.0, velocity=1.0, mass=33_000.0)


@pytest.fixture
def reference(lunar):
    """High-precision RK45 reference."""
    return ReferenceIntegrator(rtol=1e-11, atol=1e-12, constants=lunar)
