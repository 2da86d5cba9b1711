import os
import sys

import matplotlib
import pytest

matplotlib.use("Agg")  # Non-interactive backend for testing

# Get the path to the project root (one level up from 'tests')
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, 'src')

# Add 'src' to sys.path
sys.path.insert(0, src_path)

from lunarlab.core.solver import DescentSolver  # noqa: E402
from lunarlab.dynamics.burn import PhysicalConstants  # noqa: E402
from lunarlab.dynamics.state import SimulationState  # noqa: E402


@pytest.fixture
def constants():
    """Lunar constants of the original game: G=0.001, N=16500, Z=1.8."""
    return PhysicalConstants(gravity=0.001, dry_mass=16_500.0, exhaust_coefficient=1.8)


@pytest.fixture
def initial_state():
    """Mission start: 120 mi out, 1 mi/s, 33000 lb."""
    return SimulationState(distance=120.0, velocity=1.0, mass=33_000.0)


@pytest.fixture
def solver(constants):
    return DescentSolver(constants)
