"""
LunarLab - Fuel-limited lunar descent simulator.

Core Components
---------------
Mission : Mission orchestrator (pilot loop, termination, classification)
DescentSolver : Decision-interval solver with sign-flip and contact refinement
SimulationState : Scalar capsule state
PhysicalConstants : Gravity, dry mass, exhaust coefficient

Outcome Models
--------------
LandingOutcome : perfect / good / damaged / crashed
MissionResult : Final mission report

Examples
--------
>>> from lunarlab import Mission, ScriptedPilot
>>> result = Mission(verbose=False).run(ScriptedPilot([0, 0, 0, 0, 0, 0, 0, 200]))
"""

__version__ = "0.1.0"

# Core simulation classes
from lunarlab.core.simulation import Mission
from lunarlab.core.solver import (
    ConvergenceError,
    DescentSolver,
    IntervalReport,
    MissionPhase,
    SolverInvariantError,
)

# Dynamics
from lunarlab.dynamics.burn import LUNAR_CONSTANTS, PhysicalConstants, integrate_burn
from lunarlab.dynamics.state import SimulationState, StatusLine, commit, status_line

# Outcome
from lunarlab.models.outcome import LandingOutcome, MissionResult, classify_impact

# Logging
from lunarlab.logger import CSVLogger
from lunarlab.api.scenario import Scenario, ScriptedPilot
from lunarlab.api.console import ConsolePilot

__all__ = [
    # Version
    "__version__",
    # Core
    "Mission",
    "DescentSolver",
    "IntervalReport",
    "MissionPhase",
    "SolverInvariantError",
    "ConvergenceError",
    # Dynamics
    "PhysicalConstants",
    "LUNAR_CONSTANTS",
    "integrate_burn",
    "SimulationState",
    "StatusLine",
    "commit",
    "status_line",
    # Outcome
    "LandingOutcome",
    "MissionResult",
    "classify_impact",
    # Logging
    "CSVLogger",
    # API
    "Scenario",
    "ScriptedPilot",
    "ConsolePilot",
]
