from .solver import (
    ConvergenceError,
    DescentSolver,
    IntervalReport,
    MissionPhase,
    SolverInvariantError,
)
from .simulation import Mission
