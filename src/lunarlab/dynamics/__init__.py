from .burn import LUNAR_CONSTANTS, PhysicalConstants, integrate_burn
from .state import SimulationState, StatusLine, commit, status_line
from .reference import ReferenceIntegrator, exact_burn
