from .scenario import CONSTANT_PRESETS, Scenario, ScriptedPilot
from .console import ConsolePilot, outcome_lines, play
