"""
Scenario API: Fluent interface for defining and flying missions.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from lunarlab.core.simulation import Mission
from lunarlab.core.solver import DescentSolver
from lunarlab.dynamics.burn import PhysicalConstants
from lunarlab.dynamics.state import INITIAL_DISTANCE, INITIAL_MASS, INITIAL_VELOCITY
from lunarlab.models.outcome import MissionResult

CONSTANT_PRESETS = {
    "apollo": {"gravity": 0.001, "dry_mass": 16_500.0, "exhaust_coefficient": 1.8},
    "heavy_lander": {"gravity": 0.001, "dry_mass": 20_000.0, "exhaust_coefficient": 1.8},
    "weak_engine": {"gravity": 0.001, "dry_mass": 16_500.0, "exhaust_coefficient": 1.2},
}


class ScriptedPilot:
    """
    Pilot that flies a fixed burn schedule.

    Parameters
    ----------
    burn_rates : Iterable[float]
        One burn rate per decision interval
    repeat_last : bool
        Keep flying the last burn rate once the schedule runs out. If False,
        running out raises RuntimeError.

    Attributes
    ----------
    prompts : list[str]
        Every status line the pilot was shown
    """

    def __init__(self, burn_rates: Iterable[float], repeat_last: bool = True) -> None:
        self.burn_rates = [float(k) for k in burn_rates]
        if not self.burn_rates:
            raise ValueError("Burn schedule must contain at least one burn rate.")
        self.repeat_last = repeat_last
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def __call__(self, prompt: str) -> float:
        index = len(self.prompts)
        self.prompts.append(prompt)
        if index < len(self.burn_rates):
            return self.burn_rates[index]
        if self.repeat_last:
            return self.burn_rates[-1]
        raise RuntimeError(
            f"Burn schedule exhausted after {len(self.burn_rates)} intervals."
        )


class Scenario:
    def __init__(self, name: str, output_dir: str = "output", logging: bool = False):
        self.name = name
        self.output_dir = Path(output_dir)
        self.logging = logging
        self.mission: Mission | None = None

        self._constants = PhysicalConstants(**CONSTANT_PRESETS["apollo"])
        self._initial = {
            "distance": INITIAL_DISTANCE,
            "velocity": INITIAL_VELOCITY,
            "mass": INITIAL_MASS,
        }
        self._solver_params: dict = {}
        self._pilot = None
        self._show_plots = False
        self._save_plots = False

    @property
    def constants(self) -> PhysicalConstants:
        return self._constants

    def configure_constants(self, preset: str = "apollo", **kwargs) -> 'Scenario':
        """
        Choose physical constants from a preset, with optional overrides.

        Presets: 'apollo', 'heavy_lander', 'weak_engine'
        Kwargs: gravity, dry_mass, exhaust_coefficient
        """
        if preset not in CONSTANT_PRESETS:
            raise ValueError(
                f"Unknown preset '{preset}'. Options: {sorted(CONSTANT_PRESETS)}"
            )
        constants = PhysicalConstants(**CONSTANT_PRESETS[preset])
        self._constants = replace(constants, **kwargs)
        return self

    def configure_solver(self, **kwargs) -> 'Scenario':
        """
        Override solver tolerances.

        Kwargs: interval_length, contact_tolerance, max_refinements,
        max_contact_iterations
        """
        self._solver_params.update(kwargs)
        return self

    def set_initial_state(
        self,
        distance: float | None = None,
        velocity: float | None = None,
        mass: float | None = None,
    ) -> 'Scenario':
        """Set the starting distance [mi], descent rate [mi/s] and total mass [lb]."""
        if distance is not None:
            self._initial["distance"] = float(distance)
        if velocity is not None:
            self._initial["velocity"] = float(velocity)
        if mass is not None:
            self._initial["mass"] = float(mass)
        return self

    def set_burn_schedule(self, burn_rates: Iterable[float], repeat_last: bool = True) -> 'Scenario':
        self._pilot = ScriptedPilot(burn_rates, repeat_last=repeat_last)
        return self

    def set_pilot(self, pilot) -> 'Scenario':
        """Use any callable taking the status line and returning a burn rate."""
        self._pilot = pilot
        return self

    def enable_plotting(self, show: bool = False) -> 'Scenario':
        """
        Save plots at the end of the mission. Turns logging on.

        Parameters
        ----------
        show : bool
            If True, display plots interactively (e.g. in Jupyter notebooks).
        """
        self.logging = True
        self._save_plots = True
        self._show_plots = show
        return self

    def build(self) -> Mission:
        solver = DescentSolver(self._constants, **self._solver_params)
        self.mission = Mission(
            solver=solver,
            simulation_name=self.name if self.logging else None,
            output_dir=self.output_dir,
            auto_save_plots=self._save_plots and not self._show_plots,
            **self._initial,
        )
        return self.mission

    def run(self) -> MissionResult:
        if self._pilot is None:
            raise RuntimeError("No pilot configured. Call set_burn_schedule() or set_pilot() first.")

        print(f"Running Scenario: {self.name}")
        mission = self.build()
        result = mission.run(self._pilot)

        # Manual plot generation if show=True
        # (otherwise the mission handled it via auto_save_plots)
        if self._show_plots:
            print("[Scenario] Generating plots...")
            mission.save_plots(show=True)

        return result
