"""
Mission orchestrator for the lunar descent.

Owns the simulation state, asks the pilot for a burn rate every decision
interval, runs the interval solver, and classifies the final impact. Optional
logging organizes output the same way for every run.
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pandas as pd

from lunarlab.core.solver import (
    TERMINAL_PHASES,
    DescentSolver,
    IntervalReport,
    MissionPhase,
)
from lunarlab.dynamics.burn import LUNAR_CONSTANTS, PhysicalConstants
from lunarlab.dynamics.state import (
    INITIAL_DISTANCE,
    INITIAL_MASS,
    INITIAL_VELOCITY,
    SimulationState,
    StatusLine,
    commit,
    status_line,
)
from lunarlab.logger import CSVLogger
from lunarlab.models.outcome import MissionResult
from lunarlab.utils.io import history_to_frame, save_simulation_history
from lunarlab.utils.units import to_mph
from lunarlab.utils.validation import (
    validate_burn_rate,
    validate_initial_mass,
    validate_positive,
)

# Default output directory
DEFAULT_OUTPUT_DIR = Path("output")

Pilot = Callable[[str], float]


class Mission:
    """
    Container and orchestrator for one lunar descent.

    Parameters
    ----------
    constants : PhysicalConstants
        Gravity, dry mass and exhaust coefficient. Ignored if a solver is
        given (the solver's constants are used).
    distance : float
        Initial distance to the surface [mi]
    velocity : float
        Initial descent rate [mi/s]
    mass : float
        Initial capsule + fuel mass [lb]
    solver : DescentSolver | None
        Interval solver. Default: DescentSolver(constants)
    simulation_name : str | None
        Name for this mission. Used to organize output files. If None,
        logging is disabled by default. Use enable_logging() to activate.
    output_dir : Path | str | None
        Base directory for all outputs. Defaults to "./output".
    auto_timestamp : bool
        If True, append timestamp to the output folder name.
    auto_save_plots : bool
        If True, save plots when the mission ends (requires logging).
    verbose : bool
        Print progress messages.

    Attributes
    ----------
    state : SimulationState
        The one mutable state record, written only through commit()
    phase : MissionPhase
        Current phase of the mission state machine
    burn_rate : float
        Burn rate of the current interval [lb/s]
    intervals : int
        Number of decision intervals flown
    history : list[dict]
        One entry per committed step (and the initial state)
    result : MissionResult | None
        Final report once the mission terminated

    Notes
    -----
    **Termination Logic:**
    The mission ends on surface contact (impact velocity classified) or on
    fuel exhaustion. On fuel exhaustion the capsule gets one free-fall
    increment of the last step length and the mission ends there, without
    integrating the rest of the fall. The result is flagged fuel_out.

    Examples
    --------
    >>> mission = Mission()
    >>> mission.step(50.0)
    False
    >>> mission.state.elapsed_seconds
    10.0
    """

    def __init__(
        self,
        constants: PhysicalConstants = LUNAR_CONSTANTS,
        distance: float = INITIAL_DISTANCE,
        velocity: float = INITIAL_VELOCITY,
        mass: float = INITIAL_MASS,
        solver: DescentSolver | None = None,
        simulation_name: str | None = None,
        output_dir: Path | str | None = None,
        auto_timestamp: bool = True,
        auto_save_plots: bool = False,
        verbose: bool = True,
    ) -> None:
        self.solver = solver if solver is not None else DescentSolver(constants)
        self.constants = self.solver.constants

        validate_positive(distance, "distance")
        validate_initial_mass(mass, self.constants.dry_mass)
        self.state = SimulationState(distance=distance, velocity=velocity, mass=mass)

        self.phase = MissionPhase.AWAITING_COMMAND
        self.burn_rate = 0.0
        self.intervals = 0
        self.last_step = 0.0
        self.fuel_out_seconds: float | None = None
        self.result: MissionResult | None = None
        self.history: list[dict] = []
        self.verbose = verbose

        # Output configuration
        self._simulation_name = simulation_name
        self._output_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
        self._auto_timestamp = auto_timestamp
        self._auto_save_plots = auto_save_plots
        self.output_path: Path | None = None
        self.logger: CSVLogger | None = None

        if simulation_name is not None:
            self.enable_logging(simulation_name)

        self._record()

    @classmethod
    def with_logging(
        cls,
        name: str,
        constants: PhysicalConstants = LUNAR_CONSTANTS,
        output_dir: Path | str | None = None,
        auto_save_plots: bool = True,
        **kwargs,
    ) -> Mission:
        """
        Convenience factory to create a Mission with logging pre-enabled.

        Examples
        --------
        >>> mission = Mission.with_logging("apollo_11", auto_save_plots=True)
        """
        return cls(
            constants=constants,
            simulation_name=name,
            output_dir=output_dir,
            auto_timestamp=True,
            auto_save_plots=auto_save_plots,
            **kwargs,
        )

    def _print(self, msg: str) -> None:
        if self.verbose:
            print(msg)

    # --- Logging ---

    def enable_logging(self, name: str | None = None) -> Path:
        """
        Enable trajectory logging with automatic output organization.

        Creates:
            output/<name>_<timestamp>/
                logs/simulation.csv
                plots/

        Raises
        ------
        ValueError
            If no simulation name available
        """
        if name is not None:
            self._simulation_name = name

        if self._simulation_name is None:
            raise ValueError(
                "Simulation name required for logging. "
                "Either pass name to __init__ or to enable_logging()."
            )

        if self._auto_timestamp:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            folder_name = f"{self._simulation_name}_{timestamp}"
        else:
            folder_name = self._simulation_name

        self.output_path = self._output_dir / folder_name

        logs_dir = self.output_path / "logs"
        plots_dir = self.output_path / "plots"
        logs_dir.mkdir(parents=True, exist_ok=True)
        plots_dir.mkdir(parents=True, exist_ok=True)

        self.logger = CSVLogger(str(logs_dir / "simulation.csv"))

        self._print(f"[Mission] Logging enabled: {self.output_path}")
        self._print(f"          Logs: {logs_dir}")
        self._print(f"          Plots: {plots_dir}")

        return self.output_path

    def disable_logging(self) -> None:
        """Disable logging and close any open log file."""
        if self.logger is not None:
            self.logger.close()
            self.logger = None
            self._print("[Mission] Logging disabled")

    def _record(self) -> None:
        row = self.state.as_dict()
        row["fuel"] = self.state.fuel_remaining(self.constants)
        row["burn_rate"] = self.burn_rate
        row["phase"] = self.phase.name
        self.history.append(row)
        if self.logger is not None:
            self.logger.log(self)

    def _on_commit(
        self,
        state: SimulationState,
        step: float,
        burn_rate: float,
        phase: MissionPhase,
    ) -> None:
        self.phase = phase
        self._record()

    # --- Status ---

    @property
    def terminated(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def status(self) -> StatusLine:
        """Status in display units for the pilot prompt."""
        return status_line(self.state, self.constants)

    # --- Decision intervals ---

    def step(self, burn_rate: float) -> bool:
        """
        Fly one decision interval at a fixed burn rate.

        Parameters
        ----------
        burn_rate : float
            Burn rate [lb/s]. 0 = free fall, 200 = maximum burn.

        Returns
        -------
        bool
            True if the mission terminated (contact or fuel out)

        Raises
        ------
        RuntimeError
            If the mission already terminated
        """
        if self.terminated:
            raise RuntimeError(
                f"Mission already terminated ({self.phase.name}); "
                "create a new Mission to fly again."
            )
        validate_burn_rate(burn_rate)

        self.burn_rate = float(burn_rate)
        self.phase = MissionPhase.INTEGRATING
        report = self.solver.run_interval(self.state, self.burn_rate, on_commit=self._on_commit)
        self.intervals += 1
        if report.substeps:
            self.last_step = report.last_step

        self.phase = report.phase
        if report.phase is MissionPhase.FUEL_OUT:
            self._finish_fuel_out()
        elif report.phase is MissionPhase.CONTACT:
            self._finish_contact(report)

        return self.terminated

    def run(self, pilot: Pilot) -> MissionResult:
        """
        Fly until contact or fuel exhaustion.

        Parameters
        ----------
        pilot : Callable[[str], float]
            Receives the status line and returns the next burn rate. It is
            responsible for re-prompting on malformed input.

        Returns
        -------
        MissionResult
        """
        fuel = self.state.fuel_remaining(self.constants)
        self._print(
            f"[Mission] Starting descent: {self.state.distance:.1f} mi, "
            f"{to_mph(self.state.velocity):.1f} mph, {fuel:.1f} lb fuel"
        )

        try:
            while not self.terminated:
                burn_rate = float(pilot(self.status().format()))
                self.step(burn_rate)
        finally:
            if self.logger:
                self.logger.flush()

            if self._auto_save_plots and self.logger is not None:
                self._print("[Mission] Auto-generating plots...")
                self.save_plots()

        if self.result is None:
            raise RuntimeError(
                f"Mission stopped in phase {self.phase.name} without a result."
            )
        return self.result

    # --- Termination ---

    def _finish_fuel_out(self) -> None:
        self.fuel_out_seconds = self.state.elapsed_seconds
        self._print(f"[Mission] Fuel out at {self.fuel_out_seconds:.2f} seconds")

        # One free-fall increment of the last step length, then stop
        step = self.last_step
        commit(
            self.state, step, 0.0,
            self.state.distance,
            self.state.velocity + self.constants.gravity * step,
        )
        self.burn_rate = 0.0
        self._record()
        self._finish(fuel_out_seconds=self.fuel_out_seconds)

    def _finish_contact(self, report: IntervalReport) -> None:
        self._print(
            f"[Mission] Contact resolved in {report.contact_iterations} iterations"
        )
        self._finish()

    def _finish(self, fuel_out_seconds: float | None = None) -> None:
        self.result = MissionResult.from_impact(
            elapsed_seconds=self.state.elapsed_seconds,
            impact_velocity_mph=to_mph(self.state.velocity),
            fuel_out_seconds=fuel_out_seconds,
            intervals=self.intervals,
        )
        self._print(
            f"[Mission] On the moon at t={self.result.elapsed_seconds:.2f}s, "
            f"impact {self.result.impact_velocity_mph:.2f} mph "
            f"({self.result.outcome.name})"
        )

    # --- Export and plotting ---

    def history_frame(self) -> pd.DataFrame:
        """Trajectory as a DataFrame (one row per committed step)."""
        return history_to_frame(self.history)

    def save_history(self, filepath: str | Path) -> Path:
        return save_simulation_history(self.history, str(filepath))

    def save_plots(self, show: bool = False) -> None:
        """
        Generate and save the standard trajectory plots from the log.

        Raises
        ------
        RuntimeError
            If logging is not enabled or no data logged yet
        """
        if self.logger is None or self.output_path is None:
            raise RuntimeError(
                "Logging must be enabled to save plots. "
                "Call enable_logging() or use Mission.with_logging()."
            )

        from lunarlab.visualization.plotting import plot_descent, plot_phase_portrait

        csv_path = self.output_path / "logs" / "simulation.csv"
        plots_dir = self.output_path / "plots"

        self.logger.flush()
        if not csv_path.exists():
            raise RuntimeError(
                f"No log file found at {csv_path}. "
                "Has the mission been flown yet?"
            )

        plot_descent(str(csv_path), save_path=str(plots_dir / "descent.png"), show=show)
        plot_phase_portrait(str(csv_path), save_path=str(plots_dir / "phase_portrait.png"), show=show)
        self._print(f"[Mission] Plots saved to: {plots_dir}")
