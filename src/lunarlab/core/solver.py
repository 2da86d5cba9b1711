"""
Decision-interval solver for the capsule descent.

One pilot command holds a burn rate for a fixed decision interval. Inside the
interval the solver integrates in closed form and inserts shorter sub-steps
for two events:

- the descent rate changing sign inside a step (sign-flip sub-step)
- the capsule reaching the surface (contact convergence)

The interval is expressed as a state machine over MissionPhase:

    INTEGRATING → REFINING → INTEGRATING
         ↓            ↓
    CONVERGING ← ─ ─ ─┘
         ↓
      CONTACT

    INTEGRATING → FUEL_OUT
    INTEGRATING → AWAITING_COMMAND  (interval used up)
"""
from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from lunarlab.dynamics.burn import LUNAR_CONSTANTS, PhysicalConstants, integrate_burn
from lunarlab.dynamics.state import SimulationState, commit
from lunarlab.utils.validation import validate_positive

DECISION_INTERVAL = 10.0  # [s] one burn rate per interval
INTERVAL_TOLERANCE = 1e-3  # [s] interval counts as used up below this
FUEL_TOLERANCE = 1e-3  # [lb] fuel counts as exhausted below this
CONTACT_TOLERANCE = 5e-3  # [s] contact iteration stops once the step is this short
SIGN_FLIP_PADDING = 0.05  # [s] added to the estimated zero-velocity time
MAX_REFINEMENTS = 1000  # per interval
MAX_CONTACT_ITERATIONS = 100


class MissionPhase(Enum):
    """
    Mission states.

    State Machine:
        AWAITING_COMMAND → INTEGRATING → REFINING / CONVERGING
                                ↓              ↓
                            FUEL_OUT        CONTACT
    """

    AWAITING_COMMAND = auto()  # Waiting for the pilot's next burn rate
    INTEGRATING = auto()  # Nominal steps within an interval
    REFINING = auto()  # Sign-flip sub-step
    CONVERGING = auto()  # Iterating onto the contact instant
    FUEL_OUT = auto()  # Terminal: no fuel left
    CONTACT = auto()  # Terminal: on the surface


TERMINAL_PHASES = frozenset({MissionPhase.FUEL_OUT, MissionPhase.CONTACT})
_INTERVAL_EXITS = TERMINAL_PHASES | {MissionPhase.AWAITING_COMMAND}

CommitHook = Callable[[SimulationState, float, float, MissionPhase], None]


class SolverInvariantError(RuntimeError):
    """Internal precondition of the descent solver was violated."""


class ConvergenceError(SolverInvariantError):
    """An iterative refinement failed to converge within its bound."""


@dataclass
class IntervalReport:
    """
    Summary of one decision interval.

    Attributes
    ----------
    burn_rate : float
        Burn rate held during the interval [lb/s]
    phase : MissionPhase
        AWAITING_COMMAND, FUEL_OUT or CONTACT
    last_step : float
        Duration of the last committed integration step [s]
    substeps : int
        Number of committed steps
    refinements : int
        Number of sign-flip sub-steps
    contact_iterations : int
        Number of contact convergence iterations
    """

    burn_rate: float
    phase: MissionPhase = MissionPhase.INTEGRATING
    last_step: float = 0.0
    substeps: int = 0
    refinements: int = 0
    contact_iterations: int = 0

    @property
    def terminated(self) -> bool:
        return self.phase in TERMINAL_PHASES


class DescentSolver:
    """
    Closed-form interval solver with sign-flip and contact refinement.

    Parameters
    ----------
    constants : PhysicalConstants
        Gravity, dry mass and exhaust coefficient
    interval_length : float
        Decision interval length [s]
    contact_tolerance : float
        Step length below which contact iteration stops [s]
    max_refinements : int
        Safety cap on sign-flip sub-steps per interval
    max_contact_iterations : int
        Safety cap on contact iterations

    Notes
    -----
    For valid physical parameters both refinements terminate: every sign-flip
    sub-step advances time by at least the padding (or finishes the nominal
    step), and the contact iteration is a fixed-point iteration whose step
    shrinks roughly cubically. The caps only turn a broken precondition into
    a ConvergenceError instead of a hang.
    """

    def __init__(
        self,
        constants: PhysicalConstants = LUNAR_CONSTANTS,
        interval_length: float = DECISION_INTERVAL,
        contact_tolerance: float = CONTACT_TOLERANCE,
        max_refinements: int = MAX_REFINEMENTS,
        max_contact_iterations: int = MAX_CONTACT_ITERATIONS,
    ) -> None:
        validate_positive(interval_length, "interval_length")
        validate_positive(contact_tolerance, "contact_tolerance")
        self.constants = constants
        self.interval_length = float(interval_length)
        self.interval_tolerance = INTERVAL_TOLERANCE
        self.fuel_tolerance = FUEL_TOLERANCE
        self.contact_tolerance = float(contact_tolerance)
        self.sign_flip_padding = SIGN_FLIP_PADDING
        self.max_refinements = int(max_refinements)
        self.max_contact_iterations = int(max_contact_iterations)

    # --- Helpers ---

    def fuel_exhausted(self, state: SimulationState) -> bool:
        return state.mass - self.constants.dry_mass < self.fuel_tolerance

    def nominal_step(self, state: SimulationState, burn_rate: float) -> float:
        """Remaining interval time, cut short where the fuel runs out first."""
        step = state.remaining_interval_time
        if burn_rate > 0 and state.mass < self.constants.dry_mass + step * burn_rate:
            step = (state.mass - self.constants.dry_mass) / burn_rate
        return step

    def _commit(
        self,
        state: SimulationState,
        step: float,
        burn_rate: float,
        new_distance: float,
        new_velocity: float,
        report: IntervalReport,
        phase: MissionPhase,
        on_commit: CommitHook | None,
    ) -> None:
        commit(state, step, burn_rate, new_distance, new_velocity)
        report.last_step = step
        report.substeps += 1
        if on_commit is not None:
            on_commit(state, step, burn_rate, phase)

    # --- Interval state machine ---

    def run_interval(
        self,
        state: SimulationState,
        burn_rate: float,
        on_commit: CommitHook | None = None,
    ) -> IntervalReport:
        """
        Hold one burn rate for a full decision interval.

        Parameters
        ----------
        state : SimulationState
            Mission state, mutated in place
        burn_rate : float
            Burn rate [lb/s]
        on_commit : CommitHook | None
            Called after every committed step with (state, step, burn_rate, phase)

        Returns
        -------
        IntervalReport
            Final phase is AWAITING_COMMAND, FUEL_OUT or CONTACT
        """
        state.remaining_interval_time = self.interval_length
        report = IntervalReport(burn_rate=burn_rate)
        phase = MissionPhase.INTEGRATING
        step = 0.0

        while phase not in _INTERVAL_EXITS:
            if phase is MissionPhase.INTEGRATING:
                phase, step = self._integrate(state, burn_rate, report, on_commit)
            elif phase is MissionPhase.REFINING:
                if report.refinements >= self.max_refinements:
                    raise ConvergenceError(
                        f"Sign-flip refinement did not settle after "
                        f"{report.refinements} sub-steps at t={state.elapsed_seconds:.3f}s"
                    )
                phase, step = self.refine_sign_flip(state, step, burn_rate, report, on_commit)
            elif phase is MissionPhase.CONVERGING:
                self.converge_contact(state, step, burn_rate, report, on_commit)
                phase = MissionPhase.CONTACT

        if phase is MissionPhase.AWAITING_COMMAND and self.fuel_exhausted(state):
            phase = MissionPhase.FUEL_OUT

        report.phase = phase
        return report

    def _integrate(
        self,
        state: SimulationState,
        burn_rate: float,
        report: IntervalReport,
        on_commit: CommitHook | None,
    ) -> tuple[MissionPhase, float]:
        """One nominal step; returns the next phase and the step it used."""
        if state.remaining_interval_time < self.interval_tolerance:
            return MissionPhase.AWAITING_COMMAND, 0.0
        if self.fuel_exhausted(state):
            return MissionPhase.FUEL_OUT, 0.0

        step = self.nominal_step(state, burn_rate)
        new_distance, new_velocity = integrate_burn(state, step, burn_rate, self.constants)

        if new_distance <= 0.0:
            return MissionPhase.CONVERGING, step
        # Ascending or hovering: no sign flip possible
        if state.velocity <= 0.0 or new_velocity >= 0.0:
            self._commit(state, step, burn_rate, new_distance, new_velocity,
                         report, MissionPhase.INTEGRATING, on_commit)
            return MissionPhase.INTEGRATING, step
        return MissionPhase.REFINING, step

    # --- Refinements ---

    def refine_sign_flip(
        self,
        state: SimulationState,
        nominal_step: float,
        burn_rate: float,
        report: IntervalReport | None = None,
        on_commit: CommitHook | None = None,
    ) -> tuple[MissionPhase, float]:
        """
        Insert a sub-step ending just past the zero-velocity instant.

        The velocity near the crossing is treated as quadratic in time:

            w    = (1 - m G / (Z k)) / 2
            step = m v / (Z k (w + sqrt(w² + v / Z))) + padding

        The sub-step is never longer than the nominal step it replaces.

        Returns
        -------
        tuple[MissionPhase, float]
            (CONVERGING, step) if the sub-step reaches the surface, otherwise
            (INTEGRATING, step) after committing it.

        Raises
        ------
        SolverInvariantError
            If called with a non-positive burn rate or velocity
        """
        if burn_rate <= 0.0:
            raise SolverInvariantError(
                f"Velocity sign flip requires thrust, got burn_rate={burn_rate}"
            )
        if state.velocity <= 0.0:
            raise SolverInvariantError(
                f"Sign-flip refinement requires a descending capsule, got v={state.velocity}"
            )
        if report is None:
            report = IntervalReport(burn_rate=burn_rate)

        g = self.constants.gravity
        z = self.constants.exhaust_coefficient
        w = (1.0 - state.mass * g / (z * burn_rate)) / 2.0
        step = (
            state.mass * state.velocity
            / (z * burn_rate * (w + math.sqrt(w * w + state.velocity / z)))
            + self.sign_flip_padding
        )
        if not math.isfinite(step):
            raise ConvergenceError(f"Sign-flip sub-step is not finite: {step}")
        step = min(step, nominal_step)
        report.refinements += 1

        new_distance, new_velocity = integrate_burn(state, step, burn_rate, self.constants)
        if new_distance <= 0.0:
            return MissionPhase.CONVERGING, step

        self._commit(state, step, burn_rate, new_distance, new_velocity,
                     report, MissionPhase.REFINING, on_commit)
        return MissionPhase.INTEGRATING, step

    def converge_contact(
        self,
        state: SimulationState,
        step: float,
        burn_rate: float,
        report: IntervalReport | None = None,
        on_commit: CommitHook | None = None,
    ) -> float:
        """
        Shrink the step onto the contact instant.

        Each iteration solves d = v t + a t² / 2 with a = G - Z k / m for the
        time to the surface, in the cancellation-free form

            t = 2 d / (v + sqrt(v² + 2 d a))

        integrates that long, and commits. Iteration stops once the step is
        no longer than contact_tolerance. The committed velocity is the
        impact velocity.

        Parameters
        ----------
        state : SimulationState
            Mission state, mutated in place
        step : float
            The step that was projected to cross the surface [s]
        burn_rate : float
            Burn rate [lb/s]

        Returns
        -------
        float
            Last step length [s], <= contact_tolerance

        Raises
        ------
        ConvergenceError
            If the root estimate is not real or the iteration cap is hit
        """
        if report is None:
            report = IntervalReport(burn_rate=burn_rate)

        g = self.constants.gravity
        z = self.constants.exhaust_coefficient
        iterations = 0
        while step > self.contact_tolerance:
            if iterations >= self.max_contact_iterations:
                raise ConvergenceError(
                    f"Contact convergence did not settle after {iterations} iterations "
                    f"(distance={state.distance:.3e} mi, step={step:.3e}s)"
                )
            accel = g - z * burn_rate / state.mass
            discriminant = state.velocity * state.velocity + 2.0 * state.distance * accel
            if discriminant < 0.0:
                raise ConvergenceError(
                    f"No real time to surface (v={state.velocity:.6f}, "
                    f"d={state.distance:.6f}, a={accel:.6f})"
                )
            delta = state.velocity + math.sqrt(discriminant)
            if delta <= 0.0:
                raise ConvergenceError(
                    f"Capsule does not reach the surface (v={state.velocity:.6f}, "
                    f"d={state.distance:.6f}, a={accel:.6f})"
                )
            step = 2.0 * state.distance / delta
            if step <= 0.0:
                # Already on or past the surface
                break

            new_distance, new_velocity = integrate_burn(state, step, burn_rate, self.constants)
            self._commit(state, step, burn_rate, new_distance, new_velocity,
                         report, MissionPhase.CONVERGING, on_commit)
            iterations += 1
            report.contact_iterations += 1

        return step
