"""
Reference integration of the exact descent ODE.

Used to verify the truncated-series burn integrator. Not part of the game
loop: the mission always runs on integrate_burn().
"""
from __future__ import annotations

import numpy as np

from lunarlab.dynamics.burn import LUNAR_CONSTANTS, PhysicalConstants
from lunarlab.dynamics.state import SimulationState


def exact_burn(
    state: SimulationState,
    duration: float,
    burn_rate: float,
    constants: PhysicalConstants = LUNAR_CONSTANTS,
) -> tuple[float, float]:
    """
    Closed-form solution of the rocket equation (no series truncation).

    Returns
    -------
    tuple[float, float]
        (new_distance, new_velocity)
    """
    g = constants.gravity
    z = constants.exhaust_coefficient
    q = duration * burn_rate / state.mass
    if q >= 1.0:
        raise ValueError(f"Burn would consume the whole vehicle mass (q={q:.3f}).")

    log_term = np.log1p(-q)
    new_velocity = state.velocity + g * duration + z * log_term
    if q == 0.0:
        integral = 0.0
    else:
        # ∫0^t ln(1 - k s/m) ds
        integral = duration * (1.0 - 1.0 / q) * log_term - duration
    new_distance = (
        state.distance
        - state.velocity * duration
        - g * duration**2 / 2
        - z * integral
    )
    return float(new_distance), float(new_velocity)


class ReferenceIntegrator:
    """
    Variable-step integrator using scipy.integrate.solve_ivp.
    State: [distance, velocity, mass].
    """
    def __init__(self, method: str = "RK45", rtol: float = 1e-10, atol: float = 1e-12,
                 constants: PhysicalConstants = LUNAR_CONSTANTS) -> None:
        self.method = method
        self.rtol = float(rtol)
        self.atol = float(atol)
        self.constants = constants

    def rhs(self, t: float, y: np.ndarray, burn_rate: float) -> np.ndarray:
        _, v, m = y
        return np.array([
            -v,
            self.constants.gravity - self.constants.exhaust_coefficient * burn_rate / m,
            -burn_rate,
        ])

    def integrate(self, state: SimulationState, duration: float, burn_rate: float):
        try:
            from scipy.integrate import solve_ivp
        except Exception as e:
            raise ImportError("SciPy is required for ReferenceIntegrator. Install scipy>=1.8.") from e

        y0 = np.array([state.distance, state.velocity, state.mass], dtype=np.float64)
        sol = solve_ivp(
            self.rhs,
            t_span=(0.0, duration),
            y0=y0,
            method=self.method,
            rtol=self.rtol,
            atol=self.atol,
            args=(burn_rate,),
        )
        if not sol.success:
            raise RuntimeError(f"Reference integration failed: {sol.message}")
        return sol

    def burn(self, state: SimulationState, duration: float, burn_rate: float) -> tuple[float, float]:
        """Same contract as integrate_burn(): (new_distance, new_velocity)."""
        sol = self.integrate(state, duration, burn_rate)
        return float(sol.y[0, -1]), float(sol.y[1, -1])
