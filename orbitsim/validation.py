"""
Integrator Comparisons
======================
Two checks on the fixed-step reentry integrator:

1. **Euler vs reference**: the same equations of motion integrated with an
   adaptive RK45 solver (``scipy.integrate.solve_ivp``) at tight tolerances,
   sampled on the Euler time grid. Shows the truncation error the coarse
   step accumulates.
2. **Shallow-angle approximation**: γ₀ − (D₀ / m V₀) t evaluated
   single-shot from the entry state at each step time, set against the
   stepped γ.
"""

import logging
from dataclasses import dataclass

import numpy as np
from scipy.integrate import solve_ivp

from .errors import SimulationError
from .history import ReentryHistory
from .reentry import (
    ReentryConfig, approximate_flight_path_angle, drag_force,
    flight_path_angle_rate, lift_force, simulate_reentry,
)


logger = logging.getLogger(__name__)


@dataclass
class ReferenceComparison:
    """Euler history next to a high-accuracy solution on the same grid."""
    euler: ReentryHistory
    time: np.ndarray
    ref_gamma: np.ndarray
    ref_velocity: np.ndarray
    ref_altitude: np.ndarray

    @property
    def gamma_error(self) -> np.ndarray:
        return self.euler.gamma - self.ref_gamma

    @property
    def velocity_error(self) -> np.ndarray:
        return self.euler.velocity - self.ref_velocity

    @property
    def altitude_error(self) -> np.ndarray:
        return self.euler.altitude - self.ref_altitude

    @property
    def max_errors(self) -> dict:
        """Largest absolute deviation per state variable."""
        return {
            'gamma': float(np.max(np.abs(self.gamma_error))),
            'velocity': float(np.max(np.abs(self.velocity_error))),
            'altitude': float(np.max(np.abs(self.altitude_error))),
        }


@dataclass
class ShallowAngleComparison:
    time: np.ndarray
    integrated_gamma: np.ndarray
    approximate_gamma: np.ndarray

    @property
    def difference(self) -> np.ndarray:
        return self.approximate_gamma - self.integrated_gamma


def _equations_of_motion(config: ReentryConfig):
    vehicle = config.vehicle
    atmosphere = config.atmosphere

    def rhs(t, y):
        gamma, velocity, altitude = y
        rho = atmosphere.density(altitude)
        drag = drag_force(rho, velocity, vehicle.drag_coeff, vehicle.area)
        lift = lift_force(rho, velocity, vehicle.lift_coeff, vehicle.area)
        gamma_dot = flight_path_angle_rate(lift, vehicle.mass, velocity,
                                           altitude, gamma, vehicle.bank_angle)
        return [gamma_dot, -drag / vehicle.mass, velocity * np.sin(gamma)]

    return rhs


def compare_with_reference(config: ReentryConfig, rtol: float = 1e-9,
                           atol: float = 1e-9) -> ReferenceComparison:
    """
    Integrate config with both Euler and RK45 and pair the results.

    Intended for runs that stay above the surface; past that point both
    solutions are equally meaningless.

    Raises:
        SimulationError: the reference solver did not reach the last step.
    """
    euler = simulate_reentry(config)
    time = euler.time
    s0 = config.initial_state

    if len(time) == 0:
        empty = np.array([])
        return ReferenceComparison(euler, empty, empty, empty, empty)

    sol = solve_ivp(
        _equations_of_motion(config),
        t_span=(0.0, float(time[-1])),
        y0=[s0.gamma, s0.velocity, s0.altitude],
        method='RK45',
        t_eval=time,
        rtol=rtol,
        atol=atol,
    )
    if not sol.success:
        raise SimulationError(f"Reference solver failed: {sol.message}")

    comparison = ReferenceComparison(
        euler=euler,
        time=sol.t,
        ref_gamma=sol.y[0],
        ref_velocity=sol.y[1],
        ref_altitude=sol.y[2],
    )
    logger.info("Euler vs RK45 max errors: %s", comparison.max_errors)
    return comparison


def compare_shallow_approximation(config: ReentryConfig) -> ShallowAngleComparison:
    """Shallow-angle estimate from the entry state vs the stepped γ."""
    history = simulate_reentry(config)
    s0 = config.initial_state
    vehicle = config.vehicle

    rho0 = config.atmosphere.density(s0.altitude)
    drag0 = drag_force(rho0, s0.velocity, vehicle.drag_coeff, vehicle.area)

    time = history.time
    approx = np.array([
        approximate_flight_path_angle(s0.gamma, drag0, vehicle.mass, s0.velocity, t)
        for t in time
    ])
    return ShallowAngleComparison(
        time=time,
        integrated_gamma=history.gamma,
        approximate_gamma=approx,
    )
