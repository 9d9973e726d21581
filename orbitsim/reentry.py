"""
Atmospheric Reentry Dynamics
============================
Classical analytical reentry relations balancing gravity, lift, drag and
atmospheric density, integrated with a fixed-step forward Euler scheme:

    γ̇ = (L / mV) cos σ + (V/r − g/V) cos γ
    V̇ = −D / m
    ḣ = V sin γ

σ is the bank angle. A decoupled shallow-angle estimate,

    γ ≈ γ₀ − (D / mV) Δt,

is provided for single-shot comparison against the stepped solution.

Units: metres, m/s, kg, radians.

The integrator has no surface-collision guard: it runs the requested number
of steps even after the altitude or the velocity goes negative.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from .atmosphere import ExponentialAtmosphere, REENTRY_ATMOSPHERE
from .errors import (
    DomainError, require_finite, require_non_negative, require_positive,
)
from .history import ReentryHistory, ReentrySnapshot


logger = logging.getLogger(__name__)


# ── Physical constants ─────────────────────────────────────────────────────
EARTH_RADIUS = 6371000.0        # m (mean radius)
MU           = 3.986004418e14   # m³/s²


# ── Forces ─────────────────────────────────────────────────────────────────
def drag_force(rho: float, velocity: float, cd: float, area: float) -> float:
    """D = ½ ρ V² C_D A"""
    return 0.5 * rho * velocity * velocity * cd * area


def lift_force(rho: float, velocity: float, cl: float, area: float) -> float:
    """L = ½ ρ V² C_L A"""
    return 0.5 * rho * velocity * velocity * cl * area


def gravity(altitude: float) -> float:
    """g(h) = μ / r²"""
    r = EARTH_RADIUS + altitude
    return MU / (r * r)


def flight_path_angle_rate(lift: float, mass: float, velocity: float,
                           altitude: float, gamma: float,
                           bank_angle: float = 0.0) -> float:
    """γ̇ (rad/s) from the lift term and the gravity-turn term."""
    r = EARTH_RADIUS + altitude
    g = gravity(altitude)

    lift_term = (lift / (mass * velocity)) * np.cos(bank_angle)
    gravity_term = (velocity / r - g / velocity) * np.cos(gamma)
    return lift_term + gravity_term


def approximate_flight_path_angle(gamma0: float, drag: float, mass: float,
                                  velocity: float, delta_time: float) -> float:
    """Shallow-entry (small γ) estimate γ ≈ γ₀ − (D / mV) Δt."""
    return gamma0 - (drag / (mass * velocity)) * delta_time


def ballistic_coefficient(mass: float, cd: float, area: float) -> float:
    """β = m / (C_D A) (kg/m²)"""
    return mass / (cd * area)


def deceleration(drag: float, mass: float) -> float:
    """a ≈ D / m (m/s²)"""
    return drag / mass


# ── Vehicle & state ────────────────────────────────────────────────────────
@dataclass(frozen=True)
class VehicleParams:
    """Entry vehicle, fixed for the whole run."""
    mass: float = 1350.0           # kg
    area: float = 2.8              # m²
    drag_coeff: float = 1.5
    lift_coeff: float = 0.0
    bank_angle: float = 0.0        # rad

    def __post_init__(self):
        require_positive('mass', self.mass)
        require_positive('area', self.area)
        require_non_negative('drag_coeff', self.drag_coeff)
        require_finite('lift_coeff', self.lift_coeff)
        require_finite('bank_angle', self.bank_angle)

    @property
    def ballistic_coefficient(self) -> float:
        if self.drag_coeff == 0:
            return float('inf')
        return ballistic_coefficient(self.mass, self.drag_coeff, self.area)

    @property
    def lift_to_drag(self) -> float:
        if self.drag_coeff == 0:
            return float('inf')
        return self.lift_coeff / self.drag_coeff


@dataclass(frozen=True)
class ReentryState:
    gamma: float       # flight-path angle (rad), negative = descending
    velocity: float    # m/s
    altitude: float    # m


@dataclass(frozen=True)
class ReentryConfig:
    """
    Inputs of one reentry run.

    Defaults approximate a Mercury capsule at the entry interface.
    """
    vehicle: VehicleParams = field(default_factory=VehicleParams)
    initial_state: ReentryState = field(
        default_factory=lambda: ReentryState(gamma=np.radians(-1.5),
                                             velocity=7500.0,
                                             altitude=120000.0))
    dt: float = 0.5                # s
    steps: int = 1200
    atmosphere: ExponentialAtmosphere = field(default=REENTRY_ATMOSPHERE, repr=False)

    def __post_init__(self):
        require_finite('gamma', self.initial_state.gamma)
        require_positive('velocity', self.initial_state.velocity)
        require_finite('altitude', self.initial_state.altitude)
        require_positive('dt', self.dt)
        if int(self.steps) != self.steps or self.steps < 0:
            raise DomainError(f"steps must be a non-negative integer, got {self.steps}")
        object.__setattr__(self, 'steps', int(self.steps))


# ── Integration ────────────────────────────────────────────────────────────
def reentry_step(state: ReentryState, vehicle: VehicleParams, dt: float,
                 atmosphere: ExponentialAtmosphere = REENTRY_ATMOSPHERE) -> ReentryState:
    """
    Advance the flight state by one Euler step of dt seconds.

    The altitude update uses the pre-step γ and V.
    """
    rho = atmosphere.density(state.altitude)
    velocity = np.float64(state.velocity)
    drag = drag_force(rho, velocity, vehicle.drag_coeff, vehicle.area)
    lift = lift_force(rho, velocity, vehicle.lift_coeff, vehicle.area)

    gamma_dot = flight_path_angle_rate(
        lift=lift,
        mass=vehicle.mass,
        velocity=velocity,
        altitude=state.altitude,
        gamma=state.gamma,
        bank_angle=vehicle.bank_angle,
    )

    return ReentryState(
        gamma=float(state.gamma + gamma_dot * dt),
        velocity=float(velocity - (drag / vehicle.mass) * dt),
        altitude=float(state.altitude + velocity * np.sin(state.gamma) * dt),
    )


def simulate_reentry(config: ReentryConfig) -> ReentryHistory:
    """Run config.steps Euler steps, recording the state after each one."""
    state = config.initial_state
    logger.debug("Reentry from h=%.0f m, V=%.1f m/s, γ=%.3f°, β=%.1f kg/m²",
                 state.altitude, state.velocity, np.degrees(state.gamma),
                 config.vehicle.ballistic_coefficient)

    history = []
    with np.errstate(over='ignore', invalid='ignore', divide='ignore'):
        for k in range(1, config.steps + 1):
            state = reentry_step(state, config.vehicle, config.dt, config.atmosphere)
            history.append(ReentrySnapshot(
                step=k,
                time=k * config.dt,
                gamma=state.gamma,
                velocity=state.velocity,
                altitude=state.altitude,
            ))

    result = ReentryHistory(history, config=config)
    if history and history[-1].altitude < 0:
        logger.info("Reentry run continued below the surface (final altitude %.0f m)",
                    history[-1].altitude)
    return result
