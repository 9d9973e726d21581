"""
Echo I Orbital Behaviour Model
==============================
Evolves orbital elements revolution by revolution under two secular effects:

1. **Atmospheric drag**: decay of the semi-major axis,
       da/dt = −C_D (A/m) ρ(a − R_E) √(μ a)
2. **Earth oblateness (J2)**: regression of the node and rotation of the
   line of apsides,
       dΩ/dt = −1.5 J2 (R_E/a)² n cos i / (1 − e²)²
       dω/dt = 0.75 J2 (R_E/a)² n (5 cos² i − 1) / (1 − e²)²

Each revolution is one forward-Euler step whose size is the current orbital
period: rates and period are evaluated at the start of the revolution and are
not re-evaluated mid-step.

The loop has no surface-collision check. Once the orbit decays below the
surface the altitude goes negative and the run carries on to the requested
revolution count.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping

import numpy as np

from .atmosphere import ExponentialAtmosphere, ORBITAL_DECAY_ATMOSPHERE
from .errors import (
    DomainError, require_eccentricity, require_finite,
    require_non_negative, require_positive,
)
from .history import OrbitHistory, OrbitSnapshot


logger = logging.getLogger(__name__)


# ── Physical constants ─────────────────────────────────────────────────────
MU  = 3.986004418e14    # Earth gravitational parameter (m³/s²)
R_E = 6378137.0         # Earth equatorial radius (m)
J2  = 1.08263e-3        # Earth oblateness coefficient


# ── Orbital mechanics ──────────────────────────────────────────────────────
def mean_motion(semi_major_axis: float) -> float:
    """n = √(μ / a³) (rad/s)"""
    return np.sqrt(MU / semi_major_axis ** 3)


def orbital_period(semi_major_axis: float) -> float:
    """T = 2π / n (s)"""
    return 2 * np.pi / mean_motion(semi_major_axis)


# ── J2 secular drift rates ─────────────────────────────────────────────────
def raan_drift_rate(a: float, e: float, inclination: float) -> float:
    """Nodal regression rate dΩ/dt (rad/s). Negative for prograde orbits."""
    n = mean_motion(a)
    return (
        -1.5 * J2 * (R_E / a) ** 2
        * n * np.cos(inclination)
        / (1 - e * e) ** 2
    )


def perigee_drift_rate(a: float, e: float, inclination: float) -> float:
    """Apsidal rotation rate dω/dt (rad/s). Changes sign at the critical inclination."""
    n = mean_motion(a)
    return (
        0.75 * J2 * (R_E / a) ** 2
        * n * (5 * np.cos(inclination) ** 2 - 1)
        / (1 - e * e) ** 2
    )


# ── Atmospheric drag decay ─────────────────────────────────────────────────
def semi_major_axis_decay_rate(a: float, area: float, mass: float,
                               drag_coeff: float,
                               atmosphere: ExponentialAtmosphere = ORBITAL_DECAY_ATMOSPHERE) -> float:
    """da/dt (m/s) from the local density at altitude a − R_E."""
    rho = atmosphere.density(a - R_E)
    return -drag_coeff * (area / mass) * rho * np.sqrt(MU * a)


# ── Configuration ──────────────────────────────────────────────────────────
@dataclass(frozen=True)
class OrbitConfig:
    """
    Inputs of one propagation run.

    Attributes:
        semi_major_axis: Initial a (m), must exceed R_E
        inclination: i (rad)
        area: Cross-sectional area (m²); 0 switches drag off
        mass: Object mass (kg)
        eccentricity: e in [0, 1)
        drag_coeff: C_D
        revolutions: Number of revolutions to step
        raan: Initial Ω (rad)
        arg_perigee: Initial ω (rad)
        atmosphere: Density model used for the decay term
    """
    semi_major_axis: float
    inclination: float
    area: float
    mass: float
    eccentricity: float = 0.0
    drag_coeff: float = 2.2
    revolutions: int = 1000
    raan: float = 0.0
    arg_perigee: float = 0.0
    atmosphere: ExponentialAtmosphere = field(default=ORBITAL_DECAY_ATMOSPHERE, repr=False)

    def __post_init__(self):
        require_finite('semi_major_axis', self.semi_major_axis)
        if self.semi_major_axis <= R_E:
            raise DomainError(
                f"semi_major_axis must exceed the Earth radius ({R_E} m), "
                f"got {self.semi_major_axis}"
            )
        require_finite('inclination', self.inclination)
        require_non_negative('area', self.area)
        require_positive('mass', self.mass)
        require_eccentricity(self.eccentricity)
        require_non_negative('drag_coeff', self.drag_coeff)
        require_finite('raan', self.raan)
        require_finite('arg_perigee', self.arg_perigee)
        if int(self.revolutions) != self.revolutions or self.revolutions < 0:
            raise DomainError(f"revolutions must be a non-negative integer, got {self.revolutions}")
        object.__setattr__(self, 'revolutions', int(self.revolutions))

    @property
    def initial_altitude(self) -> float:
        return self.semi_major_axis - R_E

    @property
    def area_to_mass(self) -> float:
        return self.area / self.mass


# ── Orbit evolution ────────────────────────────────────────────────────────
def propagate_orbit(config: OrbitConfig) -> OrbitHistory:
    """
    Step the orbit one revolution at a time for config.revolutions revolutions.

    Ω and ω accumulate unwrapped, in radians; they are converted to degrees
    only when a snapshot is recorded.
    """
    a = float(config.semi_major_axis)
    e = config.eccentricity
    inc = config.inclination
    raan = float(config.raan)
    arg_perigee = float(config.arg_perigee)

    logger.debug("Propagating %d revolutions from a=%.1f m, i=%.4f rad, A/m=%.4g",
                 config.revolutions, a, inc, config.area_to_mass)

    history = []
    with np.errstate(over='ignore', invalid='ignore', divide='ignore'):
        for n in range(config.revolutions):
            T = orbital_period(a)

            da_dt = semi_major_axis_decay_rate(a, config.area, config.mass,
                                               config.drag_coeff, config.atmosphere)
            draan_dt = raan_drift_rate(a, e, inc)
            dperigee_dt = perigee_drift_rate(a, e, inc)

            # one revolution
            a += da_dt * T
            raan += draan_dt * T
            arg_perigee += dperigee_dt * T

            history.append(OrbitSnapshot(
                orbit=n,
                semi_major_axis=float(a),
                altitude=float(a - R_E),
                raan_deg=float(np.degrees(raan)),
                perigee_deg=float(np.degrees(arg_perigee)),
                period=float(T),
            ))

    result = OrbitHistory(history, config=config)
    if history:
        logger.info("Propagated %d revolutions: altitude %.1f km -> %.1f km",
                    len(result), config.initial_altitude / 1000, history[-1].altitude / 1000)
    return result


def propagate_orbits(configs: Mapping[str, OrbitConfig]) -> Dict[str, OrbitHistory]:
    """Run several independent objects (e.g. a satellite and its debris)."""
    return {name: propagate_orbit(cfg) for name, cfg in configs.items()}
