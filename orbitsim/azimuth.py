"""
Launch Azimuth & Orbital Geometry
=================================
Closed-form relationships from early Mercury / Apollo trajectory analysis:

    cos ψ = cos i / cos φ

where ψ is the launch azimuth (clockwise from North), i the target
inclination and φ the geocentric latitude of the launch site.

Reference: NASA NTRS 19980227091
"""

import logging
from dataclasses import dataclass, asdict
from typing import Optional

import numpy as np

from .errors import DomainError, require_eccentricity, require_finite


logger = logging.getLogger(__name__)


# ── Constants ──────────────────────────────────────────────────────────────
EARTH_RADIUS_KM  = 6378.0      # km
EARTH_ROT_RATE   = 0.25068     # deg/min


# ── Angle utilities ────────────────────────────────────────────────────────
def deg_to_rad(degrees):
    return np.radians(degrees)


def rad_to_deg(radians):
    return np.degrees(radians)


# ── Orbital geometry ───────────────────────────────────────────────────────
def compute_semilatus_rectum(semimajor_axis: float, eccentricity: float) -> float:
    """p = a (1 − e²)"""
    require_eccentricity(eccentricity)
    return semimajor_axis * (1 - eccentricity ** 2)


def compute_orbital_radius(p: float, true_anomaly_deg: float,
                           eccentricity: float) -> float:
    """r = p / (1 + e cos θ)"""
    theta = deg_to_rad(true_anomaly_deg)
    return float(p / (1 + eccentricity * np.cos(theta)))


def compute_circular_velocity(radius_km: float) -> float:
    """
    Normalised circular velocity, 1/√r.

    Not scaled by the gravitational parameter; kept as a unitless shape
    function for plots.
    """
    return float(np.sqrt(1 / radius_km))


def compute_time_from_perigee(orbital_period_min: float,
                              eccentric_anomaly_deg: float) -> float:
    """
    Simplified Kepler relation t ≈ (T / 2π) · E.

    Linear in the eccentric anomaly; the e·sin E term of Kepler's equation
    is deliberately left out.
    """
    eccentric_anomaly_rad = deg_to_rad(eccentric_anomaly_deg)
    return float((orbital_period_min / (2 * np.pi)) * eccentric_anomaly_rad)


# ── Earth rotation ─────────────────────────────────────────────────────────
def compute_earth_rotation_longitude(time_min: float) -> float:
    """Longitude shift λ = ω_E · t (deg) after time_min minutes."""
    return EARTH_ROT_RATE * time_min


# ── Launch azimuth ─────────────────────────────────────────────────────────
def is_inclination_reachable(latitude_deg: float, inclination_deg: float) -> bool:
    """
    True when a launch from latitude_deg can reach inclination_deg.

    For prograde orbits this is |i| ≥ |φ|. The inclination is first reduced
    modulo 360°; a retrograde inclination is then reachable when its
    supplement (180° − |i|) is.
    """
    inc = abs(inclination_deg) % 360.0
    if inc > 180.0:
        inc = 360.0 - inc
    if inc > 90.0:
        inc = 180.0 - inc
    return inc >= abs(latitude_deg)


def compute_launch_azimuth(latitude_deg: float, inclination_deg: float) -> float:
    """
    Launch azimuth ψ (deg, clockwise from North) for a direct ascent.

    Raises:
        DomainError: the inclination cannot be achieved from this latitude
            (|cos ψ| would exceed 1).
    """
    require_finite('latitude_deg', latitude_deg)
    require_finite('inclination_deg', inclination_deg)
    if not is_inclination_reachable(latitude_deg, inclination_deg):
        raise DomainError(
            f"Target inclination {inclination_deg}° cannot be achieved "
            f"from latitude {latitude_deg}°."
        )

    phi = deg_to_rad(latitude_deg)
    inclination = deg_to_rad(inclination_deg)
    cos_psi = np.cos(inclination) / np.cos(phi)

    # |cos ψ| can only exceed 1 here by rounding at the boundary
    psi = np.arccos(np.clip(cos_psi, -1.0, 1.0))
    return float(rad_to_deg(psi))


# ── High-level interface ───────────────────────────────────────────────────
@dataclass(frozen=True)
class AzimuthConfig:
    """Inputs of the azimuth simulation (φ, i, t in the paper's notation)."""
    latitude_deg: float = 28.5
    inclination_deg: float = 51.6
    time_since_epoch_min: float = 0.0

    def __post_init__(self):
        require_finite('latitude_deg', self.latitude_deg)
        require_finite('inclination_deg', self.inclination_deg)
        require_finite('time_since_epoch_min', self.time_since_epoch_min)
        if abs(self.latitude_deg) > 90.0:
            raise DomainError(f"latitude_deg must lie in [-90, 90], got {self.latitude_deg}")


@dataclass(frozen=True)
class AzimuthResult:
    azimuth_deg: Optional[float]   # None when infeasible
    longitude_shift_deg: float
    feasible: bool

    def to_dict(self) -> dict:
        return asdict(self)


def run_azimuth_simulation(latitude_deg: float, inclination_deg: float,
                           time_since_epoch_min: float = 0.0) -> AzimuthResult:
    """
    Azimuth, Earth-rotation longitude shift and feasibility in one record.

    An unreachable inclination is reported as ``feasible=False`` with no
    azimuth rather than as an exception.
    """
    config = AzimuthConfig(latitude_deg, inclination_deg, time_since_epoch_min)
    return run_azimuth(config)


def run_azimuth(config: AzimuthConfig) -> AzimuthResult:
    feasible = is_inclination_reachable(config.latitude_deg, config.inclination_deg)
    azimuth_deg = None
    if feasible:
        azimuth_deg = compute_launch_azimuth(config.latitude_deg, config.inclination_deg)
    else:
        logger.info("Inclination %.3f° unreachable from latitude %.3f°",
                    config.inclination_deg, config.latitude_deg)

    return AzimuthResult(
        azimuth_deg=azimuth_deg,
        longitude_shift_deg=compute_earth_rotation_longitude(config.time_since_epoch_min),
        feasible=feasible,
    )


def azimuth_sweep(inclination_deg: float, latitudes_deg: np.ndarray) -> np.ndarray:
    """Azimuth for each latitude; NaN where the inclination is unreachable."""
    out = np.full(len(latitudes_deg), np.nan)
    for k, lat in enumerate(latitudes_deg):
        if is_inclination_reachable(lat, inclination_deg):
            out[k] = compute_launch_azimuth(lat, inclination_deg)
    return out
