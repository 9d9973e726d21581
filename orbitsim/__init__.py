"""
Analytical Orbit & Reentry Simulator
====================================
Three independent analytical models that turn physical parameters into
time-ordered sequences of orbital / flight state:
  - Launch azimuth geometry (cos ψ = cos i / cos φ)
  - Per-revolution orbit propagation with drag decay and J2 drift ("Echo I")
  - Fixed-step Euler reentry integration with a shallow-angle approximation

All runs are pure functions of frozen configuration objects and return
JSON-serializable results.
"""

from .errors import SimulationError, DomainError, ParameterError
from .atmosphere import (
    ExponentialAtmosphere, ORBITAL_DECAY_ATMOSPHERE, REENTRY_ATMOSPHERE,
)
from .azimuth import (
    AzimuthConfig, AzimuthResult,
    compute_launch_azimuth, is_inclination_reachable,
    compute_earth_rotation_longitude, run_azimuth_simulation, run_azimuth,
    compute_semilatus_rectum, compute_orbital_radius,
    compute_circular_velocity, compute_time_from_perigee,
)
from .history import (
    SimulationHistory, OrbitHistory, OrbitSnapshot,
    ReentryHistory, ReentrySnapshot,
)
from .propagator import (
    OrbitConfig, propagate_orbit, propagate_orbits,
    mean_motion, orbital_period, raan_drift_rate, perigee_drift_rate,
    semi_major_axis_decay_rate,
)
from .reentry import (
    VehicleParams, ReentryState, ReentryConfig,
    reentry_step, simulate_reentry, approximate_flight_path_angle,
    ballistic_coefficient, deceleration, drag_force, lift_force,
    gravity, flight_path_angle_rate,
)
from .schema import (
    VariableDescriptor, load_variables, default_values,
    config_from_values, run_simulation,
)
from .validation import compare_with_reference, compare_shallow_approximation

__version__ = "1.0.0"
__all__ = [
    'SimulationError', 'DomainError', 'ParameterError',
    'ExponentialAtmosphere', 'ORBITAL_DECAY_ATMOSPHERE', 'REENTRY_ATMOSPHERE',
    'AzimuthConfig', 'AzimuthResult', 'compute_launch_azimuth',
    'is_inclination_reachable', 'compute_earth_rotation_longitude',
    'run_azimuth_simulation', 'run_azimuth',
    'compute_semilatus_rectum', 'compute_orbital_radius',
    'compute_circular_velocity', 'compute_time_from_perigee',
    'SimulationHistory', 'OrbitHistory', 'OrbitSnapshot',
    'ReentryHistory', 'ReentrySnapshot',
    'OrbitConfig', 'propagate_orbit', 'propagate_orbits',
    'mean_motion', 'orbital_period', 'raan_drift_rate', 'perigee_drift_rate',
    'semi_major_axis_decay_rate',
    'VehicleParams', 'ReentryState', 'ReentryConfig',
    'reentry_step', 'simulate_reentry', 'approximate_flight_path_angle',
    'ballistic_coefficient', 'deceleration', 'drag_force', 'lift_force',
    'gravity', 'flight_path_angle_rate',
    'VariableDescriptor', 'load_variables', 'default_values',
    'config_from_values', 'run_simulation',
    'compare_with_reference', 'compare_shallow_approximation',
]
