"""
Simulation Parameter Schemas
============================
Bridges the form-driven presentation layer and the models.

Each simulation ships an ordered variable list in ``data/<simulation>.json``:

    {"simulation": "echoi",
     "variables": [{"name": ..., "label": ..., "type": ..., "default": ...}]}

The front end renders one input per variable and hands back a flat
name → number mapping, which ``config_from_values`` turns into the model's
configuration object.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Union

import numpy as np

from .azimuth import AzimuthConfig, run_azimuth
from .errors import ParameterError
from .propagator import OrbitConfig, R_E, propagate_orbit
from .reentry import ReentryConfig, ReentryState, VehicleParams, simulate_reentry


logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')

SIMULATIONS = ('azimuth', 'echoi', 'reentry')


@dataclass(frozen=True)
class VariableDescriptor:
    """One form input of a simulation."""
    name: str
    label: str
    input_type: str = 'number'
    default: Optional[float] = None


def load_variables(simulation: str, data_dir: Optional[str] = None) -> List[VariableDescriptor]:
    """
    Ordered variable descriptors for a simulation.

    Raises:
        ParameterError: no schema exists for that simulation name.
    """
    path = os.path.join(data_dir or DATA_DIR, f'{simulation}.json')
    if not os.path.isfile(path):
        raise ParameterError(
            f"Unknown simulation '{simulation}'. Available: {list(SIMULATIONS)}"
        )
    with open(path, 'r', encoding='utf-8') as fh:
        data = json.load(fh)

    return [
        VariableDescriptor(
            name=v['name'],
            label=v.get('label', v['name']),
            input_type=v.get('type', 'number'),
            default=v.get('default'),
        )
        for v in data['variables']
    ]


def default_values(simulation: str, data_dir: Optional[str] = None) -> Dict[str, float]:
    return {v.name: v.default for v in load_variables(simulation, data_dir)
            if v.default is not None}


# ── Mapping → config ───────────────────────────────────────────────────────
def _take(values: Dict[str, float], name: str, default=None):
    if name in values:
        return float(values.pop(name))
    if default is None:
        raise ParameterError(f"Missing parameter '{name}'")
    return default


def _angle(values: Dict[str, float], name: str, default=None):
    """Angle in radians from either '<name>' (rad) or '<name>_deg'."""
    if f'{name}_deg' in values:
        return float(np.radians(float(values.pop(f'{name}_deg'))))
    return _take(values, name, default)


def _azimuth_config(values: Dict[str, float]) -> AzimuthConfig:
    return AzimuthConfig(
        latitude_deg=_take(values, 'latitude_deg'),
        inclination_deg=_take(values, 'inclination_deg'),
        time_since_epoch_min=_take(values, 'time_since_epoch_min', 0.0),
    )


def _orbit_config(values: Dict[str, float]) -> OrbitConfig:
    if 'altitude' in values:
        semi_major_axis = R_E + float(values.pop('altitude'))
    else:
        semi_major_axis = _take(values, 'semi_major_axis')
    return OrbitConfig(
        semi_major_axis=semi_major_axis,
        inclination=_angle(values, 'inclination'),
        area=_take(values, 'area'),
        mass=_take(values, 'mass'),
        eccentricity=_take(values, 'eccentricity', 0.0),
        drag_coeff=_take(values, 'drag_coeff', 2.2),
        revolutions=_take(values, 'revolutions', 1000),
        raan=_angle(values, 'raan', 0.0),
        arg_perigee=_angle(values, 'arg_perigee', 0.0),
    )


def _reentry_config(values: Dict[str, float]) -> ReentryConfig:
    vehicle = VehicleParams(
        mass=_take(values, 'mass'),
        area=_take(values, 'area'),
        drag_coeff=_take(values, 'drag_coeff'),
        lift_coeff=_take(values, 'lift_coeff', 0.0),
        bank_angle=_angle(values, 'bank_angle', 0.0),
    )
    state = ReentryState(
        gamma=_angle(values, 'gamma'),
        velocity=_take(values, 'velocity'),
        altitude=_take(values, 'altitude'),
    )
    return ReentryConfig(
        vehicle=vehicle,
        initial_state=state,
        dt=_take(values, 'dt', 0.5),
        steps=_take(values, 'steps', 1200),
    )


_BUILDERS: Dict[str, Callable] = {
    'azimuth': _azimuth_config,
    'echoi': _orbit_config,
    'reentry': _reentry_config,
}

_RUNNERS: Dict[str, Callable] = {
    'azimuth': run_azimuth,
    'echoi': propagate_orbit,
    'reentry': simulate_reentry,
}


def config_from_values(simulation: str, values: Mapping[str, float]
                       ) -> Union[AzimuthConfig, OrbitConfig, ReentryConfig]:
    """
    Build a simulation's config from a flat name → number mapping.

    Raises:
        ParameterError: unknown simulation, missing or unexpected parameter.
        DomainError: the values violate a model precondition.
    """
    if simulation not in _BUILDERS:
        raise ParameterError(
            f"Unknown simulation '{simulation}'. Available: {list(SIMULATIONS)}"
        )
    remaining = dict(values)
    config = _BUILDERS[simulation](remaining)
    if remaining:
        raise ParameterError(
            f"Unexpected parameters for '{simulation}': {sorted(remaining)}"
        )
    return config


def run_simulation(simulation: str, values: Mapping[str, float]):
    """
    Build the config and run the model.

    Returns a dict for the azimuth simulation and a list of snapshot
    records for the history-producing models, ready for ``json.dumps``.
    """
    config = config_from_values(simulation, values)
    logger.debug("Running '%s' with %r", simulation, config)
    result = _RUNNERS[simulation](config)
    if simulation == 'azimuth':
        return result.to_dict()
    return result.to_records()
