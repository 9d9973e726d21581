"""
Simulation Histories
====================
Ordered, immutable sequences of per-revolution / per-step snapshots.

Insertion order is simulation time order. A history is built once by the run
that produced it and never mutated afterwards; it converts to plain records
(list of dicts) or JSON for the presentation layer, and to numpy columns for
plotting.
"""

import json
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Iterator, List, Tuple

import numpy as np


def _finite_or_none(value):
    if isinstance(value, float) and not np.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class OrbitSnapshot:
    """Orbital elements at the end of one revolution."""
    orbit: int                 # revolution index, 0-based
    semi_major_axis: float     # m
    altitude: float            # m, a − R_E (may go negative)
    raan_deg: float            # unwrapped accumulator
    perigee_deg: float         # unwrapped accumulator
    period: float              # s, period used to step this revolution


@dataclass(frozen=True)
class ReentrySnapshot:
    """Flight state after one integration step."""
    step: int                  # 1-based
    time: float                # s since entry interface
    gamma: float               # rad
    velocity: float            # m/s
    altitude: float            # m

    @property
    def gamma_deg(self) -> float:
        return float(np.degrees(self.gamma))


class SimulationHistory:
    """Read-only sequence of snapshots of a single dataclass type."""

    snapshot_type = None

    def __init__(self, snapshots, config=None):
        self._snapshots: Tuple = tuple(snapshots)
        self.config = config

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator:
        return iter(self._snapshots)

    def __getitem__(self, index):
        return self._snapshots[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, SimulationHistory):
            return NotImplemented
        return type(self) is type(other) and self._snapshots == other._snapshots

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} snapshots)"

    @property
    def snapshots(self) -> Tuple:
        return self._snapshots

    def column(self, name: str) -> np.ndarray:
        """One snapshot field as a float array, in time order."""
        if self.snapshot_type is not None:
            names = [f.name for f in fields(self.snapshot_type)]
            if name not in names:
                raise KeyError(f"Unknown field '{name}'. Available: {names}")
        return np.array([getattr(s, name) for s in self._snapshots], dtype=float)

    def to_records(self) -> List[Dict[str, Any]]:
        """Plain dicts per snapshot; NaN and infinities become None."""
        return [
            {k: _finite_or_none(v) for k, v in asdict(s).items()}
            for s in self._snapshots
        ]

    def to_json(self, **kwargs) -> str:
        """Strict JSON text (no NaN / Infinity tokens)."""
        return json.dumps(self.to_records(), allow_nan=False, **kwargs)


class OrbitHistory(SimulationHistory):
    """Output of the per-revolution orbit propagator."""

    snapshot_type = OrbitSnapshot

    @property
    def orbit(self) -> np.ndarray:
        return self.column('orbit')

    @property
    def semi_major_axis(self) -> np.ndarray:
        return self.column('semi_major_axis')

    @property
    def altitude(self) -> np.ndarray:
        return self.column('altitude')

    @property
    def raan_deg(self) -> np.ndarray:
        return self.column('raan_deg')

    @property
    def perigee_deg(self) -> np.ndarray:
        return self.column('perigee_deg')

    @property
    def elapsed_time(self) -> np.ndarray:
        """Cumulative time (s) at the end of each revolution."""
        return np.cumsum(self.column('period'))

    @property
    def altitude_lost(self) -> float:
        """Altitude lost over the run (m)."""
        if not self._snapshots or self.config is None:
            return 0.0
        return float(self.config.initial_altitude - self._snapshots[-1].altitude)

    def summary(self) -> str:
        if not self._snapshots:
            return "Orbit history: empty"
        last = self._snapshots[-1]
        lines = [
            f"  Revolutions  : {len(self):>10d}",
            f"  Final alt    : {last.altitude/1000:>10.2f} km",
            f"  Alt lost     : {self.altitude_lost/1000:>10.3f} km",
            f"  RAAN drift   : {last.raan_deg:>10.3f} °",
            f"  Perigee drift: {last.perigee_deg:>10.3f} °",
            f"  Elapsed      : {self.elapsed_time[-1]/86400:>10.2f} days",
        ]
        return '\n'.join(lines)


class ReentryHistory(SimulationHistory):
    """Output of the fixed-step reentry integrator."""

    snapshot_type = ReentrySnapshot

    @property
    def time(self) -> np.ndarray:
        return self.column('time')

    @property
    def gamma(self) -> np.ndarray:
        return self.column('gamma')

    @property
    def velocity(self) -> np.ndarray:
        return self.column('velocity')

    @property
    def altitude(self) -> np.ndarray:
        return self.column('altitude')

    def summary(self) -> str:
        if not self._snapshots:
            return "Reentry history: empty"
        last = self._snapshots[-1]
        lines = [
            f"  Steps        : {len(self):>10d}",
            f"  Elapsed      : {last.time:>10.1f} s",
            f"  Final alt    : {last.altitude/1000:>10.2f} km",
            f"  Final vel    : {last.velocity:>10.1f} m/s",
            f"  Final γ      : {last.gamma_deg:>10.2f} °",
        ]
        return '\n'.join(lines)
