"""
Exponential Atmosphere Model
============================
Isothermal exponential density law used by both dynamics models:

    ρ(h) = ρ₀ · exp(−h / H)

The orbital-decay and reentry models are tuned with different scale heights,
so each gets its own preset instance. Neither clamps at the surface: for
negative (sub-surface) altitudes the density simply keeps growing.
"""

import numpy as np
from dataclasses import dataclass

from .errors import require_positive


# ── Presets ────────────────────────────────────────────────────────────────
SEA_LEVEL_DENSITY      = 1.225     # kg/m³
DECAY_SCALE_HEIGHT     = 8500.0    # m  (orbital-decay timescales)
REENTRY_SCALE_HEIGHT   = 7200.0    # m  (reentry timescales)


@dataclass(frozen=True)
class ExponentialAtmosphere:
    """
    Density-vs-altitude model with a sea-level density and a scale height.

    Attributes:
        rho0: Sea-level density (kg/m³)
        scale_height: e-folding height H (m)
        name: Label used in plots and logs
    """
    rho0: float = SEA_LEVEL_DENSITY
    scale_height: float = REENTRY_SCALE_HEIGHT
    name: str = "exponential"

    def __post_init__(self):
        require_positive('rho0', self.rho0)
        require_positive('scale_height', self.scale_height)

    def density(self, altitude):
        """
        Air density (kg/m³) at altitude (m).

        Accepts a float or an array. Very negative altitudes overflow to
        ``inf`` instead of raising.
        """
        with np.errstate(over='ignore'):
            rho = self.rho0 * np.exp(-np.asarray(altitude, dtype=float) / self.scale_height)
        if np.ndim(rho) == 0:
            return float(rho)
        return rho

    def profile(self, alt_array: np.ndarray) -> dict:
        """Density for an array of altitudes, keyed for plotting."""
        alt_array = np.asarray(alt_array, dtype=float)
        return {
            'altitude': alt_array,
            'density': self.density(alt_array),
        }


ORBITAL_DECAY_ATMOSPHERE = ExponentialAtmosphere(
    rho0=SEA_LEVEL_DENSITY,
    scale_height=DECAY_SCALE_HEIGHT,
    name="orbital decay",
)

REENTRY_ATMOSPHERE = ExponentialAtmosphere(
    rho0=SEA_LEVEL_DENSITY,
    scale_height=REENTRY_SCALE_HEIGHT,
    name="reentry",
)
