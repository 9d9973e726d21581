"""
Error Taxonomy
==============
Every failure the engine reports derives from ``SimulationError``.

- ``DomainError``    : a physical or geometric precondition does not hold
  (unreachable inclination, e >= 1, non-positive mass, ...).
- ``ParameterError`` : a parameter mapping does not match a simulation's
  variable schema.

Both also subclass ``ValueError`` so callers that only know the standard
exception hierarchy still catch them.
"""


class SimulationError(Exception):
    """Base class for all simulator errors."""


class DomainError(SimulationError, ValueError):
    """Input lies outside the domain where a model is defined."""


class ParameterError(SimulationError, ValueError):
    """Unknown simulation, unknown parameter name or missing parameter."""


def require_finite(name: str, value: float) -> float:
    """Reject NaN and infinities before they leak into a run."""
    value = float(value)
    if value != value or value in (float('inf'), float('-inf')):
        raise DomainError(f"{name} must be a finite number, got {value}")
    return value


def require_positive(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value <= 0.0:
        raise DomainError(f"{name} must be > 0, got {value}")
    return value


def require_non_negative(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value < 0.0:
        raise DomainError(f"{name} must be >= 0, got {value}")
    return value


def require_eccentricity(value: float) -> float:
    """Closed orbits only: the J2 rate formulas divide by (1 - e²)."""
    value = require_finite('eccentricity', value)
    if not 0.0 <= value < 1.0:
        raise DomainError(
            f"eccentricity must lie in [0, 1) for a closed orbit, got {value}"
        )
    return value
