# patrol/errors.py
from __future__ import annotations


class PatrolError(Exception):
    """Base class for everything this package raises on purpose."""


class ConfigurationError(PatrolError, ValueError):
    """Bad grid, start state, map text or config value. Raised before any simulation."""


class InvariantViolation(PatrolError, RuntimeError):
    """The tick rule was broken; this is a bug, not bad input."""


class UnboundedRunError(PatrolError, RuntimeError):
    """A non cycle-aware run outlived the state space, so the configuration loops."""
