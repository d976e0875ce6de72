"""Exception taxonomy for ecalfit.

This module defines a small, coherent hierarchy of exceptions so that callers
can tell malformed input apart from fit failures and configuration problems.
Use these instead of generic Exception to communicate intent.
"""

from __future__ import annotations


class EcalFitError(Exception):
    """Base class for all ecalfit-specific exceptions."""


class InvalidInputError(EcalFitError, ValueError):
    """Malformed histogram, degenerate degrees of freedom or bad sample count."""


class ConfigError(EcalFitError):
    """Configuration-related errors (missing tables, unknown keys)."""


class DataIOError(EcalFitError):
    """Data loading/saving errors (files, formats, permissions)."""


class ExternalFitFailure(EcalFitError):
    """The peak fitter did not produce a usable result."""


class MonteCarloCancelledError(EcalFitError):
    """A Monte-Carlo sweep was aborted through its cancellation token."""


class NumericalWarning(UserWarning):
    """Result computed, but the chi-square approximation may not hold."""


__all__ = [
    "ConfigError",
    "DataIOError",
    "EcalFitError",
    "ExternalFitFailure",
    "InvalidInputError",
    "MonteCarloCancelledError",
    "NumericalWarning",
]
