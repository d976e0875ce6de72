"""Shared building blocks: exceptions and typing helpers."""

from ecalfit.core.shared.exceptions import (
    ConfigError,
    DataIOError,
    EcalFitError,
    ExternalFitFailure,
    InvalidInputError,
    MonteCarloCancelledError,
    NumericalWarning,
)

__all__ = [
    "ConfigError",
    "DataIOError",
    "EcalFitError",
    "ExternalFitFailure",
    "InvalidInputError",
    "MonteCarloCancelledError",
    "NumericalWarning",
]
