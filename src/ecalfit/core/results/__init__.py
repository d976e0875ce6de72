"""Result containers for goodness-of-fit diagnostics."""

from ecalfit.core.results.statistics import (
    GOFResult,
    MonteCarloResult,
    ResidualResult,
    compute_degrees_of_freedom,
)

__all__ = ["GOFResult", "MonteCarloResult", "ResidualResult", "compute_degrees_of_freedom"]
