"""Goodness-of-fit statistics and residual diagnostics.

This module defines dataclasses for representing the outcome of the
goodness-of-fit tests: parametric tests (chi-square, likelihood ratio),
the Monte-Carlo resampling test and bin-wise residuals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ecalfit.core.shared.typing import FloatArray


def compute_degrees_of_freedom(n_data: int, n_params: int) -> int:
    """Compute degrees of freedom for statistical calculations.

    Unlike a reduced chi-square helper, this does not clamp: a non-positive
    result means the test is undefined and callers must reject it.

    Args:
        n_data: Number of bins entering the statistic
        n_params: Number of free parameters of the fit

    Returns
    -------
        Degrees of freedom (n_data - n_params)
    """
    return n_data - n_params


@dataclass(frozen=True, slots=True)
class GOFResult:
    """Outcome of a parametric goodness-of-fit test.

    Attributes
    ----------
        p_value: Upper-tail probability of the statistic, in [0, 1]
        statistic: Test statistic (chi-square or deviance), non-negative
        dof: Degrees of freedom
        n_bins: Number of bins entering the statistic
        min_expected: Smallest modeled count among those bins
        warnings: Numerical-quality notes; empty when the approximation holds
    """

    p_value: float
    statistic: float
    dof: int
    n_bins: int = 0
    min_expected: float = float("nan")
    warnings: tuple[str, ...] = ()

    @property
    def is_reliable(self) -> bool:
        """Whether no numerical-quality warning was raised."""
        return not self.warnings

    @property
    def reduced_statistic(self) -> float:
        """Statistic divided by degrees of freedom."""
        return self.statistic / self.dof

    def __iter__(self):
        """Unpack as ``p_value, statistic, dof``."""
        return iter((self.p_value, self.statistic, self.dof))

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, object] = {
            "p_value": self.p_value,
            "statistic": self.statistic,
            "dof": self.dof,
            "n_bins": self.n_bins,
            "min_expected": self.min_expected,
        }
        if self.warnings:
            result["warnings"] = list(self.warnings)
        return result


@dataclass(frozen=True, slots=True)
class ResidualResult:
    """Bin-wise residuals of a fit, restricted to bins with positive model.

    Attributes
    ----------
        residuals: Model minus observed counts
        normalized_residuals: Residuals divided by sqrt(model)
        p_values: Two-sided Poisson probability of a residual at least as large
        bin_centers: Centers of the bins the other arrays refer to
    """

    residuals: FloatArray
    normalized_residuals: FloatArray
    p_values: FloatArray
    bin_centers: FloatArray

    def __len__(self) -> int:
        return self.residuals.size

    def __iter__(self):
        """Unpack as ``residuals, normalized_residuals, p_values, bin_centers``."""
        return iter((self.residuals, self.normalized_residuals, self.p_values, self.bin_centers))

    @property
    def rms(self) -> float:
        """Root mean square of the normalized residuals."""
        if self.normalized_residuals.size == 0:
            return 0.0
        return float(np.sqrt(np.mean(self.normalized_residuals**2)))

    def to_dict(self) -> dict[str, object]:
        """Summary dictionary (excludes the arrays)."""
        return {
            "n_bins": len(self),
            "rms_normalized": self.rms,
            "max_abs_normalized": float(np.max(np.abs(self.normalized_residuals), initial=0.0)),
            "min_p_value": float(np.min(self.p_values, initial=1.0)),
        }


@dataclass(slots=True)
class MonteCarloResult:
    """Best-fit log-likelihoods collected by a Monte-Carlo goodness-of-fit sweep.

    Both scores follow the sign convention of the sweep: the best-fit
    log-likelihood of a histogram is the negated value of the histogram
    log-likelihood evaluator, so a worse fit has a larger score.

    Attributes
    ----------
        observed_loglike: Best-fit log-likelihood of the observed histogram
        sample_loglikes: Best-fit log-likelihood per synthetic sample,
            NaN where the refit failed
    """

    observed_loglike: float
    sample_loglikes: FloatArray = field(default_factory=lambda: np.empty(0))

    @property
    def n_samples(self) -> int:
        """Number of samples drawn."""
        return self.sample_loglikes.size

    @property
    def n_failed(self) -> int:
        """Number of samples whose refit failed."""
        return int(np.count_nonzero(np.isnan(self.sample_loglikes)))

    @property
    def p_value(self) -> float:
        """Fraction of successful samples scoring lower than or equal to the observation."""
        valid = self.sample_loglikes[~np.isnan(self.sample_loglikes)]
        if valid.size == 0:
            return float("nan")
        return float(np.count_nonzero(valid <= self.observed_loglike) / valid.size)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "p_value": self.p_value,
            "observed_loglike": self.observed_loglike,
            "n_samples": self.n_samples,
            "n_failed": self.n_failed,
        }
