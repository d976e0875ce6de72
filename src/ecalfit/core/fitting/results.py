"""Single-peak fit report."""

from dataclasses import dataclass, field

import numpy as np

from ecalfit.core.constants import FWHM_TO_SIGMA


@dataclass
class SinglePeakFitReport:
    """Outcome of a maximum-likelihood single-peak fit."""

    converged: bool
    message: str
    nfev: int
    nit: int
    negative_loglike: float
    n_bins: int
    values: dict[str, float] = field(default_factory=dict)
    stderr: dict[str, float] = field(default_factory=dict)
    covariance: np.ndarray | None = None

    @property
    def n_params(self) -> int:
        """Number of fitted parameters."""
        return len(self.values)

    @property
    def loglike(self) -> float:
        """Log-likelihood at the best fit."""
        return -self.negative_loglike

    @property
    def fwhm(self) -> float:
        """Full width at half maximum of the Gaussian component."""
        return self.values["sigma"] / FWHM_TO_SIGMA

    @property
    def fwhm_err(self) -> float | None:
        """Uncertainty on the FWHM, if uncertainties were estimated."""
        if "sigma" not in self.stderr:
            return None
        return self.stderr["sigma"] / FWHM_TO_SIGMA

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization (excludes covariance)."""
        result: dict[str, object] = {
            "converged": self.converged,
            "message": self.message,
            "nfev": self.nfev,
            "nit": self.nit,
            "loglike": self.loglike,
            "n_bins": self.n_bins,
            "n_params": self.n_params,
            "values": dict(self.values),
        }
        if self.stderr:
            result["stderr"] = dict(self.stderr)
        return result
