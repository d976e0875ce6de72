"""Peak fitting: likelihood, single-peak fitter and shared computations."""

from ecalfit.core.fitting.computation import evaluate_density, expected_counts, fix_parameters
from ecalfit.core.fitting.likelihood import hist_loglike, poisson_loglike
from ecalfit.core.fitting.results import SinglePeakFitReport
from ecalfit.core.fitting.single_peak import fit_single_peak, initial_guess

__all__ = [
    "SinglePeakFitReport",
    "evaluate_density",
    "expected_counts",
    "fit_single_peak",
    "fix_parameters",
    "hist_loglike",
    "initial_guess",
    "poisson_loglike",
]
