"""Core module for ecalfit - data models, peak fitting and goodness-of-fit."""

from ecalfit.core.diagnostics import (
    get_residuals,
    monte_carlo_gof,
    p_value,
    p_value_loglike_ratio,
    p_value_mc,
)
from ecalfit.core.domain import (
    EnergyCalConfig,
    Histogram,
    PeakSampleSpec,
    PeakWindow,
    ecal_peak_windows,
    energy_cal_config,
)
from ecalfit.core.fitting import SinglePeakFitReport, fit_single_peak, hist_loglike
from ecalfit.core.lineshapes import gamma_peakshape
from ecalfit.core.parallel import CancellationToken
from ecalfit.core.results import GOFResult, MonteCarloResult, ResidualResult

__all__ = [
    "CancellationToken",
    "EnergyCalConfig",
    "GOFResult",
    "Histogram",
    "MonteCarloResult",
    "PeakSampleSpec",
    "PeakWindow",
    "ResidualResult",
    "SinglePeakFitReport",
    "ecal_peak_windows",
    "energy_cal_config",
    "fit_single_peak",
    "gamma_peakshape",
    "get_residuals",
    "hist_loglike",
    "monte_carlo_gof",
    "p_value",
    "p_value_loglike_ratio",
    "p_value_mc",
]
