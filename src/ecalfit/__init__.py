"""ecalfit - Energy calibration peak fits and goodness-of-fit diagnostics.

Public API:
    - p_value, p_value_loglike_ratio: parametric goodness-of-fit tests
    - p_value_mc, monte_carlo_gof: Monte-Carlo goodness-of-fit test
    - get_residuals: bin-wise residuals and significances
    - fit_single_peak, hist_loglike, gamma_peakshape: reference fit collaborators

Configuration:
    - energy_cal_config, ecal_peak_windows: detector calibration settings

Domain Objects:
    - Histogram, PeakSampleSpec, PeakWindow
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from ecalfit.core import (  # noqa: E402
    CancellationToken,
    EnergyCalConfig,
    GOFResult,
    Histogram,
    MonteCarloResult,
    PeakSampleSpec,
    PeakWindow,
    ResidualResult,
    SinglePeakFitReport,
    ecal_peak_windows,
    energy_cal_config,
    fit_single_peak,
    gamma_peakshape,
    get_residuals,
    hist_loglike,
    monte_carlo_gof,
    p_value,
    p_value_loglike_ratio,
    p_value_mc,
)
from ecalfit.core.shared.exceptions import (  # noqa: E402
    ConfigError,
    DataIOError,
    EcalFitError,
    ExternalFitFailure,
    InvalidInputError,
    MonteCarloCancelledError,
    NumericalWarning,
)

__all__ = [
    # Version
    "__version__",
    # Goodness of fit
    "get_residuals",
    "monte_carlo_gof",
    "p_value",
    "p_value_loglike_ratio",
    "p_value_mc",
    "GOFResult",
    "MonteCarloResult",
    "ResidualResult",
    "CancellationToken",
    # Fitting
    "fit_single_peak",
    "gamma_peakshape",
    "hist_loglike",
    "SinglePeakFitReport",
    # Configuration
    "EnergyCalConfig",
    "ecal_peak_windows",
    "energy_cal_config",
    # Domain
    "Histogram",
    "PeakSampleSpec",
    "PeakWindow",
    # Errors
    "ConfigError",
    "DataIOError",
    "EcalFitError",
    "ExternalFitFailure",
    "InvalidInputError",
    "MonteCarloCancelledError",
    "NumericalWarning",
]
