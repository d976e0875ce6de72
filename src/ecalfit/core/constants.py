"""Core constants for ecalfit goodness-of-fit tests and peak fitting.

These constants define default numeric settings. Most of them can be
overridden through keyword arguments of the functions that use them.
"""

import numpy as np

# =============================================================================
# Goodness-of-Fit Defaults
# =============================================================================

CHI2_MIN_EXPECTED_COUNTS = 5.0
"""Smallest modeled bin count for which the chi-square approximation is trusted.

Bins at or below this expectation are still included in the statistic, but the
result is flagged as potentially unreliable.
"""

MC_DEFAULT_SAMPLES = 1000
"""Default number of synthetic histograms drawn by the Monte-Carlo test."""

MC_MAX_WORKERS = 12
"""Upper bound on threads used for the Monte-Carlo refits.

Thread parallelism is limited by GIL contention in the optimizer's Python
layer, so more workers than this rarely helps.
"""

# =============================================================================
# Peakshape
# =============================================================================

FWHM_TO_SIGMA = 1.0 / (2.0 * np.sqrt(2.0 * np.log(2.0)))
"""Conversion factor from full width at half maximum to Gaussian sigma."""

PEAKSHAPE_PARAMETERS = (
    "mu",
    "sigma",
    "n",
    "step_amplitude",
    "skew_fraction",
    "skew_width",
    "background",
)
"""Parameter names of the gamma peakshape, in fit order."""

# =============================================================================
# Single-Peak Fit Defaults
# =============================================================================

FIT_MAX_ITERATIONS = 5000
"""Maximum number of L-BFGS-B iterations for a single-peak fit."""

FIT_FTOL = 1e-10
"""Relative function tolerance for the single-peak likelihood fit."""

FIT_POSITION_WINDOW = 10.0
"""Half-width (in energy units) of the allowed range around the seed position."""

SKEW_FRACTION_BOUNDS = (0.0, 0.25)
"""Allowed range of the low-energy tail fraction."""

SKEW_WIDTH_BOUNDS = (1e-4, 0.1)
"""Allowed range of the tail slope, relative to the peak position."""

HESSIAN_REL_STEP = 1e-4
"""Relative step of the finite-difference Hessian used for uncertainties."""
