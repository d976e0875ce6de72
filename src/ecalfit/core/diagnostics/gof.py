"""Goodness-of-fit tests for binned peak fits.

Several functions to judge how well a fitted peakshape describes a histogram:

* ``p_value``: Pearson chi-square test (baseline method)
* ``p_value_loglike_ratio``: likelihood-ratio (Poisson deviance) test
* ``p_value_mc``: Monte-Carlo test, refitting Poisson-resampled histograms
* ``get_residuals``: bin-wise residuals and Poisson significances

All of them share the same binning helpers and the same bin selection: only
bins with a strictly positive modeled count enter a statistic. Bins with zero
expectation would divide by zero; dropping them is an approximation accepted
for peak windows, where the background keeps almost every bin positive.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats
from scipy.special import xlogy

from ecalfit.core.constants import (
    CHI2_MIN_EXPECTED_COUNTS,
    MC_DEFAULT_SAMPLES,
    PEAKSHAPE_PARAMETERS,
)
from ecalfit.core.domain.histogram import Histogram
from ecalfit.core.fitting.computation import expected_counts, fix_parameters
from ecalfit.core.fitting.likelihood import hist_loglike
from ecalfit.core.fitting.single_peak import fit_single_peak
from ecalfit.core.parallel import CancellationToken, run_independent
from ecalfit.core.results.statistics import (
    GOFResult,
    MonteCarloResult,
    ResidualResult,
    compute_degrees_of_freedom,
)
from ecalfit.core.shared.exceptions import ExternalFitFailure, InvalidInputError, NumericalWarning

if TYPE_CHECKING:
    from collections.abc import Callable

    from ecalfit.core.domain.peaks import PeakSampleSpec
    from ecalfit.core.shared.typing import (
        FloatArray,
        HistogramLogLikelihood,
        ParameterSet,
        PeakFitter,
        PeakshapeModel,
    )

logger = logging.getLogger(__name__)


# =============================================================================
# Shared helpers
# =============================================================================


def prepare_data(histogram: Histogram | tuple) -> tuple[FloatArray, FloatArray, FloatArray]:
    """Convert a histogram into bin counts, bin widths and bin centers.

    Args:
        histogram: Histogram, or an ``(edges, counts)`` pair

    Returns
    -------
        counts, widths, centers (equal length)

    Raises
    ------
        InvalidInputError: If the edges are not strictly increasing or do not
            match the number of counts
    """
    h = _as_histogram(histogram)
    return h.counts, h.widths, h.centers


def get_model_counts(
    f_fit: PeakshapeModel,
    params: ParameterSet,
    bin_centers: FloatArray,
    bin_widths: FloatArray,
) -> FloatArray:
    """Modeled counts per bin for fixed best-fit parameters.

    The density is evaluated at the bin centers and scaled by the bin widths.
    """
    return expected_counts(fix_parameters(f_fit, params), bin_centers, bin_widths)


def select_bins(model_counts: FloatArray) -> np.ndarray:
    """Boolean mask of the bins that enter a statistic (modeled count > 0)."""
    return model_counts > 0


def _as_histogram(histogram: Histogram | tuple) -> Histogram:
    if isinstance(histogram, Histogram):
        return histogram
    try:
        edges, counts = histogram
    except (TypeError, ValueError) as exc:
        msg = f"Expected a Histogram or an (edges, counts) pair, got {type(histogram).__name__}"
        raise InvalidInputError(msg) from exc
    return Histogram(edges, counts)


def _degrees_of_freedom(n_bins: int, params: ParameterSet) -> int:
    n_params = len(params)
    dof = compute_degrees_of_freedom(n_bins, n_params)
    if dof < 1:
        msg = (
            f"Degrees of freedom must be at least 1: {n_bins} bin(s) with positive "
            f"model count for {n_params} parameter(s)"
        )
        raise InvalidInputError(msg)
    return dof


def _selected_counts(
    f_fit: PeakshapeModel,
    histogram: Histogram | tuple,
    params: ParameterSet,
) -> tuple[FloatArray, FloatArray, FloatArray]:
    """Observed counts, modeled counts and centers of the selected bins."""
    counts, bin_widths, bin_centers = prepare_data(histogram)
    model_counts = get_model_counts(f_fit, params, bin_centers, bin_widths)
    selected = select_bins(model_counts)
    return counts[selected], model_counts[selected], bin_centers[selected]


def _validity_notes(model_counts: FloatArray) -> tuple[str, ...]:
    """Warn when the chi-square approximation is questionable."""
    if model_counts.size == 0 or np.min(model_counts) > CHI2_MIN_EXPECTED_COUNTS:
        return ()
    n_low = int(np.count_nonzero(model_counts <= CHI2_MIN_EXPECTED_COUNTS))
    msg = (
        f"{n_low} bin(s) with <= {CHI2_MIN_EXPECTED_COUNTS:g} expected counts "
        f"(minimum {np.min(model_counts):.2g}) - chi2 test might not be valid"
    )
    logger.warning(msg)
    warnings.warn(msg, NumericalWarning, stacklevel=4)
    return (msg,)


def _gof_result(statistic: float, model_counts: FloatArray, params: ParameterSet) -> GOFResult:
    dof = _degrees_of_freedom(model_counts.size, params)
    pval = float(stats.chi2.sf(statistic, dof))
    notes = _validity_notes(model_counts)
    if not notes:
        logger.debug("p-value = %.2f", pval)
    return GOFResult(
        p_value=pval,
        statistic=float(statistic),
        dof=dof,
        n_bins=model_counts.size,
        min_expected=float(np.min(model_counts)),
        warnings=notes,
    )


# =============================================================================
# Parametric tests
# =============================================================================


def p_value(f_fit: PeakshapeModel, histogram: Histogram | tuple, params: ParameterSet) -> GOFResult:
    """Calculate the p-value of a Pearson chi-square test.

    Baseline method to get the goodness-of-fit.

    Args:
        f_fit: Peakshape ``f_fit(energy, params)``
        histogram: Histogram of data
        params: Best-fit parameters; every entry counts as a free parameter

    Returns
    -------
        GOFResult with p-value, chi-square and degrees of freedom
    """
    counts, model_counts, _ = _selected_counts(f_fit, histogram, params)
    chi2 = np.sum((model_counts - counts) ** 2 / model_counts)
    return _gof_result(chi2, model_counts, params)


def p_value_loglike_ratio(
    f_fit: PeakshapeModel,
    histogram: Histogram | tuple,
    params: ParameterSet,
) -> GOFResult:
    """Alternative p-value via the log-likelihood ratio (Poisson deviance).

    The statistic is ``2 * sum(k * ln(k / m) - k + m)`` over the selected bins,
    where ``k`` is the observed and ``m`` the modeled count. An empty bin
    contributes its limiting value ``2 * m``.

    This is the saturated-model deviance, not the term
    ``m * ln(m / k) + m - k`` with model and data swapped: that form is
    undefined for empty bins and can sum to a negative statistic.

    Returns
    -------
        GOFResult with p-value, deviance and degrees of freedom
    """
    counts, model_counts, _ = _selected_counts(f_fit, histogram, params)
    deviance = 2 * np.sum(xlogy(counts, counts / model_counts) - counts + model_counts)
    # Rounding can push a perfect match a hair below zero
    return _gof_result(max(float(deviance), 0.0), model_counts, params)


# =============================================================================
# Monte-Carlo test
# =============================================================================


def monte_carlo_gof(
    f_fit: PeakshapeModel,
    histogram: Histogram | tuple,
    peak_spec: PeakSampleSpec,
    params: ParameterSet,
    n_samples: int = MC_DEFAULT_SAMPLES,
    *,
    fitter: PeakFitter = fit_single_peak,
    loglike: HistogramLogLikelihood = hist_loglike,
    refit_parameters: Sequence[str] = PEAKSHAPE_PARAMETERS,
    rng: np.random.Generator | int | None = None,
    n_workers: int | None = None,
    cancel_token: CancellationToken | None = None,
    progress_callback: Callable[[int], None] | None = None,
) -> MonteCarloResult:
    """Run the Monte-Carlo goodness-of-fit sweep and keep every sample score.

    * ``n_samples`` synthetic histograms are drawn; each bin count comes from
      a Poisson distribution whose mean is the modeled count of that bin
    * every synthetic histogram is refit (without uncertainty estimation)
    * each refit is scored with the best-fit log-likelihood of its histogram,
      the negated value of ``loglike`` (larger means a worse fit)

    The synthetic counts are all drawn before fitting, so a seeded ``rng``
    gives the same samples whatever the number of workers.

    Args:
        f_fit: Peakshape ``f_fit(energy, params)``
        histogram: Observed histogram
        peak_spec: Seed record forwarded to the fitter
        params: Best-fit parameters of the observed histogram
        n_samples: Number of synthetic histograms
        fitter: Single-peak fitter, ``fitter(h, peak_spec, uncertainty=False)``
        loglike: Log-likelihood evaluator, ``loglike(bound_model, h)``
        refit_parameters: Fitted parameters passed on to ``f_fit``
        rng: Random generator or seed
        n_workers: Threads for the refits (default: automatic)
        cancel_token: Token to abort the sweep
        progress_callback: Called with the number of finished samples

    Returns
    -------
        MonteCarloResult; samples whose refit failed are stored as NaN

    Raises
    ------
        InvalidInputError: If ``n_samples`` is smaller than 1
        ExternalFitFailure: If every refit failed
        MonteCarloCancelledError: If the sweep was cancelled
    """
    if isinstance(n_samples, bool) or int(n_samples) != n_samples or n_samples < 1:
        msg = f"n_samples must be a positive integer, got {n_samples!r}"
        raise InvalidInputError(msg)
    n_samples = int(n_samples)

    h = _as_histogram(histogram)
    model_counts = get_model_counts(f_fit, params, h.centers, h.widths)
    observed = -loglike(fix_parameters(f_fit, params), h)

    generator = np.random.default_rng(rng)
    samples = generator.poisson(np.clip(model_counts, 0.0, None), size=(n_samples, h.n_bins))

    def fit_sample(sample_counts: np.ndarray) -> float:
        h_mc = h.with_counts(sample_counts)
        try:
            fit_par, _report = fitter(h_mc, peak_spec, uncertainty=False)
        except ExternalFitFailure as exc:
            logger.debug("Monte-Carlo refit failed: %s", exc)
            return float("nan")
        fit_par_mc = {name: fit_par[name] for name in refit_parameters}
        return -float(loglike(fix_parameters(f_fit, fit_par_mc), h_mc))

    sample_loglikes = run_independent(
        fit_sample,
        list(samples),
        n_workers=n_workers,
        cancel_token=cancel_token,
        progress_callback=progress_callback,
    )
    result = MonteCarloResult(
        observed_loglike=float(observed),
        sample_loglikes=np.asarray(sample_loglikes, dtype=float),
    )

    if result.n_failed == n_samples:
        msg = f"All {n_samples} Monte-Carlo refits failed"
        raise ExternalFitFailure(msg)
    if result.n_failed:
        logger.warning(
            "%d of %d Monte-Carlo refits failed and were excluded from the p-value",
            result.n_failed,
            n_samples,
        )
    logger.debug("Monte-Carlo p-value = %.2f", result.p_value)
    return result


def p_value_mc(
    f_fit: PeakshapeModel,
    histogram: Histogram | tuple,
    peak_spec: PeakSampleSpec,
    params: ParameterSet,
    n_samples: int = MC_DEFAULT_SAMPLES,
    **kwargs,
) -> float:
    """Alternative p-value via Monte-Carlo sampling.

    Computationally far more expensive than ``p_value`` and
    ``p_value_loglike_ratio``: every sample is a full nonlinear fit. The
    p-value is the fraction of successfully refit samples whose best-fit
    log-likelihood (the negated ``loglike`` score) is lower than or equal to
    that of the observed histogram.
    Keyword arguments are forwarded to ``monte_carlo_gof``.

    Returns
    -------
        Empirical p-value in [0, 1]
    """
    return monte_carlo_gof(f_fit, histogram, peak_spec, params, n_samples, **kwargs).p_value


# =============================================================================
# Residuals
# =============================================================================


def get_residuals(
    f_fit: PeakshapeModel,
    histogram: Histogram | tuple,
    params: ParameterSet,
) -> ResidualResult:
    """Calculate bin-wise residuals, normalized residuals and Poisson p-values.

    For each bin with positive model count ``m`` and observed count ``k``:

    * residual ``r = m - k``
    * normalized residual ``r / sqrt(m)``
    * p-value ``P(X <= m - |r|) + P(X > m + |r|)`` with ``X ~ Poisson(m)``,
      roughly the probability of a residual at least as large as observed

    Returns
    -------
        ResidualResult aligned on the selected bins
    """
    counts, model_counts, bin_centers = _selected_counts(f_fit, histogram, params)

    residuals = model_counts - counts
    residuals_norm = residuals / np.sqrt(model_counts)

    deviation = np.abs(residuals)
    p_value_binwise = stats.poisson.cdf(model_counts - deviation, model_counts) + stats.poisson.sf(
        model_counts + deviation, model_counts
    )
    return ResidualResult(
        residuals=residuals,
        normalized_residuals=residuals_norm,
        p_values=np.clip(p_value_binwise, 0.0, 1.0),
        bin_centers=bin_centers,
    )
