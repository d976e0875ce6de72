"""Binned Poisson likelihood of a histogram under a peakshape model."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy.special import gammaln, xlogy

from ecalfit.core.fitting.computation import expected_counts

if TYPE_CHECKING:
    from ecalfit.core.domain.histogram import Histogram
    from ecalfit.core.shared.typing import BoundModel, FloatArray


def poisson_loglike(counts: FloatArray, expected: FloatArray) -> float:
    """Sum of Poisson log-probabilities of ``counts`` given ``expected``.

    A bin with zero expectation contributes nothing when it is empty and makes
    the total ``-inf`` otherwise.
    """
    with np.errstate(divide="ignore"):
        terms = xlogy(counts, expected) - expected - gammaln(counts + 1)
    return float(np.sum(terms))


def hist_loglike(model: BoundModel, histogram: Histogram) -> float:
    """Log-likelihood of a histogram given a model with fixed parameters.

    The expected count of each bin is approximated by the density at the bin
    center times the bin width.

    Args:
        model: Peakshape density with fixed parameters, ``model(energy)``
        histogram: Observed histogram

    Returns
    -------
        Binned Poisson log-likelihood
    """
    expected = expected_counts(model, histogram.centers, histogram.widths)
    return poisson_loglike(histogram.counts, expected)
