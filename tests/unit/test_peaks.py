"""Tests for seed estimation of a single peak."""

import numpy as np
import pytest

from ecalfit.core.domain.histogram import Histogram
from ecalfit.core.domain.peaks import PeakSampleSpec
from ecalfit.core.shared.exceptions import InvalidInputError


class TestPeakSampleSpec:
    """Tests for PeakSampleSpec.from_histogram."""

    def test_estimates_from_gamma_peak(self, exact_histogram, gamma_params):
        """Estimates should be close to the generating parameters."""
        spec = PeakSampleSpec.from_histogram(exact_histogram)
        assert spec.peak_pos == pytest.approx(gamma_params["mu"], abs=0.5)
        assert spec.peak_sigma == pytest.approx(gamma_params["sigma"], rel=0.3)
        assert spec.peak_fwhm == pytest.approx(spec.peak_sigma * 2 * np.sqrt(2 * np.log(2)))
        assert spec.mean_background > 0
        assert spec.peak_counts == pytest.approx(gamma_params["n"], rel=0.2)

    def test_flat_histogram(self):
        """A flat histogram has no net peak counts."""
        spec = PeakSampleSpec.from_histogram(Histogram(np.arange(11.0), np.full(10, 4)))
        assert spec.mean_background == pytest.approx(4.0)
        assert spec.peak_counts == 1.0
        assert spec.peak_fwhm >= 1.0

    def test_too_few_bins(self):
        with pytest.raises(InvalidInputError, match="at least 3 bins"):
            PeakSampleSpec.from_histogram(Histogram([0, 1, 2], [1, 2]))

    def test_to_dict(self):
        spec = PeakSampleSpec(1.0, 2.0, 0.85, 100.0, 3.0)
        assert spec.to_dict() == {
            "peak_pos": 1.0,
            "peak_fwhm": 2.0,
            "peak_sigma": 0.85,
            "peak_counts": 100.0,
            "mean_background": 3.0,
        }
