"""Tests for the reference single-peak fitter."""

import numpy as np
import pytest

from ecalfit.core.constants import PEAKSHAPE_PARAMETERS
from ecalfit.core.domain.peaks import PeakSampleSpec
from ecalfit.core.fitting.single_peak import fit_single_peak, initial_guess
from ecalfit.core.shared.exceptions import ExternalFitFailure


class TestInitialGuess:
    """Tests for start values and bounds."""

    def test_start_values_inside_bounds(self, gamma_histogram):
        spec = PeakSampleSpec.from_histogram(gamma_histogram)
        x0, bounds = initial_guess(gamma_histogram, spec)
        assert x0.size == len(bounds) == len(PEAKSHAPE_PARAMETERS)
        for value, (low, high) in zip(x0, bounds, strict=True):
            assert low <= value <= high

    def test_position_bounded_by_histogram(self, gamma_histogram):
        spec = PeakSampleSpec.from_histogram(gamma_histogram)
        _, bounds = initial_guess(gamma_histogram, spec)
        mu_low, mu_high = bounds[0]
        assert mu_low >= gamma_histogram.edges[0]
        assert mu_high <= gamma_histogram.edges[-1]


class TestFitSinglePeak:
    """Tests for fit_single_peak."""

    @pytest.fixture
    def fitted(self, gamma_histogram):
        spec = PeakSampleSpec.from_histogram(gamma_histogram)
        return fit_single_peak(gamma_histogram, spec)

    def test_recovers_parameters(self, fitted, gamma_params):
        values, report = fitted
        assert set(values) == set(PEAKSHAPE_PARAMETERS)
        assert values["mu"] == pytest.approx(gamma_params["mu"], abs=0.1)
        assert values["sigma"] == pytest.approx(gamma_params["sigma"], rel=0.1)
        assert values["n"] == pytest.approx(gamma_params["n"], rel=0.05)
        assert values["background"] == pytest.approx(gamma_params["background"], rel=0.3)
        assert report.n_bins == 100
        assert report.n_params == 7

    def test_uncertainties(self, fitted):
        values, report = fitted
        assert report.covariance.shape == (7, 7)
        for name in ("mu", "sigma", "n"):
            assert np.isfinite(report.stderr[name])
            assert 0 < report.stderr[name] < abs(values[name])
        assert report.fwhm_err is not None

    def test_report(self, fitted):
        values, report = fitted
        assert report.loglike == -report.negative_loglike
        assert report.fwhm == pytest.approx(values["sigma"] * 2 * np.sqrt(2 * np.log(2)))
        data = report.to_dict()
        assert data["values"] == values
        assert "stderr" in data
        assert "covariance" not in data

    def test_without_uncertainty(self, gamma_histogram):
        spec = PeakSampleSpec.from_histogram(gamma_histogram)
        values, report = fit_single_peak(gamma_histogram, spec, uncertainty=False)
        assert report.stderr == {}
        assert report.covariance is None
        assert report.fwhm_err is None
        assert values["n"] > 0

    def test_iteration_limit(self, gamma_histogram):
        """Running out of iterations is reported as a fit failure."""
        spec = PeakSampleSpec.from_histogram(gamma_histogram)
        with pytest.raises(ExternalFitFailure, match="failed"):
            fit_single_peak(gamma_histogram, spec, max_iterations=1)
