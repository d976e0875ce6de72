"""Tests for the gamma peakshape components."""

import numpy as np
import pytest
from scipy import integrate, stats

from ecalfit.core.lineshapes.gamma import ex_gauss_pdf, gamma_peakshape, gauss_pdf, step_gauss


class TestComponents:
    """Tests for the normalized building blocks."""

    def test_gauss_matches_scipy(self):
        x = np.linspace(-5, 5, 41)
        np.testing.assert_allclose(gauss_pdf(x, 0.3, 1.7), stats.norm.pdf(x, 0.3, 1.7))

    @pytest.mark.parametrize(("sigma", "theta"), [(1.0, 0.5), (1.2, 2.6), (0.5, 20.0), (2.0, 0.01)])
    def test_ex_gauss_matches_scipy(self, sigma, theta):
        """The tail extends to high x, as in scipy's exponnorm."""
        x = np.linspace(-10, 40, 201)
        expected = stats.exponnorm.pdf(x, theta / sigma, loc=1.0, scale=sigma)
        np.testing.assert_allclose(
            ex_gauss_pdf(x, 1.0, sigma, theta), expected, rtol=1e-6, atol=1e-300
        )

    def test_ex_gauss_no_overflow(self):
        """Small decay lengths stay finite far from the center."""
        values = ex_gauss_pdf(np.linspace(-50, 50, 101), 0.0, 1.0, 1e-4)
        assert np.all(np.isfinite(values))
        assert np.all(values >= 0)

    def test_step_limits(self):
        assert step_gauss(-100.0, 0.0, 1.0) == pytest.approx(1.0)
        assert step_gauss(100.0, 0.0, 1.0) == pytest.approx(0.0)
        assert step_gauss(0.0, 0.0, 1.0) == pytest.approx(0.5)


class TestGammaPeakshape:
    """Tests for the full peakshape."""

    def test_scalar_returns_float(self, gamma_params):
        assert isinstance(gamma_peakshape(2614.5, gamma_params), float)

    def test_array_shape(self, gamma_params):
        x = np.linspace(2600, 2630, 7)
        assert gamma_peakshape(x, gamma_params).shape == (7,)

    def test_peak_integral(self, gamma_params):
        """Without step and background the density integrates to n."""
        params = {**gamma_params, "step_amplitude": 0.0, "background": 0.0}
        total, _ = integrate.quad(
            lambda x: gamma_peakshape(x, params), 2500, 2700, points=[2614.5], limit=200
        )
        assert total == pytest.approx(params["n"], rel=1e-4)

    def test_tail_on_low_energy_side(self, gamma_params):
        """The skew tail raises the low-energy flank only."""
        params = {**gamma_params, "step_amplitude": 0.0, "background": 0.0}
        no_tail = {**params, "skew_fraction": 0.0}
        low, high = 2614.5 - 6.0, 2614.5 + 6.0
        assert gamma_peakshape(low, params) > gamma_peakshape(low, no_tail)
        assert gamma_peakshape(high, params) < gamma_peakshape(high, no_tail) * 1.01

    def test_far_from_peak(self, gamma_params):
        """Far below the peak: step plus background; far above: background."""
        assert gamma_peakshape(2500.0, gamma_params) == pytest.approx(
            gamma_params["step_amplitude"] + gamma_params["background"], rel=1e-3
        )
        assert gamma_peakshape(2700.0, gamma_params) == pytest.approx(
            gamma_params["background"], rel=1e-6
        )
