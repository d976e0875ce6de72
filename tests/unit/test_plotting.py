"""Tests for diagnostic plots."""

import matplotlib.pyplot as plt
import numpy as np

from ecalfit.core.lineshapes.gamma import gamma_peakshape
from ecalfit.core.results.statistics import MonteCarloResult
from ecalfit.plotting.diagnostics import (
    plot_fit_residuals,
    plot_mc_distribution,
    save_diagnostic_plots,
)


class TestDiagnosticPlots:
    """Tests for figure creation."""

    def test_fit_residuals(self, gamma_histogram, gamma_params):
        fig = plot_fit_residuals(gamma_peakshape, gamma_histogram, gamma_params, title="Tl208FEP")
        assert len(fig.axes) == 2
        plt.close(fig)

    def test_mc_distribution_with_failures(self):
        result = MonteCarloResult(-120.0, np.array([-130.0, -110.0, np.nan, -118.0]))
        fig = plot_mc_distribution(result, bins=5)
        assert len(fig.axes) == 1
        plt.close(fig)

    def test_save_pdf(self, tmp_path, gamma_histogram, gamma_params):
        path = tmp_path / "diagnostics.pdf"
        result = MonteCarloResult(-120.0, np.array([-130.0, -110.0]))
        save_diagnostic_plots(path, gamma_peakshape, gamma_histogram, gamma_params, result)
        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF")
