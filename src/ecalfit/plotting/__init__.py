"""Plotting module for ecalfit diagnostic figures."""

from ecalfit.plotting.diagnostics import (
    plot_fit_residuals,
    plot_mc_distribution,
    save_diagnostic_plots,
)

__all__ = ["plot_fit_residuals", "plot_mc_distribution", "save_diagnostic_plots"]
