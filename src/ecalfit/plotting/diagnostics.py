"""Diagnostic plots for single-peak fits.

This module provides the figures that accompany the goodness-of-fit tests:
- Fit overlay with normalized residuals and bin-wise significances
- Distribution of Monte-Carlo sample log-likelihoods
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.backends.backend_pdf import PdfPages

from ecalfit.core.diagnostics.gof import get_model_counts, get_residuals

if TYPE_CHECKING:
    from pathlib import Path

    from matplotlib.figure import Figure

    from ecalfit.core.domain.histogram import Histogram
    from ecalfit.core.results.statistics import MonteCarloResult
    from ecalfit.core.shared.typing import ParameterSet, PeakshapeModel

_SIGNIFICANCE_LEVEL = 0.01


def plot_fit_residuals(
    f_fit: PeakshapeModel,
    histogram: Histogram,
    params: ParameterSet,
    title: str | None = None,
) -> Figure:
    """Plot data with the fitted model and the normalized residuals below.

    Bins whose Poisson p-value falls below 1% are highlighted in the
    residual panel.

    Args:
        f_fit: Peakshape ``f_fit(energy, params)``
        histogram: Observed histogram
        params: Best-fit parameters
        title: Optional figure title

    Returns:
        Matplotlib Figure object
    """
    residuals = get_residuals(f_fit, histogram, params)
    model_counts = get_model_counts(f_fit, params, histogram.centers, histogram.widths)

    fig, (ax_fit, ax_res) = plt.subplots(
        2,
        1,
        sharex=True,
        figsize=(8, 6),
        gridspec_kw={"height_ratios": [3, 1]},
    )

    ax_fit.stairs(histogram.counts, histogram.edges, color="black", linewidth=1, label="Data")
    ax_fit.stairs(model_counts, histogram.edges, color="tab:red", linewidth=1.5, label="Model")
    ax_fit.set_ylabel("Counts per bin")
    ax_fit.legend(fontsize=9, loc="upper right")
    ax_fit.grid(True, alpha=0.3)

    significant = residuals.p_values < _SIGNIFICANCE_LEVEL
    ax_res.axhline(0, color="black", linewidth=0.5)
    for level in (-3, 3):
        ax_res.axhline(level, color="gray", linestyle="--", linewidth=0.5, alpha=0.5)
    ax_res.plot(
        residuals.bin_centers[~significant],
        residuals.normalized_residuals[~significant],
        ".",
        color="tab:blue",
        markersize=3,
    )
    ax_res.plot(
        residuals.bin_centers[significant],
        residuals.normalized_residuals[significant],
        ".",
        color="tab:red",
        markersize=4,
        label=f"p < {_SIGNIFICANCE_LEVEL:g}",
    )
    ax_res.set_xlabel("Energy")
    ax_res.set_ylabel("(model - data) / sqrt(model)", fontsize=8)
    ax_res.grid(True, alpha=0.3)
    if np.any(significant):
        ax_res.legend(fontsize=8, loc="upper right")

    if title:
        fig.suptitle(title, fontsize=12, fontweight="bold")
    plt.tight_layout()
    return fig


def plot_mc_distribution(mc_result: MonteCarloResult, bins: int = 40) -> Figure:
    """Histogram the Monte-Carlo sample log-likelihoods against the observation.

    Args:
        mc_result: Result of a Monte-Carlo goodness-of-fit sweep
        bins: Number of histogram bins

    Returns:
        Matplotlib Figure object
    """
    samples = mc_result.sample_loglikes[~np.isnan(mc_result.sample_loglikes)]

    fig, ax = plt.subplots(figsize=(7, 4))
    ax.hist(samples, bins=bins, color="tab:blue", alpha=0.7, label="Samples")
    ax.axvline(
        mc_result.observed_loglike,
        color="tab:red",
        linewidth=1.5,
        label=f"Observed (p = {mc_result.p_value:.3f})",
    )
    ax.set_xlabel("Best-fit log-likelihood (negated, larger is worse)")
    ax.set_ylabel("Samples")
    ax.legend(fontsize=9)
    ax.grid(True, alpha=0.3)
    if mc_result.n_failed:
        ax.set_title(f"{mc_result.n_failed} failed refit(s) excluded", fontsize=9, color="gray")
    plt.tight_layout()
    return fig


def save_diagnostic_plots(
    output_path: Path,
    f_fit: PeakshapeModel,
    histogram: Histogram,
    params: ParameterSet,
    mc_result: MonteCarloResult | None = None,
    title: str | None = None,
) -> None:
    """Generate and save the diagnostic plots to a PDF file.

    Args:
        output_path: Path to save PDF
        f_fit: Peakshape ``f_fit(energy, params)``
        histogram: Observed histogram
        params: Best-fit parameters
        mc_result: Optional Monte-Carlo result for a second page
        title: Optional title of the fit page
    """
    with PdfPages(output_path) as pdf:
        fig_fit = plot_fit_residuals(f_fit, histogram, params, title=title)
        pdf.savefig(fig_fit, bbox_inches="tight")
        plt.close(fig_fit)

        if mc_result is not None:
            fig_mc = plot_mc_distribution(mc_result)
            pdf.savefig(fig_mc, bbox_inches="tight")
            plt.close(fig_mc)
