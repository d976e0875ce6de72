"""Goodness-of-fit diagnostics for peak fits."""

from ecalfit.core.diagnostics.gof import (
    get_model_counts,
    get_residuals,
    monte_carlo_gof,
    p_value,
    p_value_loglike_ratio,
    p_value_mc,
    prepare_data,
    select_bins,
)

__all__ = [
    "get_model_counts",
    "get_residuals",
    "monte_carlo_gof",
    "p_value",
    "p_value_loglike_ratio",
    "p_value_mc",
    "prepare_data",
    "select_bins",
]
