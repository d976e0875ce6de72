"""Pytest fixtures for ecalfit tests."""

import matplotlib
import numpy as np
import pytest

from ecalfit.core.diagnostics.gof import get_model_counts
from ecalfit.core.domain.histogram import Histogram
from ecalfit.core.lineshapes.gamma import gamma_peakshape

# Headless plotting for every test
matplotlib.use("Agg")


def _flat(energy, params):
    return np.full_like(np.asarray(energy, dtype=float), params["level"])


@pytest.fixture
def flat_model():
    """Constant density model, ``params = {"level": ...}``."""
    return _flat


@pytest.fixture
def gamma_params():
    """Realistic parameters of the 2614.5 keV Tl-208 line."""
    return {
        "mu": 2614.5,
        "sigma": 1.2,
        "n": 5000.0,
        "step_amplitude": 2.0,
        "skew_fraction": 0.05,
        "skew_width": 0.001,
        "background": 20.0,
    }


@pytest.fixture
def gamma_edges():
    """0.5 keV binning around the 2614.5 keV line."""
    return np.arange(2590.0, 2640.0 + 0.25, 0.5)


@pytest.fixture
def gamma_expected(gamma_params, gamma_edges):
    """Expected counts per bin of the gamma peakshape."""
    h = Histogram(gamma_edges, np.zeros(gamma_edges.size - 1))
    return get_model_counts(gamma_peakshape, gamma_params, h.centers, h.widths)


@pytest.fixture
def gamma_histogram(gamma_edges, gamma_expected):
    """Poisson-fluctuated histogram of the gamma peakshape."""
    rng = np.random.default_rng(42)
    return Histogram(gamma_edges, rng.poisson(gamma_expected))


@pytest.fixture
def exact_histogram(gamma_edges, gamma_expected):
    """Histogram whose counts equal the modeled counts."""
    return Histogram(gamma_edges, gamma_expected)


@pytest.fixture
def alternating_histogram():
    """Edges 0..5 with counts alternating between 10 and 0."""
    return Histogram([0, 1, 2, 3, 4, 5], [10, 0, 10, 0, 10])


@pytest.fixture
def sample_config_file(tmp_path):
    """Energy configuration with a default table and one detector override."""
    config_content = """
[energy.default]
th228_names = ["Tl208DEP", "Tl208FEP"]
th228_lines = [1592.53, 2614.51]
left_window_sizes = [25.0, 35.0]
right_window_sizes = [25.0, 35.0]
fit_func = "gamma_def"

[energy.V05266A]
left_window_sizes = [20.0, 30.0]
fit_func = "gamma_tails"
"""
    config_file = tmp_path / "ecalfit.toml"
    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def histogram_file(tmp_path, gamma_histogram):
    """The fluctuated gamma histogram saved as an .npz archive."""
    path = tmp_path / "th228.npz"
    np.savez(path, edges=gamma_histogram.edges, counts=gamma_histogram.counts)
    return path
