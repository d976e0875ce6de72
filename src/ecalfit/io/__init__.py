"""File input/output for configurations and histograms."""

from ecalfit.io.config import (
    generate_default_config,
    load_detector_config,
    load_energy_config,
    save_energy_config,
)
from ecalfit.io.histogram import load_histogram, save_histogram

__all__ = [
    "generate_default_config",
    "load_detector_config",
    "load_energy_config",
    "load_histogram",
    "save_energy_config",
    "save_histogram",
]
