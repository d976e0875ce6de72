"""Domain models representing core ecalfit entities."""

from ecalfit.core.domain.config import (
    EnergyCalConfig,
    PeakWindow,
    ecal_peak_windows,
    energy_cal_config,
)
from ecalfit.core.domain.histogram import Histogram
from ecalfit.core.domain.peaks import PeakSampleSpec

__all__ = [
    "EnergyCalConfig",
    "Histogram",
    "PeakSampleSpec",
    "PeakWindow",
    "ecal_peak_windows",
    "energy_cal_config",
]
