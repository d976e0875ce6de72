"""Shared typing aliases and collaborator protocols used across ecalfit."""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from ecalfit.core.domain.histogram import Histogram
    from ecalfit.core.domain.peaks import PeakSampleSpec

FloatArray = npt.NDArray[np.float64]

ParameterSet = Mapping[str, float]
"""Named best-fit parameters; only the peakshape and the fitter read the names."""

PeakshapeModel = Callable[[Any, ParameterSet], Any]
"""``model(energy, params) -> density``; energy may be a scalar or an array."""

BoundModel = Callable[[Any], Any]
"""Peakshape with its parameters fixed: ``model(energy) -> density``."""


class PeakFitter(Protocol):
    """Fits a single peak in a histogram and returns the best-fit parameters."""

    def __call__(
        self,
        histogram: "Histogram",
        peak_spec: "PeakSampleSpec",
        *,
        uncertainty: bool = ...,
    ) -> tuple[Mapping[str, float], Any]: ...


class HistogramLogLikelihood(Protocol):
    """Scores a bound model against a histogram."""

    def __call__(self, model: BoundModel, histogram: "Histogram") -> float: ...
