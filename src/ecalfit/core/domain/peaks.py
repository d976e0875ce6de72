"""Seed characteristics of a single gamma peak."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

import numpy as np

from ecalfit.core.constants import FWHM_TO_SIGMA
from ecalfit.core.shared.exceptions import InvalidInputError

if TYPE_CHECKING:
    from ecalfit.core.domain.histogram import Histogram
    from ecalfit.core.shared.typing import FloatArray


@dataclass(frozen=True, slots=True)
class PeakSampleSpec:
    """Prior/seed peak characteristics handed to the single-peak fitter.

    Attributes
    ----------
        peak_pos: Estimated peak position (energy units)
        peak_fwhm: Estimated full width at half maximum
        peak_sigma: Estimated Gaussian width
        peak_counts: Estimated number of counts in the peak
        mean_background: Estimated flat background density (counts per energy unit)
    """

    peak_pos: float
    peak_fwhm: float
    peak_sigma: float
    peak_counts: float
    mean_background: float

    @classmethod
    def from_histogram(cls, histogram: Histogram, n_edge_bins: int | None = None) -> PeakSampleSpec:
        """Estimate the seed record from a histogram containing one peak.

        The background density is the mean of the outermost bins on both sides,
        the position is the center of the fullest bin, and the FWHM is taken
        from linearly interpolated half-maximum crossings above background.

        Args:
            histogram: Histogram cut around a single peak
            n_edge_bins: Bins per side used for the background estimate
                (default: 10% of the bins, at least one)

        Returns
        -------
            Estimated PeakSampleSpec
        """
        counts = histogram.counts
        widths = histogram.widths
        centers = histogram.centers
        n_bins = histogram.n_bins
        if n_bins < 3:
            msg = f"Need at least 3 bins to estimate peak characteristics, got {n_bins}"
            raise InvalidInputError(msg)

        if n_edge_bins is None:
            n_edge_bins = max(1, n_bins // 10)
        n_edge_bins = min(n_edge_bins, n_bins // 2)
        edge_idx = np.r_[0:n_edge_bins, n_bins - n_edge_bins : n_bins]
        mean_background = float(np.mean(counts[edge_idx] / widths[edge_idx]))

        density = counts / widths
        i_max = int(np.argmax(density))
        peak_pos = float(centers[i_max])
        half_level = mean_background + (density[i_max] - mean_background) / 2
        left = _half_max_crossing(centers, density, i_max, half_level, step=-1)
        right = _half_max_crossing(centers, density, i_max, half_level, step=1)
        peak_fwhm = max(float(right - left), float(widths[i_max]))

        peak_counts = float(histogram.total - mean_background * np.sum(widths))
        peak_counts = max(peak_counts, 1.0)

        return cls(
            peak_pos=peak_pos,
            peak_fwhm=peak_fwhm,
            peak_sigma=peak_fwhm * FWHM_TO_SIGMA,
            peak_counts=peak_counts,
            mean_background=mean_background,
        )

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)


def _half_max_crossing(
    centers: FloatArray,
    density: FloatArray,
    start: int,
    level: float,
    step: int,
) -> float:
    """Walk away from ``start`` until density drops below ``level``; interpolate."""
    i = start
    while 0 <= i + step < density.size:
        nxt = i + step
        if density[nxt] < level:
            frac = (density[i] - level) / (density[i] - density[nxt])
            return float(centers[i] + frac * (centers[nxt] - centers[i]))
        i = nxt
    return float(centers[i])
