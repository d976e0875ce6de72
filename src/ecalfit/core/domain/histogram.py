"""Binned energy histogram value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from ecalfit.core.shared.exceptions import InvalidInputError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ecalfit.core.domain.config import PeakWindow
    from ecalfit.core.shared.typing import FloatArray


def _readonly(values: Iterable[float] | np.ndarray, name: str) -> FloatArray:
    try:
        array = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        msg = f"Histogram {name} must be numeric: {exc}"
        raise InvalidInputError(msg) from exc
    if array.ndim != 1:
        msg = f"Histogram {name} must be one-dimensional, got shape {array.shape}"
        raise InvalidInputError(msg)
    array.flags.writeable = False
    return array


def validate_edges(edges: FloatArray) -> None:
    """Check that bin edges describe at least one bin and strictly increase."""
    if edges.size < 2:
        msg = f"Histogram needs at least one bin (two edges), got {edges.size} edge(s)"
        raise InvalidInputError(msg)
    if not np.all(np.isfinite(edges)):
        msg = "Histogram edges must be finite"
        raise InvalidInputError(msg)
    if np.any(np.diff(edges) <= 0):
        msg = "Histogram edges must be strictly increasing"
        raise InvalidInputError(msg)


def validate_counts(counts: FloatArray, n_bins: int) -> None:
    """Check that counts match the binning and are non-negative."""
    if counts.size != n_bins:
        msg = f"Expected {n_bins} bin counts for {n_bins + 1} edges, got {counts.size}"
        raise InvalidInputError(msg)
    if not np.all(np.isfinite(counts)):
        msg = "Histogram counts must be finite"
        raise InvalidInputError(msg)
    if np.any(counts < 0):
        msg = "Histogram counts must be non-negative"
        raise InvalidInputError(msg)


@dataclass(frozen=True, slots=True, eq=False)
class Histogram:
    """One-dimensional histogram of observed counts.

    Both arrays are stored read-only. Bin centers and widths are derived on
    access. Histograms built with :meth:`with_counts` share the edge array of
    their parent, so creating many of them (e.g. Monte-Carlo samples) is cheap
    and never touches the original.

    Attributes
    ----------
        edges: Bin edges, length N+1, strictly increasing
        counts: Observed counts per bin, length N, non-negative
    """

    edges: FloatArray
    counts: FloatArray

    def __post_init__(self) -> None:
        """Validate and freeze the arrays."""
        edges = self.edges
        shared = (
            isinstance(edges, np.ndarray)
            and edges.dtype == np.float64
            and edges.ndim == 1
            and not edges.flags.writeable
        )
        if not shared:
            edges = _readonly(edges, "edges")
        validate_edges(edges)
        counts = _readonly(self.counts, "counts")
        validate_counts(counts, edges.size - 1)
        object.__setattr__(self, "edges", edges)
        object.__setattr__(self, "counts", counts)

    @classmethod
    def from_samples(cls, values: Iterable[float], edges: Iterable[float]) -> Histogram:
        """Bin raw energies into a histogram with the given edges."""
        edge_array = _readonly(edges, "edges")
        validate_edges(edge_array)
        counts, _ = np.histogram(np.asarray(values, dtype=float), bins=edge_array)
        return cls(edge_array, counts)

    @property
    def n_bins(self) -> int:
        """Number of bins."""
        return self.counts.size

    @property
    def centers(self) -> FloatArray:
        """Bin centers, ``(left + right) / 2``."""
        return (self.edges[:-1] + self.edges[1:]) / 2

    @property
    def widths(self) -> FloatArray:
        """Bin widths, ``right - left``."""
        return self.edges[1:] - self.edges[:-1]

    @property
    def total(self) -> float:
        """Sum of all bin counts."""
        return float(self.counts.sum())

    def with_counts(self, counts: Iterable[float] | np.ndarray) -> Histogram:
        """Return a histogram with the same (shared) edges and new counts."""
        return Histogram(self.edges, counts)

    def restrict(self, window: PeakWindow) -> Histogram:
        """Return the sub-histogram of bins lying entirely inside ``window``."""
        inside = (self.edges[:-1] >= window.left) & (self.edges[1:] <= window.right)
        indices = np.flatnonzero(inside)
        if indices.size == 0:
            msg = f"No complete bin inside window [{window.left}, {window.right}]"
            raise InvalidInputError(msg)
        first, last = indices[0], indices[-1]
        return Histogram(self.edges[first : last + 2].copy(), self.counts[first : last + 1])

    def __repr__(self) -> str:
        return (
            f"Histogram(n_bins={self.n_bins}, range=({self.edges[0]:g}, {self.edges[-1]:g}), "
            f"total={self.total:g})"
        )
