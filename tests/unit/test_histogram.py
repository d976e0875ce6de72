"""Tests for the Histogram value object."""

import numpy as np
import pytest

from ecalfit.core.domain.config import PeakWindow
from ecalfit.core.domain.histogram import Histogram
from ecalfit.core.shared.exceptions import InvalidInputError


class TestHistogramCreation:
    """Tests for construction and validation."""

    def test_basic(self):
        h = Histogram([0, 1, 3], [2, 5])
        assert h.n_bins == 2
        assert h.total == 7.0
        np.testing.assert_array_equal(h.centers, [0.5, 2.0])
        np.testing.assert_array_equal(h.widths, [1.0, 2.0])

    def test_arrays_read_only(self):
        """Stored arrays cannot be modified in place."""
        h = Histogram([0, 1, 2], [2, 5])
        with pytest.raises(ValueError):
            h.counts[0] = 10
        with pytest.raises(ValueError):
            h.edges[0] = -1

    def test_input_copied(self):
        """Mutating the input array does not affect the histogram."""
        counts = np.array([1.0, 2.0])
        h = Histogram([0, 1, 2], counts)
        counts[0] = 99
        assert h.counts[0] == 1.0

    @pytest.mark.parametrize(
        ("edges", "counts"),
        [
            ([0], []),
            ([0, 1, 1], [1, 2]),
            ([0, 2, 1], [1, 2]),
            ([0, np.nan, 2], [1, 2]),
            ([0, 1, 2], [1]),
            ([0, 1, 2], [1, -1]),
            ([0, 1, 2], [1, np.inf]),
            ([[0, 1], [2, 3]], [1]),
            (["a", "b"], [1]),
        ],
    )
    def test_invalid(self, edges, counts):
        with pytest.raises(InvalidInputError):
            Histogram(edges, counts)

    def test_from_samples(self):
        h = Histogram.from_samples([0.1, 0.2, 1.5, 2.7, 5.0], [0, 1, 2, 3])
        np.testing.assert_array_equal(h.counts, [2, 1, 1])

    def test_repr(self):
        assert repr(Histogram([0, 1, 2], [2, 5])) == "Histogram(n_bins=2, range=(0, 2), total=7)"


class TestHistogramDerived:
    """Tests for derived histograms."""

    def test_with_counts_shares_edges(self):
        h = Histogram([0, 1, 2], [2, 5])
        other = h.with_counts([4, 4])
        assert other.edges is h.edges
        np.testing.assert_array_equal(h.counts, [2, 5])
        np.testing.assert_array_equal(other.counts, [4, 4])

    def test_with_counts_validates(self):
        with pytest.raises(InvalidInputError):
            Histogram([0, 1, 2], [2, 5]).with_counts([1, 2, 3])

    def test_restrict_keeps_complete_bins(self):
        """Only bins lying entirely inside the window are kept."""
        h = Histogram(np.arange(11.0), np.arange(10))
        sub = h.restrict(PeakWindow(2.5, 7.0))
        np.testing.assert_array_equal(sub.edges, [3, 4, 5, 6, 7])
        np.testing.assert_array_equal(sub.counts, [3, 4, 5, 6])

    def test_restrict_outside(self):
        h = Histogram(np.arange(11.0), np.arange(10))
        with pytest.raises(InvalidInputError, match="No complete bin"):
            h.restrict(PeakWindow(20.0, 30.0))
