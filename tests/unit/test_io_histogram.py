"""Tests for histogram file loading and saving."""

import numpy as np
import pytest

from ecalfit.core.domain.histogram import Histogram
from ecalfit.core.shared.exceptions import DataIOError
from ecalfit.io.histogram import load_histogram, save_histogram


class TestLoadHistogram:
    """Tests for load_histogram."""

    def test_npz(self, histogram_file, gamma_histogram):
        h = load_histogram(histogram_file)
        np.testing.assert_array_equal(h.edges, gamma_histogram.edges)
        np.testing.assert_array_equal(h.counts, gamma_histogram.counts)

    def test_text_table(self, tmp_path):
        path = tmp_path / "hist.txt"
        path.write_text("# left right counts\n0 1 4\n1 2 5\n2 4 6\n")
        h = load_histogram(path)
        np.testing.assert_array_equal(h.edges, [0, 1, 2, 4])
        np.testing.assert_array_equal(h.counts, [4, 5, 6])

    def test_csv_table(self, tmp_path):
        path = tmp_path / "hist.csv"
        path.write_text("0,1,4\n1,2,5\n")
        assert load_histogram(path).n_bins == 2

    def test_single_row(self, tmp_path):
        path = tmp_path / "hist.txt"
        path.write_text("0 1 4\n")
        assert load_histogram(path).n_bins == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_histogram(tmp_path / "missing.npz")

    def test_missing_array(self, tmp_path):
        path = tmp_path / "bad.npz"
        np.savez(path, edges=np.arange(3.0))
        with pytest.raises(DataIOError, match="counts"):
            load_histogram(path)

    def test_gap_between_bins(self, tmp_path):
        path = tmp_path / "hist.txt"
        path.write_text("0 1 4\n2 3 5\n")
        with pytest.raises(DataIOError, match="contiguous"):
            load_histogram(path)

    def test_wrong_columns(self, tmp_path):
        path = tmp_path / "hist.txt"
        path.write_text("0 1\n1 2\n")
        with pytest.raises(DataIOError, match="3 columns"):
            load_histogram(path)

    def test_negative_counts(self, tmp_path):
        path = tmp_path / "hist.txt"
        path.write_text("0 1 4\n1 2 -5\n")
        with pytest.raises(DataIOError, match="Invalid histogram"):
            load_histogram(path)


class TestSaveHistogram:
    """Tests for save_histogram."""

    def test_roundtrip(self, tmp_path):
        h = Histogram([0.0, 0.5, 1.0], [3, 7])
        path = tmp_path / "saved.npz"
        save_histogram(h, path)
        loaded = load_histogram(path)
        np.testing.assert_array_equal(loaded.counts, h.counts)

    def test_rejects_other_suffix(self, tmp_path):
        with pytest.raises(DataIOError, match=".npz"):
            save_histogram(Histogram([0, 1], [1]), tmp_path / "saved.txt")
