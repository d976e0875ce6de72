"""Histogram file loading and saving.

Supported formats:
- ``.npz`` archives with ``edges`` and ``counts`` arrays
- text tables (whitespace or comma separated) with ``left right counts``
  columns, one row per bin; lines starting with ``#`` are ignored
"""

from pathlib import Path

import numpy as np

from ecalfit.core.domain.histogram import Histogram
from ecalfit.core.shared.exceptions import DataIOError, InvalidInputError


def load_histogram(path: Path) -> Histogram:
    """Load a histogram from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        DataIOError: If the file cannot be parsed into a valid histogram.
    """
    if not path.exists():
        msg = f"Histogram file not found: {path}"
        raise FileNotFoundError(msg)

    try:
        if path.suffix == ".npz":
            with np.load(path) as archive:
                return Histogram(archive["edges"], archive["counts"])
        return _load_table(path)
    except KeyError as exc:
        msg = f"Histogram archive {path} lacks array {exc}"
        raise DataIOError(msg) from exc
    except (OSError, ValueError) as exc:
        if isinstance(exc, InvalidInputError):
            msg = f"Invalid histogram in {path}: {exc}"
        else:
            msg = f"Cannot read histogram from {path}: {exc}"
        raise DataIOError(msg) from exc


def _load_table(path: Path) -> Histogram:
    delimiter = "," if path.suffix == ".csv" else None
    table = np.loadtxt(path, delimiter=delimiter, comments="#", ndmin=2)
    if table.shape[1] != 3:
        msg = f"expected 3 columns (left right counts), got {table.shape[1]}"
        raise ValueError(msg)
    left, right, counts = table.T
    if not np.allclose(left[1:], right[:-1]):
        msg = "bins are not contiguous"
        raise ValueError(msg)
    edges = np.append(left, right[-1])
    return Histogram(edges, counts)


def save_histogram(histogram: Histogram, path: Path) -> None:
    """Save a histogram as an ``.npz`` archive."""
    if path.suffix != ".npz":
        msg = f"Histograms are saved as .npz archives, got {path.suffix!r}"
        raise DataIOError(msg)
    np.savez(path, edges=histogram.edges, counts=histogram.counts)
