# tests/data_gen.py
"""
Tiny synthetic-data generators reused across the split-kmeans test suite.

    >>> X, y, C = make_blobs(n_per=50, seed=0)
    >>> X.shape, y.shape, C.shape
    ((200, 2), (200,), (4, 2))
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple
import numpy as np

NDArray = np.ndarray

SQUARE_CORNERS = ((-10.0, -10.0), (-10.0, 10.0), (10.0, -10.0), (10.0, 10.0))


def make_blobs(
    centers: Sequence[Sequence[float]] = SQUARE_CORNERS,
    n_per: int = 50,
    std: float = 0.5,
    seed: Optional[int] = None,
) -> Tuple[NDArray, NDArray, NDArray]:
    """
    Isotropic Gaussian blobs around fixed centers.

    Returns
    -------
    X : (len(centers) * n_per, d) ndarray, float64, rows grouped by blob
    y : (len(centers) * n_per,) ndarray, int64 ground-truth labels
    C : (len(centers), d) ndarray, the generating centers
    """
    rng = np.random.default_rng(seed)
    C = np.asarray(centers, dtype=np.float64)
    k, d = C.shape

    X = np.vstack([c + std * rng.normal(size=(n_per, d)) for c in C])
    y = np.repeat(np.arange(k), n_per).astype(np.int64)
    return X, y, C


def make_duplicates(locations: Sequence[Sequence[float]], copies: int) -> NDArray:
    """Each location repeated ``copies`` times."""
    L = np.asarray(locations, dtype=np.float64)
    return np.repeat(L, copies, axis=0)


def make_lopsided(n_major: int = 1000) -> NDArray:
    """``n_major`` copies of the origin plus a single point at (1, 1).

    Exactly two distinct locations; a random pair of rows almost always
    lands on the origin twice.
    """
    X = np.zeros((n_major + 1, 2), dtype=np.float64)
    X[-1] = 1.0
    return X
