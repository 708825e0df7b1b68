# tests/utils.py
"""
Small, reusable helpers used across the split-kmeans test suite.

Functions:
- labels_equal_up_to_perm(y1, y2, K): partitions match after relabelling.
- same_centroid_set(A, B, atol): rows of A and B match in some order.
- time_block(label, meta=None): context manager that prints wall-clock time.
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict

import numpy as np
import torch


def _to_numpy(x) -> np.ndarray:
    if isinstance(x, torch.Tensor):
        return x.detach().cpu().numpy()
    return np.asarray(x)


def labels_equal_up_to_perm(y1, y2, K: int) -> bool:
    """Return True if y2 can be relabelled to equal y1 exactly."""
    y1 = _to_numpy(y1)
    y2 = _to_numpy(y2)
    for perm in itertools.permutations(range(K)):
        mapping = np.array(perm)
        if np.array_equal(y1, mapping[y2]):
            return True
    return False


def same_centroid_set(A, B, atol: float = 1e-9) -> bool:
    """Rows of A equal rows of B up to ordering (small K only)."""
    A = _to_numpy(A)
    B = _to_numpy(B)
    if A.shape != B.shape:
        return False
    for perm in itertools.permutations(range(A.shape[0])):
        if np.allclose(A, B[list(perm)], atol=atol):
            return True
    return False


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Time a block and print a single-line summary.

    Output
    ------
    [timing] fit {"n":160,"K":4} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        meta_str = " " + json.dumps(meta, separators=(",", ":")) if meta else ""
        print(f"[timing] {label}{meta_str} {dt:.3f}s")
