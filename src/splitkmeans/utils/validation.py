"""
Input validation utilities.

Every search entry point funnels its arguments through these helpers so
that bad input is refused before any work starts.
"""

from typing import Optional, Union
import torch
from torch import Tensor
import numpy as np

from ..exceptions import InputError, ConsistencyError


def validate_data(X: Union[Tensor, np.ndarray, list],
                  dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None,
                  ensure_min_samples: int = 1,
                  ensure_finite: bool = True) -> Tensor:
    """Validate and convert input data to a 2D tensor.

    Args:
        X: Input data (tensor, numpy array, or nested list)
        dtype: Target floating point type
        device: Target device
        ensure_min_samples: Minimum number of rows required
        ensure_finite: Whether to reject inf/nan

    Returns:
        (n, d) tensor

    Raises:
        InputError: If validation fails
    """
    if isinstance(X, Tensor):
        X = X.to(dtype=dtype, device=device)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(X).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        try:
            X = torch.tensor(X, dtype=dtype, device=device)
        except (TypeError, ValueError) as exc:
            raise InputError(f"Cannot convert input to tensor: {exc}") from exc
    else:
        raise InputError(f"Cannot convert {type(X)} to tensor")

    if X.dim() == 1:
        X = X.unsqueeze(1)
    elif X.dim() != 2:
        raise InputError(f"Expected 2D array, got {X.dim()}D")

    n_samples, n_features = X.shape
    if n_samples < ensure_min_samples:
        raise InputError(f"Found {n_samples} samples, but need at least "
                         f"{ensure_min_samples}")
    if n_features < 1:
        raise InputError("Data points have no coordinates")

    if ensure_finite:
        if torch.isnan(X).any():
            raise InputError("Input contains NaN values")
        if torch.isinf(X).any():
            raise InputError("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters against the dataset size.

    Raises:
        InputError: If n_clusters is not a positive int no larger than n_samples
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise InputError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise InputError(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise InputError(f"n_clusters ({n_clusters}) cannot be larger than "
                         f"n_samples ({n_samples})")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create a generator from a random state.

    ``None`` yields a generator seeded from system entropy, so every search
    owns its random source instead of touching torch's global one.
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def validate_centroids(centroids: Union[Tensor, np.ndarray, list],
                       X: Tensor,
                       n_clusters: Optional[int] = None) -> Tensor:
    """Validate a centroid set against the data it will partition.

    Returns:
        (k, d) tensor with X's dtype and device
    """
    centroids = validate_data(centroids, dtype=X.dtype, device=X.device)

    if centroids.shape[1] != X.shape[1]:
        raise InputError(f"Centroids have dimension {centroids.shape[1]}, "
                         f"but data has dimension {X.shape[1]}")
    if n_clusters is not None and centroids.shape[0] != n_clusters:
        raise InputError(f"Got {centroids.shape[0]} centroids, "
                         f"but n_clusters={n_clusters}")
    return centroids


def validate_partition(partition: Tensor, n_points: int, n_clusters: int) -> Tensor:
    """Check that a partition maps every point into ``[0, n_clusters)``.

    Raises:
        ConsistencyError: If any value is out of range or the length is wrong
    """
    if partition.dim() != 1 or partition.shape[0] != n_points:
        raise ConsistencyError(f"Partition has shape {tuple(partition.shape)}, "
                               f"expected ({n_points},)")
    if n_points == 0:
        return partition.long()
    low = partition.min().item()
    high = partition.max().item()
    if low < 0 or high >= n_clusters:
        raise ConsistencyError(f"Partition values must lie in [0, {n_clusters}), "
                               f"found range [{low}, {high}]")
    return partition.long()
