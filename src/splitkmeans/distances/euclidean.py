"""
Euclidean distance metric for clustering.

Nearest-centroid ranking uses the squared distance; the objective may use
either form.
"""

import torch
from torch import Tensor

from ..exceptions import InputError


def squared_distance(a: Tensor, b: Tensor) -> Tensor:
    """Sum of squared coordinate differences over the last dimension.

    Broadcasts, so ``a`` may be (n, d) and ``b`` a single (d,) vector.
    """
    if a.shape[-1] != b.shape[-1]:
        raise InputError(f"Dimension mismatch: {a.shape[-1]} vs {b.shape[-1]}")
    diff = a - b
    return torch.sum(diff * diff, dim=-1)


def distance(a: Tensor, b: Tensor) -> Tensor:
    """Euclidean distance, the square root of ``squared_distance``."""
    return torch.sqrt(squared_distance(a, b))


def pairwise_squared_distances(points: Tensor, centroids: Tensor) -> Tensor:
    """(n, k) matrix of squared distances from every point to every centroid.

    Filled column by column; a point sitting on a centroid gets exactly 0.
    """
    n_points = points.shape[0]
    n_clusters = centroids.shape[0]

    distances = torch.empty(n_points, n_clusters, dtype=points.dtype, device=points.device)
    for k in range(n_clusters):
        distances[:, k] = squared_distance(points, centroids[k])

    return distances


class EuclideanDistance:
    """Euclidean distance from points to a single centroid.

    Computes ||x - μ||² by default.
    """

    def __init__(self, squared: bool = True):
        """
        Args:
            squared: If True, return squared distances (default).
                    If False, return actual Euclidean distances.
        """
        self.squared = squared

    def compute(self, points: Tensor, centroid: Tensor) -> Tensor:
        """Compute distances from points to a centroid.

        Args:
            points: (n, d) tensor of points
            centroid: (d,) cluster center

        Returns:
            (n,) tensor of distances
        """
        squared_distances = squared_distance(points, centroid)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def __repr__(self) -> str:
        return f"EuclideanDistance(squared={self.squared})"
