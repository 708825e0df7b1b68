"""
Mean update strategy for centroid-based clustering.
"""

import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater
from ..utils.validation import validate_partition


class MeanUpdater(ParameterUpdater):
    """Moves each centroid to the mean of the points assigned to it."""

    def update(self, points: Tensor, partition: Tensor, centroids: Tensor,
               **kwargs) -> Tensor:
        """Recompute centroids as coordinate-wise means.

        Args:
            points: (n, d) data points
            partition: (n,) hard assignments in [0, k)
            centroids: (k, d) current centroids
            **kwargs: Ignored

        Returns:
            (k, d) new centroids. A slot with no points keeps its
            current centroid.
        """
        n_clusters = centroids.shape[0]
        partition = validate_partition(partition, points.shape[0], n_clusters)

        sums = torch.zeros_like(centroids)
        sums.index_add_(0, partition, points)
        counts = torch.bincount(partition, minlength=n_clusters)

        new_centroids = centroids.clone()
        occupied = counts > 0
        new_centroids[occupied] = sums[occupied] / counts[occupied].unsqueeze(1).to(points.dtype)

        return new_centroids
