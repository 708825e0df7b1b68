"""
Random initialization strategy.

Selects distinct points from the dataset as initial centroids.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..utils.validation import check_n_clusters


class RandomInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.

    Selects n_clusters random points (without replacement) as initial centers.
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Initialize centroids with random points.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Random source

        Returns:
            (n_clusters, d) tensor of centroids

        Raises:
            InputError: If there are fewer points than clusters
        """
        n_points = points.shape[0]
        check_n_clusters(n_clusters, n_points)

        indices = torch.randperm(n_points, generator=generator)[:n_clusters]
        return points[indices.to(points.device)].clone()
