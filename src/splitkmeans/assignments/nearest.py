"""
Nearest-centroid assignment with empty-cluster repair.

Assigns each point to its nearest centroid. A pass that leaves a centroid
without points is rejected: the orphaned centroid is moved onto a random
data point that no centroid occupies yet, and the whole assignment is
recomputed.
"""

from typing import List, Optional, Tuple
import warnings
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy
from ..distances.euclidean import pairwise_squared_distances
from ..exceptions import InputError, DegenerateClusterError


class NearestCentroidAssignment(AssignmentStrategy):
    """Hard assignment to the nearest centroid.

    Ties go to the highest centroid index. After every pass each slot must
    own at least one point; empty slots are reseeded and the pass is
    repeated. Past ``max_repair_attempts`` rounds the repair gives up, but
    only when the data has fewer distinct points than centroids.
    """

    def __init__(self, max_repair_attempts: int = 100, verbose: int = 0):
        """
        Args:
            max_repair_attempts: Reseed-and-reassign rounds after which
                repair stops with InputError if the data has fewer distinct
                points than centroids
            verbose: Verbosity level
        """
        super().__init__()
        if max_repair_attempts < 0:
            raise ValueError(f"max_repair_attempts must be non-negative, got {max_repair_attempts}")
        self.max_repair_attempts = max_repair_attempts
        self.verbose = verbose
        self.n_repairs_ = 0

    def nearest(self, points: Tensor, centroids: Tensor) -> Tensor:
        """Index of the nearest centroid for every point, without repair.

        Args:
            points: (n, d) data points
            centroids: (k, d) centroids

        Returns:
            (n,) tensor of centroid indices
        """
        distances = pairwise_squared_distances(points, centroids)
        n_clusters = centroids.shape[0]

        # argmin keeps the first minimum; scanning reversed columns makes the last one win
        return (n_clusters - 1) - torch.argmin(distances.flip(1), dim=1)

    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            generator: Optional[torch.Generator] = None,
                            **kwargs) -> Tuple[Tensor, Tensor]:
        """Assign each point to its nearest centroid, repairing empty clusters.

        Args:
            points: (n, d) data points
            centroids: (k, d) centroids; never modified
            generator: Random source for reseeding empty clusters

        Returns:
            partition: (n,) cluster indices, every slot non-empty
            centroids: the centroids the partition refers to (a new tensor
                if any slot was reseeded)

        Raises:
            InputError: On empty input, or if repair does not converge
        """
        n_points = points.shape[0]
        n_clusters = centroids.shape[0]

        if n_points == 0:
            raise InputError("Cannot assign an empty set of points")
        if n_clusters == 0:
            raise InputError("Cannot assign points to an empty set of centroids")
        if n_clusters > n_points:
            raise InputError(f"Cannot fill {n_clusters} clusters with {n_points} points")

        self.n_repairs_ = 0
        attempt = 0

        while True:
            partition = self.nearest(points, centroids)
            try:
                self._check_non_empty(partition, n_clusters)
                break
            except DegenerateClusterError as exc:
                if attempt >= self.max_repair_attempts and \
                        self._count_distinct(points) < n_clusters:
                    raise InputError(
                        f"Empty-cluster repair did not converge after {attempt} attempts "
                        f"(clusters {exc.empty_slots} still empty); the data has "
                        f"fewer than {n_clusters} distinct points"
                    ) from exc
                centroids = self._reseed(points, centroids, exc.empty_slots, generator)
                attempt += 1

        self.n_repairs_ = attempt
        if attempt and self.verbose >= 2:
            warnings.warn(f"Reseeded empty clusters {attempt} time(s)")

        return partition, centroids

    @staticmethod
    def _check_non_empty(partition: Tensor, n_clusters: int) -> None:
        counts = torch.bincount(partition, minlength=n_clusters)
        empty = torch.where(counts == 0)[0]
        if len(empty) > 0:
            raise DegenerateClusterError(empty.tolist())

    @staticmethod
    def _count_distinct(points: Tensor) -> int:
        return torch.unique(points, dim=0).shape[0]

    @staticmethod
    def _reseed(points: Tensor, centroids: Tensor, empty_slots: List[int],
                generator: Optional[torch.Generator]) -> Tensor:
        """Move each empty centroid onto a random data point that no centroid
        sits on yet.

        A point at distance zero from a single centroid is won by it, so every
        reseeded slot owns at least one point on the next pass.

        Raises:
            InputError: If every point already coincides with a centroid,
                i.e. there are fewer distinct points than centroids
        """
        centroids = centroids.clone()
        for slot in empty_slots:
            covered = (pairwise_squared_distances(points, centroids) == 0).any(dim=1)
            free = torch.where(~covered)[0]
            if len(free) == 0:
                raise InputError(
                    f"Empty-cluster repair failed: every data point already sits on a "
                    f"centroid, so the data has fewer than {centroids.shape[0]} "
                    f"distinct points"
                )
            pick = torch.randint(len(free), (1,), generator=generator).item()
            centroids[slot] = points[free[pick]]
        return centroids
