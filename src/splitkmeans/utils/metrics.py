"""
Clustering evaluation metrics.

The Centroid Index (CI) compares two centroid sets: it counts centroids of
one set that no centroid of the other set picks as its nearest neighbour.
CI = 0 means the two solutions have the same cluster-level structure.
"""

import torch
from torch import Tensor

from ..assignments.nearest import NearestCentroidAssignment
from ..exceptions import InputError
from .validation import validate_partition


def count_orphans(centroids1: Tensor, centroids2: Tensor) -> int:
    """Number of centroids in ``centroids2`` that are nobody's nearest
    neighbour among ``centroids1``."""
    if centroids1.shape[0] == 0 or centroids2.shape[0] == 0:
        raise InputError("Centroid sets must not be empty")

    nearest = NearestCentroidAssignment().nearest(centroids1, centroids2)
    has_closest = torch.zeros(centroids2.shape[0], dtype=torch.bool, device=centroids2.device)
    has_closest[nearest] = True

    return int((~has_closest).sum().item())


def centroid_index(centroids1: Tensor, centroids2: Tensor) -> int:
    """Centroid Index: the larger orphan count of the two mapping directions."""
    return max(count_orphans(centroids1, centroids2),
               count_orphans(centroids2, centroids1))


def cluster_sizes(partition: Tensor, n_clusters: int) -> Tensor:
    """(k,) number of points per cluster."""
    partition = validate_partition(partition, partition.shape[0], n_clusters)
    return torch.bincount(partition, minlength=n_clusters)


def ground_truth_centroids(X: Tensor, labels: Tensor) -> Tensor:
    """Centroids of a labelled partition: the mean of every label's points.

    Labels must be consecutive integers starting at 0, each used at least once.
    """
    if X.shape[0] != labels.shape[0]:
        raise InputError(f"Got {X.shape[0]} points but {labels.shape[0]} labels")
    if X.shape[0] == 0:
        raise InputError("Cannot compute centroids of an empty dataset")

    labels = labels.long()
    n_clusters = int(labels.max().item()) + 1
    labels = validate_partition(labels, X.shape[0], n_clusters)

    counts = torch.bincount(labels, minlength=n_clusters)
    if (counts == 0).any():
        missing = torch.where(counts == 0)[0].tolist()
        raise InputError(f"Labels {missing} have no points")

    sums = torch.zeros(n_clusters, X.shape[1], dtype=X.dtype, device=X.device)
    sums.index_add_(0, labels, X)
    return sums / counts.unsqueeze(1).to(X.dtype)
