"""Utility functions for split-kmeans."""

from .convergence import StagnantObjective

from .metrics import (
    count_orphans,
    centroid_index,
    cluster_sizes,
    ground_truth_centroids
)

from .validation import (
    validate_data,
    check_n_clusters,
    check_random_state,
    validate_centroids,
    validate_partition
)

__all__ = [
    # Convergence criteria
    'StagnantObjective',

    # Metrics
    'count_orphans',
    'centroid_index',
    'cluster_sizes',
    'ground_truth_centroids',

    # Validation
    'validate_data',
    'check_n_clusters',
    'check_random_state',
    'validate_centroids',
    'validate_partition'
]
