"""
split-kmeans: search strategies for k-means clustering.

This package compares ways of minimizing the k-means objective on a static
dataset:
- LocalSearch: Lloyd's algorithm
- RestartSearch: repeated k-means from random initializations
- SwapSearch: random swap hill climbing
- SplitSearch: bisecting (split) k-means

Example usage:
    >>> import torch
    >>> from splitkmeans import RestartSearch
    >>>
    >>> X = torch.randn(1000, 2)
    >>> search = RestartSearch(n_clusters=5, n_repeats=20, random_state=0)
    >>> result = search.run(X)
    >>> result.sse, result.centroids.shape
"""

__version__ = '0.1.0'

from .algorithms.lloyd import LocalSearch
from .algorithms.restart import RestartSearch
from .algorithms.swap import SwapSearch
from .algorithms.split import SplitSearch

from .base import (
    KMeansResult,
    SearchStatus,
    SwapRecord,
    SplitRecord
)

from .exceptions import (
    ClusteringError,
    InputError,
    ConsistencyError,
    DegenerateClusterError
)

from .distances import squared_distance, distance
from .objectives import sse, cluster_sse, mse
from .utils.metrics import centroid_index, ground_truth_centroids
from .io import load_dataset, load_centroids, load_partition, write_centroids, write_partition
from .experiments import Statistics, run_experiment, format_statistics

__all__ = [
    # Algorithms
    'LocalSearch',
    'RestartSearch',
    'SwapSearch',
    'SplitSearch',

    # Results
    'KMeansResult',
    'SearchStatus',
    'SwapRecord',
    'SplitRecord',

    # Errors
    'ClusteringError',
    'InputError',
    'ConsistencyError',
    'DegenerateClusterError',

    # Measures
    'squared_distance',
    'distance',
    'sse',
    'cluster_sse',
    'mse',
    'centroid_index',
    'ground_truth_centroids',

    # I/O
    'load_dataset',
    'load_centroids',
    'load_partition',
    'write_centroids',
    'write_partition',

    # Experiments
    'Statistics',
    'run_experiment',
    'format_statistics',

    # Version
    '__version__'
]
