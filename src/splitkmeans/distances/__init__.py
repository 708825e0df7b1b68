"""Distance metrics."""

from .euclidean import (
    squared_distance,
    distance,
    pairwise_squared_distances,
    EuclideanDistance
)

__all__ = [
    'squared_distance',
    'distance',
    'pairwise_squared_distances',
    'EuclideanDistance'
]
