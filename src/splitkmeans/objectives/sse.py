"""
Sum-of-errors objective and per-cluster error measures.

The default objective sums the plain Euclidean distance from each point to
its centroid. Pass ``squared=True`` for the classic within-cluster sum of
squares.
"""

from torch import Tensor

from ..base.interfaces import ClusteringObjective
from ..distances.euclidean import squared_distance
from ..exceptions import InputError
from ..utils.validation import validate_partition


def _point_errors(points: Tensor, centroids: Tensor, partition: Tensor,
                  squared: bool) -> Tensor:
    if points.shape[0] == 0:
        raise InputError("Cannot evaluate the objective on an empty set of points")
    if centroids.shape[0] == 0:
        raise InputError("Cannot evaluate the objective with no centroids")

    partition = validate_partition(partition, points.shape[0], centroids.shape[0])
    errors = squared_distance(points, centroids[partition])

    if squared:
        return errors
    return errors.sqrt()


class SSEObjective(ClusteringObjective):
    """Total error between every point and its assigned centroid."""

    def __init__(self, squared: bool = False):
        """
        Args:
            squared: Sum squared distances instead of distances
        """
        self.squared = squared

    def compute(self, points: Tensor, centroids: Tensor,
                partition: Tensor) -> float:
        """Compute the total error.

        Raises:
            InputError: If points or centroids are empty
            ConsistencyError: If a partition value is outside [0, k)
        """
        return _point_errors(points, centroids, partition, self.squared).sum().item()

    @property
    def minimize(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"SSEObjective(squared={self.squared})"


def sse(points: Tensor, centroids: Tensor, partition: Tensor,
        squared: bool = False) -> float:
    """Functional form of ``SSEObjective``."""
    return SSEObjective(squared=squared).compute(points, centroids, partition)


def cluster_sse(points: Tensor, centroids: Tensor, partition: Tensor,
                cluster: int, squared: bool = False) -> float:
    """Error contributed by the points of a single cluster."""
    errors = _point_errors(points, centroids, partition, squared)
    return errors[partition == cluster].sum().item()


def cluster_sse_all(points: Tensor, centroids: Tensor, partition: Tensor,
                    squared: bool = False) -> Tensor:
    """(k,) tensor with the error contributed by each cluster."""
    errors = _point_errors(points, centroids, partition, squared)
    totals = errors.new_zeros(centroids.shape[0])
    totals.index_add_(0, partition.long(), errors)
    return totals


def mse(points: Tensor, centroids: Tensor, partition: Tensor) -> float:
    """Mean squared error per coordinate: squared SSE / (n * d)."""
    n_points, dimension = points.shape
    return sse(points, centroids, partition, squared=True) / (n_points * dimension)
