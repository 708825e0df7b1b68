"""
Core interfaces for the split-kmeans search strategies.

This module defines the abstract base classes that the pluggable pieces of
the Lloyd loop implement, so searches can be assembled from interchangeable
components.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Dict, Any
import torch
from torch import Tensor


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-centroid assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            generator: Optional[torch.Generator] = None,
                            **kwargs) -> Tuple[Tensor, Tensor]:
        """Compute cluster assignments for points.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of centroids
            generator: Random source for any reseeding the strategy performs
            **kwargs: Strategy-specific parameters

        Returns:
            Tuple of (partition, centroids): the (n,) partition and the
            centroid set it was computed against, which may differ from the
            input when the strategy had to repair it.
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, points: Tensor, partition: Tensor, centroids: Tensor,
               **kwargs) -> Tensor:
        """Recompute centroids given points and their assignments.

        Args:
            points: (n, d) tensor of all data points
            partition: (n,) hard assignments
            centroids: (k, d) current centroids
            **kwargs: Update-specific parameters

        Returns:
            (k, d) tensor of new centroids
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for centroid initialization strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Initialize a centroid set.

        Args:
            points: (n, d) tensor of data points
            n_clusters: Number of centroids to produce
            generator: Random source
            **kwargs: Strategy-specific parameters

        Returns:
            (n_clusters, d) tensor of centroids
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the search should stop.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor, centroids: Tensor,
                partition: Tensor) -> float:
        """Compute objective function value.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of centroids
            partition: (n,) hard assignments

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
