"""
Core data structures shared by the search strategies.

A search hands back a ``KMeansResult``; the per-step records let callers
inspect how a strategy got there.
"""

from typing import Optional, List
from dataclasses import dataclass, field
from enum import Enum
import torch
from torch import Tensor


class SearchStatus(Enum):
    """Terminal state of a search."""

    CONVERGED = 'converged'   # objective hit exactly zero
    STALLED = 'stalled'       # stagnation counter tripped
    EXHAUSTED = 'exhausted'   # iteration / round budget used up


@dataclass
class KMeansResult:
    """Output of every search strategy.

    ``sse`` is the best objective observed anywhere in the search;
    ``partition`` and ``centroids`` are the state that produced it, not
    necessarily the last state visited.
    """

    sse: float
    partition: Tensor   # (n,) long, values in [0, k)
    centroids: Tensor   # (k, d)

    n_iter: int = 0
    status: SearchStatus = SearchStatus.EXHAUSTED
    history: List[float] = field(default_factory=list)

    @property
    def n_clusters(self) -> int:
        return self.centroids.shape[0]

    @property
    def cluster_sizes(self) -> Tensor:
        """Number of points owned by each slot."""
        return torch.bincount(self.partition, minlength=self.n_clusters)

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Indices of points assigned to a specific cluster."""
        return torch.where(self.partition == cluster_idx)[0]

    def to(self, device: torch.device) -> 'KMeansResult':
        """Move tensors to specified device."""
        return KMeansResult(
            sse=self.sse,
            partition=self.partition.to(device),
            centroids=self.centroids.to(device),
            n_iter=self.n_iter,
            status=self.status,
            history=list(self.history)
        )


@dataclass
class SwapRecord:
    """One round of random-swap search."""
    round: int
    slot: int
    point_index: int
    candidate_sse: float
    accepted: bool
    best_sse: float


@dataclass
class SplitRecord:
    """One split step of a bisecting search."""
    n_centroids: int
    split_cluster: int
    sse: float
    sse_drop: Optional[float] = None
