"""
Split (bisecting) k-means.

Grows the centroid set from one centroid, the global mean, to K by
repeatedly bisecting a cluster with a 2-means run restricted to that
cluster's points.

Cluster selection:
- 'sse'      : the cluster contributing the most to the objective
- 'sse_drop' : the cluster whose tentative bisection lowers the objective most
- 'random'   : a uniformly random splittable cluster

Cluster errors follow the objective: with the default ``squared=False`` they
are sums of plain distances, so 'sse' and 'sse_drop' rank clusters
differently than a sum of squares would. Pass ``squared=True`` for the
classic within-cluster sum of squares.

Refinement after each split:
- 'local'  : only the bisected cluster's points are redistributed
- 'global' : Lloyd's algorithm runs over all centroids
A final Lloyd run over all K centroids always follows.
"""

from typing import Optional, Union, List, Tuple
import time
import torch
from torch import Tensor

from ..base.search_base import BaseSearch
from ..base.data_structures import KMeansResult, SplitRecord
from ..distances.euclidean import squared_distance
from ..objectives.sse import cluster_sse_all
from ..utils.validation import check_n_clusters
from ..exceptions import InputError
from .lloyd import LocalSearch


SELECTION_METHODS = ('sse', 'sse_drop', 'random')
REFINE_METHODS = ('local', 'global')


class SplitSearch(BaseSearch):
    """Bisecting k-means.

    Parameters
    ----------
    n_clusters : int
        Target number of clusters K
    selection : str, default='sse'
        Which cluster to split next, one of 'sse', 'sse_drop', 'random'
    refine : str, default='global'
        'global' re-optimizes all centroids after every split, 'local'
        leaves that to the final Lloyd run
    n_bisect_trials : int, default=1
        Tentative 2-means runs per split; the one with the lowest objective
        is kept
    squared : bool, default=False
        Rank clusters and score runs by the sum of squared distances instead
        of the sum of distances
    max_iter : int, default=100
        Iteration cap of every Lloyd run

    Attributes
    ----------
    split_history_ : list of SplitRecord
        One record per split of the last run
    """

    def __init__(self,
                 n_clusters: Optional[int] = None,
                 selection: str = 'sse',
                 refine: str = 'global',
                 n_bisect_trials: int = 1,
                 max_iter: int = 100,
                 patience: int = 3,
                 squared: bool = False,
                 max_repair_attempts: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float64):
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state,
            device=device,
            dtype=dtype
        )
        if selection not in SELECTION_METHODS:
            raise ValueError(f"selection must be one of {SELECTION_METHODS}, got '{selection}'")
        if refine not in REFINE_METHODS:
            raise ValueError(f"refine must be one of {REFINE_METHODS}, got '{refine}'")
        if n_bisect_trials < 1:
            raise ValueError(f"n_bisect_trials must be at least 1, got {n_bisect_trials}")

        self.selection = selection
        self.refine = refine
        self.n_bisect_trials = n_bisect_trials
        self.squared = squared
        self.patience = patience
        self.max_repair_attempts = max_repair_attempts

        self._create_components()
        self.split_history_: List[SplitRecord] = []

    def _create_components(self) -> None:
        self.local_search = LocalSearch(
            max_iter=self.max_iter,
            patience=self.patience,
            squared=self.squared,
            max_repair_attempts=self.max_repair_attempts,
            verbose=max(self.verbose - 1, 0),
            random_state=self.generator,
            device=self.device,
            dtype=self.dtype
        )

    def run(self, X: Tensor, n_clusters: Optional[int] = None) -> KMeansResult:
        """Grow the centroid set to n_clusters by bisection.

        Args:
            X: (n, d) data
            n_clusters: Target K (defaults to the constructor value)

        Returns:
            KMeansResult of the final Lloyd run; its history is the
            objective after each split followed by the final run's history

        Raises:
            InputError: If n < K, or no cluster can be split before K is
                reached (too few distinct points)
        """
        X = self._validate_data(X)
        n_clusters = self.n_clusters if n_clusters is None else n_clusters
        if n_clusters is None:
            raise InputError("n_clusters is required")
        check_n_clusters(n_clusters, X.shape[0])

        start_time = time.time()
        centroids = X.mean(dim=0, keepdim=True)
        partition = torch.zeros(X.shape[0], dtype=torch.long, device=X.device)
        self.split_history_ = []

        while centroids.shape[0] < n_clusters:
            cluster, children, child_partition, sse_drop = self._select_and_bisect(
                X, centroids, partition
            )

            members = torch.where(partition == cluster)[0]
            new_index = centroids.shape[0]

            centroids = torch.cat([centroids, children[1:2]], dim=0)
            centroids[cluster] = children[0]
            partition = partition.clone()
            partition[members[child_partition == 1]] = new_index

            if self.refine == 'global':
                refined = self.local_search.run(X, centroids)
                centroids, partition = refined.centroids, refined.partition

            current_sse = self.local_search.objective.compute(X, centroids, partition)
            self.split_history_.append(SplitRecord(
                n_centroids=centroids.shape[0],
                split_cluster=cluster,
                sse=current_sse,
                sse_drop=sse_drop
            ))
            self._log(f"Split cluster {cluster:3d}: {centroids.shape[0]} centroids, "
                      f"objective = {current_sse:.6f}")

        final = self.local_search.run(X, centroids)
        final.history = [record.sse for record in self.split_history_] + final.history

        self._log(f"Split k-means finished in {time.time() - start_time:.3f}s")
        return final

    def _search(self, X: Tensor) -> KMeansResult:
        return self.run(X)

    def _select_and_bisect(self, X: Tensor, centroids: Tensor,
                           partition: Tensor) -> Tuple[int, Tensor, Tensor, Optional[float]]:
        """Pick the cluster to split and return its bisection.

        Returns:
            (cluster, children (2, d), child partition of the members, sse_drop)
        """
        splittable = [
            c for c in range(centroids.shape[0])
            if self._is_splittable(X[partition == c])
        ]
        if not splittable:
            raise InputError(f"Cannot grow beyond {centroids.shape[0]} clusters: "
                             f"no cluster has two distinct points")

        cluster_errors = cluster_sse_all(X, centroids, partition, squared=self.squared)

        if self.selection == 'sse_drop':
            best = None
            for c in splittable:
                children, child_partition, child_sse = self._bisect(X[partition == c])
                drop = cluster_errors[c].item() - child_sse
                if best is None or drop > best[3]:
                    best = (c, children, child_partition, drop)
            return best

        if self.selection == 'random':
            pick = torch.randint(len(splittable), (1,), generator=self.generator).item()
            cluster = splittable[pick]
        else:
            errors = cluster_errors[splittable]
            cluster = splittable[int(torch.argmax(errors).item())]

        children, child_partition, child_sse = self._bisect(X[partition == cluster])
        return cluster, children, child_partition, cluster_errors[cluster].item() - child_sse

    def _bisect(self, points: Tensor) -> Tuple[Tensor, Tensor, float]:
        """Best of ``n_bisect_trials`` 2-means runs on one cluster's points."""
        best: Optional[KMeansResult] = None

        for _ in range(self.n_bisect_trials):
            seeds = self._pick_two_distinct(points)
            trial = self.local_search.run(points, seeds)
            if best is None or trial.sse < best.sse:
                best = trial

        return best.centroids, best.partition, best.sse

    def _pick_two_distinct(self, points: Tensor) -> Tensor:
        """Two member points with different coordinates, chosen at random."""
        n_points = points.shape[0]
        first = torch.randint(n_points, (1,), generator=self.generator).item()

        others = torch.where(squared_distance(points, points[first]) > 0)[0]
        second = others[torch.randint(len(others), (1,), generator=self.generator).item()].item()

        return torch.stack([points[first], points[second]]).clone()

    @staticmethod
    def _is_splittable(points: Tensor) -> bool:
        if points.shape[0] < 2:
            return False
        return bool((squared_distance(points, points[0]) > 0).any())

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params.update({
            'selection': self.selection,
            'refine': self.refine,
            'n_bisect_trials': self.n_bisect_trials,
            'patience': self.patience,
            'squared': self.squared,
            'max_repair_attempts': self.max_repair_attempts
        })
        return params

    def set_params(self, **params) -> 'SplitSearch':
        super().set_params(**params)
        self._create_components()
        return self
