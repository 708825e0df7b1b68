"""
Lloyd's algorithm: the local search every strategy builds on.

Alternates nearest-centroid assignment and mean recomputation until the
objective stagnates, reaches zero, or the iteration cap is hit.
"""

from typing import Optional, Union
import time
import warnings
import numpy as np
import torch
from torch import Tensor

from ..base.search_base import BaseSearch
from ..base.data_structures import KMeansResult, SearchStatus
from ..assignments.nearest import NearestCentroidAssignment
from ..updates.mean import MeanUpdater
from ..objectives.sse import SSEObjective
from ..initialization.random import RandomInit
from ..initialization.from_previous import FromPreviousInit
from ..utils.convergence import StagnantObjective
from ..utils.validation import validate_centroids, check_n_clusters
from ..exceptions import InputError


class LocalSearch(BaseSearch):
    """K-means local search (Lloyd's algorithm).

    Parameters
    ----------
    n_clusters : int, optional
        Number of clusters. Required by ``fit`` with ``init='random'``;
        ``run`` takes it from the initial centroids.
    init : str or array-like, default='random'
        - 'random' : distinct random data points
        - array of shape (n_clusters, n_features) : use as initial centers
        - KMeansResult : warm start from an earlier search
    max_iter : int, default=100
        Maximum number of assign/update iterations
    patience : int, default=3
        Consecutive iterations with an unchanged objective before stopping
    squared : bool, default=False
        Objective sums squared distances instead of distances
    max_repair_attempts : int, default=100
        Bound on empty-cluster reseeding per assignment
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Random source for initialization and reseeding
    device : torch.device, optional
        Device for computation (CPU/GPU)

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
    labels_ : Tensor of shape (n_samples,)
    inertia_ : float
        Best objective value reached
    n_iter_ : int
        Number of iterations run
    """

    def __init__(self,
                 n_clusters: Optional[int] = None,
                 init: Union[str, Tensor, np.ndarray, KMeansResult] = 'random',
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
        self.init = init
        self.patience = patience
        self.squared = squared
        self.max_repair_attempts = max_repair_attempts

        self._create_components()

    def _create_components(self) -> None:
        self.assignment_strategy = NearestCentroidAssignment(
            max_repair_attempts=self.max_repair_attempts,
            verbose=self.verbose
        )
        self.update_strategy = MeanUpdater()
        self.objective = SSEObjective(squared=self.squared)
        self.convergence_criterion = StagnantObjective(patience=self.patience)

        if isinstance(self.init, str):
            if self.init != 'random':
                raise ValueError(f"Unknown init method: {self.init}")
            self.initialization_strategy = RandomInit()
        else:
            self.initialization_strategy = FromPreviousInit(self.init)

    def run(self, X: Tensor, initial_centroids: Tensor,
            max_iter: Optional[int] = None) -> KMeansResult:
        """Run Lloyd's algorithm from the given centroids.

        Args:
            X: (n, d) data
            initial_centroids: (k, d) starting centroids; not modified
            max_iter: Override of the iteration cap

        Returns:
            KMeansResult holding the best state seen

        Raises:
            InputError: On empty data, mismatched shapes, or n < k
        """
        X = self._validate_data(X)
        centroids = validate_centroids(initial_centroids, X)
        check_n_clusters(centroids.shape[0], X.shape[0])

        if max_iter is None:
            max_iter = self.max_iter
        if max_iter < 1:
            raise InputError(f"max_iter must be at least 1, got {max_iter}")

        return self._optimize(X, centroids, max_iter)

    def _search(self, X: Tensor) -> KMeansResult:
        n_clusters = self.n_clusters
        if n_clusters is None:
            if isinstance(self.init, str):
                raise InputError("n_clusters is required with random initialization")
            elif isinstance(self.init, KMeansResult):
                n_clusters = self.init.n_clusters
            else:
                n_clusters = len(self.init)

        check_n_clusters(n_clusters, X.shape[0])
        self._log(f"Initializing {n_clusters} clusters...")
        centroids = self.initialization_strategy.initialize(
            X, n_clusters, generator=self.generator
        )
        return self._optimize(X, centroids, self.max_iter)

    def _optimize(self, X: Tensor, centroids: Tensor, max_iter: int) -> KMeansResult:
        """Main loop on validated inputs."""
        self.convergence_criterion.reset()

        best_sse = float('inf')
        best_partition = None
        best_centroids = None
        history = []
        status = SearchStatus.EXHAUSTED
        n_iter = 0
        start_time = time.time()

        for iteration in range(max_iter):
            iter_start_time = time.time()

            partition, centroids = self.assignment_strategy.compute_assignments(
                X, centroids, generator=self.generator
            )
            centroids = self.update_strategy.update(X, partition, centroids)
            objective_value = self.objective.compute(X, centroids, partition)

            history.append(objective_value)
            n_iter = iteration + 1

            if objective_value < best_sse:
                best_sse = objective_value
                best_partition = partition.clone()
                best_centroids = centroids.clone()

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: objective = {objective_value:.6f} "
                      f"({iter_time:.3f}s)")

            if objective_value == 0.0:
                status = SearchStatus.CONVERGED
                break

            if self.convergence_criterion.check({
                'iteration': iteration,
                'objective': objective_value
            }):
                status = SearchStatus.STALLED
                break

        if self.verbose:
            if status is SearchStatus.EXHAUSTED:
                warnings.warn(f"Failed to converge after {max_iter} iterations")
            else:
                print(f"Stopped ({status.value}) at iteration {n_iter - 1}")
            print(f"Total time: {time.time() - start_time:.3f}s")

        return KMeansResult(
            sse=best_sse,
            partition=best_partition,
            centroids=best_centroids,
            n_iter=n_iter,
            status=status,
            history=history
        )

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params.update({
            'init': self.init,
            'patience': self.patience,
            'squared': self.squared,
            'max_repair_attempts': self.max_repair_attempts
        })
        return params

    def set_params(self, **params) -> 'LocalSearch':
        super().set_params(**params)
        self._create_components()
        return self
