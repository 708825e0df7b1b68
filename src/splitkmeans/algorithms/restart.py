"""
Repeated k-means: independent random restarts of Lloyd's algorithm,
keeping the best.
"""

from typing import Optional, Union, List
import time
import torch
from torch import Tensor

from ..base.search_base import BaseSearch
from ..base.data_structures import KMeansResult, SearchStatus
from ..initialization.random import RandomInit
from ..utils.validation import check_n_clusters
from ..exceptions import InputError
from .lloyd import LocalSearch


class RestartSearch(BaseSearch):
    """Random-restart metaheuristic over LocalSearch.

    Every repeat draws a fresh set of distinct data points as centroids and
    runs Lloyd's algorithm from it. The trial with the lowest objective wins.

    Attributes
    ----------
    trial_sse_ : list of float
        Objective of every trial of the last run, in order
    """

    def __init__(self,
                 n_clusters: Optional[int] = None,
                 n_repeats: int = 10,
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
        if n_repeats < 1:
            raise ValueError(f"n_repeats must be at least 1, got {n_repeats}")
        self.n_repeats = n_repeats
        self.patience = patience
        self.squared = squared
        self.max_repair_attempts = max_repair_attempts

        self._create_components()
        self.trial_sse_: List[float] = []

    def _create_components(self) -> None:
        self.initialization_strategy = RandomInit()
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

    def run(self, X: Tensor,
            n_clusters: Optional[int] = None,
            n_repeats: Optional[int] = None,
            max_iter: Optional[int] = None) -> KMeansResult:
        """Run repeated k-means.

        Args:
            X: (n, d) data
            n_clusters: Number of clusters (defaults to the constructor value)
            n_repeats: Number of restarts (defaults to the constructor value)
            max_iter: Iteration cap of every Lloyd run

        Returns:
            Best KMeansResult across trials; its history holds the objective
            of every trial

        Raises:
            InputError: If n < k or the arguments are invalid
        """
        X = self._validate_data(X)

        n_clusters = self.n_clusters if n_clusters is None else n_clusters
        n_repeats = self.n_repeats if n_repeats is None else n_repeats
        max_iter = self.max_iter if max_iter is None else max_iter

        if n_clusters is None:
            raise InputError("n_clusters is required")
        check_n_clusters(n_clusters, X.shape[0])
        if n_repeats < 1:
            raise InputError(f"n_repeats must be at least 1, got {n_repeats}")
        if max_iter < 1:
            raise InputError(f"max_iter must be at least 1, got {max_iter}")

        best: Optional[KMeansResult] = None
        self.trial_sse_ = []
        start_time = time.time()

        for repeat in range(n_repeats):
            centroids = self.initialization_strategy.initialize(
                X, n_clusters, generator=self.generator
            )
            trial = self.local_search.run(X, centroids, max_iter=max_iter)
            self.trial_sse_.append(trial.sse)

            if best is None or trial.sse < best.sse:
                best = trial
                self._log(f"Repeat {repeat + 1:3d}: new best objective = {trial.sse:.6f}")
            else:
                self._log(f"Repeat {repeat + 1:3d}: objective = {trial.sse:.6f}", level=2)

        self._log(f"Repeated k-means finished in {time.time() - start_time:.3f}s")

        return KMeansResult(
            sse=best.sse,
            partition=best.partition,
            centroids=best.centroids,
            n_iter=n_repeats,
            status=SearchStatus.EXHAUSTED,
            history=list(self.trial_sse_)
        )

    def _search(self, X: Tensor) -> KMeansResult:
        return self.run(X)

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params.update({
            'n_repeats': self.n_repeats,
            'patience': self.patience,
            'squared': self.squared,
            'max_repair_attempts': self.max_repair_attempts
        })
        return params

    def set_params(self, **params) -> 'RestartSearch':
        super().set_params(**params)
        self._create_components()
        return self
