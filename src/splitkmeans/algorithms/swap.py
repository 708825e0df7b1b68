"""
Random swap clustering.

Hill climbing over centroid placement: move one centroid onto a random data
point, re-run Lloyd's algorithm, and keep the move only if the objective
improves.
"""

from typing import Optional, Union, List
import time
import numpy as np
import torch
from torch import Tensor

from ..base.search_base import BaseSearch
from ..base.data_structures import KMeansResult, SearchStatus, SwapRecord
from ..initialization.random import RandomInit
from ..utils.validation import validate_centroids, check_n_clusters
from ..exceptions import InputError
from .lloyd import LocalSearch


class SwapSearch(BaseSearch):
    """Random swap metaheuristic over LocalSearch.

    Rounds are strictly sequential: each round perturbs the centroids
    accepted so far.

    Parameters
    ----------
    n_clusters : int, optional
        Number of clusters, used when no initial centroids are given
    n_swaps : int, default=100
        Number of swap rounds
    local_max_iter : int, default=100
        Iteration cap of the Lloyd run inside every round
    local_search : LocalSearch, optional
        Local search to use; built from the other arguments when omitted

    Attributes
    ----------
    swap_history_ : list of SwapRecord
        One record per round of the last run
    """

    def __init__(self,
                 n_clusters: Optional[int] = None,
                 n_swaps: int = 100,
                 local_max_iter: int = 100,
                 init: Union[str, Tensor, np.ndarray] = 'random',
                 patience: int = 3,
                 squared: bool = False,
                 max_repair_attempts: int = 100,
                 local_search: Optional[LocalSearch] = None,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float64):
        super().__init__(
            n_clusters=n_clusters,
            max_iter=local_max_iter,
            verbose=verbose,
            random_state=random_state,
            device=device,
            dtype=dtype
        )
        if n_swaps < 1:
            raise ValueError(f"n_swaps must be at least 1, got {n_swaps}")
        self.n_swaps = n_swaps
        self.init = init
        self.patience = patience
        self.squared = squared
        self.max_repair_attempts = max_repair_attempts
        self._custom_local_search = local_search

        self._create_components()
        self.swap_history_: List[SwapRecord] = []

    @property
    def local_max_iter(self) -> int:
        return self.max_iter

    def _create_components(self) -> None:
        if self._custom_local_search is not None:
            self.local_search = self._custom_local_search
            return
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
            initial_centroids: Optional[Tensor] = None,
            n_swaps: Optional[int] = None) -> KMeansResult:
        """Run random swap.

        Args:
            X: (n, d) data
            initial_centroids: (k, d) starting centroids; random distinct
                data points when omitted
            n_swaps: Number of rounds (defaults to the constructor value)

        Returns:
            KMeansResult of the best accepted state; its history is the
            running best objective after every round
        """
        X = self._validate_data(X)
        n_swaps = self.n_swaps if n_swaps is None else n_swaps
        if n_swaps < 1:
            raise InputError(f"n_swaps must be at least 1, got {n_swaps}")

        if initial_centroids is None:
            if not isinstance(self.init, str):
                initial_centroids = self.init
            elif self.n_clusters is None:
                raise InputError("n_clusters is required when no initial centroids are given")
            else:
                check_n_clusters(self.n_clusters, X.shape[0])
                initial_centroids = RandomInit().initialize(
                    X, self.n_clusters, generator=self.generator
                )

        current = validate_centroids(initial_centroids, X, self.n_clusters).clone()
        n_points = X.shape[0]
        n_clusters = current.shape[0]
        check_n_clusters(n_clusters, n_points)

        best_sse = float('inf')
        best: Optional[KMeansResult] = None
        running_best = []
        self.swap_history_ = []
        status = SearchStatus.EXHAUSTED
        start_time = time.time()

        for round_idx in range(n_swaps):
            slot = torch.randint(n_clusters, (1,), generator=self.generator).item()
            point_index = torch.randint(n_points, (1,), generator=self.generator).item()

            candidate = current.clone()
            candidate[slot] = X[point_index]

            trial = self.local_search.run(X, candidate)
            accepted = trial.sse < best_sse

            if accepted:
                best_sse = trial.sse
                best = trial
                current = trial.centroids.clone()
                self._log(f"Swap {round_idx + 1:4d}: accepted, objective = {best_sse:.6f}")
            else:
                self._log(f"Swap {round_idx + 1:4d}: rejected ({trial.sse:.6f})", level=2)

            running_best.append(best_sse)
            self.swap_history_.append(SwapRecord(
                round=round_idx,
                slot=slot,
                point_index=point_index,
                candidate_sse=trial.sse,
                accepted=accepted,
                best_sse=best_sse
            ))

            if best_sse == 0.0:
                status = SearchStatus.CONVERGED
                break

        self._log(f"Random swap finished in {time.time() - start_time:.3f}s")

        return KMeansResult(
            sse=best_sse,
            partition=best.partition,
            centroids=best.centroids,
            n_iter=len(running_best),
            status=status,
            history=running_best
        )

    def _search(self, X: Tensor) -> KMeansResult:
        return self.run(X)

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params['local_max_iter'] = params.pop('max_iter')
        params.update({
            'n_swaps': self.n_swaps,
            'init': self.init,
            'patience': self.patience,
            'squared': self.squared,
            'max_repair_attempts': self.max_repair_attempts,
            'local_search': self._custom_local_search
        })
        return params

    def set_params(self, **params) -> 'SwapSearch':
        if 'local_max_iter' in params:
            params['max_iter'] = params.pop('local_max_iter')
        if 'local_search' in params:
            self._custom_local_search = params.pop('local_search')
        super().set_params(**params)
        self._create_components()
        return self
