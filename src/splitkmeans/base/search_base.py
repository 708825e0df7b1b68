"""
Base class for the search strategies.

Provides the shared estimator surface (fit / predict / fitted attributes),
input validation and the per-instance random source.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor

from .data_structures import KMeansResult
from ..assignments.nearest import NearestCentroidAssignment
from ..utils.validation import validate_data, check_random_state


class BaseSearch:
    """Base class for k-means search strategies.

    Subclasses implement ``_search`` and expose a strategy-specific ``run``.
    """

    def __init__(self,
                 n_clusters: Optional[int] = None,
                 max_iter: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float64):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Iteration cap of each Lloyd run
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or torch.Generator; None draws a fresh seed
            device: Torch device (None for auto-detect)
            dtype: Floating point type used for data and centroids
        """
        if max_iter < 1:
            raise ValueError(f"max_iter must be at least 1, got {max_iter}")

        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.verbose = verbose
        self.random_state = random_state
        self.dtype = dtype

        if device is None:
            self.device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')
        else:
            self.device = device

        self.generator = check_random_state(random_state)

        self.fitted_ = False
        self.result_: Optional[KMeansResult] = None

    @abstractmethod
    def _search(self, X: Tensor) -> KMeansResult:
        """Run the strategy with its configured parameters on validated data."""
        pass

    def fit(self, X: Tensor, y: Optional[Tensor] = None) -> 'BaseSearch':
        """Run the search and store the result.

        Args:
            X: (n, d) data
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        X = self._validate_data(X)
        self.result_ = self._search(X)
        self.fitted_ = True
        return self

    def fit_predict(self, X: Tensor, y: Optional[Tensor] = None) -> Tensor:
        """Fit and return the partition of the training data."""
        self.fit(X)
        return self.labels_

    def predict(self, X: Tensor) -> Tensor:
        """Assign new points to the nearest fitted centroid.

        Args:
            X: (n, d) data tensor

        Returns:
            (n,) tensor of cluster indices
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        X = self._validate_data(X)
        return NearestCentroidAssignment().nearest(X, self.result_.centroids)

    def _validate_data(self, X: Tensor) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, dtype=self.dtype, device=self.device)

    def _log(self, message: str, level: int = 1) -> None:
        if self.verbose >= level:
            print(message)

    @property
    def cluster_centers_(self) -> Tensor:
        """Centroids of the best state found."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.centroids

    @property
    def labels_(self) -> Tensor:
        """Partition of the training data in the best state found."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.partition

    @property
    def inertia_(self) -> float:
        """Best objective value found."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.sse

    @property
    def n_iter_(self) -> int:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.n_iter

    @property
    def history_(self) -> List[float]:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.history

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device,
            'dtype': self.dtype
        }

    def set_params(self, **params) -> 'BaseSearch':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            setattr(self, key, value)
        if 'random_state' in params:
            self.generator = check_random_state(params['random_state'])
        return self
