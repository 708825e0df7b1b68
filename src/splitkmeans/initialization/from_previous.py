"""
Initialization from a previous solution or custom centers.

Useful for warm starts and for reproducing a known starting point.
"""

from typing import Optional, Union
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import KMeansResult
from ..utils.validation import validate_centroids


class FromPreviousInit(InitializationStrategy):
    """Initialize from previous cluster centers.

    Accepts either a (n_clusters, dimension) array of centers or a
    KMeansResult from an earlier search.
    """

    def __init__(self, initial_state: Union[Tensor, np.ndarray, list, KMeansResult]):
        """
        Args:
            initial_state: Previous solution to use for initialization
        """
        self.initial_state = initial_state

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Return a validated copy of the stored centers.

        Raises:
            InputError: If the stored centers do not match points or n_clusters
        """
        if isinstance(self.initial_state, KMeansResult):
            centers = self.initial_state.centroids
        else:
            centers = self.initial_state

        return validate_centroids(centers, points, n_clusters).clone()
