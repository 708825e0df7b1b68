"""Base classes and interfaces for the split-kmeans search strategies."""

from .interfaces import (
    AssignmentStrategy,
    ParameterUpdater,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    KMeansResult,
    SearchStatus,
    SwapRecord,
    SplitRecord
)

from .search_base import BaseSearch

__all__ = [
    # Interfaces
    'AssignmentStrategy',
    'ParameterUpdater',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'KMeansResult',
    'SearchStatus',
    'SwapRecord',
    'SplitRecord',

    # Base search
    'BaseSearch'
]
