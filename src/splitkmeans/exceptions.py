"""
Exception hierarchy for split-kmeans.

Input problems and internal inconsistencies are raised to the caller;
empty clusters found during assignment are repaired in place and never
escape the assignment step.
"""


class ClusteringError(Exception):
    """Base class for all errors raised by split-kmeans."""


class InputError(ClusteringError, ValueError):
    """Invalid input: empty data, fewer points than clusters, shape mismatch,
    or an empty-cluster repair that could not converge."""


class ConsistencyError(ClusteringError, RuntimeError):
    """A partition refers to a centroid slot that does not exist."""


class DegenerateClusterError(ClusteringError):
    """One or more centroid slots own no points after an assignment pass.

    Raised and handled inside the assignment step only.
    """

    def __init__(self, empty_slots):
        self.empty_slots = list(empty_slots)
        super().__init__(f"Empty clusters: {self.empty_slots}")
