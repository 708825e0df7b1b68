"""Assignment strategies."""

from .nearest import NearestCentroidAssignment

__all__ = [
    'NearestCentroidAssignment'
]
