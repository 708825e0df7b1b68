"""Search strategies."""

from .lloyd import LocalSearch
from .restart import RestartSearch
from .swap import SwapSearch
from .split import SplitSearch

__all__ = [
    'LocalSearch',
    'RestartSearch',
    'SwapSearch',
    'SplitSearch'
]
