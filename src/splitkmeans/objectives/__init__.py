"""Clustering objectives and per-cluster error measures."""

from .sse import SSEObjective, sse, cluster_sse, cluster_sse_all, mse

__all__ = [
    'SSEObjective',
    'sse',
    'cluster_sse',
    'cluster_sse_all',
    'mse'
]
