"""
Benchmark loop for comparing search strategies.

Runs one strategy several times on the same data and aggregates the
objective, the Centroid Index against known ground truth, the success rate
(share of runs with CI = 0) and the running time.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional
import time
import torch
from torch import Tensor

from .base.data_structures import KMeansResult
from .utils.metrics import centroid_index
from .utils.validation import validate_data


@dataclass
class Statistics:
    """Aggregated results of repeated runs of one strategy."""
    n_runs: int
    sse_mean: float
    time_mean: float
    ci_mean: Optional[float] = None
    success_rate: Optional[float] = None

    sse_values: List[float] = field(default_factory=list)
    ci_values: List[int] = field(default_factory=list)
    time_values: List[float] = field(default_factory=list)
    best_result: Optional[KMeansResult] = None


def run_experiment(search: Callable[[Tensor], KMeansResult],
                   X: Tensor,
                   ground_truth: Optional[Tensor] = None,
                   loop_count: int = 10,
                   verbose: int = 0) -> Statistics:
    """Run ``search`` ``loop_count`` times and aggregate the results.

    Args:
        search: Callable taking the data and returning a KMeansResult, e.g.
            ``RestartSearch(n_clusters=15, n_repeats=100).run``
        X: (n, d) data
        ground_truth: Optional (k, d) reference centroids for CI
        loop_count: Number of independent runs
        verbose: Print one line per run when >= 1

    Returns:
        Statistics over all runs
    """
    if loop_count < 1:
        raise ValueError(f"loop_count must be at least 1, got {loop_count}")

    X = validate_data(X)
    if ground_truth is not None:
        ground_truth = validate_data(ground_truth, dtype=X.dtype, device=X.device)

    sse_values, ci_values, time_values = [], [], []
    best_result = None

    for run in range(loop_count):
        start = time.perf_counter()
        result = search(X)
        elapsed = time.perf_counter() - start

        sse_values.append(result.sse)
        time_values.append(elapsed)
        if ground_truth is not None:
            ci_values.append(centroid_index(result.centroids.to(ground_truth), ground_truth))

        if best_result is None or result.sse < best_result.sse:
            best_result = result

        if verbose:
            ci_str = f", CI = {ci_values[-1]}" if ci_values else ""
            print(f"Run {run + 1:3d}: objective = {result.sse:.6f}{ci_str} ({elapsed:.3f}s)")

    stats = Statistics(
        n_runs=loop_count,
        sse_mean=sum(sse_values) / loop_count,
        time_mean=sum(time_values) / loop_count,
        sse_values=sse_values,
        ci_values=ci_values,
        time_values=time_values,
        best_result=best_result
    )
    if ci_values:
        stats.ci_mean = sum(ci_values) / loop_count
        stats.success_rate = sum(1 for ci in ci_values if ci == 0) / loop_count

    return stats


def format_statistics(name: str, stats: Statistics) -> str:
    """One-line summary of an experiment."""
    parts = [f"{name}: runs = {stats.n_runs}",
             f"objective = {stats.sse_mean:.4f}"]
    if stats.ci_mean is not None:
        parts.append(f"CI = {stats.ci_mean:.2f}")
        parts.append(f"success = {100.0 * stats.success_rate:.1f}%")
    parts.append(f"time = {stats.time_mean:.3f}s")
    return ", ".join(parts)
