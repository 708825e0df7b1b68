"""
Cluster visualization utilities.

2D scatter plots of a partition with its centroids (optionally against
ground-truth centroids, which makes Centroid Index mistakes easy to spot),
and objective traces of the search strategies.
"""

from typing import Optional, Sequence, Union
from torch import Tensor
import matplotlib.pyplot as plt
import numpy as np

from ..base.data_structures import KMeansResult


def plot_clusters_2d(X: Tensor,
                     labels: Union[Tensor, KMeansResult],
                     centers: Optional[Tensor] = None,
                     ax: Optional[plt.Axes] = None,
                     ground_truth: Optional[Tensor] = None,
                     cmap: str = 'tab20',
                     point_size: int = 12,
                     show_legend: bool = False,
                     title: Optional[str] = None) -> plt.Axes:
    """Scatter a 2D dataset colored by partition.

    Args:
        X: (n, 2) data points
        labels: (n,) partition, or a KMeansResult (its centroids are drawn
            unless ``centers`` is given)
        centers: Optional (k, 2) centroids, drawn as black crosses
        ax: Matplotlib axes (created if None)
        ground_truth: Optional (k, 2) reference centroids, drawn as red
            circles
        cmap: Colormap name for the clusters
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if X.shape[1] != 2:
        raise ValueError(f"plot_clusters_2d expects 2D data, got dimension {X.shape[1]}")

    if isinstance(labels, KMeansResult):
        if centers is None:
            centers = labels.centroids
        labels = labels.partition

    if ax is None:
        _, ax = plt.subplots(figsize=(8, 6))

    points = X.detach().cpu().numpy()
    partition = labels.detach().cpu().numpy()
    colors = plt.get_cmap(cmap)

    # slots are plotted in index order; empty ones are skipped
    for slot in np.unique(partition):
        members = points[partition == slot]
        ax.scatter(members[:, 0], members[:, 1],
                   color=colors(int(slot) % colors.N),
                   s=point_size,
                   linewidth=0,
                   label=f'Cluster {slot}')

    if ground_truth is not None:
        truth = ground_truth.detach().cpu().numpy()
        ax.scatter(truth[:, 0], truth[:, 1],
                   facecolors='none', edgecolors='red',
                   marker='o', s=160, linewidth=1.5,
                   label='Ground truth', zorder=9)

    if centers is not None:
        found = centers.detach().cpu().numpy()
        ax.scatter(found[:, 0], found[:, 1],
                   c='black', marker='X', s=120,
                   label='Centroids', zorder=10)

    ax.set_aspect('equal', adjustable='datalim')
    if title:
        ax.set_title(title)
    if show_legend:
        ax.legend(loc='best', fontsize='small')

    return ax


def plot_sse_history(history: Sequence[float],
                     ax: Optional[plt.Axes] = None,
                     label: Optional[str] = None,
                     xlabel: str = 'Iteration',
                     title: Optional[str] = None) -> plt.Axes:
    """Plot an objective trace, e.g. ``KMeansResult.history``.

    Call repeatedly on the same axes to compare strategies.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 4))

    values = np.asarray(list(history), dtype=float)
    ax.step(np.arange(1, len(values) + 1), values, where='post', label=label)

    ax.set_xlabel(xlabel)
    ax.set_ylabel('Objective')

    if title:
        ax.set_title(title)
    if label:
        ax.legend()

    return ax
