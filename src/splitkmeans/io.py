"""
Plain-text dataset and result files.

Datasets and centroid files hold one point per line with whitespace
separated coordinates; the dimension is taken from the first row. Partition
files hold one cluster index per line.
"""

from pathlib import Path
from typing import Union
import warnings
import numpy as np
import torch
from torch import Tensor

from .exceptions import InputError

PathLike = Union[str, Path]


def _load_matrix(path: PathLike, dtype: torch.dtype) -> Tensor:
    path = Path(path)
    try:
        with warnings.catch_warnings():
            # numpy warns on empty input; emptiness is reported below
            warnings.simplefilter('ignore', UserWarning)
            data = np.loadtxt(path, dtype=np.float64, ndmin=2)
    except OSError as exc:
        raise InputError(f"Cannot read '{path}': {exc}") from exc
    except ValueError as exc:
        raise InputError(f"Malformed numeric data in '{path}': {exc}") from exc

    if data.size == 0:
        raise InputError(f"No data points in '{path}'")

    return torch.from_numpy(data).to(dtype)


def load_dataset(path: PathLike, dtype: torch.dtype = torch.float64) -> Tensor:
    """Read a whitespace-separated dataset into an (n, d) tensor.

    Raises:
        InputError: If the file is missing, empty, or has ragged rows
    """
    return _load_matrix(path, dtype)


def load_centroids(path: PathLike, dtype: torch.dtype = torch.float64) -> Tensor:
    """Read a centroid file (same format as a dataset)."""
    return _load_matrix(path, dtype)


def load_partition(path: PathLike) -> Tensor:
    """Read a partition file into an (n,) long tensor."""
    path = Path(path)
    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', UserWarning)
            labels = np.loadtxt(path, dtype=np.int64, ndmin=1)
    except OSError as exc:
        raise InputError(f"Cannot read '{path}': {exc}") from exc
    except ValueError as exc:
        raise InputError(f"Malformed partition file '{path}': {exc}") from exc

    if labels.size == 0:
        raise InputError(f"No labels in '{path}'")
    return torch.from_numpy(labels)


def write_centroids(path: PathLike, centroids: Tensor) -> None:
    """Write one centroid per line, coordinates separated by spaces."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(path, centroids.detach().cpu().numpy(), fmt='%f', delimiter=' ')


def write_partition(path: PathLike, partition: Tensor) -> None:
    """Write one cluster index per line."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(path, partition.detach().cpu().numpy().astype(np.int64), fmt='%d')
