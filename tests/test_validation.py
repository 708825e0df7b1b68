import numpy as np
import pytest
import torch

from splitkmeans.utils.validation import (
    validate_data,
    check_n_clusters,
    check_random_state,
    validate_centroids,
    validate_partition,
)
from splitkmeans.exceptions import InputError, ConsistencyError


def test_validate_data_converts_lists_and_arrays():
    X = validate_data([[1, 2], [3, 4]])
    assert X.dtype == torch.float64 and X.shape == (2, 2)

    Y = validate_data(np.arange(3, dtype=np.float32))
    assert Y.shape == (3, 1) and Y.dtype == torch.float64


@pytest.mark.parametrize("bad", [
    [[1.0, float("nan")]],
    [[float("inf"), 0.0]],
    np.zeros((2, 2, 2)),
    np.zeros((0, 3)),
    "not data",
])
def test_validate_data_rejects(bad):
    with pytest.raises(InputError):
        validate_data(bad)


def test_ragged_list_rejected():
    with pytest.raises(InputError):
        validate_data([[1.0, 2.0], [3.0]])


@pytest.mark.parametrize("k", [0, -1, 5, 2.0, True])
def test_check_n_clusters_rejects(k):
    with pytest.raises(InputError):
        check_n_clusters(k, 4)


def test_check_random_state_seeds_deterministically():
    a = torch.randint(1000, (5,), generator=check_random_state(42))
    b = torch.randint(1000, (5,), generator=check_random_state(42))
    assert torch.equal(a, b)

    g = torch.Generator()
    assert check_random_state(g) is g

    with pytest.raises(TypeError):
        check_random_state("seed")


def test_validate_centroids_checks_dimension_and_count():
    X = torch.zeros(4, 2, dtype=torch.float64)
    with pytest.raises(InputError):
        validate_centroids([[0.0, 0.0, 0.0]], X)
    with pytest.raises(InputError):
        validate_centroids([[0.0, 0.0]], X, n_clusters=2)
    assert validate_centroids([[0.0, 1.0]], X).shape == (1, 2)


def test_validate_partition():
    assert validate_partition(torch.tensor([0, 1, 1], dtype=torch.int32), 3, 2).dtype == torch.long
    with pytest.raises(ConsistencyError):
        validate_partition(torch.tensor([0, -1]), 2, 2)
    with pytest.raises(ConsistencyError):
        validate_partition(torch.tensor([0, 1]), 3, 2)


def test_input_error_is_value_error():
    assert issubclass(InputError, ValueError)
