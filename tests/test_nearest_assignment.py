"""
Nearest-centroid assignment: tie-break, empty-cluster repair and input checks.
"""

import numpy as np
import pytest
import torch

from splitkmeans.assignments import NearestCentroidAssignment
from splitkmeans.exceptions import InputError
from data_gen import make_duplicates, make_lopsided


def _t(rows):
    return torch.tensor(rows, dtype=torch.float64)


def test_tie_goes_to_highest_index():
    assigner = NearestCentroidAssignment()
    points = _t([[0.0, 0.0], [-2.0, 0.0], [2.0, 0.0]])
    centroids = _t([[-1.0, 0.0], [1.0, 0.0]])

    partition, _ = assigner.compute_assignments(points, centroids)
    assert partition.tolist() == [1, 0, 1]


def test_tie_among_three_coincident_centroids():
    assigner = NearestCentroidAssignment()
    centroids = _t([[5.0, 5.0], [5.0, 5.0], [5.0, 5.0]])
    assert assigner.nearest(_t([[5.0, 5.0]]), centroids).tolist() == [2]


def test_partition_is_valid_on_random_data(rng):
    X = torch.from_numpy(rng.normal(size=(200, 3)))
    g = torch.Generator().manual_seed(0)
    centroids = X[torch.randperm(200, generator=g)[:7]].clone()

    partition, used = NearestCentroidAssignment().compute_assignments(X, centroids, generator=g)

    assert partition.dtype == torch.long
    assert partition.min().item() >= 0 and partition.max().item() < 7
    assert (torch.bincount(partition, minlength=7) > 0).all()
    # every point really sits with its nearest centroid
    D = torch.cdist(X, used) ** 2
    np.testing.assert_allclose(D[torch.arange(200), partition].numpy(), D.min(dim=1).values.numpy())


def test_empty_cluster_is_reseeded_without_touching_input():
    points = _t([[0.0, 0.0], [1.0, 0.0], [10.0, 0.0]])
    centroids = _t([[0.0, 0.0], [100.0, 0.0]])
    original = centroids.clone()

    assigner = NearestCentroidAssignment()
    g = torch.Generator().manual_seed(3)
    partition, repaired = assigner.compute_assignments(points, centroids, generator=g)

    assert torch.equal(centroids, original)
    assert assigner.n_repairs_ >= 1
    assert (torch.bincount(partition, minlength=2) > 0).all()
    # the reseeded slot now sits on a data point
    assert any(torch.equal(repaired[1], p) for p in points)


def test_repair_is_bounded_when_too_few_distinct_points():
    X = torch.from_numpy(make_duplicates([[0.0, 0.0], [1.0, 1.0]], copies=3))
    centroids = X[[0, 1, 3]].clone()  # slots 0 and 1 coincide

    assigner = NearestCentroidAssignment(max_repair_attempts=5)
    with pytest.raises(InputError, match="repair"):
        assigner.compute_assignments(X, centroids, generator=torch.Generator().manual_seed(0))


@pytest.mark.parametrize("seed", range(20))
def test_repair_finds_the_single_outlier(seed):
    X = torch.from_numpy(make_lopsided(1000))
    centroids = X[[0, 1]].clone()  # both on the origin

    assigner = NearestCentroidAssignment()
    partition, repaired = assigner.compute_assignments(
        X, centroids, generator=torch.Generator().manual_seed(seed)
    )

    assert sorted(torch.bincount(partition, minlength=2).tolist()) == [1, 1000]
    assert assigner.n_repairs_ == 1
    assert torch.equal(repaired[0], X[-1])


def test_spent_budget_does_not_fail_with_enough_distinct_points():
    X = torch.from_numpy(make_lopsided(50))
    assigner = NearestCentroidAssignment(max_repair_attempts=0)
    partition, _ = assigner.compute_assignments(X, X[[0, 1]].clone())
    assert (torch.bincount(partition, minlength=2) > 0).all()


@pytest.mark.parametrize("n_points, n_centroids", [(0, 2), (3, 0), (2, 3)])
def test_invalid_sizes_raise(n_points, n_centroids):
    points = torch.zeros(n_points, 2, dtype=torch.float64)
    centroids = torch.arange(n_centroids * 2, dtype=torch.float64).reshape(n_centroids, 2)
    with pytest.raises(InputError):
        NearestCentroidAssignment().compute_assignments(points, centroids)


def test_negative_repair_budget_rejected():
    with pytest.raises(ValueError):
        NearestCentroidAssignment(max_repair_attempts=-1)
