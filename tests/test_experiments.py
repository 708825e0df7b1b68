import pytest

from splitkmeans import RestartSearch, run_experiment, format_statistics


def test_statistics_with_ground_truth(blobs):
    X, _, C = blobs
    search = RestartSearch(n_clusters=4, n_repeats=3, random_state=0)
    stats = run_experiment(search.run, X, ground_truth=C, loop_count=3)

    assert stats.n_runs == 3
    assert len(stats.sse_values) == len(stats.ci_values) == len(stats.time_values) == 3
    assert stats.sse_mean == pytest.approx(sum(stats.sse_values) / 3)
    assert stats.ci_mean == pytest.approx(sum(stats.ci_values) / 3)
    assert stats.success_rate == sum(ci == 0 for ci in stats.ci_values) / 3
    assert stats.best_result.sse == min(stats.sse_values)

    line = format_statistics("repeated", stats)
    assert line.startswith("repeated: runs = 3")
    assert "CI =" in line and "success =" in line


def test_statistics_without_ground_truth(square_dataset):
    search = RestartSearch(n_clusters=2, n_repeats=1, random_state=0)
    stats = run_experiment(search.run, square_dataset, loop_count=2)

    assert stats.ci_mean is None and stats.success_rate is None
    assert stats.ci_values == []
    assert "CI" not in format_statistics("repeated", stats)


def test_loop_count_must_be_positive(square_dataset):
    with pytest.raises(ValueError):
        run_experiment(RestartSearch(n_clusters=2).run, square_dataset, loop_count=0)
