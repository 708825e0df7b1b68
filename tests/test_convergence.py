# tests/test_convergence.py
"""
Stagnation criterion of the Lloyd loop.

Covers:
- exact-equality repeats counted up to patience
- any change resets the count
- reset() clears state between runs
"""

import pytest

from splitkmeans.utils.convergence import StagnantObjective


def _feed(crit, values):
    return [crit.check({'objective': v, 'iteration': i}) for i, v in enumerate(values)]


def test_stops_after_patience_repeats():
    crit = StagnantObjective(patience=3)
    assert _feed(crit, [5.0, 4.0, 4.0, 4.0, 4.0]) == [False, False, False, False, True]
    assert crit.stable_count == 3


def test_change_resets_count():
    crit = StagnantObjective(patience=2)
    assert _feed(crit, [3.0, 3.0, 2.5, 2.5, 2.5]) == [False, False, False, False, True]
    assert [h['stable_count'] for h in crit.history] == [0, 1, 0, 1, 2]


def test_tiny_change_is_not_stagnation():
    crit = StagnantObjective(patience=1)
    assert _feed(crit, [1.0, 1.0 + 1e-12]) == [False, False]


def test_reset_clears_state():
    crit = StagnantObjective(patience=1)
    _feed(crit, [2.0, 2.0])
    crit.reset()
    assert crit.history == []
    assert crit.stable_count == 0
    assert _feed(crit, [2.0]) == [False]


def test_patience_must_be_positive():
    with pytest.raises(ValueError):
        StagnantObjective(patience=0)
