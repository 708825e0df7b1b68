"""
Convergence criteria for the Lloyd loop.

The stagnation check compares objective values for exact equality; there
is no tolerance.
"""

from typing import Dict, Any, Optional

from ..base.interfaces import ConvergenceCriterion


class StagnantObjective(ConvergenceCriterion):
    """Stop after the objective repeats itself ``patience`` times in a row."""

    def __init__(self, patience: int = 3):
        """
        Args:
            patience: Consecutive iterations whose objective equals the
                previous one before declaring convergence
        """
        super().__init__()
        if patience < 1:
            raise ValueError(f"patience must be at least 1, got {patience}")
        self.patience = patience
        self._prev_objective: Optional[float] = None
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the objective has stopped changing."""
        current_objective = current_state['objective']

        if self._prev_objective is not None and current_objective == self._prev_objective:
            self._stable_count += 1
        else:
            self._stable_count = 0

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'objective': current_objective,
            'stable_count': self._stable_count
        })

        self._prev_objective = current_objective

        return self._stable_count >= self.patience

    @property
    def stable_count(self) -> int:
        return self._stable_count

    def reset(self):
        super().reset()
        self._prev_objective = None
        self._stable_count = 0