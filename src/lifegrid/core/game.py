"""Generation bookkeeping around a toroidal Game of Life grid."""

from typing import Any, Deque, Dict, Optional, Tuple
from collections import deque
import logging

import numpy as np

from .grid import Grid, RandomSource

logger = logging.getLogger(__name__)


class GameOfLife:
    """Conway's Game of Life simulation.

    Owns one :class:`Grid` and advances it one tick per :meth:`step`, while
    tracking the generation number, population history and cycles.
    """

    def __init__(self, grid: Grid) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The grid to simulate
        """
        self.grid = grid
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[bytes] = deque(maxlen=1000)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self._check_for_cycles()

        self.grid.tick()

        self._generation += 1
        self._update_population_history()

    def run(self, generations: int) -> None:
        """Advance the simulation by a fixed number of generations."""
        for _ in range(generations):
            self.step()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Record the committed state and flag a cycle if it was seen before."""
        if self._cycle_detected:
            return

        current_state = self.grid.cells.tobytes()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            logger.info(
                "Cycle of length %d detected at generation %d (started at %d)",
                self._cycle_length,
                self._generation,
                first_occurrence,
            )
            return

        self._seen_states[current_state] = self._generation
        self._state_history.append(current_state)

        # Forget the oldest state once the window is nearly full
        if len(self._state_history) > 900:
            old_state = self._state_history[0]
            if self._seen_states.get(old_state) == self._generation - len(self._state_history) + 1:
                del self._seen_states[old_state]

    def reset(self, threshold: Optional[float] = None, rng: RandomSource = None) -> None:
        """Reset the simulation.

        Args:
            threshold: If given, reseed the grid with this probability;
                otherwise the grid is cleared
            rng: Random source used when reseeding
        """
        if threshold is None:
            self.grid.clear()
        else:
            self.grid.randomize(threshold, rng)

        self._generation = 0
        self._population_history.clear()
        self.clear_cycle_detection()
        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Forget seen states, e.g. after the grid was edited by hand."""
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                return self._generation, "cycle"

            if self.population == 0:
                return self._generation, "extinction"

        return self._generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate average population change per generation over a recent window."""
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict[str, Any]:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        return {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": self.grid.shape,
            "population_density": self.population / len(self.grid),
        }
