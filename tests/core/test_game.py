"""Tests for the GameOfLife class."""

from lifegrid.core.grid import Grid, new_grid
from lifegrid.core.game import GameOfLife


def make_blinker(rows: int = 10, cols: int = 10) -> Grid:
    grid = Grid(rows, cols)
    for x, y in [(5, 4), (5, 5), (5, 6)]:
        grid.set_cell(x, y, True)
    return grid


class TestGameOfLife:
    """Test cases for the GameOfLife class."""

    def test_initialization(self):
        grid = Grid(10, 10)
        game = GameOfLife(grid)

        assert game.grid is grid
        assert game.generation == 0
        assert game.population == 0
        assert game.population_history == [0]
        assert not game.cycle_detected
        assert list(game.grid.get_changed_cells()) == []
        assert game.cycle_length == 0
        assert game.cycle_start_generation == 0

    def test_step_advances_generation(self):
        game = GameOfLife(make_blinker())
        game.step()
        assert game.generation == 1
        assert set(game.grid.alive_cells()) == {(4, 5), (5, 5), (6, 5)}

    def test_run(self):
        game = GameOfLife(make_blinker())
        game.run(4)
        assert game.generation == 4
        assert game.grid == make_blinker()

    def test_still_life_block(self):
        """Test that a block pattern is stable (still life)."""
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        for x, y in [(4, 4), (4, 5), (5, 4), (5, 5)]:
            grid.set_cell(x, y, True)

        for _ in range(5):
            game.step()

        assert game.population == 4
        assert set(grid.alive_cells()) == {(4, 4), (4, 5), (5, 4), (5, 5)}
        assert game.generation == 5

    def test_extinction(self):
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        grid.set_cell(5, 5, True)

        game.step()
        assert game.population == 0
        assert game.generation == 1

    def test_population_history(self):
        grid = new_grid(12, 12, threshold=0.3, rng=4)
        game = GameOfLife(grid)

        for i in range(3):
            game.step()
            history = game.population_history
            assert len(history) == i + 2
            assert history[-1] == game.population

    def test_population_history_is_bounded(self):
        game = GameOfLife(make_blinker())
        game.run(150)
        assert len(game.population_history) == 100

    def test_cycle_detection_blinker(self):
        game = GameOfLife(make_blinker())

        for _ in range(10):
            if game.cycle_detected:
                break
            game.step()

        assert game.cycle_detected
        assert game.cycle_length == 2
        assert game.cycle_start_generation == 0

    def test_cycle_detection_still_life(self):
        grid = Grid(6, 6)
        for x, y in [(2, 2), (2, 3), (3, 2), (3, 3)]:
            grid.set_cell(x, y, True)
        game = GameOfLife(grid)

        final_generation, reason = game.run_until_stable(50)
        assert reason == "cycle"
        assert game.cycle_length == 1
        assert final_generation == 2

    def test_run_until_stable_extinction(self):
        grid = Grid(8, 8)
        grid.set_cell(3, 3, True)
        game = GameOfLife(grid)

        assert game.run_until_stable(100) == (1, "extinction")

    def test_run_until_stable_max_generations(self):
        # A glider on a large torus keeps moving for far more than 5 generations
        grid = Grid(20, 20)
        for x, y in [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]:
            grid.set_cell(x, y, True)
        game = GameOfLife(grid)

        assert game.run_until_stable(5) == (5, "max_generations")

    def test_glider_returns_after_wrapping_around(self):
        """A glider moves one cell diagonally every 4 generations and wraps around the torus."""
        grid = Grid(8, 8)
        for x, y in [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]:
            grid.set_cell(x, y, True)
        start = grid.copy()
        game = GameOfLife(grid)

        game.run(32)
        assert game.grid == start
        assert game.population == 5

    def test_reset_clears_grid(self):
        game = GameOfLife(make_blinker())
        game.run(3)

        game.reset()
        assert game.generation == 0
        assert game.population == 0
        assert game.population_history == [0]
        assert not game.cycle_detected
        assert list(game.grid.get_changed_cells()) == []

    def test_reset_reseeds_grid(self):
        game = GameOfLife(make_blinker(6, 6))
        game.run(2)

        game.reset(threshold=1.0, rng=0)
        assert game.population == 36
        assert game.generation == 0
        assert list(game.grid.get_changed_cells()) == []

    def test_clear_cycle_detection(self):
        game = GameOfLife(make_blinker())
        game.run(5)
        assert game.cycle_detected

        game.clear_cycle_detection()
        assert not game.cycle_detected
        assert game.cycle_length == 0
        assert game.generation == 5

    def test_population_change_rate(self):
        grid = Grid(10, 10)
        grid.set_cell(5, 5, True)
        grid.set_cell(5, 6, True)
        game = GameOfLife(grid)
        assert game.get_population_change_rate() == 0.0

        game.step()
        assert game.get_population_change_rate() == -2.0

    def test_statistics(self):
        game = GameOfLife(make_blinker())
        game.step()
        stats = game.get_statistics()

        assert stats["generation"] == 1
        assert stats["population"] == 3
        assert stats["grid_size"] == (10, 10)
        assert stats["population_density"] == 0.03
        assert stats["population_history"] == [3, 3]
        assert stats["cycle_detected"] is False

    def test_same_seed_same_history(self):
        first = GameOfLife(new_grid(15, 15, threshold=0.25, rng=21))
        second = GameOfLife(new_grid(15, 15, threshold=0.25, rng=21))

        first.run(30)
        second.run(30)
        assert first.grid == second.grid
        assert first.population_history == second.population_history
