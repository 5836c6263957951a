#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

import numpy as np

from lifegrid import GameOfLife, Grid, new_grid


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    # A glider on a small torus wraps back to where it started
    grid = Grid(8, 8)
    for x, y in [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]:
        grid.set_cell(x, y, True)
    game = GameOfLife(grid)

    print("Initial state:")
    print(grid)
    print()

    for _ in range(4):
        game.step()
    print(f"Generation {game.generation} (moved one cell diagonally):")
    print(grid)
    print()

    # A reproducible random grid, read back cell by cell like a renderer would
    grid = new_grid(12, 24, threshold=0.15, rng=np.random.default_rng(2024))
    game = GameOfLife(grid)
    final_generation, reason = game.run_until_stable(500)
    live = [cell.position for cell in grid if cell.alive]
    print(f"Random grid finished after {final_generation} generations ({reason}), {len(live)} live cells")

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        if key != "population_history":
            print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
