"""Command-line driver for the toroidal Game of Life."""

import argparse
import logging
import sys
import time
from typing import Dict, Optional, TextIO, Tuple

from ..config import SimulationConfig
from ..core.game import GameOfLife
from ..core.grid import Grid, InvalidConfigurationError, new_grid
from ..logging_config import setup_logging

logger = logging.getLogger(__name__)

ALIVE_CHAR = "*"
DEAD_CHAR = "."
CLEAR_SCREEN = "\x1b[H\x1b[2J"


class CLIGameOfLife:
    """Runs a simulation in the terminal, one text frame per tick."""

    def __init__(self, config: SimulationConfig) -> None:
        """Initialize the driver.

        Args:
            config: Simulation settings; validated eagerly

        Raises:
            InvalidConfigurationError: If the configuration is unusable
        """
        config.validate()
        self.config = config

    def build_game(self) -> GameOfLife:
        """Seed a fresh grid from the configuration and wrap it in a game."""
        grid = new_grid(
            self.config.rows,
            self.config.cols,
            threshold=self.config.threshold,
            rng=self.config.make_rng(),
        )
        logger.info(
            "Seeded %dx%d grid (threshold %.2f, seed %s): %d live cells",
            grid.rows,
            grid.cols,
            self.config.threshold,
            self.config.seed,
            grid.population,
        )
        return GameOfLife(grid)

    def animate(self, game: GameOfLife, output: Optional[TextIO] = None, clear: bool = True) -> int:
        """Tick and redraw at the configured frame rate.

        Runs until ``max_generations`` ticks have been made, or forever when
        it is unset.

        Args:
            game: Game to advance
            output: Stream the frames are written to (default: stdout)
            clear: Clear the terminal before each frame

        Returns:
            Number of generations advanced
        """
        if output is None:
            output = sys.stdout
        interval = self.config.frame_interval
        limit = self.config.max_generations
        ticks = 0

        while limit is None or ticks < limit:
            frame_start = time.monotonic()

            game.step()
            ticks += 1

            frame = self.render_frame(game)
            if clear:
                output.write(CLEAR_SCREEN)
            output.write(frame + "\n")
            output.flush()

            # Sleep off the rest of the frame
            remaining = interval - (time.monotonic() - frame_start)
            if remaining > 0:
                time.sleep(remaining)

        return ticks

    def run_simulation(self, verbose: bool = False, show_grid: bool = False) -> Tuple[int, str, Dict]:
        """Run without animation until the grid dies out, cycles, or hits the limit.

        Args:
            verbose: Print progress updates
            show_grid: Show initial and final grid states

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        game = self.build_game()
        initial_population = game.population
        max_generations = self.config.max_generations or 10000

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(game.grid))

        if verbose:
            print(f"\nRunning simulation (max {max_generations} generations)...")

        start_time = time.time()
        final_generation, reason = game.run_until_stable(max_generations)
        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid and reason != "extinction":
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_grid(game.grid))

        return final_generation, reason, stats

    def render_frame(self, game: GameOfLife) -> str:
        """Render the committed grid plus a status line."""
        status = f"Generation {game.generation}  Population {game.population}"
        return f"{self._format_grid(game.grid)}\n{status}"

    def _format_grid(self, grid: Grid, max_size: int = 200) -> str:
        """Format grid for display, truncating if too large.

        Args:
            grid: Grid to format
            max_size: Maximum dimension to display

        Returns:
            Formatted grid string
        """
        if grid.rows > max_size or grid.cols > max_size:
            return f"Grid too large to display ({grid.rows}x{grid.cols})"

        lines = [[DEAD_CHAR] * grid.cols for _ in range(grid.rows)]
        for cell in grid:
            if cell.alive:
                x, y = cell.position
                lines[x][y] = ALIVE_CHAR
        return "\n".join("".join(line) for line in lines)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life on a toroidal grid in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Animate a random 50x50 grid at 10 frames per second
  lifegrid-cli

  # Reproducible 30x80 run, 200 generations at 20 fps
  lifegrid-cli -r 30 -c 80 --seed 42 -g 200 --fps 20

  # Run without animation until the grid dies out or cycles
  lifegrid-cli --no-animate --threshold 0.3 --verbose
        """,
    )

    parser.add_argument("-r", "--rows", type=int, default=defaults.rows, help=f"Grid rows (default: {defaults.rows})")

    parser.add_argument("-c", "--cols", type=int, default=defaults.cols, help=f"Grid columns (default: {defaults.cols})")

    parser.add_argument(
        "-t",
        "--threshold",
        type=float,
        default=defaults.threshold,
        help=f"Probability each cell starts alive, 0.0-1.0 (default: {defaults.threshold})",
    )

    parser.add_argument("--fps", type=float, default=defaults.fps, help=f"Ticks per second (default: {defaults.fps:g})")

    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        default=None,
        help="Number of generations to run (default: unlimited when animating, 10000 otherwise)",
    )

    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible initial grid")

    parser.add_argument(
        "--no-animate",
        action="store_true",
        help="Skip animation and run until extinction, a cycle, or the generation limit",
    )

    parser.add_argument("--show-grid", action="store_true", help="Show initial and final grids (with --no-animate)")

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    parser.add_argument("--log-file", default=None, help="Also write log records to this file")

    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Map parsed arguments onto a SimulationConfig."""
    return SimulationConfig(
        rows=args.rows,
        cols=args.cols,
        threshold=args.threshold,
        fps=args.fps,
        seed=args.seed,
        max_generations=args.generations,
    )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    try:
        config_from_args(args).validate()
    except InvalidConfigurationError as e:
        print(f"Error: Invalid arguments: {e}")
        return False

    return True


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display.

    Args:
        reason: Finish reason from GameOfLife.run_until_stable
        stats: Statistics dictionary

    Returns:
        Formatted reason string
    """
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")
    else:
        print(
            "Population: {} -> {}, Duration: {:.3f}s, Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats.get("duration_seconds", 0),
                stats.get("generations_per_second", 0),
            )
        )


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level), args.log_file)

    if not validate_args(args):
        return 1

    try:
        cli = CLIGameOfLife(config_from_args(args))

        if args.no_animate:
            final_generation, reason, stats = cli.run_simulation(verbose=args.verbose, show_grid=args.show_grid)
            print_results(final_generation, reason, stats, args.verbose)
            return 0

        game = cli.build_game()
        ticks = cli.animate(game)
        if args.verbose:
            print(f"Ran {ticks} generations, final population {game.population}")
        return 0

    except InvalidConfigurationError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
