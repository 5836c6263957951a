"""Toroidal grid engine for Conway's Game of Life."""

from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple, Union
import logging

import numpy as np
import torch
import torch.nn.functional as F

logger = logging.getLogger(__name__)

SeedFunction = Callable[[int, int], bool]
RandomSource = Union[None, int, np.random.Generator]

# Offsets examined by live_neighbours, in order.
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, 0),
    (1, 0),
    (0, 1),
    (0, -1),
    (-1, 1),
    (1, 1),
    (-1, -1),
    (1, -1),
)

DEFAULT_THRESHOLD = 0.15


class InvalidConfigurationError(ValueError):
    """Raised when a grid or simulation is configured with unusable values."""


class Cell(NamedTuple):
    """Read-only snapshot of one committed cell."""

    position: Tuple[int, int]
    alive: bool


def next_state(alive: bool, live_neighbours: int) -> bool:
    """Apply the Game of Life transition rule to a single cell.

    Args:
        alive: Current state of the cell
        live_neighbours: Number of live neighbours (0-8)

    Returns:
        State of the cell in the next generation
    """
    if alive:
        return live_neighbours in (2, 3)
    return live_neighbours == 3


def validate_dimensions(rows: int, cols: int) -> None:
    """Reject grid dimensions that are not positive integers.

    Raises:
        InvalidConfigurationError: If either dimension is invalid
    """
    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidConfigurationError(f"{name} must be positive, got {value}")


def validate_threshold(threshold: float) -> None:
    """Reject seeding probabilities outside [0, 1].

    Raises:
        InvalidConfigurationError: If threshold is not a probability
    """
    if not 0.0 <= threshold <= 1.0:
        raise InvalidConfigurationError(f"threshold must be between 0.0 and 1.0, got {threshold}")


class Grid:
    """A fixed-size toroidal grid of cells.

    Cells are addressed as ``(x, y)`` with ``0 <= x < rows`` and
    ``0 <= y < cols``. The committed state lives in one boolean array and the
    state computed during a tick lives in a second one, so that every cell's
    transition reads only the previous generation.
    """

    def __init__(self, rows: int, cols: int) -> None:
        """Initialize an all-dead grid.

        Args:
            rows: Number of rows (range of x)
            cols: Number of columns (range of y)

        Raises:
            InvalidConfigurationError: If rows or cols is not a positive integer
        """
        validate_dimensions(rows, cols)
        self._rows = int(rows)
        self._cols = int(cols)
        self._alive = np.zeros((self._rows, self._cols), dtype=bool)
        self._alive_next = np.zeros((self._rows, self._cols), dtype=bool)
        self._previous = np.zeros((self._rows, self._cols), dtype=bool)

        # Single-threaded torch keeps tick() synchronous and bounded
        torch.set_num_threads(1)

        self._torch_input = torch.zeros(1, 1, self._rows, self._cols, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @classmethod
    def new(
        cls,
        rows: int,
        cols: int,
        threshold: float = DEFAULT_THRESHOLD,
        rng: RandomSource = None,
        seed_fn: Optional[SeedFunction] = None,
    ) -> "Grid":
        """Create a grid and seed every cell.

        Args:
            rows: Number of rows
            cols: Number of columns
            threshold: Probability that a cell starts alive
            rng: Random source (Generator, integer seed, or None for a fresh generator)
            seed_fn: Optional function ``(x, y) -> bool`` used instead of random draws

        Returns:
            The seeded grid

        Raises:
            InvalidConfigurationError: If dimensions or threshold are invalid
        """
        grid = cls(rows, cols)
        validate_threshold(threshold)
        if seed_fn is not None:
            for x in range(grid.rows):
                for y in range(grid.cols):
                    grid._alive[x, y] = bool(seed_fn(x, y))
        else:
            grid.randomize(threshold, rng)

        grid._alive_next[:] = grid._alive
        grid._previous[:] = grid._alive
        logger.debug("Created %dx%d grid with %d live cells", grid.rows, grid.cols, grid.population)
        return grid

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (rows, cols)."""
        return (self._rows, self._cols)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the committed cell states."""
        view = self._alive.view()
        view.flags.writeable = False
        return view

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._alive))

    def cell_at(self, x: int, y: int) -> Cell:
        """Get a snapshot of a committed cell.

        Raises:
            IndexError: If (x, y) lies outside the grid
        """
        if not (0 <= x < self._rows and 0 <= y < self._cols):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self._rows}x{self._cols} grid")
        return Cell((x, y), bool(self._alive[x, y]))

    def __iter__(self) -> Iterator[Cell]:
        for x in range(self._rows):
            for y in range(self._cols):
                yield Cell((x, y), bool(self._alive[x, y]))

    def __len__(self) -> int:
        return self._rows * self._cols

    def alive_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield positions of all live cells."""
        xs, ys = np.nonzero(self._alive)
        for x, y in zip(xs, ys):
            yield (int(x), int(y))

    def get_cell(self, x: int, y: int) -> bool:
        """Get the state of a cell, wrapping coordinates around the torus."""
        return bool(self._alive[x % self._rows, y % self._cols])

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the committed state of a cell, wrapping coordinates around the torus."""
        x = x % self._rows
        y = y % self._cols
        self._alive[x, y] = alive
        self._alive_next[x, y] = alive

    def toggle_cell(self, x: int, y: int) -> bool:
        """Toggle the state of a cell.

        Returns:
            New state of the cell
        """
        new_state = not self.get_cell(x, y)
        self.set_cell(x, y, new_state)
        return new_state

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._alive.fill(False)
        self._alive_next.fill(False)
        self._previous.fill(False)

    def randomize(self, threshold: float = DEFAULT_THRESHOLD, rng: RandomSource = None) -> None:
        """Seed every cell independently alive with probability ``threshold``.

        Args:
            threshold: Chance each cell will be alive (0.0 to 1.0)
            rng: Random source (Generator, integer seed, or None for a fresh generator)
        """
        validate_threshold(threshold)
        generator = np.random.default_rng(rng)
        self._alive[:] = generator.random((self._rows, self._cols)) < threshold
        self._alive_next[:] = self._alive
        self._previous[:] = self._alive

    def live_neighbours(self, x: int, y: int) -> int:
        """Count live neighbours of a cell using toroidal wraparound.

        An index that steps off one edge re-enters from the opposite one. On a
        dimension of size 1 a cell is its own neighbour in that direction.

        Args:
            x: Row coordinate
            y: Column coordinate

        Returns:
            Number of living neighbours (0-8)
        """
        count = 0
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy

            if nx == self._rows:
                nx = 0
            elif nx == -1:
                nx = self._rows - 1

            if ny == self._cols:
                ny = 0
            elif ny == -1:
                ny = self._cols - 1

            if self._alive[nx, ny]:
                count += 1

        return count

    def count_all_neighbours(self) -> np.ndarray:
        """Count live neighbours for all cells with a circular-padded convolution.

        Returns:
            Integer array of shape (rows, cols) with neighbour counts
        """
        self._torch_input[0, 0] = torch.from_numpy(self._alive.astype(np.float32))
        padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="circular")
        neighbours = F.conv2d(padded, self._torch_kernel)
        return neighbours[0, 0].numpy().astype(np.int8)

    def tick(self) -> None:
        """Advance the whole grid by exactly one generation.

        Every next state is computed into the scratch buffer from the
        committed states before any committed state is overwritten.
        """
        # Compute phase: reads only self._alive
        counts = self.count_all_neighbours()
        alive = self._alive
        survive = alive & ((counts == 2) | (counts == 3))
        birth = ~alive & (counts == 3)
        np.logical_or(survive, birth, out=self._alive_next)

        # Commit phase
        self._previous[:] = self._alive
        self._alive[:] = self._alive_next

    def get_changed_cells(self) -> Iterator[Tuple[int, int]]:
        """Get coordinates of cells whose state changed in the last tick.

        Yields:
            Tuples of (x, y) coordinates for changed cells
        """
        xs, ys = np.nonzero(self._alive != self._previous)
        for x, y in zip(xs, ys):
            yield (int(x), int(y))

    def copy(self) -> "Grid":
        """Return an independent grid with the same committed state."""
        other = Grid(self._rows, self._cols)
        other._alive[:] = self._alive
        other._alive_next[:] = self._alive
        other._previous[:] = self._alive
        return other

    def to_list(self) -> List[List[bool]]:
        """Convert committed state to a nested list indexed [x][y]."""
        return self._alive.tolist()

    def from_list(self, data: List[List[bool]]) -> None:
        """Load committed state from a nested list indexed [x][y].

        Raises:
            ValueError: If data dimensions don't match grid
        """
        arr = np.array(data, dtype=bool)
        if arr.shape != self.shape:
            raise ValueError(f"Data shape {arr.shape} doesn't match grid {self.shape}")

        self._alive[:] = arr
        self._alive_next[:] = arr
        self._previous[:] = arr

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same shape and committed state."""
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._alive, other._alive)

    def __repr__(self) -> str:
        return f"Grid(rows={self._rows}, cols={self._cols}, population={self.population})"

    def __str__(self) -> str:
        """String representation with one line per row, '*' alive and '.' dead."""
        return "\n".join("".join("*" if alive else "." for alive in row) for row in self._alive)


def new_grid(
    rows: int,
    cols: int,
    threshold: float = DEFAULT_THRESHOLD,
    rng: RandomSource = None,
    seed_fn: Optional[SeedFunction] = None,
) -> Grid:
    """Create and seed a grid. See :meth:`Grid.new`."""
    return Grid.new(rows, cols, threshold=threshold, rng=rng, seed_fn=seed_fn)
