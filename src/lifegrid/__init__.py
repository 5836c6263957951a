"""Conway's Game of Life on a fixed-size toroidal grid."""

__version__ = "0.1.0"

from .core.grid import Cell, Grid, InvalidConfigurationError, new_grid, next_state
from .core.game import GameOfLife
from .config import SimulationConfig

__all__ = ["Cell", "Grid", "InvalidConfigurationError", "new_grid", "next_state", "GameOfLife", "SimulationConfig"]
