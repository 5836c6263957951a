"""Core cellular automaton logic."""

from .grid import Cell, Grid, InvalidConfigurationError, new_grid, next_state
from .game import GameOfLife

__all__ = ["Cell", "Grid", "InvalidConfigurationError", "new_grid", "next_state", "GameOfLife"]
