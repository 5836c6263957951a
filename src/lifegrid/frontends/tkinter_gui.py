"""Tkinter window that draws each live cell as a square."""

import argparse
import logging
import sys
import tkinter as tk
from typing import Dict, Optional, Tuple

from ..config import SimulationConfig
from ..core.game import GameOfLife
from ..core.grid import InvalidConfigurationError, new_grid
from ..logging_config import setup_logging

logger = logging.getLogger(__name__)

CELL_COLOR = "#00FFFF"


class TkinterGameOfLifeGUI:
    """Tkinter-based window for the toroidal Game of Life."""

    def __init__(self, master: tk.Tk, config: Optional[SimulationConfig] = None) -> None:
        """Initialize the GUI.

        Args:
            master: Root Tkinter window
            config: Simulation settings (defaults to a 50x50 grid in a 1200x1200 window)

        Raises:
            InvalidConfigurationError: If the configuration is unusable
        """
        self.config = config or SimulationConfig()
        self.config.validate()

        self.master = master
        self.master.title("Conway's Game of Life")
        self.master.configure(bg="#333333")

        self.canvas_width = self.config.width
        self.canvas_height = self.config.height
        self.rows = self.config.rows
        self.cols = self.config.cols
        # y runs across the window, x runs down it
        self.cell_width = self.canvas_width / self.cols
        self.cell_height = self.canvas_height / self.rows

        self.rng = self.config.make_rng()
        self.grid = new_grid(self.rows, self.cols, threshold=self.config.threshold, rng=self.rng)
        self.game = GameOfLife(self.grid)

        self.running = False
        self.frame_rate = self.config.fps
        self.update_interval = max(1, int(1000 / self.frame_rate))

        # Canvas rectangle per live cell
        self.cell_objects: Dict[Tuple[int, int], int] = {}

        self.setup_ui()
        self.redraw_all_cells()
        self._after_id = self.master.after(self.update_interval, self.update_loop)

    def setup_ui(self) -> None:
        """Set up the user interface."""
        control_frame = tk.Frame(self.master, bg="#333333")
        control_frame.pack(pady=5)

        self.toggle_btn = tk.Button(
            control_frame,
            text="Run",
            command=self.toggle_running,
            bg="#555555",
            fg="white",
            font=("Arial", 9),
        )
        self.toggle_btn.pack(side=tk.LEFT, padx=3)

        self.step_btn = tk.Button(
            control_frame,
            text="Step",
            command=self.step_once,
            bg="#555555",
            fg="white",
            font=("Arial", 9),
        )
        self.step_btn.pack(side=tk.LEFT, padx=3)

        self.reseed_btn = tk.Button(
            control_frame,
            text="Reseed",
            command=self.reseed,
            bg="#444444",
            fg="white",
            font=("Arial", 9),
        )
        self.reseed_btn.pack(side=tk.LEFT, padx=3)

        self.status_label = tk.Label(control_frame, text="", bg="#333333", fg="white", font=("Arial", 9))
        self.status_label.pack(side=tk.LEFT, padx=10)

        self.canvas = tk.Canvas(
            self.master,
            width=self.canvas_width,
            height=self.canvas_height,
            bg="black",
            highlightthickness=0,
        )
        self.canvas.pack()
        self.canvas.bind("<Button-1>", self.on_click)

    def toggle_running(self) -> None:
        self.running = not self.running
        self.toggle_btn.config(text="Pause" if self.running else "Run")

    def step_once(self) -> None:
        """Advance one generation and redraw what changed."""
        self.game.step()
        self.draw_changed_cells()
        self.update_status()

    def reseed(self) -> None:
        """Reseed the grid from the configured threshold."""
        self.game.reset(threshold=self.config.threshold, rng=self.rng)
        self.redraw_all_cells()

    def on_click(self, event: tk.Event) -> None:
        """Handle mouse click on canvas."""
        self.toggle_cell_at_position(event.x, event.y)

    def toggle_cell_at_position(self, canvas_x: int, canvas_y: int) -> None:
        """Toggle the cell under a canvas pixel."""
        x = int(canvas_y // self.cell_height)
        y = int(canvas_x // self.cell_width)

        if 0 <= x < self.rows and 0 <= y < self.cols:
            self.grid.toggle_cell(x, y)
            self.game.clear_cycle_detection()
            self.draw_cell(x, y)
            self.update_status()

    def cell_bounds(self, x: int, y: int) -> Tuple[float, float, float, float]:
        """Canvas rectangle (left, top, right, bottom) covering cell (x, y)."""
        left = y * self.cell_width
        top = x * self.cell_height
        return (left, top, left + self.cell_width, top + self.cell_height)

    def draw_cell(self, x: int, y: int) -> None:
        """Draw or erase a single cell according to its committed state."""
        cell = self.grid.cell_at(x, y)
        key = cell.position

        if cell.alive:
            if key not in self.cell_objects:
                self.cell_objects[key] = self.canvas.create_rectangle(
                    *self.cell_bounds(x, y), fill=CELL_COLOR, outline=""
                )
        elif key in self.cell_objects:
            self.canvas.delete(self.cell_objects.pop(key))

    def redraw_all_cells(self) -> None:
        """Redraw all cells on the canvas."""
        self.canvas.delete("all")
        self.cell_objects.clear()

        for cell in self.grid:
            if cell.alive:
                self.draw_cell(*cell.position)

        self.update_status()

    def draw_changed_cells(self) -> None:
        """Draw only the cells that changed in the last tick."""
        for x, y in self.grid.get_changed_cells():
            self.draw_cell(x, y)

    def update_status(self) -> None:
        self.status_label.config(text=f"Generation: {self.game.generation}  Population: {self.game.population}")

    def update_loop(self) -> None:
        """Tick once per frame interval while running."""
        if self.running:
            self.step_once()

        self._after_id = self.master.after(self.update_interval, self.update_loop)

    def close(self) -> None:
        """Stop the update loop."""
        self.master.after_cancel(self._after_id)


def create_parser() -> argparse.ArgumentParser:
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(description="Run Conway's Game of Life on a toroidal grid in a window")
    parser.add_argument("-r", "--rows", type=int, default=defaults.rows, help=f"Grid rows (default: {defaults.rows})")
    parser.add_argument("-c", "--cols", type=int, default=defaults.cols, help=f"Grid columns (default: {defaults.cols})")
    parser.add_argument(
        "-t", "--threshold", type=float, default=defaults.threshold, help="Probability each cell starts alive"
    )
    parser.add_argument("--fps", type=float, default=defaults.fps, help="Ticks per second")
    parser.add_argument("--width", type=int, default=defaults.width, help="Window width in pixels")
    parser.add_argument("--height", type=int, default=defaults.height, help="Window height in pixels")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible initial grid")
    parser.add_argument("--test", action="store_true", help="Run for three seconds and exit")
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the Tkinter GUI."""
    args = create_parser().parse_args(argv)
    setup_logging(logging.INFO)

    config = SimulationConfig(
        rows=args.rows,
        cols=args.cols,
        threshold=args.threshold,
        fps=args.fps,
        width=args.width,
        height=args.height,
        seed=args.seed,
    )
    try:
        config.validate()
    except InvalidConfigurationError as e:
        print(f"Error: {e}")
        return 1

    root = tk.Tk()
    root.resizable(False, False)

    app = TkinterGameOfLifeGUI(root, config)
    app.toggle_running()

    if args.test:

        def auto_exit() -> None:
            logger.info("Test completed. Ran %d generations.", app.game.generation)
            app.close()
            root.quit()
            root.destroy()

        root.after(3000, auto_exit)

    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
