"""Tests for the Tkinter GUI frontend."""

from io import StringIO
from unittest.mock import patch

import pytest
import tkinter as tk

from lifegrid.config import SimulationConfig
from lifegrid.core.grid import InvalidConfigurationError
from lifegrid.frontends.tkinter_gui import TkinterGameOfLifeGUI, create_parser, main


class TestTkinterGameOfLifeGUI:
    """Test cases for the Tkinter GUI."""

    @pytest.fixture
    def root(self):
        """Create a root Tkinter window for testing."""
        try:
            root = tk.Tk()
        except tk.TclError:
            pytest.skip("no display available")
        root.withdraw()
        yield root
        root.destroy()

    @pytest.fixture
    def config(self):
        return SimulationConfig(rows=10, cols=20, width=200, height=100, threshold=0.3, seed=8, fps=20)

    @pytest.fixture
    def gui(self, root, config):
        """Create a GUI instance for testing."""
        app = TkinterGameOfLifeGUI(root, config)
        yield app
        app.close()

    def test_initialization(self, gui):
        assert gui.rows == 10
        assert gui.cols == 20
        assert gui.cell_width == 10
        assert gui.cell_height == 10
        assert gui.update_interval == 50
        assert gui.running is False
        assert gui.game.generation == 0

    def test_invalid_config(self, root):
        with pytest.raises(InvalidConfigurationError):
            TkinterGameOfLifeGUI(root, SimulationConfig(rows=0))

    def test_live_cells_are_drawn(self, gui):
        assert set(gui.cell_objects) == set(gui.grid.alive_cells())

    def test_cell_bounds(self, gui):
        # x runs down the window, y across it
        assert gui.cell_bounds(2, 5) == (50, 20, 60, 30)

    def test_toggle_running(self, gui):
        gui.toggle_running()
        assert gui.running is True
        assert gui.toggle_btn["text"] == "Pause"

        gui.toggle_running()
        assert gui.running is False
        assert gui.toggle_btn["text"] == "Run"

    def test_step_once_redraws_changes(self, gui):
        gui.step_once()
        assert gui.game.generation == 1
        assert set(gui.cell_objects) == set(gui.grid.alive_cells())
        assert "Generation: 1" in gui.status_label["text"]

    def test_update_loop_ticks_only_while_running(self, gui):
        gui.update_loop()
        assert gui.game.generation == 0

        gui.running = True
        gui.update_loop()
        assert gui.game.generation == 1

    def test_toggle_cell_at_position(self, gui):
        gui.grid.clear()
        gui.redraw_all_cells()

        # Pixel (35, 15) lies in column 3 of row 1
        gui.toggle_cell_at_position(35, 15)
        assert gui.grid.get_cell(1, 3)
        assert (1, 3) in gui.cell_objects

        gui.toggle_cell_at_position(35, 15)
        assert not gui.grid.get_cell(1, 3)
        assert (1, 3) not in gui.cell_objects

    def test_toggle_cell_out_of_bounds(self, gui):
        population = gui.grid.population
        gui.toggle_cell_at_position(gui.canvas_width + 10, gui.canvas_height + 10)
        assert gui.grid.population == population

    def test_reseed(self, gui):
        gui.game.run(3)
        gui.reseed()

        assert gui.game.generation == 0
        assert set(gui.cell_objects) == set(gui.grid.alive_cells())


def test_create_parser_defaults():
    args = create_parser().parse_args([])
    assert (args.rows, args.cols) == (50, 50)
    assert (args.width, args.height) == (1200, 1200)
    assert args.fps == 10.0
    assert args.test is False


def test_non_finite_fps_rejected_before_window_setup():
    """The frame interval is never computed from a NaN or infinite rate."""
    for fps in [float("nan"), float("inf")]:
        with pytest.raises(InvalidConfigurationError):
            TkinterGameOfLifeGUI(None, SimulationConfig(fps=fps))


@patch("lifegrid.frontends.tkinter_gui.tk.Tk")
@patch("sys.stdout", new_callable=StringIO)
def test_main_rejects_nan_fps(mock_stdout, mock_tk):
    assert main(["--fps", "nan"]) == 1
    mock_tk.assert_not_called()
    assert "fps must be a positive finite number" in mock_stdout.getvalue()
