"""Driver loops and renderers built on the grid engine."""
