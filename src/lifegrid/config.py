"""Simulation settings shared by the terminal and window drivers."""

from dataclasses import dataclass, asdict
import math
from typing import Any, Dict, Optional

import numpy as np

from .core.grid import DEFAULT_THRESHOLD, InvalidConfigurationError, validate_dimensions, validate_threshold


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    rows: int = 50
    cols: int = 50
    threshold: float = DEFAULT_THRESHOLD
    fps: float = 10.0
    width: int = 1200
    height: int = 1200
    seed: Optional[int] = None
    max_generations: Optional[int] = None

    def validate(self) -> None:
        """Check every field, failing on the first invalid one.

        Raises:
            InvalidConfigurationError: If any value is unusable
        """
        validate_dimensions(self.rows, self.cols)
        validate_threshold(self.threshold)
        if not (math.isfinite(self.fps) and self.fps > 0):
            raise InvalidConfigurationError(f"fps must be a positive finite number, got {self.fps}")
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfigurationError(f"window size must be positive, got {self.width}x{self.height}")
        if self.max_generations is not None and self.max_generations <= 0:
            raise InvalidConfigurationError(f"max_generations must be positive, got {self.max_generations}")

    @property
    def frame_interval(self) -> float:
        """Seconds between ticks."""
        return 1.0 / self.fps

    def make_rng(self) -> np.random.Generator:
        """Build the random source used to seed the grid."""
        return np.random.default_rng(self.seed)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
