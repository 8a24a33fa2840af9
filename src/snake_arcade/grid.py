"""Grid coordinate space for the snake game."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

import numpy as np

# Board sizes offered by the size menu.
GRID_SIZES: tuple[int, ...] = (12, 16, 20, 26)

# The centred three-segment starting snake needs three cells left of centre.
MIN_GRID_SIZE = 6


class Position(NamedTuple):
    """Immutable (x, y) grid coordinate."""

    x: int
    y: int


class GridModel:
    """Square game grid of ``size`` × ``size`` cells.

    Coordinates use (x, y) ordering; x grows to the right and y grows
    downwards. The occupancy helpers return NumPy arrays indexed
    ``[y, x]`` so rows match screen rows.
    """

    def __init__(self, size: int = 20) -> None:
        validate_grid_size(size)
        self.size = size

    def in_bounds(self, pos: Position) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def random_position(self, rng: np.random.Generator) -> Position:
        """Draw a uniformly random cell."""
        x, y = rng.integers(0, self.size, size=2)
        return Position(int(x), int(y))

    def occupancy(self, positions: Iterable[Position]) -> np.ndarray:
        """Return a boolean mask marking the given in-bounds cells."""
        mask = np.zeros((self.size, self.size), dtype=bool)
        for pos in positions:
            if self.in_bounds(pos):
                mask[pos.y, pos.x] = True
        return mask

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"size": self.size}


def validate_grid_size(size: int) -> int:
    """Return *size* if it is a usable grid size, else raise ValueError."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise ValueError("Grid size must be an integer.")
    if size < MIN_GRID_SIZE:
        raise ValueError(
            f"Grid size must be at least {MIN_GRID_SIZE} so the "
            "three-segment starting snake fits.",
        )
    return size
