"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Container

import numpy as np

from snake_arcade.grid import GridModel, Position

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 200

# Offset of the fallback cell from the anchor on both axes.
_FALLBACK_OFFSET = 3


class FoodSpawner:
    """Places food on a random free cell using bounded retries.

    Random draws are taken from a NumPy generator. When every one of the
    ``max_attempts`` draws lands on an occupied cell the spawner gives up
    and returns a cell computed from the anchor instead; that fallback
    cell is not checked against ``occupied`` and may overlap the snake on
    a crowded board.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def spawn(
        self,
        occupied: Container[Position],
        grid: GridModel,
        anchor: Position,
    ) -> Position:
        """Return a food position, preferably outside *occupied*."""
        for _ in range(self.max_attempts):
            candidate = grid.random_position(self.rng)
            if candidate not in occupied:
                return candidate

        fallback = Position(
            (anchor.x + _FALLBACK_OFFSET) % grid.size,
            (anchor.y + _FALLBACK_OFFSET) % grid.size,
        )
        logger.warning(
            "Food spawn gave up after %d attempts; using fallback cell %s.",
            self.max_attempts, fallback,
        )
        return fallback
