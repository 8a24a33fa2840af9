"""Snake body, direction buffering, and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

from snake_arcade.grid import GridModel, Position


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    RIGHT = (1, 0)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    UP = (0, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return Direction((-self.dx, -self.dy))

    def is_opposite(self, other: Direction) -> bool:
        """True if *other* points the exact other way."""
        return other is self.opposite


class Collision(enum.Enum):
    """What the head ran into."""

    WALL = "wall"
    SELF = "self"


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of a look-ahead move."""

    new_head: Position
    collision: Collision | None = None


class SnakeState:
    """A snake as an ordered deque of positions.

    The head is ``body[0]``; the tail is ``body[-1]``. ``direction`` is the
    direction applied on the last move and ``buffered`` is the latest
    accepted request, which stays in place until replaced.
    """

    def __init__(
        self,
        body: Iterable[Position],
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.body: deque[Position] = deque(Position(*p) for p in body)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        if len(set(self.body)) != len(self.body):
            raise ValueError("Snake segments must not overlap.")
        self.direction = direction
        self.buffered = direction

    @classmethod
    def centered(cls, grid: GridModel, length: int = 3) -> SnakeState:
        """Lay a snake out horizontally around the grid centre, heading right."""
        mid = grid.size // 2
        body = [Position(mid - 1 - i, mid) for i in range(length)]
        if not all(grid.in_bounds(p) for p in body):
            raise ValueError("Snake does not fit the grid.")
        return cls(body, Direction.RIGHT)

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def segments(self) -> tuple[Position, ...]:
        return tuple(self.body)

    def occupied(self) -> set[Position]:
        return set(self.body)

    def buffer_direction(self, requested: Direction) -> bool:
        """Record *requested* as the next direction.

        Immediate reversals are refused while the snake has a body to
        reverse into; the previous buffered value is kept in that case.
        """
        if len(self.body) > 1 and self.direction.is_opposite(requested):
            return False
        self.buffered = requested
        return True

    def resolve_direction(self) -> Direction:
        """Pick the direction for this move and remember it as applied."""
        if len(self.body) == 1 or not self.direction.is_opposite(self.buffered):
            self.direction = self.buffered
        return self.direction

    def advance(self, applied: Direction, grid: GridModel) -> AdvanceResult:
        """Compute the next head and report any collision without moving.

        The self check runs against the whole current body, tail included,
        so moving into the cell the tail is about to leave is fatal.
        """
        head = self.head
        new_head = Position(head.x + applied.dx, head.y + applied.dy)
        if not grid.in_bounds(new_head):
            return AdvanceResult(new_head, Collision.WALL)
        if new_head in self.body:
            return AdvanceResult(new_head, Collision.SELF)
        return AdvanceResult(new_head)

    def grow(self, new_head: Position) -> None:
        """Prepend the head and keep the tail."""
        self.body.appendleft(new_head)

    def move_without_growth(self, new_head: Position) -> Position:
        """Prepend the head and drop the tail. Returns the vacated cell."""
        self.body.appendleft(new_head)
        return self.body.pop()

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": list(self.direction.value),
        }
