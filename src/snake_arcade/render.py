"""Renderer port and a plain-text board renderer."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Protocol, TextIO

import numpy as np

if TYPE_CHECKING:
    from snake_arcade.session import Snapshot

EMPTY_CHAR = "."
HEAD_CHAR = "@"
BODY_CHAR = "o"
FOOD_CHAR = "*"


class Renderer(Protocol):
    """Anything that can draw a session snapshot. Must not mutate it."""

    def draw(self, snapshot: Snapshot) -> None: ...


def render_text(snapshot: Snapshot) -> str:
    """Draw the board as text with a one-line status header."""
    size = snapshot.grid_size
    board = np.full((size, size), EMPTY_CHAR, dtype="<U1")

    if snapshot.food is not None and _visible(snapshot.food, size):
        board[snapshot.food.y, snapshot.food.x] = FOOD_CHAR
    # Tail first so the head wins on any overlap.
    for i, seg in reversed(list(enumerate(snapshot.segments))):
        if _visible(seg, size):
            board[seg.y, seg.x] = HEAD_CHAR if i == 0 else BODY_CHAR

    header = (
        f"score {snapshot.score}  best {snapshot.high_score}  "
        f"speed {snapshot.speed_label} ({snapshot.interval_ms} ms)  "
        f"[{snapshot.state.value}]"
    )
    rows = ["".join(row) for row in board]
    return "\n".join([header, *rows])


def _visible(pos: tuple[int, int], size: int) -> bool:
    return 0 <= pos[0] < size and 0 <= pos[1] < size


class TextRenderer:
    """Writes each snapshot as a text frame to a stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.frames = 0

    def draw(self, snapshot: Snapshot) -> None:
        self.stream.write(render_text(snapshot) + "\n\n")
        self.frames += 1


class RecordingRenderer:
    """Keeps every snapshot it is given."""

    def __init__(self) -> None:
        self.snapshots: list[Snapshot] = []

    def draw(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def last(self) -> Snapshot | None:
        return self.snapshots[-1] if self.snapshots else None
