"""Advisory sound cues for game events."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class SoundEvent(enum.Enum):
    """Game events that have a sound cue."""

    START = "start"
    FOOD = "food"
    GAME_OVER = "game_over"
    PAUSE = "pause"
    RESUME = "resume"


@dataclass(frozen=True)
class Tone:
    """A simple beep: frequency in Hz, duration in seconds, volume 0..1."""

    frequency: float
    duration: float
    volume: float


TONES: dict[SoundEvent, Tone] = {
    SoundEvent.START: Tone(660, 0.06, 0.08),
    SoundEvent.FOOD: Tone(880, 0.05, 0.08),
    SoundEvent.GAME_OVER: Tone(220, 0.12, 0.14),
    SoundEvent.PAUSE: Tone(330, 0.04, 0.04),
    SoundEvent.RESUME: Tone(660, 0.04, 0.06),
}


class AudioPort(Protocol):
    def notify(self, event: SoundEvent) -> None: ...


def _log_tone(tone: Tone) -> None:
    logger.debug(
        "beep %.0f Hz for %.2fs at volume %.2f",
        tone.frequency, tone.duration, tone.volume,
    )


class Audio:
    """Maps events to tones and hands them to a sink unless muted."""

    def __init__(
        self,
        sound_on: bool = True,
        sink: Callable[[Tone], None] | None = None,
    ) -> None:
        self.muted = not sound_on
        self.sink = sink if sink is not None else _log_tone

    def toggle_mute(self) -> bool:
        """Flip the mute flag and return the new value."""
        self.muted = not self.muted
        return self.muted

    def notify(self, event: SoundEvent) -> None:
        if self.muted:
            return
        self.sink(TONES[event])
