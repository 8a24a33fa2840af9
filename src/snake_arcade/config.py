"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from snake_arcade.clock import SpeedRamp
from snake_arcade.grid import validate_grid_size
from snake_arcade.themes import Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Player-facing options plus the tuning of the speed ramp.

    Supports JSON serialization so a setup can be saved and reused.
    """

    # Options menu
    grid_size: int = 20
    theme: str = "neon"
    sound_on: bool = True

    # Speed ramp
    base_interval_ms: int = 140
    min_interval_ms: int = 50
    ramp_step_ms: int = 6
    ramp_every: int = 3

    # Food placement
    spawn_attempts: int = 200

    # Persistence; None keeps the high score in memory only.
    high_score_path: str | None = None

    def __post_init__(self) -> None:
        validate_grid_size(self.grid_size)
        # Store the canonical lowercase name.
        object.__setattr__(self, "theme", Theme.from_name(self.theme).value)
        if self.spawn_attempts < 1:
            raise ValueError("spawn_attempts must be at least 1.")
        # Raises for inconsistent ramp settings.
        self.speed_ramp()

    def speed_ramp(self) -> SpeedRamp:
        return SpeedRamp(
            base_ms=self.base_interval_ms,
            min_ms=self.min_interval_ms,
            step_ms=self.ramp_step_ms,
            every=self.ramp_every,
        )

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must hold a JSON object.")
        unknown = sorted(set(raw) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown config key(s): {', '.join(unknown)}.")
        return cls(**raw)
