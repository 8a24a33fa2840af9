"""Snake Arcade — single-player snake game engine."""

from snake_arcade.clock import GameClock, ManualScheduler, SpeedRamp, speed_label
from snake_arcade.config import GameConfig
from snake_arcade.food import FoodSpawner
from snake_arcade.grid import GRID_SIZES, GridModel, Position
from snake_arcade.session import GameSession, GridChange, SessionState, Snapshot
from snake_arcade.snake import Collision, Direction, SnakeState
from snake_arcade.themes import Palette, Theme

__all__ = [
    "GRID_SIZES",
    "Collision",
    "Direction",
    "FoodSpawner",
    "GameClock",
    "GameConfig",
    "GameSession",
    "GridChange",
    "GridModel",
    "ManualScheduler",
    "Palette",
    "Position",
    "SessionState",
    "SnakeState",
    "Snapshot",
    "SpeedRamp",
    "Theme",
    "speed_label",
]
