"""Colour palettes offered to renderers."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Palette:
    """The four colours a board is drawn with."""

    background: str
    head: str
    body: str
    food: str

    def to_dict(self) -> dict:
        return asdict(self)


class Theme(enum.Enum):
    """Selectable board themes."""

    NEON = "neon"
    CLASSIC = "classic"
    RETRO = "retro"

    @property
    def palette(self) -> Palette:
        return _PALETTES[self]

    @classmethod
    def from_name(cls, name: str | Theme) -> Theme:
        """Look up a theme by case-insensitive name. Raises ValueError."""
        if isinstance(name, Theme):
            return name
        try:
            return cls(str(name).lower())
        except ValueError:
            raise ValueError(f"Unknown theme {name!r}.") from None

    @classmethod
    def parse(cls, name: str | Theme) -> Theme:
        """Like :meth:`from_name`, falling back to NEON."""
        try:
            return cls.from_name(name)
        except ValueError:
            return cls.NEON


_PALETTES: dict[Theme, Palette] = {
    Theme.NEON: Palette("#081226", "#84F3C9", "#06B6D4", "#FB7185"),
    Theme.CLASSIC: Palette("#0b1220", "#4ade80", "#10b981", "#ef4444"),
    Theme.RETRO: Palette("#121212", "#FFD166", "#06D6A0", "#FF6B6B"),
}
