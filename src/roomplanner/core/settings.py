"""Session-wide planner settings."""

from __future__ import annotations

from dataclasses import dataclass

from roomplanner.constants import MAX_RCL
from roomplanner.core.tiles import TilePosition, check_tile, tile_position


@dataclass
class Settings:
    rcl: int = MAX_RCL
    brush: str | None = None
    hover_tile: int = 0
    bottom_drawer_open: bool = False

    def __post_init__(self) -> None:
        self.set_rcl(self.rcl)
        self.set_hover(self.hover_tile)

    def set_rcl(self, level: int) -> None:
        if isinstance(level, bool) or not isinstance(level, int):
            raise ValueError(f"rcl must be an integer, got {level!r}")
        if not 1 <= level <= MAX_RCL:
            raise ValueError(f"rcl must be between 1 and {MAX_RCL}, got {level}")
        self.rcl = level

    def set_hover(self, tile: int) -> None:
        self.hover_tile = check_tile(tile)

    @property
    def hover_position(self) -> TilePosition:
        return tile_position(self.hover_tile)
