"""Per-tile terrain classification for the room."""

from __future__ import annotations

from enum import Enum

from roomplanner.constants import ROOM_TILES, TERRAIN_MASK_SWAMP, TERRAIN_MASK_WALL
from roomplanner.core.tiles import check_tile


class TerrainKind(str, Enum):
    PLAIN = "plain"
    SWAMP = "swamp"
    WALL = "wall"

    @classmethod
    def from_mask(cls, mask: int) -> "TerrainKind":
        if mask & TERRAIN_MASK_WALL:
            return cls.WALL
        if mask & TERRAIN_MASK_SWAMP:
            return cls.SWAMP
        return cls.PLAIN


DEFAULT_TERRAIN = TerrainKind.PLAIN


class TerrainStore:
    """Sparse terrain map; tiles without an entry read as plain."""

    def __init__(self) -> None:
        self._terrain: dict[int, TerrainKind] = {}

    def get(self, tile: int) -> TerrainKind:
        return self._terrain.get(tile, DEFAULT_TERRAIN)

    def set(self, tile: int, kind: TerrainKind) -> None:
        check_tile(tile)
        if kind == DEFAULT_TERRAIN:
            self._terrain.pop(tile, None)
        else:
            self._terrain[tile] = TerrainKind(kind)

    def wipe(self) -> None:
        self._terrain = {}

    def replace(self, terrain: dict[int, TerrainKind]) -> None:
        """Swap in a whole new terrain map after validating every entry."""
        replacement: dict[int, TerrainKind] = {}
        for tile, kind in terrain.items():
            check_tile(tile)
            kind = TerrainKind(kind)
            if kind != DEFAULT_TERRAIN:
                replacement[tile] = kind
        self._terrain = replacement

    def load_encoded(self, encoded: str) -> None:
        self._terrain = parse_encoded(encoded)

    def items(self) -> dict[int, TerrainKind]:
        return dict(self._terrain)

    def __len__(self) -> int:
        return len(self._terrain)


TERRAIN_MASKS = "0123"


def parse_encoded(encoded: str) -> dict[int, TerrainKind]:
    """Decode the game's terrain string into a sparse terrain map.

    The string holds one mask digit per tile in row-major order. Wall
    takes precedence over swamp when both bits are set.
    """
    encoded = encoded.strip()
    if len(encoded) != ROOM_TILES:
        raise ValueError(f"Terrain string must have {ROOM_TILES} characters, got {len(encoded)}")
    terrain: dict[int, TerrainKind] = {}
    for tile, char in enumerate(encoded):
        if char not in TERRAIN_MASKS:
            raise ValueError(f"Invalid terrain mask {char!r} at tile {tile}")
        kind = TerrainKind.from_mask(int(char))
        if kind != DEFAULT_TERRAIN:
            terrain[tile] = kind
    return terrain
