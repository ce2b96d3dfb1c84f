"""Tile index <-> (x, y) conversion for the fixed-size room grid."""

from __future__ import annotations

from dataclasses import dataclass

from roomplanner.constants import ROOM_SIZE, ROOM_TILES


@dataclass(frozen=True)
class TilePosition:
    x: int
    y: int


def tile_index(x: int, y: int) -> int:
    if not (0 <= x < ROOM_SIZE and 0 <= y < ROOM_SIZE):
        raise ValueError(f"Position out of room bounds: ({x}, {y})")
    return y * ROOM_SIZE + x


def tile_position(tile: int) -> TilePosition:
    check_tile(tile)
    y, x = divmod(tile, ROOM_SIZE)
    return TilePosition(x=x, y=y)


def check_tile(tile: int) -> int:
    if not 0 <= tile < ROOM_TILES:
        raise ValueError(f"Tile index out of range: {tile}")
    return tile
