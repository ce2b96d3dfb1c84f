"""Legality checks for placing one more unit of a structure.

The checks are pure: they look only at the catalog entry, the current
control level, how many units are already placed and the terrain of the
target tile. Each check is reported separately so callers can tell a
level lock apart from an exhausted capacity or an unbuildable tile.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from roomplanner.config import StructureConfig
from roomplanner.core.terrain import TerrainKind


class Rejection(str, Enum):
    CAPACITY_EXCEEDED = "capacity_exceeded"
    LEVEL_LOCKED = "level_locked"
    TERRAIN_UNBUILDABLE = "terrain_unbuildable"
    TILE_OCCUPIED = "tile_occupied"
    TILE_EMPTY = "tile_empty"
    UNKNOWN_STRUCTURE = "unknown_structure"


@dataclass(frozen=True)
class PlacementVerdict:
    key: str
    placed: int
    capacity_ok: bool
    level_ok: bool
    terrain_ok: bool
    over_capacity: bool
    reasons: tuple[Rejection, ...] = field(default_factory=tuple)

    @property
    def allowed(self) -> bool:
        return self.capacity_ok and self.level_ok and self.terrain_ok


def capacity_allows(entry: StructureConfig, placed: int) -> bool:
    return placed < entry.total


def level_allows(entry: StructureConfig, level: int) -> bool:
    if entry.level_exempt:
        return True
    return level >= entry.required_level


def terrain_allows(entry: StructureConfig, terrain: TerrainKind) -> bool:
    return TerrainKind(terrain) in entry.buildable_terrain


def evaluate(entry: StructureConfig, level: int, placed: int, terrain: TerrainKind) -> PlacementVerdict:
    capacity_ok = capacity_allows(entry, placed)
    level_ok = level_allows(entry, level)
    terrain_ok = terrain_allows(entry, terrain)

    reasons: list[Rejection] = []
    if not capacity_ok:
        reasons.append(Rejection.CAPACITY_EXCEEDED)
    if not level_ok:
        reasons.append(Rejection.LEVEL_LOCKED)
    if not terrain_ok:
        reasons.append(Rejection.TERRAIN_UNBUILDABLE)

    return PlacementVerdict(
        key=entry.key,
        placed=placed,
        capacity_ok=capacity_ok,
        level_ok=level_ok,
        terrain_ok=terrain_ok,
        over_capacity=placed > entry.total,
        reasons=tuple(reasons),
    )


def can_place(entry: StructureConfig, level: int, placed: int, terrain: TerrainKind) -> bool:
    return evaluate(entry, level, placed, terrain).allowed
