"""Placed structures indexed both by kind and by tile."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from roomplanner.core.tiles import check_tile
from roomplanner.systems.placement_rules import PlacementVerdict, Rejection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    tile: int
    key: str | None
    reasons: tuple[Rejection, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.reasons


class RoomState:
    """Owns the structures-by-kind and grid-by-tile maps.

    The two maps are only mutated here so they always describe the same set
    of (tile, kind) placements.
    """

    def __init__(self) -> None:
        self._structures: dict[str, list[int]] = {}
        self._grid: dict[int, str] = {}

    def place(self, tile: int, key: str, verdict: PlacementVerdict) -> MutationResult:
        check_tile(tile)
        if tile in self._grid:
            return MutationResult(tile=tile, key=key, reasons=(Rejection.TILE_OCCUPIED,))
        if verdict.key != key:
            raise ValueError(f"Verdict for {verdict.key} cannot place {key}")
        if verdict.placed != self.placed_count(key):
            raise ValueError(
                f"Stale verdict for {key}: computed for {verdict.placed} placed, room has {self.placed_count(key)}"
            )
        if not verdict.allowed:
            return MutationResult(tile=tile, key=key, reasons=verdict.reasons)

        self._structures.setdefault(key, []).append(tile)
        self._grid[tile] = key
        logger.debug("placed %s at tile %d", key, tile)
        return MutationResult(tile=tile, key=key)

    def remove(self, tile: int) -> MutationResult:
        check_tile(tile)
        key = self._grid.get(tile)
        if key is None:
            return MutationResult(tile=tile, key=None, reasons=(Rejection.TILE_EMPTY,))

        tiles = self._structures[key]
        tiles.remove(tile)
        if not tiles:
            del self._structures[key]
        del self._grid[tile]
        logger.debug("removed %s from tile %d", key, tile)
        return MutationResult(tile=tile, key=key)

    def wipe_structures(self) -> None:
        self._structures = {}
        self._grid = {}

    def load(self, structures: dict[str, list[int]]) -> None:
        """Replace every placement in one step.

        Counts are taken as given, so an imported layout may exceed a
        structure's capacity. A tile claimed twice is rejected and leaves the
        current state untouched.
        """
        new_structures: dict[str, list[int]] = {}
        new_grid: dict[int, str] = {}
        for key, tiles in structures.items():
            for tile in tiles:
                check_tile(tile)
                if tile in new_grid:
                    raise ValueError(f"Tile {tile} claimed by both {new_grid[tile]} and {key}")
                new_grid[tile] = key
                new_structures.setdefault(key, []).append(tile)
        self._structures = new_structures
        self._grid = new_grid

    def placed_count(self, key: str) -> int:
        return len(self._structures.get(key, ()))

    def structure_at(self, tile: int) -> str | None:
        return self._grid.get(tile)

    def tiles(self, key: str) -> list[int]:
        return list(self._structures.get(key, ()))

    def counts(self) -> dict[str, int]:
        return {key: len(tiles) for key, tiles in self._structures.items()}

    def structures(self) -> dict[str, list[int]]:
        return {key: list(tiles) for key, tiles in self._structures.items()}

    def grid(self) -> dict[int, str]:
        return dict(self._grid)

    def is_consistent(self) -> bool:
        seen: dict[int, str] = {}
        for key, tiles in self._structures.items():
            for tile in tiles:
                if tile in seen:
                    return False
                seen[tile] = key
        return seen == self._grid

    def __len__(self) -> int:
        return len(self._grid)
