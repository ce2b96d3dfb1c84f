"""Per-brush state consumed by a structure selection panel."""

from __future__ import annotations

from dataclasses import dataclass

from roomplanner.config import Catalog, StructureConfig
from roomplanner.constants import MAX_RCL
from roomplanner.core.settings import Settings
from roomplanner.core.terrain import TerrainKind
from roomplanner.systems.placement_rules import PlacementVerdict, evaluate
from roomplanner.systems.room_state import RoomState


@dataclass(frozen=True)
class BrushState:
    key: str
    display_name: str
    image: str
    total: int
    placed: int
    required_level: int
    disabled: bool
    error: bool
    locked: bool
    selected: bool
    verdict: PlacementVerdict

    @property
    def remaining(self) -> int:
        return self.total - self.placed

    @property
    def label(self) -> str:
        if self.locked:
            return f"RCL {self.required_level}"
        return f"{self.placed} / {self.total}"

    @property
    def tooltip(self) -> str:
        return f"{self.remaining} Remaining"


def brush_state(
    entry: StructureConfig,
    room: RoomState,
    settings: Settings,
    terrain: TerrainKind = TerrainKind.PLAIN,
) -> BrushState:
    placed = room.placed_count(entry.key)
    verdict = evaluate(entry, settings.rcl, placed, terrain)
    error = verdict.over_capacity
    return BrushState(
        key=entry.key,
        display_name=entry.display_name,
        image=entry.image,
        total=entry.total,
        placed=placed,
        required_level=entry.required_level,
        disabled=not verdict.allowed,
        error=error,
        locked=not error and not verdict.level_ok,
        selected=settings.brush == entry.key,
        verdict=verdict,
    )


def brush_states(
    catalog: Catalog,
    room: RoomState,
    settings: Settings,
    terrain: TerrainKind = TerrainKind.PLAIN,
) -> list[BrushState]:
    return [brush_state(entry, room, settings, terrain) for entry in catalog]


def level_choices() -> list[int]:
    return list(range(1, MAX_RCL + 1))
