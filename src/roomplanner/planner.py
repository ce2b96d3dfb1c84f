"""Planning session orchestrator."""

from __future__ import annotations

from pathlib import Path
import logging

from roomplanner.config import Catalog, load_catalog
from roomplanner.core.event_bus import EventBus
from roomplanner.core.settings import Settings
from roomplanner.core.terrain import TerrainStore, parse_encoded
from roomplanner.core.tiles import TilePosition
from roomplanner.systems.control_surface import BrushState, brush_states
from roomplanner.systems.placement_rules import PlacementVerdict, Rejection, evaluate
from roomplanner.systems.room_state import MutationResult, RoomState

logger = logging.getLogger(__name__)


class RoomPlanner:
    """Engine-agnostic model behind the planner's control panel."""

    def __init__(
        self,
        data_dir: Path | None = None,
        catalog: Catalog | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.catalog = catalog or load_catalog(base_data_dir=data_dir)
        self.settings = settings or Settings()
        self.events = EventBus()
        self.room = RoomState()
        self.terrain = TerrainStore()

    def set_rcl(self, level: int) -> None:
        previous = self.settings.rcl
        self.settings.set_rcl(level)
        self.events.emit("rcl_changed", previous=previous, rcl=level)

    def select_brush(self, key: str | None) -> None:
        if key is not None and key not in self.catalog:
            raise ValueError(f"Unknown structure: {key}")
        self.settings.brush = key
        self.events.emit("brush_selected", brush=key)

    def hover(self, tile: int) -> TilePosition:
        self.settings.set_hover(tile)
        return self.settings.hover_position

    def set_bottom_drawer(self, open_: bool) -> None:
        self.settings.bottom_drawer_open = open_
        self.events.emit("bottom_drawer_toggled", open=open_)

    def verdict(self, key: str, tile: int) -> PlacementVerdict | None:
        entry = self.catalog.entry(key)
        if entry is None:
            return None
        return evaluate(entry, self.settings.rcl, self.room.placed_count(key), self.terrain.get(tile))

    def place(self, tile: int, key: str | None = None) -> MutationResult:
        key = key or self.settings.brush
        if key is None:
            raise ValueError("No structure selected")

        verdict = self.verdict(key, tile)
        if verdict is None:
            result = MutationResult(tile=tile, key=key, reasons=(Rejection.UNKNOWN_STRUCTURE,))
        else:
            result = self.room.place(tile, key, verdict)

        if result.ok:
            self.events.emit("structure_placed", key=key, tile=tile, placed=self.room.placed_count(key))
        else:
            logger.warning("rejected %s at tile %d: %s", key, tile, [r.value for r in result.reasons])
            self.events.emit("placement_rejected", key=key, tile=tile, reasons=list(result.reasons))
        return result

    def remove(self, tile: int) -> MutationResult:
        result = self.room.remove(tile)
        if result.ok:
            self.events.emit("structure_removed", key=result.key, tile=tile)
        return result

    def wipe_structures(self) -> None:
        removed = len(self.room)
        self.room.wipe_structures()
        self.events.emit("structures_wiped", removed=removed)

    def wipe_terrain(self) -> None:
        cleared = len(self.terrain)
        self.terrain.wipe()
        self.events.emit("terrain_wiped", cleared=cleared)

    def load_terrain(self, encoded: str) -> None:
        """Load a fresh room's terrain, discarding the current layout."""
        terrain = parse_encoded(encoded)
        self.wipe_terrain()
        self.wipe_structures()
        self.terrain.replace(terrain)
        self.events.emit("terrain_loaded", tiles=len(self.terrain))

    def load_layout(self, structures: dict[str, list[int]]) -> None:
        """Replace the layout with an imported one, such as an example bunker."""
        unknown = sorted(key for key in structures if key not in self.catalog)
        if unknown:
            raise ValueError(f"Layout references unknown structures: {unknown}")

        replaced = len(self.room)
        self.room.load(structures)
        self.events.emit("structures_wiped", removed=replaced)
        self.wipe_terrain()
        for state in self.brush_states():
            if state.error:
                logger.warning("%s over capacity: %d / %d", state.key, state.placed, state.total)
        self.events.emit("layout_loaded", counts=self.room.counts())

    def brush_states(self) -> list[BrushState]:
        return brush_states(self.catalog, self.room, self.settings)

    def snapshot(self) -> dict[str, int | str | bool | tuple[int, int] | None]:
        return {
            "rcl": self.settings.rcl,
            "brush": self.settings.brush,
            "hover": (self.settings.hover_position.x, self.settings.hover_position.y),
            "bottom_drawer_open": self.settings.bottom_drawer_open,
            "structures_placed": len(self.room),
            "terrain_tiles": len(self.terrain),
            "over_capacity": any(state.error for state in self.brush_states()),
            "consistent": self.room.is_consistent(),
        }
