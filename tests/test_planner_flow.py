import pytest

from roomplanner.constants import ROOM_TILES
from roomplanner.core.settings import Settings
from roomplanner.core.terrain import TerrainKind
from roomplanner.planner import RoomPlanner
from roomplanner.systems.placement_rules import Rejection


def test_brush_placement_emits_events() -> None:
    planner = RoomPlanner(settings=Settings(rcl=2))
    planner.select_brush("extension")
    position = planner.hover(120)
    assert (position.x, position.y) == (20, 2)
    assert planner.snapshot()["hover"] == (20, 2)

    result = planner.place(120)

    assert result.ok
    assert planner.room.structure_at(120) == "extension"
    assert [event.name for event in planner.events.drain()] == ["brush_selected", "structure_placed"]


def test_rejected_placement_reports_reason() -> None:
    planner = RoomPlanner(settings=Settings(rcl=1))
    result = planner.place(55, "extension")
    assert result.reasons == (Rejection.LEVEL_LOCKED,)
    rejected = planner.events.named("placement_rejected")
    assert rejected[0].payload["reasons"] == [Rejection.LEVEL_LOCKED]


def test_place_uses_tile_terrain() -> None:
    planner = RoomPlanner()
    planner.terrain.set(10, TerrainKind.WALL)
    assert planner.place(10, "spawn").reasons == (Rejection.TERRAIN_UNBUILDABLE,)
    assert planner.place(10, "road").ok


def test_unknown_structure_and_missing_brush() -> None:
    planner = RoomPlanner()
    assert planner.place(3, "bunker").reasons == (Rejection.UNKNOWN_STRUCTURE,)
    with pytest.raises(ValueError, match="No structure selected"):
        planner.place(3)
    with pytest.raises(ValueError, match="Unknown structure"):
        planner.select_brush("bunker")


def test_set_rcl_validates_range() -> None:
    planner = RoomPlanner()
    planner.set_rcl(3)
    assert planner.settings.rcl == 3
    with pytest.raises(ValueError):
        planner.set_rcl(0)
    with pytest.raises(ValueError):
        planner.set_rcl(9)
    assert planner.settings.rcl == 3


def test_wipes_are_independent() -> None:
    planner = RoomPlanner()
    planner.terrain.set(7, TerrainKind.SWAMP)
    planner.place(8, "spawn")

    planner.wipe_terrain()
    assert planner.terrain.items() == {}
    assert planner.room.grid() == {8: "spawn"}

    planner.terrain.set(7, TerrainKind.SWAMP)
    planner.wipe_structures()
    assert planner.room.grid() == {}
    assert planner.room.structures() == {}
    assert planner.terrain.get(7) == TerrainKind.SWAMP


def test_load_terrain_discards_layout() -> None:
    planner = RoomPlanner()
    planner.place(8, "spawn")
    planner.load_terrain("1" * 50 + "0" * (ROOM_TILES - 50))
    assert len(planner.room) == 0
    assert planner.terrain.get(49) == TerrainKind.WALL
    assert planner.terrain.get(50) == TerrainKind.PLAIN
    assert planner.events.named("terrain_loaded")[0].payload == {"tiles": 50}


def test_load_layout_flags_over_capacity() -> None:
    planner = RoomPlanner()
    planner.load_layout({"spawn": [1, 2, 3, 4], "road": [5, 6]})

    snapshot = planner.snapshot()
    assert snapshot["structures_placed"] == 6
    assert snapshot["over_capacity"] is True
    assert snapshot["consistent"] is True
    spawn = next(state for state in planner.brush_states() if state.key == "spawn")
    assert spawn.error
    assert spawn.disabled


def test_load_layout_rejects_unknown_structures() -> None:
    planner = RoomPlanner()
    planner.place(8, "spawn")
    with pytest.raises(ValueError, match="unknown structures"):
        planner.load_layout({"bunker": [1]})
    assert planner.room.grid() == {8: "spawn"}


def test_remove_emits_event_only_when_occupied() -> None:
    planner = RoomPlanner()
    planner.place(8, "spawn")
    planner.events.drain()

    assert planner.remove(8).ok
    assert not planner.remove(8).ok
    assert [event.name for event in planner.events.drain()] == ["structure_removed"]


def test_cli_prints_structure_panel(capsys: pytest.CaptureFixture[str]) -> None:
    from roomplanner.__main__ import main

    main(["--rcl", "1"])

    out = capsys.readouterr().out
    assert "rcl=1" in out
    assert "RCL 2" in out
    assert "structures_placed=16" in out
    assert "consistent=True" in out


def test_failed_terrain_load_keeps_layout_and_terrain() -> None:
    planner = RoomPlanner()
    planner.place(8, "spawn")
    planner.terrain.set(9, TerrainKind.SWAMP)
    planner.events.drain()

    with pytest.raises(ValueError):
        planner.load_terrain("0" * 10)
    with pytest.raises(ValueError):
        planner.load_terrain("7" * ROOM_TILES)

    assert planner.room.grid() == {8: "spawn"}
    assert planner.terrain.items() == {9: TerrainKind.SWAMP}
    assert planner.events.drain() == []


def test_hover_rejects_tiles_outside_room() -> None:
    planner = RoomPlanner()
    with pytest.raises(ValueError):
        planner.hover(ROOM_TILES)
    with pytest.raises(ValueError):
        Settings(hover_tile=-1)


def test_bottom_drawer_toggle_is_recorded() -> None:
    planner = RoomPlanner()
    seen = []
    planner.events.subscribe("bottom_drawer_toggled", seen.append)

    planner.set_bottom_drawer(True)

    assert planner.settings.bottom_drawer_open
    assert planner.snapshot()["bottom_drawer_open"] is True
    assert [event.payload for event in seen] == [{"open": True}]
