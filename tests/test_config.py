import json
from pathlib import Path

import pytest

from roomplanner.config import Catalog, StructureConfig, load_catalog
from roomplanner.constants import MAX_RCL
from roomplanner.core.terrain import TerrainKind


def _write_catalog(tmp_path: Path, structures: list[dict]) -> Path:
    (tmp_path / "structures.json").write_text(json.dumps(structures))
    return tmp_path


def test_load_catalog_success() -> None:
    catalog = load_catalog()
    assert len(catalog) == 17
    assert catalog.keys()[0] == "controller"

    controller = catalog.controller
    assert controller is not None
    assert controller.key == "controller"
    assert controller.total == 1

    extension = catalog.entry("extension")
    assert extension is not None
    assert extension.total == 60
    assert extension.required_level == 2
    assert extension.limit_at(3) == 10
    assert extension.limit_at(1) == 0

    assert catalog.entry("observer").required_level == MAX_RCL
    assert catalog.entry("storage").required_level == 4
    assert catalog.entry("spawn").required_level == 1
    assert catalog.entry("missing") is None


def test_default_terrain_rules() -> None:
    catalog = load_catalog()
    assert catalog.entry("spawn").buildable_terrain == frozenset({TerrainKind.PLAIN, TerrainKind.SWAMP})
    assert TerrainKind.WALL in catalog.entry("road").buildable_terrain
    assert TerrainKind.WALL in catalog.entry("controller").buildable_terrain


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Missing config file"):
        load_catalog(tmp_path)


def test_missing_keys_raise(tmp_path: Path) -> None:
    _write_catalog(tmp_path, [{"key": "spawn", "name": "Spawn", "image": "x.png", "total": 3}])
    with pytest.raises(ValueError, match="missing keys \\['unlocks'\\]"):
        load_catalog(tmp_path)


def test_non_positive_total_rejected(tmp_path: Path) -> None:
    _write_catalog(
        tmp_path,
        [{"key": "spawn", "name": "Spawn", "image": "x.png", "total": 0, "unlocks": {"1": 1}}],
    )
    with pytest.raises(ValueError, match="total must be positive"):
        load_catalog(tmp_path)


def test_unknown_terrain_rejected(tmp_path: Path) -> None:
    _write_catalog(
        tmp_path,
        [
            {
                "key": "spawn",
                "name": "Spawn",
                "image": "x.png",
                "total": 1,
                "unlocks": {"1": 1},
                "terrain": ["lava"],
            }
        ],
    )
    with pytest.raises(ValueError, match="unknown terrain 'lava'"):
        load_catalog(tmp_path)


def test_unlock_level_out_of_range_rejected(tmp_path: Path) -> None:
    _write_catalog(
        tmp_path,
        [{"key": "spawn", "name": "Spawn", "image": "x.png", "total": 1, "unlocks": {"9": 1}}],
    )
    with pytest.raises(ValueError, match="outside 1..8"):
        load_catalog(tmp_path)


def test_duplicate_and_multiple_exempt_entries_rejected() -> None:
    spawn = StructureConfig(key="spawn", display_name="Spawn", image="", total=1, unlocks={1: 1})
    with pytest.raises(ValueError, match="Duplicate structure key"):
        Catalog.from_entries([spawn, spawn])

    first = StructureConfig(key="a", display_name="A", image="", total=1, level_exempt=True)
    second = StructureConfig(key="b", display_name="B", image="", total=1, level_exempt=True)
    with pytest.raises(ValueError, match="Only one level-exempt"):
        Catalog.from_entries([first, second])


def test_required_level_without_unlocks() -> None:
    never = StructureConfig(key="never", display_name="Never", image="", total=1)
    assert never.required_level == MAX_RCL + 1
    exempt = StructureConfig(key="controller", display_name="Controller", image="", total=1, level_exempt=True)
    assert exempt.required_level == 1
