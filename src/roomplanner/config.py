"""Structure catalog loading and validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator
import json

from roomplanner.constants import MAX_RCL
from roomplanner.core.terrain import TerrainKind


@dataclass(frozen=True)
class StructureConfig:
    key: str
    display_name: str
    image: str
    total: int
    unlocks: dict[int, int] = field(default_factory=dict)
    level_exempt: bool = False
    buildable_terrain: frozenset[TerrainKind] = frozenset({TerrainKind.PLAIN, TerrainKind.SWAMP})

    @property
    def required_level(self) -> int:
        """Lowest level whose unlock table permits at least one instance."""
        unlocked = [level for level, count in self.unlocks.items() if count > 0]
        if not unlocked:
            return 1 if self.level_exempt else MAX_RCL + 1
        return max(1, min(unlocked))

    def limit_at(self, level: int) -> int:
        """Instances the unlock table permits at ``level``."""
        permitted = [count for unlock_level, count in self.unlocks.items() if unlock_level <= level]
        return max(permitted, default=0)


@dataclass
class Catalog:
    entries: dict[str, StructureConfig]

    @classmethod
    def from_entries(cls, entries: list[StructureConfig]) -> "Catalog":
        catalog: dict[str, StructureConfig] = {}
        for entry in entries:
            if entry.key in catalog:
                raise ValueError(f"Duplicate structure key: {entry.key}")
            catalog[entry.key] = entry
        exempt = [entry.key for entry in entries if entry.level_exempt]
        if len(exempt) > 1:
            raise ValueError(f"Only one level-exempt structure is allowed, got {exempt}")
        return cls(entries=catalog)

    def entry(self, key: str) -> StructureConfig | None:
        return self.entries.get(key)

    def keys(self) -> list[str]:
        return list(self.entries)

    @property
    def controller(self) -> StructureConfig | None:
        for entry in self.entries.values():
            if entry.level_exempt:
                return entry
        return None

    def __iter__(self) -> Iterator[StructureConfig]:
        return iter(self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries


DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"


def _load_json(path: Path) -> dict | list:
    if not path.exists():
        raise ValueError(f"Missing config file: {path}")
    return json.loads(path.read_text())


def _require_keys(data: dict, keys: set[str], context: str) -> None:
    missing = keys - set(data.keys())
    if missing:
        raise ValueError(f"{context}: missing keys {sorted(missing)}")


def _parse_unlocks(raw: dict, context: str) -> dict[int, int]:
    unlocks: dict[int, int] = {}
    for level_raw, count_raw in raw.items():
        level = int(level_raw)
        count = int(count_raw)
        if not 1 <= level <= MAX_RCL:
            raise ValueError(f"{context}: unlock level {level} outside 1..{MAX_RCL}")
        if count < 0:
            raise ValueError(f"{context}: unlock count must be non-negative")
        unlocks[level] = count
    return dict(sorted(unlocks.items()))


def _parse_terrain(raw: list, context: str) -> frozenset[TerrainKind]:
    kinds: set[TerrainKind] = set()
    for name in raw:
        try:
            kinds.add(TerrainKind(name))
        except ValueError:
            raise ValueError(f"{context}: unknown terrain {name!r}") from None
    return frozenset(kinds)


def parse_structure(raw: dict) -> StructureConfig:
    _require_keys(raw, {"key", "name", "image", "total", "unlocks"}, f"structure {raw!r}")
    context = f"structure {raw['key']}"
    entry = StructureConfig(
        key=raw["key"],
        display_name=raw["name"],
        image=raw["image"],
        total=int(raw["total"]),
        unlocks=_parse_unlocks(raw["unlocks"], context),
        level_exempt=bool(raw.get("level_exempt", False)),
        buildable_terrain=_parse_terrain(raw.get("terrain", ["plain", "swamp"]), context),
    )
    if entry.total <= 0:
        raise ValueError(f"{context}: total must be positive")
    if not entry.buildable_terrain:
        raise ValueError(f"{context}: at least one buildable terrain is required")
    return entry


def load_catalog(base_data_dir: Path | None = None) -> Catalog:
    data_dir = base_data_dir or DEFAULT_DATA_DIR
    structures_raw = _load_json(data_dir / "structures.json")
    if not isinstance(structures_raw, list):
        raise ValueError("structures.json must contain a list of structures")
    return Catalog.from_entries([parse_structure(raw) for raw in structures_raw])
