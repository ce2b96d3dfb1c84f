"""Room geometry, progression bounds and structure keys."""

from __future__ import annotations

ROOM_SIZE = 50
ROOM_TILES = ROOM_SIZE * ROOM_SIZE
MAX_RCL = 8

STRUCTURE_CONTROLLER = "controller"
STRUCTURE_SPAWN = "spawn"
STRUCTURE_EXTENSION = "extension"
STRUCTURE_ROAD = "road"
STRUCTURE_STORAGE = "storage"
STRUCTURE_TOWER = "tower"

# Terrain string mask bits.
TERRAIN_MASK_WALL = 1
TERRAIN_MASK_SWAMP = 2

__all__ = [
    "ROOM_SIZE",
    "ROOM_TILES",
    "MAX_RCL",
    "STRUCTURE_CONTROLLER",
    "STRUCTURE_SPAWN",
    "STRUCTURE_EXTENSION",
    "STRUCTURE_ROAD",
    "STRUCTURE_STORAGE",
    "STRUCTURE_TOWER",
    "TERRAIN_MASK_WALL",
    "TERRAIN_MASK_SWAMP",
]
