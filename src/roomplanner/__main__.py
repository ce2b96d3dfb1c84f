"""CLI entry point printing the structure panel for a sample layout."""

from __future__ import annotations

import argparse
import logging

from roomplanner.constants import (
    MAX_RCL,
    STRUCTURE_CONTROLLER,
    STRUCTURE_EXTENSION,
    STRUCTURE_ROAD,
    STRUCTURE_SPAWN,
    STRUCTURE_STORAGE,
    STRUCTURE_TOWER,
)
from roomplanner.core.tiles import tile_index
from roomplanner.planner import RoomPlanner


def _sample_layout() -> dict[str, list[int]]:
    # Small core around (25, 25): spawn, storage, tower and an extension ring.
    ring = [(24, 24), (26, 24), (24, 26), (26, 26), (25, 23)]
    return {
        STRUCTURE_CONTROLLER: [tile_index(10, 10)],
        STRUCTURE_SPAWN: [tile_index(25, 25)],
        STRUCTURE_STORAGE: [tile_index(25, 27)],
        STRUCTURE_TOWER: [tile_index(27, 25)],
        STRUCTURE_EXTENSION: [tile_index(x, y) for x, y in ring],
        STRUCTURE_ROAD: [tile_index(x, 28) for x in range(22, 29)],
    }


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Room planner structure panel")
    parser.add_argument("--rcl", type=int, default=MAX_RCL, choices=range(1, MAX_RCL + 1))
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    planner = RoomPlanner()
    planner.load_layout(_sample_layout())
    planner.set_rcl(args.rcl)

    print("Room Planner")
    print(f"rcl={planner.settings.rcl}")
    for state in planner.brush_states():
        flags = []
        if state.locked:
            flags.append("locked")
        if state.error:
            flags.append("over capacity")
        elif state.disabled:
            flags.append("disabled")
        suffix = f" ({', '.join(flags)})" if flags else ""
        print(f"{state.display_name:<12} {state.label:>11}{suffix}")

    summary = planner.snapshot()
    print(f"structures_placed={summary['structures_placed']}")
    print(f"consistent={summary['consistent']}")


if __name__ == "__main__":
    main()
