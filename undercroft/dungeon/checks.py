"""Structural checks over a generated dungeon.

``analyze`` returns lists of offending room coordinates per issue kind so
diagnostics scripts and tests can assert on them without re-deriving the rules.
Omitted stairs are reported separately; they are allowed.
"""

from __future__ import annotations

from typing import Dict, List

from .cells import Direction
from .connectivity import analyze_connectivity
from .tiles import EXIT, STAIRS_DOWN, STAIRS_UP


def _label(coord) -> str:
    return f"{coord.floor}/{coord.col}/{coord.row}"


def asymmetric_exits(layout) -> List[str]:
    steps = {
        Direction.RIGHT: (0, 1),
        Direction.LEFT: (0, -1),
        Direction.BOTTOM: (1, 0),
        Direction.TOP: (-1, 0),
    }
    bad = []
    for fl in layout.floors:
        for req in fl.rooms:
            for d in req.exits:
                drow, dcol = steps[d]
                other = fl.room_at(req.row + drow, req.col + dcol)
                if other is None or d.opposite() not in other.exits:
                    bad.append(_label(req.coordinate))
    return bad


def analyze(dungeon) -> Dict[str, List[str]]:
    layout = dungeon.layout
    requirements = {req.coordinate: req for fl in layout.floors for req in fl.rooms}
    res: Dict[str, List[str]] = {
        "asymmetric_exits": asymmetric_exits(layout),
        "pathing_not_dominant": [],
        "exit_mismatches": [],
        "unrequested_open_borders": [],
        "tiles_outside_pathing": [],
        "missing_stairs": [],
    }
    for arranged in dungeon.rooms:
        room = arranged.room
        req = requirements[arranged.coord]
        label = _label(arranged.coord)
        requested = {d for d in req.exits if d in Direction.planar()}

        if sorted(room.pathing) != analyze_connectivity(room.tiles, room.rows, room.cols).pathing:
            res["pathing_not_dominant"].append(label)

        exit_dirs = [d for _, d in room.exits]
        on_border = all(d in room.borders_of(idx) for idx, d in room.exits)
        if sorted(exit_dirs, key=str) != sorted(requested, key=str) or not on_border:
            res["exit_mismatches"].append(label)

        if not set(room.hit_borders()) <= requested:
            res["unrequested_open_borders"].append(label)

        pathing = set(room.pathing)
        special = [i for i, t in enumerate(room.tiles) if t in (EXIT, STAIRS_UP, STAIRS_DOWN)]
        if any(i not in pathing for i in special):
            res["tiles_outside_pathing"].append(label)

        if (req.stair_up and STAIRS_UP not in room.tiles) or (req.stair_down and STAIRS_DOWN not in room.tiles):
            res["missing_stairs"].append(label)
    return res


def issue_counts(res: Dict[str, List[str]]) -> Dict[str, int]:
    """Counts of hard failures; ``missing_stairs`` is excluded."""
    return {k: len(v) for k, v in res.items() if k != "missing_stairs"}


__all__ = ["analyze", "asymmetric_exits", "issue_counts"]
