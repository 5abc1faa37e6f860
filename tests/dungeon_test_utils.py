from itertools import combinations

from undercroft.dungeon import Direction, RoomGrid, RoomRequirement
from undercroft.dungeon.tiles import EXIT, WALL

PLANAR = Direction.planar()

# every subset of the four border directions, smallest first
EXIT_SUBSETS = [subset for n in range(len(PLANAR) + 1) for subset in combinations(PLANAR, n)]


def subset_id(subset):
    return "-".join(d.value.lower() for d in subset) or "none"


def requirement(*exits, stair_up=False, stair_down=False, floor=0, row=0, col=0):
    return RoomRequirement(
        floor=floor, row=row, col=col, exits=tuple(exits), stair_up=stair_up, stair_down=stair_down
    )


def room_from_rows(*rows, refresh=True):
    """Build a RoomGrid from equal-length strings of tile characters."""
    tiles = [ch for line in rows for ch in line]
    room = RoomGrid(len(rows), len(rows[0]), tiles)
    if refresh:
        room.refresh_pathing()
    return room


def exit_directions(room):
    """Borders carrying an exit tile, in planar order."""
    found = set()
    for idx, tile in enumerate(room.tiles):
        if tile == EXIT:
            found.update(room.borders_of(idx))
    return [d for d in PLANAR if d in found]


def open_border_tiles(room, direction):
    return [i for i in room.side_indexes(direction) if room.tiles[i] != WALL]
