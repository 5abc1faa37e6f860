import pytest

from tests.dungeon_test_utils import exit_directions, requirement, room_from_rows
from undercroft.dungeon import (
    Direction,
    DungeonArchitect,
    DungeonAssembler,
    DungeonLayoutConfig,
    DungeonRandom,
    make_builder,
)
from undercroft.dungeon.assembler import place_exits, place_stairs, stamp_stair
from undercroft.dungeon.tiles import EXIT, FLOOR, STAIRS_DOWN, STAIRS_UP


class FixedBuilder:
    """Returns the same hand-drawn room for every requirement."""

    def __init__(self, *lines, name="fixed"):
        self.lines = lines
        self.name = name
        self.rows = len(lines)
        self.cols = len(lines[0])

    def generate(self, requirement, rng):
        return room_from_rows(*self.lines, refresh=False)


HALLWAY = ("#####", ".....", "#####")


def test_exits_go_to_middle_of_border_pathing():
    room = room_from_rows(*HALLWAY)
    placed = place_exits(room, requirement(Direction.LEFT, Direction.RIGHT))
    assert placed == 2
    assert room.tiles[5] == EXIT and room.tiles[9] == EXIT
    assert room.exits == [(5, Direction.LEFT), (9, Direction.RIGHT)]
    assert exit_directions(room) == [Direction.LEFT, Direction.RIGHT]


def test_exit_prefers_non_corner_tiles():
    room = room_from_rows("...", "...", "...")
    place_exits(room, requirement(Direction.TOP))
    assert room.tiles[1] == EXIT
    # a lone corner tile is still better than no exit
    room = room_from_rows(".#", "##")
    place_exits(room, requirement(Direction.TOP))
    assert room.tiles[0] == EXIT


def test_existing_exit_tiles_are_kept():
    room = room_from_rows("#E#", "...", "###")
    before = list(room.tiles)
    assert place_exits(room, requirement(Direction.TOP, Direction.LEFT)) == 1
    assert room.tiles == before


def test_unplaceable_exit_is_logged_and_skipped(capsys):
    room = room_from_rows("###", "#.#", "###")
    assert place_exits(room, requirement(Direction.TOP)) == 0
    assert EXIT not in room.tiles
    out = capsys.readouterr().out
    assert "event=exit_unplaceable" in out


def test_stairs_use_thirds_of_pathing():
    room = room_from_rows("..........")
    placed = place_stairs(room, requirement(stair_up=True, stair_down=True))
    assert placed == (2, 0)
    assert room.tiles[3] == STAIRS_DOWN
    assert room.tiles[6] == STAIRS_UP


def test_stair_search_steps_over_special_tiles():
    room = room_from_rows("......E...")
    assert stamp_stair(room, STAIRS_UP, 6)
    assert room.tiles[8] == STAIRS_UP
    assert room.tiles[6] == EXIT


def test_stair_is_omitted_when_no_floor_tile_fits():
    room = room_from_rows(".")
    assert place_stairs(room, requirement(stair_up=True, stair_down=True)) == (1, 1)
    assert room.tiles == [STAIRS_DOWN]


def test_no_stairs_without_request():
    room = room_from_rows(*HALLWAY)
    assert place_stairs(room, requirement(Direction.LEFT)) == (0, 0)
    assert room.count(FLOOR) == 5


def test_assemble_room_updates_metrics():
    assembler = DungeonAssembler([FixedBuilder(*HALLWAY)])
    metrics = {}
    arranged = assembler.assemble_room(
        requirement(Direction.LEFT, Direction.RIGHT, stair_down=True, floor=1, row=2, col=-1),
        DungeonRandom(1),
        metrics,
    )
    assert arranged.builder == "fixed"
    assert (arranged.floor, arranged.row, arranged.col) == (1, 2, -1)
    assert metrics["builder_usage"] == {"fixed": 1}
    assert metrics["exits"] == 2
    assert metrics["stairs_placed"] == 1
    assert metrics["stairs_omitted"] == 0
    assert STAIRS_DOWN in arranged.tiles


def test_assemble_covers_every_slot_in_floor_order():
    layout = DungeonArchitect(DungeonLayoutConfig(floors_above=(1, 3))).create_layout(DungeonRandom(5))
    pool = [FixedBuilder(*HALLWAY, name="a"), FixedBuilder(*HALLWAY, name="b")]
    rooms = DungeonAssembler(pool).assemble(layout, DungeonRandom(9))
    assert [r.coord for r in rooms] == [req.coordinate for fl in layout.floors for req in fl.rooms]
    assert {r.builder for r in rooms} <= {"a", "b"}


def test_builder_choice_is_seeded():
    layout = DungeonArchitect(DungeonLayoutConfig(floor_size=(6, 7))).create_layout(DungeonRandom(2))
    pool = [FixedBuilder(*HALLWAY, name=n) for n in ("a", "b", "c")]
    first = [r.builder for r in DungeonAssembler(pool).assemble(layout, DungeonRandom(3))]
    second = [r.builder for r in DungeonAssembler(pool).assemble(layout, DungeonRandom(3))]
    assert first == second


def test_real_builder_gets_exit_and_stairs():
    assembler = DungeonAssembler([make_builder("grid")])
    arranged = assembler.assemble_room(requirement(Direction.TOP, stair_up=True), DungeonRandom(4))
    assert exit_directions(arranged.room) == [Direction.TOP]
    assert STAIRS_UP in arranged.tiles
    assert STAIRS_DOWN not in arranged.tiles


def test_empty_pool_is_rejected():
    with pytest.raises(ValueError):
        DungeonAssembler([])
