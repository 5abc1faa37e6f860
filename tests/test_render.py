from tests.dungeon_test_utils import requirement, room_from_rows
from undercroft.dungeon import ArrangedRoom, Coordinate3D, FloorLayout
from undercroft.dungeon.render import (
    FloorGrid,
    render_dungeon,
    render_floor,
    render_floor_layout,
    render_room,
)


def _arranged(floor, row, col, *lines):
    return ArrangedRoom(room=room_from_rows(*lines), coord=Coordinate3D(floor, col, row))


def test_render_room_with_padding():
    room = room_from_rows("...", "...", "...")
    assert render_room(room, 1, 2) == "       \n  ...  \n  ...  \n  ...  \n       "
    assert render_room(room) == "...\n...\n..."


def test_render_floor_layout_marks_occupied_cells():
    layout = FloorLayout(
        floor=0,
        rooms=(requirement(row=0, col=1), requirement(row=1, col=0), requirement(row=1, col=1)),
    )
    assert render_floor_layout(layout) == " O\nOO"


def test_render_floor_layout_normalizes_negative_coordinates():
    layout = FloorLayout(floor=2, rooms=(requirement(row=-1, col=-2), requirement(row=-1, col=-1)))
    assert render_floor_layout(layout) == "OO"
    assert render_floor_layout(FloorLayout(floor=0, rooms=())) == ""


def test_floor_grid_pads_to_row_and_column_maxima():
    grid = FloorGrid(2, 2)
    grid.insert(0, 0, 3, 3)
    grid.insert(0, 1, 5, 7)
    grid.insert(1, 1, 2, 2)
    assert grid.max_heights == [5, 2]
    assert grid.max_widths == [3, 7]
    assert grid.top_pad(0, 0) == 1
    assert grid.left_pad(1, 1) == 2
    # empty cells pad by the whole cell
    assert grid.top_pad(1, 0) == 2
    assert grid.left_pad(1, 0) == 3


def test_render_floor_aligns_rooms():
    rooms = [
        _arranged(0, 0, 0, "..", ".."),
        _arranged(0, 0, 1, "..", ".."),
        _arranged(0, 1, 0, "..", ".."),
    ]
    assert render_floor(rooms) == ".. ..\n.. ..\n\n..\n.."
    assert render_floor(rooms, column_spacing=3, row_spacing=0) == "..   ..\n..   ..\n..\n.."


def test_render_floor_centres_smaller_rooms():
    rooms = [
        _arranged(0, 0, 0, "###", "#.#", "###"),
        _arranged(0, 0, 1, "."),
    ]
    assert render_floor(rooms) == "###\n#.# .\n###"


def test_render_dungeon_lists_floors_top_down():
    rooms = [
        _arranged(0, 0, 0, ".."),
        _arranged(1, 0, 0, "##"),
        _arranged(-1, 0, 0, "E."),
        _arranged(-1, 0, 1, ".E"),
    ]
    text = render_dungeon(rooms)
    assert text == (
        "== Floor 1 (1 rooms) ==\n##\n\n"
        "== Floor 0 (1 rooms) ==\n..\n\n"
        "== Floor -1 (2 rooms) ==\nE. .E"
    )
