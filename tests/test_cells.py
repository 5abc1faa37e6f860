import pytest

from undercroft.dungeon import ORIGIN, Coordinate3D, Direction, Position, Rect


@pytest.mark.parametrize("d", [d for d in Direction if d is not Direction.NONE])
def test_opposite_is_an_involution(d):
    assert d.opposite().opposite() is d
    assert d.opposite() is not d


def test_opposite_pairs():
    assert Direction.TOP.opposite() is Direction.BOTTOM
    assert Direction.LEFT.opposite() is Direction.RIGHT
    assert Direction.UP.opposite() is Direction.DOWN
    assert Direction.NONE.opposite() is Direction.NONE


def test_parse_is_case_insensitive():
    assert Direction.parse("top") is Direction.TOP
    assert Direction.parse(" Right ") is Direction.RIGHT
    with pytest.raises(ValueError):
        Direction.parse("sideways")


def test_planar_order():
    assert Direction.planar() == (Direction.TOP, Direction.BOTTOM, Direction.LEFT, Direction.RIGHT)


def test_rect_intersect_uses_closed_intervals():
    a = Rect(1, 3, 1, 3)
    assert a.intersect(Rect(3, 5, 3, 5))  # shares the corner tile
    assert not a.intersect(Rect(4, 5, 1, 3))
    assert not a.intersect(Rect(1, 3, 4, 6))
    assert Rect(0, 10, 0, 10).intersect(Rect(4, 5, 4, 5))


def test_rect_center_truncates():
    assert Rect(1, 4, 2, 7).center() == Position(2, 4)
    assert Rect(5, 5, 0, 0).center() == Position(5, 0)
    assert len(list(Rect(1, 2, 1, 3).cells())) == 6


def test_coordinates_compare_componentwise():
    assert ORIGIN == Coordinate3D(0, 0, 0)
    c = Coordinate3D(floor=-1, col=2, row=3)
    assert c.position == Position(3, 2)
    assert c != Coordinate3D(-1, 3, 2)
