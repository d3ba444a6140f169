"""Test position keys and selection bounds."""

from scrollpad.region import Position, decode, encode, point_in_region, region_bounds


def test_keys_order_row_then_column():
    assert encode(Position(0, 5)) < encode(Position(1, 0))
    assert encode(Position(0, 10**6)) < encode(Position(1, 0))
    assert encode(Position(3, 2)) < encode(Position(3, 4))


def test_decode_inverts_encode():
    for pos in (Position(0, 0), Position(7, 3), Position(12345, 2**20)):
        assert decode(encode(pos)) == pos


def test_region_bounds_normalizes_order():
    a, b = Position(2, 3), Position(0, 1)
    assert region_bounds(a, b) == (b, a)
    assert region_bounds(b, a) == (b, a)


def test_region_bounds_same_row():
    assert region_bounds(Position(1, 9), Position(1, 2)) == (Position(1, 2), Position(1, 9))


def test_point_in_region_is_inclusive():
    anchor, cursor = Position(0, 2), Position(1, 1)
    assert point_in_region(Position(0, 2), anchor, cursor)
    assert point_in_region(Position(1, 1), anchor, cursor)
    assert point_in_region(Position(0, 50), anchor, cursor)
    assert not point_in_region(Position(0, 1), anchor, cursor)
    assert not point_in_region(Position(1, 2), anchor, cursor)


def test_no_anchor_means_no_selection():
    assert not point_in_region(Position(0, 0), None, Position(0, 0))
