import pytest

from saltpepper.Utils import ClampPolicy, OutOfRangeCoordinate, clamp, to_offset, checked_offset, neighbour_offsets
from saltpepper.Utils.boundary_index import window_offsets


@pytest.mark.parametrize("value, expected", [(-3, 0), (0, 0), (5, 5), (9, 9), (12, 9)])
def test_clamp(value, expected):
    assert clamp(value, 0, 9) == expected


def test_to_offset_is_row_major():
    assert to_offset(2, 3, width=5) == 13
    assert to_offset(0, 0, width=5) == 0


def test_checked_offset_rejects_out_of_range():
    assert checked_offset(1, 1, width=3, size=9) == 4
    with pytest.raises(OutOfRangeCoordinate):
        checked_offset(3, 0, width=3, size=9)


@pytest.mark.parametrize("radius, count", [(1, 8), (2, 24), (3, 48)])
def test_window_excludes_centre(radius, count):
    offsets = window_offsets(radius)
    assert len(offsets) == count
    assert (0, 0) not in offsets


def test_top_left_corner_neighbours():
    # 4 wide, 3 tall
    assert neighbour_offsets(0, 0, width=4, height=3) == [0, 0, 1, 0, 1, 4, 4, 5]


@pytest.mark.parametrize("policy", list(ClampPolicy))
@pytest.mark.parametrize("width, height", [(4, 3), (3, 4), (5, 5), (1, 3), (3, 1)])
def test_every_corner_stays_in_bounds(policy, width, height):
    corners = [(0, 0), (0, width - 1), (height - 1, 0), (height - 1, width - 1)]
    for row, col in corners:
        offsets = neighbour_offsets(row, col, width, height, radius=2, policy=policy)
        assert offsets
        assert all(0 <= o < width * height for o in offsets)


def test_width_policy_skips_rows_past_the_buffer():
    # 4 wide, 2 tall: the row below the last clamps to row 2, which does not exist
    assert neighbour_offsets(1, 3, width=4, height=2, policy=ClampPolicy.HEIGHT) == [2, 3, 3, 6, 7, 6, 7, 7]
    assert neighbour_offsets(1, 3, width=4, height=2, policy=ClampPolicy.WIDTH) == [2, 3, 3, 6, 7]


def test_width_policy_pulls_tall_image_rows_up():
    # 2 wide, 4 tall: rows are clamped to [0, 1]
    assert neighbour_offsets(3, 0, width=2, height=4, policy=ClampPolicy.WIDTH) == [2, 2, 3, 2, 3, 2, 2, 3]
    assert neighbour_offsets(3, 0, width=2, height=4, policy=ClampPolicy.HEIGHT) == [4, 4, 5, 6, 7, 6, 6, 7]


def test_policy_accepts_string():
    assert neighbour_offsets(0, 0, 3, 3, policy="width") == neighbour_offsets(0, 0, 3, 3)
