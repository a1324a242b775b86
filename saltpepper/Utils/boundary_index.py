"""
Coordinate to offset mapping with clamped neighbour lookup.

Used by every neighbourhood filter to turn a (row, col) pair that may lie
outside the image into a valid index into a flat row-major buffer.
"""

from enum import Enum
from typing import List, Tuple

from .errors import OutOfRangeCoordinate


class ClampPolicy(str, Enum):
    """
    Upper bound used when clamping neighbour rows.

    HEIGHT clamps rows to [0, height - 1] and columns to [0, width - 1].
    WIDTH reproduces the historical behaviour of clamping rows against the
    width as well; on images wider than tall some offsets then land past the
    end of the buffer and are skipped.
    """
    HEIGHT = "height"
    WIDTH = "width"


def clamp(value, min_value, max_value):
    """Return value limited to [min_value, max_value]."""
    if value < min_value:
        return min_value
    if value > max_value:
        return max_value
    return value


def to_offset(row: int, col: int, width: int) -> int:
    """Row-major linear index. Caller must clamp row and col first."""
    return row * width + col


def checked_offset(row: int, col: int, width: int, size: int) -> int:
    """Linear index of (row, col), raising if it falls outside a buffer of `size` pixels."""
    offset = to_offset(row, col, width)
    if not 0 <= offset < size:
        raise OutOfRangeCoordinate(
            f"({row}, {col}) maps to offset {offset}, outside buffer of {size} pixels."
        )
    return offset


def window_offsets(radius: int) -> List[Tuple[int, int]]:
    """(drow, dcol) pairs of a (2r+1)x(2r+1) window, centre excluded."""
    return [
        (a, b)
        for a in range(-radius, radius + 1)
        for b in range(-radius, radius + 1)
        if a or b
    ]


def neighbour_offsets(
    row: int,
    col: int,
    width: int,
    height: int,
    radius: int = 1,
    policy: ClampPolicy = ClampPolicy.HEIGHT,
) -> List[int]:
    """
    Linear offsets of the clamped neighbours of (row, col).

    Args:
        row, col: centre pixel.
        width, height: buffer dimensions.
        radius: window half-size k; the window is (2k+1)x(2k+1).
        policy: row clamp bound, see ClampPolicy.

    Returns:
        Offsets in window order (row-major over the window). Clamped
        neighbours may repeat the same offset, including the centre's own.
    """
    policy = ClampPolicy(policy)
    row_max = (height if policy is ClampPolicy.HEIGHT else width) - 1
    size = width * height

    offsets = []
    for a, b in window_offsets(radius):
        r = clamp(row + a, 0, row_max)
        c = clamp(col + b, 0, width - 1)
        try:
            offsets.append(checked_offset(r, c, width, size))
        except OutOfRangeCoordinate:
            # only reachable under ClampPolicy.WIDTH with width > height
            continue
    return offsets


__all__ = [
    "ClampPolicy",
    "clamp",
    "to_offset",
    "checked_offset",
    "window_offsets",
    "neighbour_offsets",
]
