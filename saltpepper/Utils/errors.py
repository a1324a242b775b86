"""
Error types raised by the pixel-processing stages.

Every stage is a pure function: it either returns a new buffer or raises one
of these. Nothing is retried or logged here.
"""


class ShapeMismatch(ValueError):
    """A buffer's pixel count does not match ``width * height``."""


class DegenerateComputation(ArithmeticError):
    """A filter produced a non-finite or undefined value for a pixel."""

    def __init__(self, message: str, index: int = -1):
        super().__init__(message)
        self.index = index


class OutOfRangeCoordinate(IndexError):
    """A linear offset falls outside the pixel buffer."""


__all__ = [
    "ShapeMismatch",
    "DegenerateComputation",
    "OutOfRangeCoordinate",
]
