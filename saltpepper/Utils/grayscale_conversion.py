"""
RGB to grayscale conversion.

Each formula maps an (N, 3) RGB array to N luminance values; the result is
broadcast back to three equal channels so downstream filters keep the RGB
buffer layout. No rounding happens here, see PixelBuffer.to_uint8.
"""

from enum import Enum

import numpy as np

from .pixel_buffer import PixelBuffer


class GrayscaleFormula(str, Enum):
    AVERAGE = "AVERAGE"
    WEIGHTED = "WEIGHTED"
    YUV = "YUV"


# ITU-R BT.601 luma weights, in thousandths so integer inputs sum exactly
LUMA_WEIGHTS = np.array([299.0, 587.0, 114.0])


def _average(rgb: np.ndarray) -> np.ndarray:
    return rgb.sum(axis=1) / 3.0


def _weighted(rgb: np.ndarray) -> np.ndarray:
    return (rgb @ LUMA_WEIGHTS) / 1000.0


def _yuv(rgb: np.ndarray) -> np.ndarray:
    # blend of the plain average and the luma-weighted value
    return (_average(rgb) + _weighted(rgb)) / 2.0


_FORMULAS = {
    GrayscaleFormula.AVERAGE: _average,
    GrayscaleFormula.WEIGHTED: _weighted,
    GrayscaleFormula.YUV: _yuv,
}


def rgb_to_grayscale(
    buffer: PixelBuffer,
    formula: GrayscaleFormula = GrayscaleFormula.WEIGHTED,
) -> PixelBuffer:
    """
    Convert an RGB buffer to grayscale.

    Args:
        buffer: input RGB buffer.
        formula: AVERAGE, WEIGHTED or YUV (enum member or its name).

    Returns:
        New buffer of the same dimensions with R == G == B for every pixel.
    """
    try:
        formula = GrayscaleFormula(formula)
    except ValueError:
        raise ValueError(f"Unknown grayscale formula: {formula!r}") from None

    gray = _FORMULAS[formula](buffer.pixels)
    return buffer.with_pixels(np.repeat(gray[:, None], 3, axis=1))


__all__ = [
    "GrayscaleFormula",
    "LUMA_WEIGHTS",
    "rgb_to_grayscale",
]
