"""
Classic salt-and-pepper denoising on flat row-major pixel buffers.

Pipeline: PixelBuffer -> rgb_to_grayscale -> add_salt_pepper_noise
-> restore_salt_pepper (or restore_salt_pepper_gpu). Every stage returns a
new buffer and leaves its input untouched.
"""

from .Utils import (
    PixelBuffer,
    ShapeMismatch,
    DegenerateComputation,
    OutOfRangeCoordinate,
    ClampPolicy,
    GrayscaleFormula,
    rgb_to_grayscale,
    add_salt_pepper_noise,
    is_noise_pixel,
)
from .TR import (
    MeanMethod,
    restore_salt_pepper,
    restore_salt_pepper_gpu,
)

__all__ = [
    "PixelBuffer",
    "ShapeMismatch",
    "DegenerateComputation",
    "OutOfRangeCoordinate",
    "ClampPolicy",
    "GrayscaleFormula",
    "rgb_to_grayscale",
    "add_salt_pepper_noise",
    "is_noise_pixel",
    "MeanMethod",
    "restore_salt_pepper",
    "restore_salt_pepper_gpu",
]
