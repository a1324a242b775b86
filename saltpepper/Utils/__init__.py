"""
Utilities module for pixel buffers, noise generation and image quality metrics.

This package contains:
- The PixelBuffer data model and the impulse-noise predicate
- Clamped row-major indexing for neighbourhood lookups
- Grayscale conversion formulas
- Salt-and-pepper noise generation
- Image quality metrics (PSNR, SSIM)
- RGBA and file I/O at the pipeline boundary
"""

from .errors import (
    ShapeMismatch,
    DegenerateComputation,
    OutOfRangeCoordinate,
)
from .pixel_buffer import (
    PixelBuffer,
    is_impulse,
    is_noise_pixel,
    impulse_mask,
)
from .boundary_index import (
    ClampPolicy,
    clamp,
    to_offset,
    checked_offset,
    neighbour_offsets,
)
from .grayscale_conversion import (
    GrayscaleFormula,
    rgb_to_grayscale,
)
from .random_noise_generation import (
    DEFAULT_SALT_PROBABILITY,
    DEFAULT_PEPPER_PROBABILITY,
    add_salt_pepper_noise,
)
from .image_metrics import (
    compute_psnr,
    compute_ssim,
    impulse_fractions,
)
from .image_io import (
    decode_rgba,
    render_rgba,
    iter_images,
    load_image,
    save_image,
)

__all__ = [
    "ShapeMismatch",
    "DegenerateComputation",
    "OutOfRangeCoordinate",
    "PixelBuffer",
    "is_impulse",
    "is_noise_pixel",
    "impulse_mask",
    "ClampPolicy",
    "clamp",
    "to_offset",
    "checked_offset",
    "neighbour_offsets",
    "GrayscaleFormula",
    "rgb_to_grayscale",
    "DEFAULT_SALT_PROBABILITY",
    "DEFAULT_PEPPER_PROBABILITY",
    "add_salt_pepper_noise",
    "compute_psnr",
    "compute_ssim",
    "impulse_fractions",
    "decode_rgba",
    "render_rgba",
    "iter_images",
    "load_image",
    "save_image",
]
