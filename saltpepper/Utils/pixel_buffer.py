"""
Flat row-major pixel buffer shared by every stage of the pipeline.

Pixels are stored as an (N, 3) float64 array where N = width * height and
pixel (row, col) lives at index row * width + col. Grayscale buffers keep
the RGB shape with R == G == B so every stage sees the same layout.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import ShapeMismatch

BLACK = 0.0
WHITE = 255.0


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Immutable RGB pixel buffer.

    The pixel array is copied on construction and marked read-only, so a
    stage can never modify the buffer it was given.
    """
    width: int
    height: int
    pixels: np.ndarray  # Shape (width * height, 3), float64, range [0, 255].

    def __post_init__(self):
        if not isinstance(self.width, (int, np.integer)) or not isinstance(self.height, (int, np.integer)):
            raise ValueError("PixelBuffer dimensions must be integers.")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"PixelBuffer dimensions must be positive, got {self.width}x{self.height}.")

        pixels = np.array(self.pixels, dtype=np.float64)
        if pixels.ndim != 2 or pixels.shape[1] != 3:
            raise ShapeMismatch(f"Expected pixels of shape (N, 3), got {pixels.shape}.")
        if pixels.shape[0] != self.width * self.height:
            raise ShapeMismatch(
                f"Buffer holds {pixels.shape[0]} pixels but dimensions are "
                f"{self.width}x{self.height} ({self.width * self.height} pixels)."
            )
        if not np.all(np.isfinite(pixels)):
            raise ValueError("PixelBuffer channel values must be finite.")
        if pixels.min() < BLACK or pixels.max() > WHITE:
            raise ValueError("PixelBuffer channel values out of range, must lie in [0, 255].")

        pixels.setflags(write=False)
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))
        object.__setattr__(self, "pixels", pixels)

    def __len__(self) -> int:
        return self.pixels.shape[0]

    @property
    def gray(self) -> np.ndarray:
        """Channel 0, the value every noise filter inspects."""
        return self.pixels[:, 0]

    @classmethod
    def from_array(cls, image: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an (H, W, 3) array."""
        if image.ndim != 3 or image.shape[2] != 3:
            raise ShapeMismatch(f"Expected an (H, W, 3) image, got {image.shape}.")
        h, w = image.shape[:2]
        return cls(width=w, height=h, pixels=image.reshape(h * w, 3))

    def to_array(self) -> np.ndarray:
        return self.pixels.reshape(self.height, self.width, 3).copy()

    def to_uint8(self) -> np.ndarray:
        """Round to displayable (H, W, 3) uint8 values."""
        return np.clip(np.rint(self.to_array()), 0, 255).astype(np.uint8)

    def with_pixels(self, pixels: np.ndarray) -> "PixelBuffer":
        """New buffer with the same dimensions and different pixels."""
        return PixelBuffer(width=self.width, height=self.height, pixels=pixels)


def is_impulse(value: float) -> bool:
    """True if a channel value is exactly pure black or pure white."""
    return value == BLACK or value == WHITE


def is_noise_pixel(pixel) -> bool:
    """True if an RGB triple is pure black (0, 0, 0) or pure white (255, 255, 255)."""
    r, g, b = pixel
    return (r == g == b) and is_impulse(r)


def impulse_mask(buffer: PixelBuffer) -> np.ndarray:
    """Boolean mask over the buffer marking channel-0 values of 0 or 255."""
    gray = buffer.gray
    return (gray == BLACK) | (gray == WHITE)


__all__ = [
    "BLACK",
    "WHITE",
    "PixelBuffer",
    "is_impulse",
    "is_noise_pixel",
    "impulse_mask",
]
