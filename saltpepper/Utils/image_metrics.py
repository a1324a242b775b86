"""
Image quality metrics computation.

PSNR and SSIM between two pixel buffers, measured on the rendered uint8
values, plus the salt/pepper fractions of a buffer.
"""

import numpy as np
from typing import Tuple

from skimage.metrics import structural_similarity

from .errors import ShapeMismatch
from .pixel_buffer import PixelBuffer, BLACK, WHITE


def _check_same_shape(reference: PixelBuffer, candidate: PixelBuffer) -> None:
    if (reference.width, reference.height) != (candidate.width, candidate.height):
        raise ShapeMismatch(
            f"Buffers must have the same dimensions. Got {reference.width}x{reference.height} "
            f"and {candidate.width}x{candidate.height}"
        )


def compute_psnr(reference: PixelBuffer, candidate: PixelBuffer) -> float:
    """
    Compute Peak Signal-to-Noise Ratio (PSNR) between two buffers.

    PSNR is defined as:
        PSNR = 10 * log10(255^2 / MSE)

    Returns:
        PSNR value in dB. Returns inf if the rendered buffers are identical.

    Raises:
        ShapeMismatch: If the buffers have different dimensions.
    """
    _check_same_shape(reference, candidate)

    a = reference.to_uint8().astype(np.float64)
    b = candidate.to_uint8().astype(np.float64)
    mse = np.mean((a - b) ** 2)

    if mse == 0:
        return float('inf')

    return float(10 * np.log10(255.0 ** 2 / mse))


def compute_ssim(reference: PixelBuffer, candidate: PixelBuffer) -> float:
    """
    Compute Structural Similarity Index (SSIM) between two grayscale buffers.

    Only channel 0 is compared. The sliding window shrinks to the largest
    odd size that fits for images smaller than 7x7.

    Raises:
        ShapeMismatch: If the buffers have different dimensions.
        ValueError: If either side is smaller than 3 pixels.
    """
    _check_same_shape(reference, candidate)

    a = reference.to_uint8()[:, :, 0]
    b = candidate.to_uint8()[:, :, 0]

    win_size = min(7, a.shape[0], a.shape[1])
    if win_size % 2 == 0:
        win_size -= 1
    if win_size < 3:
        raise ValueError("compute_ssim needs images of at least 3x3 pixels.")

    return float(structural_similarity(a, b, data_range=255, win_size=win_size))


def impulse_fractions(buffer: PixelBuffer) -> Tuple[float, float]:
    """Fractions of pixels that are pure white (salt) and pure black (pepper)."""
    pixels = buffer.pixels
    salt = np.all(pixels == WHITE, axis=1)
    pepper = np.all(pixels == BLACK, axis=1)
    n = len(buffer)
    return float(salt.sum()) / n, float(pepper.sum()) / n


__all__ = [
    "compute_psnr",
    "compute_ssim",
    "impulse_fractions",
]
