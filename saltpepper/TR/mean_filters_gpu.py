"""
GPU-accelerated mean filters for salt-and-pepper noise removal.

Same statistics as mean_filters.restore_salt_pepper under
ClampPolicy.HEIGHT, computed for every pixel at once with PyTorch:
replicate padding reproduces per-axis clamping and unfold gathers the
neighbourhoods. Designed for high-resolution images where the per-pixel
CPU loop is too slow.
"""

import numpy as np
import torch
import torch.nn.functional as F

from ..Utils.errors import DegenerateComputation
from ..Utils.pixel_buffer import PixelBuffer
from .mean_filters import DEFAULT_Q, DEFAULT_RADIUS, MeanMethod, _check_args


def restore_salt_pepper_gpu(
    buffer: PixelBuffer,
    device: torch.device,
    method: MeanMethod = MeanMethod.ARITHMETIC,
    radius: int = DEFAULT_RADIUS,
    q: float = DEFAULT_Q,
) -> PixelBuffer:
    """
    GPU-accelerated replacement of salt-and-pepper pixels by a neighbourhood mean.

    Args:
        buffer: grayscale-shaped buffer (R == G == B).
        device: torch device (cuda or cpu). Must support float64.
        method: ARITHMETIC, HARMONIC, GEOMETRIC or CONTRAHARMONIC.
        radius: window half-size k.
        q: contraharmonic order.

    Returns:
        New buffer of the same dimensions.

    Raises:
        DegenerateComputation: if any noise pixel's mean is undefined or
            non-finite; `exc.index` is the first such pixel.
    """
    method, radius = _check_args(method, radius)

    gray = torch.from_numpy(buffer.gray.reshape(buffer.height, buffer.width).copy()).to(device)
    restored = _restore_gray_gpu(gray, method, radius, q)

    out = restored.reshape(-1).cpu().numpy()
    return buffer.with_pixels(np.repeat(out[:, None], 3, axis=1))


def _restore_gray_gpu(
    gray: torch.Tensor,
    method: MeanMethod,
    radius: int,
    q: float,
) -> torch.Tensor:
    """Restore a (H, W) float64 tensor. Non-noise pixels pass through unchanged."""
    noisy = (gray == 0) | (gray == 255)
    if not torch.any(noisy):
        return gray.clone()

    patches = _neighbourhood_patches_gpu(gray, radius)  # (n, H, W)
    n = patches.shape[0]

    if method is MeanMethod.ARITHMETIC:
        combined = patches.sum(dim=0) / n
    elif method is MeanMethod.HARMONIC:
        zero_hit = torch.any(patches == 0, dim=0) & noisy
        if torch.any(zero_hit):
            index = int(torch.nonzero(zero_hit.reshape(-1))[0])
            raise DegenerateComputation(
                f"HARMONIC mean at pixel {index}: harmonic mean is undefined with a zero-valued neighbour",
                index=index,
            )
        combined = n / torch.sum(1.0 / patches, dim=0)
    elif method is MeanMethod.GEOMETRIC:
        combined = torch.exp(torch.mean(torch.log(patches), dim=0))
    else:
        combined = torch.sum(patches ** (q + 1), dim=0) / torch.sum(patches ** q, dim=0)

    bad = noisy & ~torch.isfinite(combined)
    if torch.any(bad):
        index = int(torch.nonzero(bad.reshape(-1))[0])
        value = float(combined.reshape(-1)[index])
        raise DegenerateComputation(f"{method.value} mean at pixel {index} is {value}", index=index)

    # every mean lies within the window extremes; keep rounding from stepping past them
    lo = patches.min(dim=0).values
    hi = patches.max(dim=0).values
    combined = torch.minimum(torch.maximum(combined, lo), hi)

    return torch.where(noisy, combined, gray)


def _neighbourhood_patches_gpu(
    gray: torch.Tensor,
    radius: int,
) -> torch.Tensor:
    """
    Clamped neighbourhoods of every pixel using unfold.

    Args:
        gray: (H, W) tensor.
        radius: window half-size.

    Returns:
        Tensor of shape ((2r+1)^2 - 1, H, W), centre excluded, window order
        matching boundary_index.window_offsets.
    """
    H, W = gray.shape
    window_size = 2 * radius + 1

    img_tensor = gray.unsqueeze(0).unsqueeze(0)  # (1, 1, H, W)
    padded = F.pad(img_tensor, (radius, radius, radius, radius), mode='replicate')

    patches = F.unfold(
        padded,
        kernel_size=window_size,
        stride=1,
        padding=0
    )  # (1, window_size*window_size, H*W)
    patches = patches.view(window_size * window_size, H, W)

    centre = (window_size * window_size) // 2
    keep = [k for k in range(window_size * window_size) if k != centre]
    return patches[keep]


__all__ = [
    "restore_salt_pepper_gpu",
]
