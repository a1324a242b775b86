"""
Mean filters for salt-and-pepper noise removal.

Only pixels whose channel-0 value is exactly 0 or 255 are treated as noise.
Each of them is replaced by a statistic of its clamped neighbourhood
(centre excluded) computed from the input buffer; all other pixels are
copied unchanged.
"""

from enum import Enum

import numpy as np

from ..Utils.boundary_index import ClampPolicy, neighbour_offsets
from ..Utils.errors import DegenerateComputation
from ..Utils.pixel_buffer import PixelBuffer, impulse_mask

DEFAULT_RADIUS = 1
DEFAULT_Q = -1.5


class MeanMethod(str, Enum):
    ARITHMETIC = "ARITHMETIC"
    HARMONIC = "HARMONIC"
    GEOMETRIC = "GEOMETRIC"
    CONTRAHARMONIC = "CONTRAHARMONIC"


def arithmetic_mean(values: np.ndarray, q: float = DEFAULT_Q) -> float:
    return float(values.sum() / values.size)


def harmonic_mean(values: np.ndarray, q: float = DEFAULT_Q) -> float:
    if np.any(values == 0):
        raise DegenerateComputation("harmonic mean is undefined with a zero-valued neighbour")
    return float(values.size / np.sum(1.0 / values))


def geometric_mean(values: np.ndarray, q: float = DEFAULT_Q) -> float:
    """n-th root of the product, evaluated in log space. A zero neighbour gives 0."""
    with np.errstate(divide="ignore"):
        return float(np.exp(np.mean(np.log(values))))


def contraharmonic_mean(values: np.ndarray, q: float = DEFAULT_Q) -> float:
    """
    sum(v^(Q+1)) / sum(v^Q).

    Negative Q removes pepper noise, positive Q removes salt noise. Zero
    neighbours with negative Q, or an all-zero window with positive Q,
    give a non-finite result.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.sum(values ** (q + 1)) / np.sum(values ** q))


_COMBINERS = {
    MeanMethod.ARITHMETIC: arithmetic_mean,
    MeanMethod.HARMONIC: harmonic_mean,
    MeanMethod.GEOMETRIC: geometric_mean,
    MeanMethod.CONTRAHARMONIC: contraharmonic_mean,
}


def _check_args(method, radius):
    try:
        method = MeanMethod(method)
    except ValueError:
        raise ValueError(f"Unknown mean filter method: {method!r}") from None
    if isinstance(radius, bool) or not isinstance(radius, (int, np.integer)) or radius < 1:
        raise ValueError("radius must be an integer >= 1.")
    return method, int(radius)


def restore_salt_pepper(
    buffer: PixelBuffer,
    method: MeanMethod = MeanMethod.ARITHMETIC,
    radius: int = DEFAULT_RADIUS,
    q: float = DEFAULT_Q,
    policy: ClampPolicy = ClampPolicy.HEIGHT,
) -> PixelBuffer:
    """
    Replace salt-and-pepper pixels by a neighbourhood mean.

    Args:
        buffer: grayscale-shaped buffer (R == G == B).
        method: ARITHMETIC, HARMONIC, GEOMETRIC or CONTRAHARMONIC.
        radius: window half-size k, the window is (2k+1)x(2k+1).
        q: contraharmonic order, ignored by the other methods.
        policy: row clamp bound used for neighbours outside the image.

    Returns:
        New buffer of the same dimensions.

    Raises:
        DegenerateComputation: if a noise pixel's mean is undefined or
            non-finite. The offending pixel index is in `exc.index`.
    """
    method, radius = _check_args(method, radius)
    policy = ClampPolicy(policy)
    combine = _COMBINERS[method]

    width, height = buffer.width, buffer.height
    gray = buffer.gray
    out = buffer.pixels.copy()

    for i in np.flatnonzero(impulse_mask(buffer)):
        r, c = divmod(int(i), width)
        offsets = neighbour_offsets(r, c, width, height, radius, policy)
        if not offsets:
            raise DegenerateComputation(f"no neighbours contribute to pixel {i}", index=int(i))

        values = gray[offsets]
        try:
            value = combine(values, q)
        except DegenerateComputation as exc:
            raise DegenerateComputation(f"{method.value} mean at pixel {i}: {exc}", index=int(i)) from exc
        if not np.isfinite(value):
            raise DegenerateComputation(
                f"{method.value} mean at pixel {i} is {value}", index=int(i)
            )
        # every mean lies within the window extremes; keep rounding from stepping past them
        out[i, :] = min(max(value, values.min()), values.max())

    return buffer.with_pixels(out)


__all__ = [
    "DEFAULT_RADIUS",
    "DEFAULT_Q",
    "MeanMethod",
    "arithmetic_mean",
    "harmonic_mean",
    "geometric_mean",
    "contraharmonic_mean",
    "restore_salt_pepper",
]
