"""
Salt-and-pepper noise generation.

Each pixel is an independent Bernoulli trial: it turns white with
probability `salt_probability`, otherwise black with probability
`pepper_probability`, otherwise it is left unchanged.
"""

import numpy as np
from typing import Optional

from .pixel_buffer import BLACK, WHITE, PixelBuffer

DEFAULT_SALT_PROBABILITY = 0.06
DEFAULT_PEPPER_PROBABILITY = 0.06


def add_salt_pepper_noise(
    buffer: PixelBuffer,
    salt_probability: float = DEFAULT_SALT_PROBABILITY,
    pepper_probability: float = DEFAULT_PEPPER_PROBABILITY,
    rng: Optional[np.random.Generator] = None,
) -> PixelBuffer:
    """
    Add salt-and-pepper impulse noise to a buffer.

    Expected salt fraction is `salt_probability`; expected pepper fraction
    is `(1 - salt_probability) * pepper_probability`. One uniform draw is
    consumed per pixel for the salt test and a second one only for pixels
    that did not become salt.

    Args:
        buffer: input buffer, RGB or grayscale.
        salt_probability: per-pixel probability in [0, 1] of pure white.
        pepper_probability: per-pixel probability in [0, 1] of pure black,
            applied to pixels that were not salted.
        rng: optional numpy Generator for reproducibility. Parallel callers
            should give each worker its own Generator.

    Returns:
        Noisy buffer with the same dimensions as the input.
    """
    if not (0.0 <= salt_probability <= 1.0):
        raise ValueError("salt_probability must be in [0, 1].")
    if not (0.0 <= pepper_probability <= 1.0):
        raise ValueError("pepper_probability must be in [0, 1].")

    if rng is None:
        rng = np.random.default_rng()

    noisy = buffer.pixels.copy()
    n = len(buffer)

    salt = rng.random(n) < salt_probability
    # second draw only for pixels that survived the salt test
    candidates = np.flatnonzero(~salt)
    pepper = candidates[rng.random(candidates.size) < pepper_probability]

    noisy[salt, :] = WHITE
    noisy[pepper, :] = BLACK
    return buffer.with_pixels(noisy)


__all__ = [
    "DEFAULT_SALT_PROBABILITY",
    "DEFAULT_PEPPER_PROBABILITY",
    "add_salt_pepper_noise",
]
