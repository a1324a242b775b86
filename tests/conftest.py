import numpy as np
import pytest

from saltpepper.Utils import PixelBuffer


def gray_buffer(rows):
    """Grayscale buffer from a 2-D list of channel values."""
    grid = np.asarray(rows, dtype=np.float64)
    h, w = grid.shape
    return PixelBuffer(width=w, height=h, pixels=np.repeat(grid.reshape(-1, 1), 3, axis=1))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def rgb_buffer(rng):
    image = rng.integers(0, 256, size=(6, 9, 3))
    return PixelBuffer.from_array(image)
