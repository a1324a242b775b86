import numpy as np
import pytest

from saltpepper.Utils import PixelBuffer, ShapeMismatch, is_impulse, is_noise_pixel, impulse_mask

from .conftest import gray_buffer


def test_pixel_count_must_match_dimensions():
    with pytest.raises(ShapeMismatch):
        PixelBuffer(width=3, height=2, pixels=np.zeros((5, 3)))


def test_pixels_must_be_rgb_triples():
    with pytest.raises(ShapeMismatch):
        PixelBuffer(width=2, height=2, pixels=np.zeros((4, 4)))


def test_channel_values_outside_range_are_rejected():
    with pytest.raises(ValueError, match="range"):
        PixelBuffer(width=1, height=1, pixels=[[0, 256, 0]])


@pytest.mark.parametrize("width, height", [(0, 1), (1, -1)])
def test_dimensions_must_be_positive(width, height):
    with pytest.raises(ValueError):
        PixelBuffer(width=width, height=height, pixels=np.zeros((0, 3)))


def test_buffer_is_read_only_copy():
    source = np.full((4, 3), 7.0)
    buf = PixelBuffer(width=2, height=2, pixels=source)
    source[0, 0] = 99.0
    assert buf.pixels[0, 0] == 7.0
    with pytest.raises(ValueError):
        buf.pixels[0, 0] = 1.0


def test_row_major_layout(rgb_buffer):
    image = rgb_buffer.to_array()
    row, col = 4, 7
    assert np.array_equal(rgb_buffer.pixels[row * rgb_buffer.width + col], image[row, col])
    assert image.shape == (rgb_buffer.height, rgb_buffer.width, 3)
    assert len(rgb_buffer) == rgb_buffer.width * rgb_buffer.height


def test_to_uint8_rounds_values():
    buf = gray_buffer([[140.75, 0.2]])
    out = buf.to_uint8()
    assert out.dtype == np.uint8
    assert out[0, 0].tolist() == [141, 141, 141]
    assert out[0, 1].tolist() == [0, 0, 0]


def test_with_pixels_keeps_dimensions(rgb_buffer):
    other = rgb_buffer.with_pixels(np.zeros_like(rgb_buffer.pixels))
    assert (other.width, other.height) == (rgb_buffer.width, rgb_buffer.height)
    assert other is not rgb_buffer


def test_noise_predicate():
    assert is_noise_pixel((0, 0, 0))
    assert is_noise_pixel((255, 255, 255))
    assert not is_noise_pixel((255, 0, 0))
    assert not is_noise_pixel((10, 10, 10))
    assert is_impulse(0.0) and is_impulse(255.0)
    assert not is_impulse(254.9)


def test_impulse_mask_reads_channel_zero():
    buf = gray_buffer([[0, 12, 255], [254, 1, 0]])
    assert impulse_mask(buf).tolist() == [True, False, True, False, False, True]
