import numpy as np
import pytest

from saltpepper.Utils import PixelBuffer, ShapeMismatch, decode_rgba, render_rgba, iter_images, load_image, save_image


def test_decode_drops_alpha():
    data = bytes([10, 20, 30, 0, 40, 50, 60, 128])
    buf = decode_rgba(data, width=2, height=1)
    assert buf.pixels.tolist() == [[10, 20, 30], [40, 50, 60]]


def test_decode_rejects_wrong_length():
    with pytest.raises(ShapeMismatch):
        decode_rgba(bytes(7), width=2, height=1)


def test_render_inserts_opaque_alpha():
    buf = PixelBuffer(width=2, height=1, pixels=[[1, 2, 3], [140.75, 140.75, 140.75]])
    assert list(render_rgba(buf)) == [1, 2, 3, 255, 141, 141, 141, 255]


def test_decode_render_keeps_row_major_order(rng):
    raw = rng.integers(0, 256, size=3 * 2 * 4, dtype=np.uint8)
    raw.reshape(-1, 4)[:, 3] = 255
    buf = decode_rgba(raw.tobytes(), width=3, height=2)
    assert render_rgba(buf) == raw.tobytes()


def test_save_and_load_png(tmp_path, rgb_buffer):
    path = tmp_path / "nested" / "img.png"
    save_image(rgb_buffer, path)
    loaded = load_image(path)
    assert (loaded.width, loaded.height) == (rgb_buffer.width, rgb_buffer.height)
    assert np.array_equal(loaded.to_uint8(), rgb_buffer.to_uint8())


def test_load_missing_file(tmp_path):
    with pytest.raises(ValueError, match="Failed to read image"):
        load_image(tmp_path / "missing.png")


def test_iter_images_filters_by_extension(tmp_path):
    for name in ("b.PNG", "a.jpg", "notes.txt"):
        (tmp_path / name).write_bytes(b"")
    (tmp_path / "sub.png").mkdir()
    assert [p.name for p in iter_images(tmp_path)] == ["a.jpg", "b.PNG"]
