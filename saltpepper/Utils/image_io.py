"""
Boundary between pixel buffers and the outside world.

RGBA byte decoding/rendering plus OpenCV-backed file loading and saving.
No filtering logic lives here.
"""

from pathlib import Path
from typing import Iterable, Union

import cv2
import numpy as np

from .errors import ShapeMismatch
from .pixel_buffer import PixelBuffer

# Supported extensions for image discovery.
_IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff"}


def decode_rgba(data: Union[bytes, bytearray, np.ndarray], width: int, height: int) -> PixelBuffer:
    """Build a buffer from row-major RGBA bytes, dropping every alpha byte."""
    raw = np.frombuffer(bytes(data), dtype=np.uint8) if not isinstance(data, np.ndarray) else data.ravel()
    if raw.size != width * height * 4:
        raise ShapeMismatch(
            f"Expected {width * height * 4} RGBA bytes for {width}x{height}, got {raw.size}."
        )
    return PixelBuffer(width=width, height=height, pixels=raw.reshape(-1, 4)[:, :3])


def render_rgba(buffer: PixelBuffer) -> bytes:
    """Row-major RGBA bytes with a constant 255 alpha after every triple."""
    rgb8 = buffer.to_uint8().reshape(-1, 3)
    alpha = np.full((rgb8.shape[0], 1), 255, dtype=np.uint8)
    return np.hstack([rgb8, alpha]).tobytes()


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in _IMAGE_EXTS


def iter_images(input_dir: Path) -> Iterable[Path]:
    for item in sorted(Path(input_dir).iterdir()):
        if item.is_file() and is_image_file(item):
            yield item


def load_image(path: Union[str, Path]) -> PixelBuffer:
    bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if bgr is None:
        raise ValueError(f"Failed to read image: {path}")
    rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
    return PixelBuffer.from_array(rgb)


def save_image(buffer: PixelBuffer, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    bgr8 = cv2.cvtColor(buffer.to_uint8(), cv2.COLOR_RGB2BGR)
    if not cv2.imwrite(str(path), bgr8):
        raise IOError(f"Failed to write image: {path}")


__all__ = [
    "decode_rgba",
    "render_rgba",
    "is_image_file",
    "iter_images",
    "load_image",
    "save_image",
]
