import numpy as np

import saltpepper
from saltpepper.Utils import decode_rgba, render_rgba


def test_decode_to_render(rng):
    width, height = 7, 5
    rgba = rng.integers(1, 255, size=width * height * 4, dtype=np.uint8).tobytes()

    original = decode_rgba(rgba, width, height)
    gray = saltpepper.rgb_to_grayscale(original, "WEIGHTED")
    noisy = saltpepper.add_salt_pepper_noise(gray, 0.1, 0.0, rng=rng)
    restored = saltpepper.restore_salt_pepper(noisy, "ARITHMETIC")
    out = render_rgba(restored)

    for stage in (gray, noisy, restored):
        assert (stage.width, stage.height, len(stage)) == (width, height, width * height)
    assert len(out) == width * height * 4
    assert not np.any(saltpepper.Utils.impulse_mask(restored) & ~saltpepper.Utils.impulse_mask(gray))
