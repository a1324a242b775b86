import cv2
import numpy as np

from saltpepper import compare_methods
from saltpepper.viz import grid_from_directory


def _write_images(directory, rng, count=2):
    directory.mkdir()
    for idx in range(count):
        image = rng.integers(20, 230, size=(12, 16, 3), dtype=np.uint8)
        cv2.imwrite(str(directory / f"img{idx}.png"), image)


def test_end_to_end_cpu(tmp_path, rng, capsys):
    in_dir = tmp_path / "in"
    out_dir = tmp_path / "out"
    _write_images(in_dir, rng)

    code = compare_methods.main([
        "--in", str(in_dir),
        "--out", str(out_dir),
        "--gpu", "-1",
        "--methods", "ARITHMETIC", "GEOMETRIC", "HARMONIC",
        "--grid",
    ])

    assert code == 0
    summary = (out_dir / "results_summary.txt").read_text()
    assert "ARITHMETIC" in summary
    for stem in ("img0", "img1"):
        for suffix in ("original", "gray_average", "gray_weighted", "gray_yuv", "noisy",
                       "restored_arithmetic", "restored_geometric", "grid"):
            assert (out_dir / f"{stem}_{suffix}.png").is_file()
    assert "RESULTS ANALYSIS" in capsys.readouterr().out


def test_restoration_beats_noise(tmp_path, rng):
    in_dir = tmp_path / "in"
    _write_images(in_dir, rng, count=1)
    methods = compare_methods.build_methods(["ARITHMETIC"], 1, -1.5, compare_methods.ClampPolicy.HEIGHT, None)
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    result = compare_methods.process_image(
        in_dir / "img0.png",
        methods,
        out_dir,
        compare_methods.GrayscaleFormula.WEIGHTED,
        0.1,
        0.1,
        np.random.default_rng(0),
        verbose=False,
    )

    assert result['methods']['ARITHMETIC']['psnr'] > result['methods']['Noisy']['psnr']


def test_grid_from_stage_directory(tmp_path, rng):
    in_dir = tmp_path / "in"
    out_dir = tmp_path / "out"
    _write_images(in_dir, rng, count=1)
    compare_methods.main(["--in", str(in_dir), "--out", str(out_dir), "--gpu", "-1", "--methods", "ARITHMETIC"])

    grid = grid_from_directory(out_dir, "img0", tmp_path / "grid.png")
    assert grid.is_file()


def test_missing_input_directory(tmp_path):
    assert compare_methods.main(["--in", str(tmp_path / "nope"), "--out", str(tmp_path / "out")]) == 1


def test_invalid_radius(tmp_path):
    (tmp_path / "in").mkdir()
    assert compare_methods.main(["--in", str(tmp_path / "in"), "--out", str(tmp_path / "out"), "--radius", "0"]) == 2
