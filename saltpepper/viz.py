"""Create side-by-side visualization grids for grayscale / noisy / restored buffers."""

import argparse
from pathlib import Path
from typing import Dict, List

import matplotlib.pyplot as plt

from .Utils.image_io import load_image
from .Utils.pixel_buffer import PixelBuffer


def _rows(panels: Dict[str, Dict[str, PixelBuffer]]) -> List[str]:
    return [name for name, row in panels.items() if row]


def create_grid(panels: Dict[str, Dict[str, PixelBuffer]], out_path: Path, title: str = "") -> Path:
    """
    Save a figure with one row per group of buffers.

    Args:
        panels: row label -> {panel title -> buffer}, e.g.
            {"Grayscale": {"AVERAGE": ..., "WEIGHTED": ...}, "Restored": {...}}
        out_path: PNG destination.
        title: optional figure title.

    Returns:
        The written path.
    """
    rows = _rows(panels)
    if not rows:
        raise RuntimeError("Nothing to visualize: every row is empty.")
    columns = max(len(panels[name]) for name in rows)

    fig, axes = plt.subplots(len(rows), columns, figsize=(4 * columns, 3 * len(rows)), squeeze=False)
    for row_idx, name in enumerate(rows):
        for col_idx in range(columns):
            axes[row_idx, col_idx].axis("off")
        for col_idx, (panel_title, buffer) in enumerate(panels[name].items()):
            ax = axes[row_idx, col_idx]
            ax.imshow(buffer.to_uint8())
            ax.set_title(f"{name}: {panel_title}" if panel_title else name)

    if title:
        fig.suptitle(title)
    fig.tight_layout()

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def grid_from_directory(stage_dir: Path, stem: str, out_path: Path) -> Path:
    """Rebuild a grid from the PNGs written by compare_methods for one image."""
    panels: Dict[str, Dict[str, PixelBuffer]] = {"Input": {}, "Grayscale": {}, "Noisy": {}, "Restored": {}}
    for path in sorted(Path(stage_dir).glob(f"{stem}_*.png")):
        label = path.stem[len(stem) + 1:]
        if label == "original":
            panels["Input"][""] = load_image(path)
        elif label.startswith("gray_"):
            panels["Grayscale"][label[len("gray_"):].upper()] = load_image(path)
        elif label == "noisy":
            panels["Noisy"][""] = load_image(path)
        elif label.startswith("restored_"):
            panels["Restored"][label[len("restored_"):].upper()] = load_image(path)
    return create_grid(panels, out_path, title=stem)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a comparison grid from compare_methods output.")
    parser.add_argument("--dir", dest="stage_dir", required=True, help="Directory holding the stage PNGs")
    parser.add_argument("--name", dest="stem", required=True, help="Image name (file stem) to visualize")
    parser.add_argument("--out", dest="out_path", required=True, help="Output PNG path")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    out = grid_from_directory(Path(args.stage_dir), args.stem, Path(args.out_path))
    print(f"Saved visualization grid to {out}")


if __name__ == "__main__":
    main()
