"""
Compare the mean filters on a directory of images.

For every image this script:
- Converts it to grayscale with the AVERAGE, WEIGHTED and YUV formulas
- Adds salt-and-pepper noise to the selected grayscale version
- Restores it with each requested mean filter (CPU or GPU)
- Saves every stage and reports PSNR/SSIM against the clean grayscale image

Example:
    python -m saltpepper.compare_methods --in images --out results --methods ARITHMETIC CONTRAHARMONIC
"""
import argparse
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np
import torch

from .TR import MeanMethod, DEFAULT_Q, DEFAULT_RADIUS, restore_salt_pepper, restore_salt_pepper_gpu
from .Utils import (
    ClampPolicy,
    DegenerateComputation,
    GrayscaleFormula,
    PixelBuffer,
    DEFAULT_PEPPER_PROBABILITY,
    DEFAULT_SALT_PROBABILITY,
    add_salt_pepper_noise,
    compute_psnr,
    compute_ssim,
    impulse_fractions,
    iter_images,
    load_image,
    rgb_to_grayscale,
    save_image,
)
from .viz import create_grid


def select_device(gpu: Optional[int]) -> Optional[torch.device]:
    """None means the CPU loop; otherwise the torch device to filter on."""
    if gpu == -1:
        print("Using CPU")
        return None
    if not torch.cuda.is_available():
        print("CUDA not available, using CPU")
        return None
    index = 0 if gpu is None else gpu
    print(f"Using GPU {index}: {torch.cuda.get_device_name(index)}")
    return torch.device(f"cuda:{index}")


def build_methods(
    names: List[str],
    radius: int,
    q: float,
    policy: ClampPolicy,
    device: Optional[torch.device],
) -> Dict[str, Callable[[PixelBuffer], PixelBuffer]]:
    methods = {}
    for name in names:
        method = MeanMethod(name)
        if device is None:
            methods[method.value] = (
                lambda buf, m=method: restore_salt_pepper(buf, m, radius=radius, q=q, policy=policy)
            )
        else:
            if policy is not ClampPolicy.HEIGHT:
                print(f"[WARN] GPU filters always clamp rows to the height; ignoring clamp={policy.value}")
            methods[method.value] = (
                lambda buf, m=method: restore_salt_pepper_gpu(buf, device, m, radius=radius, q=q)
            )
    return methods


def process_image(
    img_path: Path,
    methods: Dict[str, Callable[[PixelBuffer], PixelBuffer]],
    output_dir: Path,
    formula: GrayscaleFormula,
    salt: float,
    pepper: float,
    rng: np.random.Generator,
    grid: bool = False,
    verbose: bool = True,
) -> Optional[Dict]:
    """Run every stage on one image, save the outputs and compute metrics."""
    start_time = time.time()
    img_name = img_path.stem

    try:
        original = load_image(img_path)
    except ValueError as e:
        if verbose:
            print(f"⚠ Warning: {e}")
        return None

    grays = {f: rgb_to_grayscale(original, f) for f in GrayscaleFormula}
    clean = grays[formula]
    noisy = add_salt_pepper_noise(clean, salt, pepper, rng=rng)
    salt_frac, pepper_frac = impulse_fractions(noisy)

    save_image(original, output_dir / f"{img_name}_original.png")
    for f, gray in grays.items():
        save_image(gray, output_dir / f"{img_name}_gray_{f.value.lower()}.png")
    save_image(noisy, output_dir / f"{img_name}_noisy.png")

    results = {
        'image': img_name,
        'shape': (original.height, original.width),
        'noise': {'salt': salt_frac, 'pepper': pepper_frac},
        'methods': {
            'Noisy': {'psnr': compute_psnr(clean, noisy), 'ssim': compute_ssim(clean, noisy)},
        },
        'timings': {},
    }
    restored_panels = {}

    for idx, (name, restore) in enumerate(methods.items(), 1):
        t0 = time.time()
        if verbose:
            print(f"  [{idx}/{len(methods)}] {name} mean filter...", end=' ', flush=True)
        try:
            restored = restore(noisy)
        except DegenerateComputation as e:
            t1 = time.time()
            if verbose:
                print(f"⚠ Error: {str(e)[:60]}")
            results['methods'][name] = {'psnr': None, 'ssim': None, 'error': str(e)}
            results['timings'][name] = t1 - t0
            continue
        t1 = time.time()

        results['methods'][name] = {
            'psnr': compute_psnr(clean, restored),
            'ssim': compute_ssim(clean, restored),
        }
        results['timings'][name] = t1 - t0
        save_image(restored, output_dir / f"{img_name}_restored_{name.lower()}.png")
        restored_panels[name] = restored
        if verbose:
            print(f"✓ ({t1-t0:.2f}s)")

    if grid:
        create_grid(
            {
                "Input": {"": original},
                "Grayscale": {f.value: g for f, g in grays.items()},
                "Noisy": {formula.value: noisy},
                "Restored": restored_panels,
            },
            output_dir / f"{img_name}_grid.png",
            title=img_name,
        )

    total_time = time.time() - start_time
    results['timings']['total'] = total_time
    if verbose:
        print(f"  Total time: {total_time:.2f}s")

    return results


def summarize(all_results: List[Dict], method_names: List[str]) -> List[str]:
    """Table lines with average PSNR/SSIM/time per method."""
    lines = [
        f"{'Method':<25} {'Avg PSNR (dB)':<15} {'Avg SSIM':<15} {'Avg Time (s)':<15} {'Count':<10}",
        "-" * 80,
    ]
    for method in ['Noisy'] + method_names:
        psnr, ssim, timings = [], [], []
        for result in all_results:
            m_result = result['methods'].get(method, {})
            if m_result.get('psnr') is not None:
                psnr.append(m_result['psnr'])
                ssim.append(m_result['ssim'])
            if method in result['timings']:
                timings.append(result['timings'][method])
        if psnr:
            mean_time = np.mean(timings) if timings else 0.0
            lines.append(
                f"{method:<25} {np.mean(psnr):>10.2f}      {np.mean(ssim):>10.4f}      "
                f"{mean_time:>10.2f}      {len(psnr):>5}"
            )
        else:
            lines.append(f"{method:<25} {'N/A':<15} {'N/A':<15} {'N/A':<15} {'0':<10}")
    return lines


def write_summary(results_file: Path, all_results: List[Dict], method_names: List[str], args: argparse.Namespace) -> None:
    with open(results_file, 'w') as f:
        f.write("="*80 + "\n")
        f.write("SALT-AND-PEPPER MEAN FILTER COMPARISON RESULTS\n")
        f.write("="*80 + "\n")
        f.write(f"Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"Total images processed: {len(all_results)}\n")
        f.write(f"Grayscale formula: {args.grayscale}\n")
        f.write(f"Salt / pepper probability: {args.salt} / {args.pepper}\n")
        f.write(f"Radius: {args.radius}  Q: {args.q}  Clamp: {args.clamp}\n\n")

        for line in summarize(all_results, method_names):
            f.write(line + "\n")

        f.write(f"\nDetailed Results:\n")
        f.write("-" * 80 + "\n")
        for result in all_results:
            f.write(f"\nImage: {result['image']}\n")
            f.write(f"Shape: {result['shape']}\n")
            f.write(f"Salt fraction: {result['noise']['salt']:.4f}  Pepper fraction: {result['noise']['pepper']:.4f}\n")
            f.write(f"Total Processing Time: {result['timings'].get('total', 0):.2f}s\n")
            for method, metrics in result['methods'].items():
                method_time = result['timings'].get(method, 0)
                if metrics.get('psnr') is not None:
                    f.write(f"  {method}:\n")
                    f.write(f"    PSNR: {metrics['psnr']:.2f} dB\n")
                    f.write(f"    SSIM: {metrics['ssim']:.4f}\n")
                    f.write(f"    Time: {method_time:.2f}s\n")
                else:
                    f.write(f"  {method}: Error - {metrics.get('error', 'Unknown')}\n")
                    f.write(f"    Time: {method_time:.2f}s\n")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare salt-and-pepper mean filters on a directory of images"
    )
    parser.add_argument("--in", dest="input_dir", required=True, help="Input image directory")
    parser.add_argument("--out", dest="output_dir", required=True, help="Output directory for results")
    parser.add_argument(
        "--grayscale",
        choices=[f.value for f in GrayscaleFormula],
        default=GrayscaleFormula.WEIGHTED.value,
        help="Grayscale formula fed to the noise stage (default: WEIGHTED)"
    )
    parser.add_argument("--salt", type=float, default=DEFAULT_SALT_PROBABILITY, help="Salt probability (default: 0.06)")
    parser.add_argument("--pepper", type=float, default=DEFAULT_PEPPER_PROBABILITY, help="Pepper probability (default: 0.06)")
    parser.add_argument(
        "--methods",
        nargs='+',
        choices=[m.value for m in MeanMethod],
        default=[m.value for m in MeanMethod],
        help="Mean filters to run (default: all)"
    )
    parser.add_argument("--radius", type=int, default=DEFAULT_RADIUS, help="Neighbourhood radius (default: 1)")
    parser.add_argument("--q", type=float, default=DEFAULT_Q, help="Contraharmonic order Q (default: -1.5)")
    parser.add_argument(
        "--clamp",
        choices=[p.value for p in ClampPolicy],
        default=ClampPolicy.HEIGHT.value,
        help="Row clamp bound for border neighbours (default: height)"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed for noise generation (default: 42)")
    parser.add_argument(
        "--gpu",
        type=int,
        default=None,
        help="GPU device ID (default: auto-detect, use -1 for CPU)"
    )
    parser.add_argument("--max_images", type=int, default=None, help="Maximum number of images to process (default: all)")
    parser.add_argument("--grid", action="store_true", help="Also save a comparison grid per image")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    input_dir = Path(args.input_dir)
    if not input_dir.exists():
        print(f"⚠ Error: input directory not found: {input_dir}")
        return 1
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        radius = int(args.radius)
        if radius < 1:
            raise ValueError("radius must be an integer >= 1.")
        if not (0.0 <= args.salt <= 1.0 and 0.0 <= args.pepper <= 1.0):
            raise ValueError("salt and pepper probabilities must be in [0, 1].")
    except ValueError as e:
        print(f"⚠ Error: {e}")
        return 2

    device = select_device(args.gpu)
    methods = build_methods(args.methods, radius, args.q, ClampPolicy(args.clamp), device)
    method_names = list(methods)

    image_files = list(iter_images(input_dir))
    if args.max_images:
        image_files = image_files[:args.max_images]

    print(f"\nFound {len(image_files)} images in {input_dir}")
    print(f"Methods: {', '.join(method_names)}")
    print(f"Output directory: {output_dir}\n")

    rng = np.random.default_rng(args.seed)
    all_results = []
    for img_idx, img_path in enumerate(image_files, 1):
        print(f"[{img_idx}/{len(image_files)}] Processing {img_path.stem}...")
        try:
            result = process_image(
                img_path,
                methods,
                output_dir,
                GrayscaleFormula(args.grayscale),
                args.salt,
                args.pepper,
                rng,
                grid=args.grid,
            )
        except Exception as exc:  # pylint: disable=broad-except
            print(f"[WARN] Skipping {img_path}: {exc}")
            result = None
        if result:
            all_results.append(result)
        print()

    print("\n" + "="*80)
    print("RESULTS ANALYSIS")
    print("="*80)

    if not all_results:
        print("No results to display.")
        return 1

    for line in summarize(all_results, method_names):
        print(line)

    results_file = output_dir / "results_summary.txt"
    write_summary(results_file, all_results, method_names, args)

    print(f"\n✓ Detailed results saved to: {results_file}")
    print(f"✓ All images saved to: {output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
