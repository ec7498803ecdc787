import argparse
import logging
import os
import sys
import time

import yaml

# Ensure repository root is on sys.path so `from histofractal...` works when running
# this script directly (e.g. `python scripts/make_image.py`).
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from histofractal.config import RenderConfig, build_spec, load_config
from histofractal.fractal import PRESETS
from histofractal.render import render_fractal, save_bitmap
from histofractal.utils import parse_complex


def build_parser():
    parser = argparse.ArgumentParser(description="Render a histogram-equalized escape-time fractal.")
    parser.add_argument("--config", type=str, default=None, help="YAML render config")
    parser.add_argument("--fractal", type=str, default=None, choices=sorted(PRESETS))
    parser.add_argument("--center", type=str, default=None, help="e.g. -0.787+0.25j")
    parser.add_argument("--zoom", type=float, default=None)
    parser.add_argument("--min-side", dest="min_side", type=int, default=None)
    parser.add_argument("--max-iter", dest="max_iter", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--outfile", type=str, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def merge_args(cfg: RenderConfig, args) -> RenderConfig:
    """Command-line values win over the config file."""
    if args.fractal is not None:
        if args.fractal != cfg.fractal:
            # preset viewport and budget belong to the old fractal
            cfg.range_x = cfg.range_y = None
            cfg.max_iterations = None
        cfg.fractal = args.fractal
    if args.center is not None:
        z = parse_complex(args.center)
        cfg.center = (z.real, z.imag)
    if args.zoom is not None:
        cfg.zoom = args.zoom
    if args.min_side is not None:
        cfg.min_side = args.min_side
    if args.max_iter is not None:
        cfg.max_iterations = args.max_iter
    if args.workers is not None:
        cfg.workers = args.workers
    if args.outfile is not None:
        cfg.outfile = args.outfile
    return cfg


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        cfg = load_config(args.config) if args.config else RenderConfig()
        cfg = merge_args(cfg, args)
        spec = build_spec(cfg)
        vp = spec.viewport
        print(f"[run] fractal={spec.name}, x={vp.range_x}, y={vp.range_y}, max_iter={spec.max_iterations}")
        start = time.time()
        result = render_fractal(spec, cfg.min_side, workers=cfg.workers)
    except (ValueError, OSError, yaml.YAMLError) as e:
        # FractalError, unknown presets, unreadable or malformed configs
        print(f"[error] {e}")
        return 1

    print(f"[run] {result.canvas.width}x{result.canvas.height} in {time.time() - start:.2f}s, saving to {cfg.outfile}")
    save_bitmap(result.intensity, result.canvas, cfg.outfile)
    print("[run] done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
