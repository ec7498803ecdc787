"""YAML render configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from .fractal import FractalSpec, make_fractal
from .utils import parse_complex


@dataclass
class RenderConfig:
    fractal: str = "mandelbrot"
    max_iterations: Optional[int] = None
    range_x: Optional[tuple[float, float]] = None
    range_y: Optional[tuple[float, float]] = None
    center: Optional[tuple[float, float]] = None
    zoom: Optional[float] = None
    min_side: int = 1000
    workers: Optional[int] = None
    outfile: str = "fractal.png"


def _pair(value, key):
    if value is None:
        return None
    if isinstance(value, str):
        z = parse_complex(value)
        return (z.real, z.imag)
    try:
        a, b = value
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a pair of numbers, got {value!r}") from None
    return (float(a), float(b))


def _opt(cfg, key, cast):
    value = cfg.get(key)
    return None if value is None else cast(value)


def config_from_dict(cfg: dict) -> RenderConfig:
    return RenderConfig(
        fractal=str(cfg.get("fractal", "mandelbrot")),
        max_iterations=_opt(cfg, "max_iterations", int),
        range_x=_pair(cfg.get("range_x"), "range_x"),
        range_y=_pair(cfg.get("range_y"), "range_y"),
        center=_pair(cfg.get("center"), "center"),
        zoom=_opt(cfg, "zoom", float),
        min_side=int(cfg.get("min_side", 1000)),
        workers=_opt(cfg, "workers", int),
        outfile=str(cfg.get("outfile", "fractal.png")),
    )


def load_config(config_path: Union[str, Path]) -> RenderConfig:
    with open(config_path, "r") as f:
        cfg = yaml.safe_load(f)
    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{config_path}: expected a mapping at top level, got {type(cfg).__name__}")
    return config_from_dict(cfg)


def build_spec(cfg: RenderConfig) -> FractalSpec:
    """Preset -> overrides -> recenter -> zoom."""
    spec = make_fractal(cfg.fractal, max_iterations=cfg.max_iterations, range_x=cfg.range_x, range_y=cfg.range_y)
    if cfg.center is not None:
        spec.viewport.recenter(cfg.center)
    if cfg.zoom is not None:
        spec.viewport.zoom(cfg.zoom)
    return spec
