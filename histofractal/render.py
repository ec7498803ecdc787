from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

from .canvas import Canvas, make_canvas
from .equalize import equalize
from .fractal import FractalSpec
from .sampler import sample
from .utils import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    canvas: Canvas
    escape: np.ndarray
    intensity: np.ndarray


def grey_level(g: float) -> int:
    """Intensity in [0, 1] -> 8-bit grey level."""
    return int(clamp(round(255 * g), 0, 255))


def to_grey_rgb(intensity, canvas: Canvas) -> np.ndarray:
    """
    Map a flat IntensityField to a (height, width, 3) uint8 image.

    Pixel (x, y) sits at flat index x*height + y and lands on row y,
    column x of the image.
    """
    intensity = np.asarray(intensity, dtype=np.float64).ravel()
    if intensity.size != canvas.size:
        raise ValueError(
            f"Intensity field has {intensity.size} values, canvas {canvas.width}x{canvas.height} needs {canvas.size}"
        )
    grey = np.clip(np.rint(255.0 * intensity), 0, 255).astype(np.uint8)
    grey = grey.reshape(canvas.width, canvas.height).T
    return np.stack([grey, grey, grey], axis=-1)


def save_bitmap(intensity, canvas: Canvas, path: Union[str, Path]) -> Path:
    """Write the greyscale image; the format follows the file extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    im = Image.fromarray(to_grey_rgb(intensity, canvas))
    im.save(path)
    logger.info("wrote %dx%d image to %s", canvas.width, canvas.height, path)
    return path


def render_fractal(spec: FractalSpec, min_side: int, workers: Optional[int] = None) -> RenderResult:
    """
    Full render: size the canvas, sample escape values, equalize.

    Every structural check runs before sampling; nothing is returned if
    any stage raises.
    """
    spec.validate()
    canvas = make_canvas(spec.viewport, min_side)
    escape = sample(spec, canvas, workers=workers)
    intensity = equalize(escape, workers=workers)
    return RenderResult(canvas=canvas, escape=escape, intensity=intensity)
