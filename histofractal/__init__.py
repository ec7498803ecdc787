"""Escape-time fractal rendering with histogram-equalized greyscale."""

from .canvas import Canvas, make_canvas
from .equalize import equalize
from .errors import (
    DegenerateHistogram,
    FractalError,
    InvalidCanvas,
    InvalidIterationBudget,
    InvalidViewport,
)
from .fractal import PRESETS, FractalSpec, make_fractal
from .iterators import pick_recurrence
from .render import RenderResult, render_fractal, save_bitmap, to_grey_rgb
from .sampler import sample
from .viewport import Viewport

__all__ = [
    "Canvas",
    "DegenerateHistogram",
    "FractalError",
    "FractalSpec",
    "InvalidCanvas",
    "InvalidIterationBudget",
    "InvalidViewport",
    "PRESETS",
    "RenderResult",
    "Viewport",
    "equalize",
    "make_canvas",
    "make_fractal",
    "pick_recurrence",
    "render_fractal",
    "sample",
    "save_bitmap",
    "to_grey_rgb",
]
