"""
Escape sampler: map every pixel to c in the complex plane and iterate
z_{k+1} = f(z_k, c) from z_0 = 0 until |z| passes the bailout radius.

The result is a flat float64 EscapeField indexed ``x*height + y``. Escaping
pixels hold the smooth escape value ``mu = (i+1) - log2(log10|z_i|)``;
interior pixels hold -1.0.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from .canvas import Canvas
from .errors import InvalidCanvas
from .fractal import FractalSpec
from .parallel import map_chunks
from .viewport import Viewport

logger = logging.getLogger(__name__)

BAILOUT = 400.0
INTERIOR = -1.0


def pixel_grid(spec: FractalSpec, canvas: Canvas, x_start: int = 0, x_stop: Optional[int] = None) -> np.ndarray:
    """Complex coordinates of columns [x_start, x_stop), flattened x-major."""
    if x_stop is None:
        x_stop = canvas.width
    (x0, x1), (y0, y1) = spec.viewport.range_x, spec.viewport.range_y
    scale_x = (x1 - x0) / canvas.width
    scale_y = (y1 - y0) / canvas.height

    cx = np.arange(x_start, x_stop, dtype=np.float64) * scale_x + x0
    cy = np.arange(canvas.height, dtype=np.float64) * scale_y + y0

    c = np.empty((x_stop - x_start, canvas.height), dtype=np.complex128)
    c.real = cx[:, None]
    c.imag = cy[None, :]
    return c.ravel()


def _scalar_call(recurrence):
    """Per-pixel wrapper for recurrences written for single complex values."""

    def call(z, c):
        try:
            return complex(recurrence(z, c))
        except OverflowError:
            # cmath/float overflow -> non-finite modulus, handled as an anomaly
            return complex(math.inf, math.inf)

    ufunc = np.frompyfunc(call, 2, 1)

    def step(z, c):
        return ufunc(z, c).astype(np.complex128)

    return step


class _Stepper:
    """
    Apply a recurrence to arrays of z and c.

    Array-aware recurrences (numpy expressions) run on the whole array. A
    recurrence that rejects arrays (cmath calls, branches on abs(z)) is
    detected on the first call and from then on runs pixel by pixel.
    """

    def __init__(self, recurrence):
        self.recurrence = recurrence
        self.per_pixel = None

    def __call__(self, z: np.ndarray, c: np.ndarray) -> np.ndarray:
        if self.per_pixel is not None:
            return self.per_pixel(z, c)
        try:
            out = self.recurrence(z, c)
        except (TypeError, ValueError):
            self.per_pixel = _scalar_call(self.recurrence)
            return self.per_pixel(z, c)
        out = np.asarray(out, dtype=np.complex128)
        if out.shape != c.shape:
            # constant recurrences hand back a scalar
            out = np.broadcast_to(out, c.shape).copy()
        return out


def escape_values(recurrence, c: np.ndarray, max_iterations: int) -> tuple[np.ndarray, int]:
    """
    Smooth escape values for an array of points.

    Returns (mu, anomalies) where anomalies counts points whose modulus
    went non-finite before reaching the bailout radius. Such a point takes
    mu from its last finite modulus, or is treated as interior when that
    gives no finite value.
    """
    n = c.size
    mu = np.full(n, INTERIOR, dtype=np.float64)
    idx = np.arange(n)
    z = np.zeros(n, dtype=np.complex128)
    cc = c
    last_mod = np.full(n, np.nan)
    anomalies = 0
    step = _Stepper(recurrence)

    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        for i in range(1, max_iterations):
            if idx.size == 0:
                break
            z = step(z, cc)
            mod = np.abs(z)
            finite = np.isfinite(mod)
            escaped = finite & (mod > BAILOUT)
            done = escaped | ~finite
            if not done.any():
                last_mod = mod
                continue

            anomalies += int(np.count_nonzero(~finite))
            ref = np.where(escaped, mod, last_mod)[done]
            m = (i + 1) - np.log2(np.log10(ref))
            mu[idx[done]] = np.where(np.isfinite(m), np.maximum(m, 0.0), INTERIOR)

            keep = ~done
            idx = idx[keep]
            z = z[keep]
            cc = cc[keep]
            last_mod = mod[keep]
    return mu, anomalies


def sample(spec: FractalSpec, canvas: Canvas, workers: Optional[int] = None) -> np.ndarray:
    """
    Compute the EscapeField for ``spec`` on ``canvas``.

    Work is split by column; each worker fills its own contiguous slice
    ``[x_start*height, x_stop*height)`` of the output, so the result does
    not depend on the worker count.
    """
    spec.validate()
    if canvas.width <= 0 or canvas.height <= 0:
        raise InvalidCanvas(f"Canvas must be non-empty, got {canvas.width}x{canvas.height}")

    height = canvas.height
    field = np.empty(canvas.size, dtype=np.float64)
    # snapshot so a later recenter/zoom cannot race the workers
    frozen = FractalSpec(
        viewport=Viewport(spec.viewport.range_x, spec.viewport.range_y),
        recurrence=spec.recurrence,
        max_iterations=int(spec.max_iterations),
        name=spec.name,
    )

    def run_columns(x_start: int, x_stop: int) -> int:
        c = pixel_grid(frozen, canvas, x_start, x_stop)
        mu, anomalies = escape_values(frozen.recurrence, c, frozen.max_iterations)
        field[x_start * height:x_stop * height] = mu
        return anomalies

    anomalies = sum(map_chunks(run_columns, canvas.width, workers=workers))
    if anomalies:
        logger.info("%d pixel(s) overflowed before bailout", anomalies)
    logger.debug(
        "sampled %s on %dx%d: %d interior",
        spec.name, canvas.width, canvas.height, int(np.count_nonzero(field == INTERIOR)),
    )
    return field
