"""Pixel grid dimensions derived from a viewport's aspect ratio."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .errors import InvalidCanvas
from .viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Canvas:
    width: int
    height: int

    @property
    def size(self) -> int:
        return self.width * self.height

    def flat_index(self, x: int, y: int) -> int:
        """Flat array index of pixel (x, y); columns are contiguous."""
        return x * self.height + y

    def coords(self, j: int) -> tuple[int, int]:
        """Inverse of :meth:`flat_index`."""
        return divmod(j, self.height)


def make_canvas(viewport: Viewport, min_side: int) -> Canvas:
    """
    Size a canvas so its shorter side is ``min_side`` pixels and the
    longer side keeps the viewport's aspect ratio (floored).
    """
    if int(min_side) != min_side or min_side <= 0:
        raise InvalidCanvas(f"min_side must be a positive integer, got {min_side}")
    min_side = int(min_side)
    viewport.validate()

    span_x = abs(viewport.range_x[1] - viewport.range_x[0])
    span_y = abs(viewport.range_y[1] - viewport.range_y[0])
    span_max = max(span_x, span_y)
    span_min = min(span_x, span_y)

    max_side = math.floor(min_side * span_max / span_min)

    # wider than tall -> width gets the long side
    if span_x > span_y:
        canvas = Canvas(width=max_side, height=min_side)
    else:
        canvas = Canvas(width=min_side, height=max_side)
    logger.debug("canvas %dx%d for spans %.6g x %.6g", canvas.width, canvas.height, span_x, span_y)
    return canvas
