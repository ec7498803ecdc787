"""Rectangular region of the complex plane being sampled."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidViewport


@dataclass
class Viewport:
    """Closed intervals ``range_x = (x0, x1)`` and ``range_y = (y0, y1)``.

    Mutated in place by :meth:`recenter` and :meth:`zoom`; both must happen
    before a render starts.
    """

    range_x: tuple[float, float]
    range_y: tuple[float, float]

    def __post_init__(self):
        self.range_x = (float(self.range_x[0]), float(self.range_x[1]))
        self.range_y = (float(self.range_y[0]), float(self.range_y[1]))

    @property
    def center(self) -> tuple[float, float]:
        return (
            (self.range_x[0] + self.range_x[1]) / 2.0,
            (self.range_y[0] + self.range_y[1]) / 2.0,
        )

    @property
    def span_x(self) -> float:
        return abs(self.range_x[1] - self.range_x[0])

    @property
    def span_y(self) -> float:
        return abs(self.range_y[1] - self.range_y[0])

    def validate(self) -> None:
        """Raise InvalidViewport unless both intervals are finite with x1 > x0, y1 > y0."""
        bounds = self.range_x + self.range_y
        if not all(math.isfinite(b) for b in bounds):
            raise InvalidViewport(f"Viewport bounds must be finite, got x={self.range_x}, y={self.range_y}")
        if not self.range_x[1] > self.range_x[0]:
            raise InvalidViewport(f"range_x must satisfy x1 > x0, got {self.range_x}")
        if not self.range_y[1] > self.range_y[0]:
            raise InvalidViewport(f"range_y must satisfy y1 > y0, got {self.range_y}")

    def recenter(self, new_center: tuple[float, float]) -> None:
        """
        Shift both intervals by |new_center - midpoint| per axis.

        The shift is the absolute distance, so the view only ever moves in the
        positive direction on each axis whatever side new_center lies on.
        """
        cx, cy = self.center
        dx = abs(new_center[0] - cx)
        dy = abs(new_center[1] - cy)
        self.range_x = (self.range_x[0] + dx, self.range_x[1] + dx)
        self.range_y = (self.range_y[0] + dy, self.range_y[1] + dy)

    def zoom(self, factor: float) -> None:
        """Scale both half-spans by 1/factor around the current midpoint."""
        if not (math.isfinite(factor) and factor > 0):
            raise InvalidViewport(f"Zoom factor must be a positive finite number, got {factor}")
        cx, cy = self.center
        half_x = (self.span_x / 2.0) / factor
        half_y = (self.span_y / 2.0) / factor
        self.range_x = (cx - half_x, cx + half_x)
        self.range_y = (cy - half_y, cy + half_y)
