"""Fractal definitions: a viewport, a recurrence and an iteration budget."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import InvalidIterationBudget
from .iterators import pick_recurrence
from .viewport import Viewport

# f(z, c) -> z_next on single complex values. The sampler hands it whole
# complex128 arrays first; if that raises TypeError or ValueError it falls
# back to calling f once per pixel with Python complex values.
Recurrence = Callable[[complex, complex], complex]

# default view and iteration budget per built-in recurrence
PRESETS = {
    "mandelbrot": {"range_x": (-2.5, 1.0), "range_y": (-1.3, 1.3), "max_iterations": 5000},
    "tricorn": {"range_x": (-2.0, 2.0), "range_y": (-2.0, 2.0), "max_iterations": 30},
    "exp": {"range_x": (-2.0, 2.0), "range_y": (-2.0, 2.0), "max_iterations": 100},
}


@dataclass(frozen=True)
class FractalSpec:
    """Viewport + recurrence + max_iterations.

    The viewport object itself stays mutable (recenter/zoom); the sampler
    reads its bounds once at entry.
    """

    viewport: Viewport
    recurrence: Recurrence
    max_iterations: int
    name: str = "custom"

    def validate(self) -> None:
        if (
            isinstance(self.max_iterations, bool)
            or not isinstance(self.max_iterations, numbers.Integral)
            or self.max_iterations <= 0
        ):
            raise InvalidIterationBudget(
                f"max_iterations must be a positive integer, got {self.max_iterations!r}"
            )
        if not callable(self.recurrence):
            raise TypeError("recurrence must be callable as f(z, c)")
        self.viewport.validate()


def make_fractal(
    name: str,
    max_iterations: Optional[int] = None,
    range_x: Optional[tuple[float, float]] = None,
    range_y: Optional[tuple[float, float]] = None,
) -> FractalSpec:
    """Build a FractalSpec from a preset name, with optional overrides."""
    key = name.lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown fractal: {name} (choose from {', '.join(sorted(PRESETS))})")
    preset = PRESETS[key]
    viewport = Viewport(
        range_x=tuple(range_x) if range_x is not None else preset["range_x"],
        range_y=tuple(range_y) if range_y is not None else preset["range_y"],
    )
    return FractalSpec(
        viewport=viewport,
        recurrence=pick_recurrence(key),
        max_iterations=max_iterations if max_iterations is not None else preset["max_iterations"],
        name=key,
    )
