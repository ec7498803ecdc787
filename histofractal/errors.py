"""Errors raised when a render cannot start or cannot be equalized."""


class FractalError(ValueError):
    """Base class for structural render errors."""


class InvalidViewport(FractalError):
    """Viewport bounds are non-finite or span a zero/negative width."""


class InvalidIterationBudget(FractalError):
    """max_iterations must be a positive integer."""


class InvalidCanvas(FractalError):
    """Canvas dimensions cannot be derived (non-positive minimum side)."""


class DegenerateHistogram(FractalError):
    """Every pixel is interior, so there is nothing to equalize."""
