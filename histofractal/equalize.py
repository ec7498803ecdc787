"""
Histogram equalization of an EscapeField.

Stage A sorts a copy of the field and counts the leading interior (-1.0)
entries. Stage B looks every pixel up in the sorted copy with a binary
search and turns its rank among escaping pixels into a grey intensity.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .errors import DegenerateHistogram
from .parallel import map_chunks

logger = logging.getLogger(__name__)

INTERIOR = -1.0
GAMMA = 1.5


def rank_structure(field: np.ndarray) -> tuple[np.ndarray, int]:
    """Sorted copy of ``field`` and the number of leading interior entries."""
    ordered = np.sort(field, kind="stable")
    not_interior = ordered != INTERIOR
    interior_count = int(np.argmax(not_interior)) if not_interior.any() else ordered.size
    return ordered, interior_count


def intensity_from_rank(ix: np.ndarray, interior_count: int, exterior_norm: float) -> np.ndarray:
    """1 - (1 - t)^(1/1.5) with t the percentile among escaping pixels; 0 below them."""
    t = (ix - interior_count) * exterior_norm
    grey = 1.0 - (1.0 - np.clip(t, 0.0, 1.0)) ** (1.0 / GAMMA)
    return np.where(ix < interior_count, 0.0, grey)


def equalize(field: np.ndarray, workers: Optional[int] = None) -> np.ndarray:
    """
    Map every escape value to an intensity in [0, 1].

    Raises DegenerateHistogram when the field is empty or entirely
    interior, since no escaping pixel is left to normalize against.
    """
    field = np.asarray(field, dtype=np.float64).ravel()
    n = field.size
    if n == 0:
        raise DegenerateHistogram("Cannot equalize an empty field")
    if not np.all(np.isfinite(field)):
        raise ValueError("EscapeField contains non-finite values")

    # Stage A: global barrier, needs the whole field
    ordered, interior_count = rank_structure(field)
    if interior_count == n:
        raise DegenerateHistogram(f"All {n} pixels are interior; nothing escapes the bailout radius")
    exterior_norm = 1.0 / (n - interior_count)
    logger.debug("equalizing %d pixels, %d interior", n, interior_count)

    # Stage B: read-only lookups into the sorted snapshot, disjoint output slices
    out = np.empty(n, dtype=np.float64)

    def lookup(start: int, stop: int) -> None:
        ix = np.minimum(np.searchsorted(ordered, field[start:stop], side="left"), n - 1)
        out[start:stop] = intensity_from_rank(ix, interior_count, exterior_norm)

    map_chunks(lookup, n, workers=workers)
    return out
