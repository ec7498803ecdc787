"""Fixed-size thread pool over disjoint index ranges."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_workers(workers: Optional[int]) -> int:
    if workers is None:
        return os.cpu_count() or 1
    if int(workers) != workers or workers < 1:
        raise ValueError(f"workers must be a positive integer, got {workers}")
    return int(workers)


def chunk_bounds(n_items: int, n_chunks: int) -> list[tuple[int, int]]:
    """Split range(n_items) into at most n_chunks contiguous (start, stop) pairs."""
    if n_items <= 0:
        return []
    n_chunks = max(1, min(n_chunks, n_items))
    base, extra = divmod(n_items, n_chunks)
    bounds = []
    start = 0
    for k in range(n_chunks):
        stop = start + base + (1 if k < extra else 0)
        bounds.append((start, stop))
        start = stop
    return bounds


def map_chunks(
    func: Callable[[int, int], T],
    n_items: int,
    workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> list[T]:
    """
    Run ``func(start, stop)`` over disjoint ranges covering ``range(n_items)``.

    Returns the results in range order. Leaving the executor block joins every
    worker, so callers see a completed stage; the first worker exception is
    re-raised from ``future.result()``.
    """
    n_workers = resolve_workers(workers)
    if chunk_size is not None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        n_chunks = -(-n_items // chunk_size)
    else:
        # a few chunks per worker so uneven pixels balance out
        n_chunks = n_workers * 4
    bounds = chunk_bounds(n_items, n_chunks)
    if not bounds:
        return []

    if n_workers == 1 or len(bounds) == 1:
        return [func(start, stop) for start, stop in bounds]

    logger.debug("dispatching %d chunks to %d workers", len(bounds), n_workers)
    with ThreadPoolExecutor(max_workers=n_workers) as pool:
        futures = [pool.submit(func, start, stop) for start, stop in bounds]
        return [f.result() for f in futures]
