import numpy as np


def mandelbrot(z, c):
    """z_{n+1} = z_n^2 + c"""
    return z * z + c


def tricorn(z, c):
    """z_{n+1} = conj(z_n)^2 + c"""
    zc = np.conj(z)
    return zc * zc + c


def exp_map(z, c):
    """z_{n+1} = exp(z_n) + c"""
    return np.exp(z) + c


RECURRENCES = {
    "mandelbrot": mandelbrot,
    "tricorn": tricorn,
    "exp": exp_map,
}


def pick_recurrence(map_name: str):
    """Return the recurrence f(z, c) -> z_next registered under map_name.

    Every recurrence is elementwise, so it accepts complex scalars or
    equally-shaped complex128 arrays.
    """
    name = map_name.lower()
    try:
        return RECURRENCES[name]
    except KeyError:
        raise ValueError(f"Unknown map name: {map_name}") from None
