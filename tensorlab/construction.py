"""Creation of new tensors: constant fills, ranges, reshaping and concatenation."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
from numpy.typing import ArrayLike


def _shape(size) -> tuple[int, ...]:
    if np.ndim(size) == 0:
        dims = (int(size),)
    else:
        dims = tuple(int(s) for s in size)
    if any(d < 0 for d in dims):
        raise ValueError(f"invalid size {dims}")
    return dims


def zeros(size) -> np.ndarray:
    """Return a ``float64`` tensor of the given size filled with zeros."""
    return np.zeros(_shape(size), dtype=np.float64)


def ones(size) -> np.ndarray:
    """Return a ``float64`` tensor of the given size filled with ones."""
    return np.ones(_shape(size), dtype=np.float64)


def arange(xmin, xmax, step=1) -> np.ndarray:
    """Return ``xmin, xmin + step, ...`` up to and including ``xmax`` when reached.

    The number of elements is ``int((xmax - xmin) / step + 1)``. The step must
    be non-zero and point from ``xmin`` toward ``xmax``.
    """
    if not (step > 0 or step < 0):
        raise ValueError("step must be a non-null number")
    if not ((step > 0 and xmax >= xmin) or (step < 0 and xmax <= xmin)):
        raise ValueError("upper bound and larger bound incoherent with step sign")
    count = int((xmax - xmin) / step + 1)
    return xmin + np.arange(count, dtype=np.float64) * step


def _check_points(a, b, n) -> int:
    n = int(n)
    if not (n > 1 or (n == 1 and a == b)):
        raise ValueError("invalid number of points")
    return n


def linspace(a, b, n: int) -> np.ndarray:
    """Return ``n`` evenly spaced points from ``a`` to ``b`` inclusive.

    A single point is allowed only when ``a == b``.
    """
    n = _check_points(a, b, n)
    if n == 1:
        return np.full(1, a, dtype=np.float64)
    return a + np.arange(n, dtype=np.float64) * (b - a) / (n - 1)


def logspace(a, b, n: int) -> np.ndarray:
    """Return ``n`` points spaced evenly on a log scale from ``10**a`` to ``10**b``."""
    n = _check_points(a, b, n)
    if n == 1:
        return np.full(1, 10.0 ** a, dtype=np.float64)
    return np.power(10.0, a + np.arange(n, dtype=np.float64) * (b - a) / (n - 1))


def reshape(t: ArrayLike, size) -> np.ndarray:
    """Return a copy of ``t`` with its elements, in row-major order, laid out in ``size``."""
    arr = np.asarray(t)
    dims = _shape(size)
    if int(np.prod(dims, dtype=np.int64)) != arr.size:
        raise ValueError(
            f"cannot reshape {arr.size} elements into size {dims}"
        )
    return arr.reshape(-1).reshape(dims).copy()


def cat(tensors: Iterable[ArrayLike], dimension: int) -> np.ndarray:
    """Concatenate tensors along ``dimension``.

    Tensors with fewer dimensions than needed are treated as having trailing
    dimensions of size 1, so vectors can be joined into the columns of a
    matrix. All sizes except the one along ``dimension`` must agree.
    """
    arrays: Sequence[np.ndarray] = [np.asarray(t) for t in tensors]
    if not arrays:
        raise ValueError("invalid number of inputs 0")
    if dimension < 0:
        raise ValueError(f"invalid dimension {dimension}")
    ndim = max(dimension + 1, *(a.ndim for a in arrays))
    padded = [a.reshape(a.shape + (1,) * (ndim - a.ndim)) for a in arrays]
    first = padded[0].shape
    for d in range(ndim):
        if d == dimension:
            continue
        if any(p.shape[d] != first[d] for p in padded[1:]):
            raise ValueError("inconsistent tensor sizes")
    return np.concatenate(padded, axis=dimension)