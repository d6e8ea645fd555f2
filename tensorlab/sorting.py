"""Sorting, order statistics and top-k selection along one dimension.

Indices are 0-based. Sorting is stable: equal elements keep the order in
which they appear along the dimension, in both directions.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


def _tensor(t: ArrayLike) -> np.ndarray:
    arr = np.asarray(t)
    if arr.dtype.kind not in "iuf":
        arr = arr.astype(np.float64)
    return arr


def _check_dim(dimension: int, ndim: int, message: str) -> None:
    if not 0 <= dimension < ndim:
        raise ValueError(message)


def sort(t: ArrayLike, dimension: int, descending: bool = False) -> tuple[np.ndarray, np.ndarray]:
    """Return the values of ``t`` sorted along ``dimension`` and their original positions."""
    arr = _tensor(t)
    _check_dim(dimension, arr.ndim, f"invalid dimension {dimension}")
    if descending:
        flipped = np.flip(arr, axis=dimension)
        order = np.argsort(flipped, axis=dimension, kind="stable")
        indices = arr.shape[dimension] - 1 - np.flip(order, axis=dimension)
    else:
        indices = np.argsort(arr, axis=dimension, kind="stable")
    indices = indices.astype(np.int64)
    return np.take_along_axis(arr, indices, axis=dimension), indices


def kthvalue(t: ArrayLike, k: int, dimension: int) -> tuple[np.ndarray, np.ndarray]:
    """Return the ``k``-th smallest values (0-based) along ``dimension`` and their positions.

    The reduced dimension is kept with size 1.
    """
    arr = _tensor(t)
    _check_dim(dimension, arr.ndim, "dimension out of range")
    k = int(k)
    if not 0 <= k < arr.shape[dimension]:
        raise ValueError("selected index out of range")
    values, indices = sort(arr, dimension)
    return np.take(values, [k], axis=dimension), np.take(indices, [k], axis=dimension)


def mode(t: ArrayLike, dimension: int) -> tuple[np.ndarray, np.ndarray]:
    """Return the most frequent values along ``dimension`` and a position of each.

    Among equally frequent values the smallest wins; the position reported
    is the last occurrence of that value. The reduced dimension is kept
    with size 1.
    """
    arr = _tensor(t)
    _check_dim(dimension, arr.ndim, "dimension out of range")
    n = arr.shape[dimension]
    values, indices = sort(arr, dimension)
    moved_values = np.moveaxis(values, dimension, -1)
    moved_indices = np.moveaxis(indices, dimension, -1)
    lead = moved_values.shape[:-1]
    rows = int(np.prod(lead, dtype=np.int64))
    flat_values = moved_values.reshape(rows, n)
    flat_indices = moved_indices.reshape(rows, n)
    out_values = np.zeros(rows, dtype=arr.dtype)
    out_indices = np.zeros(rows, dtype=np.int64)
    if n:
        for r, (row, row_indices) in enumerate(zip(flat_values, flat_indices)):
            ends = np.flatnonzero(np.append(row[1:] != row[:-1], True))
            lengths = np.diff(np.concatenate(([-1], ends)))
            end = ends[int(np.argmax(lengths))]
            out_values[r] = row[end]
            out_indices[r] = row_indices[end]
    shape = lead + (1,)
    return (
        np.moveaxis(out_values.reshape(shape), -1, dimension),
        np.moveaxis(out_indices.reshape(shape), -1, dimension),
    )


def median(t: ArrayLike, dimension: int) -> tuple[np.ndarray, np.ndarray]:
    """Return the median along ``dimension``; for even sizes the lower middle element."""
    arr = _tensor(t)
    _check_dim(dimension, arr.ndim, "dimension out of range")
    k = (arr.shape[dimension] - 1) >> 1
    return kthvalue(arr, k, dimension)


def topk(
    t: ArrayLike, k: int, dim: int, largest: bool = False, sorted: bool = True
) -> tuple[np.ndarray, np.ndarray]:
    """Return the ``k`` smallest (or largest) elements along ``dim`` and their positions.

    With ``sorted`` they come ascending for the smallest and descending for
    the largest; otherwise they come in the order they hold in ``t``.
    """
    arr = _tensor(t)
    _check_dim(dim, arr.ndim, "dim not in range")
    k = int(k)
    if not 0 < k <= arr.shape[dim]:
        raise ValueError("k not in range for dimension")
    _, indices = sort(arr, dim, descending=largest)
    indices = np.take(indices, np.arange(k), axis=dim)
    if not sorted:
        indices = np.sort(indices, axis=dim)
    return np.take_along_axis(arr, indices, axis=dim), indices