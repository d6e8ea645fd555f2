"""Selection and assignment through 0/1 masks, and non-zero subscripts."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


def _tensor(t: ArrayLike) -> np.ndarray:
    arr = np.asarray(t)
    if arr.dtype.kind not in "iuf":
        arr = arr.astype(np.float64)
    return arr


def _flat_mask(mask: ArrayLike, size: int) -> np.ndarray:
    m = np.asarray(mask).reshape(-1)
    if m.size != size:
        raise ValueError(
            "Number of elements of destination tensor != Number of elements in mask"
        )
    return m


def _first_invalid(mask: np.ndarray) -> int | None:
    bad = np.flatnonzero((mask != 0) & (mask != 1))
    return int(bad[0]) if bad.size else None


def _check_mask(mask: np.ndarray) -> None:
    if _first_invalid(mask) is not None:
        raise ValueError("Mask tensor can take 0 and 1 values only")


def masked_fill(tensor: ArrayLike, mask: ArrayLike, value) -> np.ndarray:
    """Return a copy of ``tensor`` with ``value`` where ``mask`` is 1."""
    out = _tensor(tensor).copy()
    m = _flat_mask(mask, out.size)
    _check_mask(m)
    flat = out.reshape(-1)
    flat[m == 1] = np.asarray(value).astype(out.dtype)[()]
    return flat.reshape(out.shape)


def masked_copy(tensor: ArrayLike, mask: ArrayLike, src: ArrayLike) -> np.ndarray:
    """Return a copy of ``tensor`` whose masked elements take ``src`` in order.

    The elements of ``src`` are read in row-major order and placed at the
    positions where ``mask`` is 1, also in row-major order.
    """
    out = _tensor(tensor).copy()
    m = _flat_mask(mask, out.size)
    values = np.asarray(src).reshape(-1)
    ones = np.flatnonzero(m == 1)
    invalid = _first_invalid(m)
    overflow = int(ones[values.size]) if ones.size > values.size else None
    if invalid is not None and (overflow is None or invalid < overflow):
        raise ValueError("Mask tensor can take 0 and 1 values only")
    if overflow is not None:
        raise ValueError("Number of elements of src < number of ones in mask")
    flat = out.reshape(-1)
    flat[ones] = values[: ones.size].astype(out.dtype, copy=False)
    return flat.reshape(out.shape)


def masked_select(src: ArrayLike, mask: ArrayLike) -> np.ndarray:
    """Return a 1-D tensor of the elements of ``src`` where ``mask`` is 1."""
    arr = _tensor(src)
    m = np.asarray(mask).reshape(-1)
    if m.size != arr.size:
        raise ValueError(
            f"inconsistent tensor size: {arr.size} and {m.size} elements"
        )
    _check_mask(m)
    return arr.reshape(-1)[m == 1].copy()


def nonzero(tensor: ArrayLike) -> np.ndarray:
    """Return the 0-based subscripts of the non-zero elements, one row each.

    Rows follow the row-major order of the elements, so the result has shape
    ``(count, ndim)``.
    """
    arr = np.asarray(tensor)
    return np.argwhere(arr != 0).astype(np.int64).reshape(-1, arr.ndim)