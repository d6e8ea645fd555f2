"""Selection and assignment of slices and elements through index tensors.

Indices are 0-based and must lie within the size of the indexed dimension;
negative indices are rejected. Every function returns a new array.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


def _tensor(t: ArrayLike) -> np.ndarray:
    arr = np.asarray(t)
    if arr.dtype.kind not in "iuf":
        arr = arr.astype(np.float64)
    return arr


def _indices(index: ArrayLike) -> np.ndarray:
    idx = np.asarray(index)
    if idx.size == 0:
        return idx.astype(np.int64)
    if idx.dtype.kind not in "iu":
        raise TypeError("index tensor must hold integers")
    return idx.astype(np.int64, copy=False)


def _index_vector(index: ArrayLike) -> np.ndarray:
    idx = _indices(index)
    if idx.ndim != 1:
        raise ValueError("Index is supposed to be a vector")
    return idx


def _check_dim(dim: int, ndim: int) -> None:
    if not 0 <= dim < ndim:
        raise ValueError(f"Indexing dim {dim} is out of bounds of tensor")


def _check_range(idx: np.ndarray, size: int) -> None:
    if np.any((idx < 0) | (idx >= size)):
        raise IndexError("index out of range")


def _slot(dim: int, position: int) -> tuple:
    return (slice(None),) * dim + (int(position),)


def index_select(src: ArrayLike, dim: int, index: ArrayLike) -> np.ndarray:
    """Return the slices of ``src`` along ``dim`` named by ``index``, in order."""
    arr = _tensor(src)
    idx = _index_vector(index)
    if arr.ndim == 0:
        raise ValueError("Source tensor is empty")
    _check_dim(dim, arr.ndim)
    _check_range(idx, arr.shape[dim])
    return np.take(arr, idx, axis=dim)


def _slice_updates(tensor: ArrayLike, dim: int, index: ArrayLike, src: ArrayLike):
    out = _tensor(tensor).copy()
    source = np.asarray(src)
    idx = _index_vector(index)
    _check_dim(dim, source.ndim)
    if idx.size != source.shape[dim]:
        raise ValueError("Number of indices should be equal to source:size(dim)")
    if out.ndim == 0 or (out.ndim == 1 and source.ndim != 1):
        raise ValueError("tensor and source must be vectors")
    if out.ndim > 1:
        _check_dim(dim, out.ndim)
    _check_range(idx, out.shape[dim] if out.ndim > 1 else out.shape[0])
    return out, source.astype(out.dtype, copy=False), idx


def _source_slice(target: np.ndarray, source: np.ndarray, dim: int, i: int):
    piece = source[_slot(dim, i)]
    if np.size(piece) != np.size(target):
        raise ValueError("inconsistent tensor size between slices")
    return np.reshape(piece, np.shape(target))


def index_copy(tensor: ArrayLike, dim: int, index: ArrayLike, src: ArrayLike) -> np.ndarray:
    """Return ``tensor`` with slice ``index[i]`` along ``dim`` replaced by slice ``i`` of ``src``.

    When an index repeats, the later slice wins.
    """
    out, source, idx = _slice_updates(tensor, dim, index, src)
    for i, target in enumerate(idx):
        if out.ndim > 1:
            slot = _slot(dim, target)
            out[slot] = _source_slice(out[slot], source, dim, i)
        else:
            out[target] = source[i]
    return out


def index_add(tensor: ArrayLike, dim: int, index: ArrayLike, src: ArrayLike) -> np.ndarray:
    """Return ``tensor`` with slice ``i`` of ``src`` added to slice ``index[i]`` along ``dim``.

    Repeated indices accumulate.
    """
    out, source, idx = _slice_updates(tensor, dim, index, src)
    for i, target in enumerate(idx):
        if out.ndim > 1:
            slot = _slot(dim, target)
            out[slot] = out[slot] + _source_slice(out[slot], source, dim, i)
        else:
            out[target] = out[target] + source[i]
    return out


def index_fill(tensor: ArrayLike, dim: int, index: ArrayLike, val) -> np.ndarray:
    """Return ``tensor`` with the slices along ``dim`` named by ``index`` set to ``val``."""
    out = _tensor(tensor).copy()
    idx = _index_vector(index)
    _check_dim(dim, out.ndim)
    _check_range(idx, out.shape[dim])
    value = np.asarray(val).astype(out.dtype)[()]
    for target in idx:
        out[_slot(dim, target)] = value
    return out


def _check_fibres(shapes: list[tuple], dim: int) -> None:
    first = shapes[0]
    for shape in shapes[1:]:
        for d, (a, b) in enumerate(zip(first, shape)):
            if d != dim and a != b:
                raise ValueError("inconsistent tensor size")


def gather(src: ArrayLike, dim: int, index: ArrayLike) -> np.ndarray:
    """Return ``out`` shaped like ``index`` with ``out[..., j, ...] = src[..., index[..., j, ...], ...]``.

    All dimensions other than ``dim`` must agree between ``src`` and ``index``.
    """
    arr = _tensor(src)
    idx = _indices(index)
    if idx.ndim != arr.ndim:
        raise ValueError("Index tensor must have same dimensions as input tensor")
    if not 0 <= dim < arr.ndim:
        raise ValueError("Index dimension is out of bounds")
    _check_fibres([arr.shape, idx.shape], dim)
    if np.any((idx < 0) | (idx >= arr.shape[dim])):
        raise IndexError("Invalid index in gather")
    return np.take_along_axis(arr, idx, axis=dim)


def _scatter_setup(tensor: ArrayLike, dim: int, index: ArrayLike):
    out = _tensor(tensor).copy()
    idx = _indices(index)
    if not 0 <= dim < out.ndim:
        raise ValueError("Index dimension is out of bounds")
    if idx.ndim != out.ndim:
        raise ValueError("Index tensor must have same dimensions as output tensor")
    if np.any((idx < 0) | (idx >= out.shape[dim])):
        raise IndexError("Invalid index in scatter")
    return out, idx


def scatter(tensor: ArrayLike, dim: int, index: ArrayLike, src: ArrayLike) -> np.ndarray:
    """Return ``tensor`` with ``out[..., index[..., j, ...], ...] = src[..., j, ...]``.

    When two positions along ``dim`` name the same target, the later wins.
    """
    out, idx = _scatter_setup(tensor, dim, index)
    source = np.asarray(src)
    if source.ndim != out.ndim:
        raise ValueError("Input tensor must have same dimensions as output tensor")
    _check_fibres([out.shape, idx.shape, source.shape], dim)
    if source.shape[dim] < idx.shape[dim]:
        raise ValueError("source is smaller than index along the scatter dimension")
    source = source.astype(out.dtype, copy=False)
    for i in range(idx.shape[dim]):
        np.put_along_axis(
            out,
            np.take(idx, [i], axis=dim),
            np.take(source, [i], axis=dim),
            axis=dim,
        )
    return out


def scatter_fill(tensor: ArrayLike, dim: int, index: ArrayLike, val) -> np.ndarray:
    """Return ``tensor`` with ``val`` at every position that ``index`` names along ``dim``."""
    out, idx = _scatter_setup(tensor, dim, index)
    _check_fibres([out.shape, idx.shape], dim)
    value = np.asarray(val).astype(out.dtype)[()]
    np.put_along_axis(out, idx, value, axis=dim)
    return out