"""Matrix-vector and matrix-matrix products accumulated into a tensor.

Each function returns ``beta * t + alpha * (product)`` as a new array of a
floating dtype. When ``beta`` is 0 the values of ``t`` are not read, and
when ``alpha`` is 0 the product is not formed. Both are the rules of the
underlying BLAS routines, so NaN or infinity in the skipped operand does
not reach the result.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import ArrayLike


def _floats(*arrays: ArrayLike) -> list[np.ndarray]:
    arrs = [np.asarray(a) for a in arrays]
    dtype = np.result_type(*arrs)
    if dtype.kind != "f":
        dtype = np.dtype(np.float64)
    return [a.astype(dtype, copy=False) for a in arrs]


def _scaled_sum(
    beta, t: np.ndarray, alpha, product: Callable[[], np.ndarray]
) -> np.ndarray:
    result = np.zeros_like(t) if beta == 0 else beta * t
    if alpha != 0:
        result = result + alpha * product()
    return np.asarray(result).astype(t.dtype, copy=False)


def addmv(beta, t: ArrayLike, alpha, mat: ArrayLike, vec: ArrayLike) -> np.ndarray:
    """Return ``beta * t + alpha * (mat @ vec)`` for a matrix and two vectors."""
    t_arr, m_arr, v_arr = _floats(t, mat, vec)
    if m_arr.ndim != 2 or v_arr.ndim != 1:
        raise ValueError(
            f"matrix and vector expected, got {m_arr.ndim}D, {v_arr.ndim}D"
        )
    if m_arr.shape[1] != v_arr.shape[0]:
        raise ValueError(f"size mismatch, {m_arr.shape}, {v_arr.shape}")
    if t_arr.ndim != 1:
        raise ValueError(f"vector expected, got t: {t_arr.ndim}D")
    if t_arr.shape[0] != m_arr.shape[0]:
        raise ValueError(f"size mismatch, t: {t_arr.shape}, mat: {m_arr.shape}")
    return _scaled_sum(beta, t_arr, alpha, lambda: m_arr @ v_arr)


def addmm(beta, t: ArrayLike, alpha, m1: ArrayLike, m2: ArrayLike) -> np.ndarray:
    """Return ``beta * t + alpha * (m1 @ m2)`` for three matrices."""
    t_arr, a, b = _floats(t, m1, m2)
    if a.ndim != 2 or b.ndim != 2:
        raise ValueError(f"matrices expected, got {a.ndim}D, {b.ndim}D tensors")
    if a.shape[1] != b.shape[0]:
        raise ValueError(f"size mismatch, m1: {a.shape}, m2: {b.shape}")
    if t_arr.ndim != 2:
        raise ValueError(f"matrix expected, got {t_arr.ndim}D tensor for t")
    if t_arr.shape != (a.shape[0], b.shape[1]):
        raise ValueError(
            f"size mismatch, t: {t_arr.shape}, m1: {a.shape}, m2: {b.shape}"
        )
    return _scaled_sum(beta, t_arr, alpha, lambda: a @ b)


def addr(beta, t: ArrayLike, alpha, vec1: ArrayLike, vec2: ArrayLike) -> np.ndarray:
    """Return ``beta * t + alpha * outer(vec1, vec2)``.

    Unlike the other products, ``t`` is always scaled when ``beta`` is not 1,
    so a zero ``beta`` still turns NaN in ``t`` into NaN.
    """
    t_arr, v1, v2 = _floats(t, vec1, vec2)
    if v1.ndim != 1 or v2.ndim != 1:
        raise ValueError(
            f"vector and vector expected, got {v1.ndim}D, {v2.ndim}D tensors"
        )
    if t_arr.ndim != 2:
        raise ValueError(f"expected matrix, got {t_arr.ndim}D tensor for t")
    if t_arr.shape != (v1.shape[0], v2.shape[0]):
        raise ValueError(
            f"size mismatch, t: {t_arr.shape}, vec1: {v1.shape}, vec2: {v2.shape}"
        )
    result = t_arr.copy() if beta == 1 else t_arr * beta
    if alpha != 0:
        result = result + alpha * np.outer(v1, v2)
    return result.astype(t_arr.dtype, copy=False)


def _check_batches(b1: np.ndarray, b2: np.ndarray) -> None:
    if b1.ndim != 3:
        raise ValueError(f"expected 3D tensor, got {b1.ndim}D")
    if b2.ndim != 3:
        raise ValueError(f"expected 3D tensor, got {b2.ndim}D")
    if b1.shape[0] != b2.shape[0]:
        raise ValueError(
            f"equal number of batches expected, got {b1.shape[0]}, {b2.shape[0]}"
        )
    if b1.shape[2] != b2.shape[1]:
        raise ValueError(
            f"wrong matrix size, batch1: {b1.shape[1]}x{b1.shape[2]}, "
            f"batch2: {b2.shape[1]}x{b2.shape[2]}"
        )


def addbmm(
    beta, t: ArrayLike, alpha, batch1: ArrayLike, batch2: ArrayLike
) -> np.ndarray:
    """Return ``beta * t + alpha * sum(batch1[i] @ batch2[i])``.

    ``t`` is scaled by ``beta`` once, with the first batch; with no batches
    it is returned unchanged.
    """
    t_arr, b1, b2 = _floats(t, batch1, batch2)
    _check_batches(b1, b2)
    if t_arr.ndim != 2 or t_arr.shape != (b1.shape[1], b2.shape[2]):
        raise ValueError("output tensor of incorrect size")
    result = t_arr.copy()
    for m1, m2 in zip(b1, b2):
        result = addmm(beta, result, alpha, m1, m2)
        beta = 1
    return result


def baddbmm(
    beta, t: ArrayLike, alpha, batch1: ArrayLike, batch2: ArrayLike
) -> np.ndarray:
    """Return ``beta * t[i] + alpha * (batch1[i] @ batch2[i])`` for every batch ``i``."""
    t_arr, b1, b2 = _floats(t, batch1, batch2)
    _check_batches(b1, b2)
    if t_arr.ndim != 3 or t_arr.shape != (b1.shape[0], b1.shape[1], b2.shape[2]):
        raise ValueError("output tensor of incorrect size")
    result = t_arr.copy()
    for i, (m1, m2) in enumerate(zip(b1, b2)):
        result[i] = addmm(beta, t_arr[i], alpha, m1, m2)
    return result


def match(m1: ArrayLike, m2: ArrayLike, gain=1.0) -> np.ndarray:
    """Return ``gain`` times the squared distances between the rows of two tensors.

    Each tensor is read as a matrix with one row per entry of its first
    dimension; ``r[i, j]`` is ``gain * sum((m1[i] - m2[j]) ** 2)``.
    """
    a, b = _floats(m1, m2)
    n1 = a.shape[0] if a.ndim else 1
    n2 = b.shape[0] if b.ndim else 1
    rows1 = a.reshape(n1, a.size // n1 if n1 else 0)
    rows2 = b.reshape(n2, b.size // n2 if n2 else 0)
    if rows1.shape[1] != rows2.shape[1]:
        raise ValueError("m1 and m2 must have the same inner vector dim")
    diff = rows1[:, None, :] - rows2[None, :, :]
    distances = np.sum(diff * diff, axis=2)
    return (gain * distances).astype(a.dtype, copy=False)