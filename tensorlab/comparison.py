"""Element-wise comparisons, tensor equality and logical reductions."""

from __future__ import annotations

import enum
import operator
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike


class Comparison(enum.Enum):
    """The relations that :func:`compare` can test."""

    LT = "lt"
    GT = "gt"
    LE = "le"
    GE = "ge"
    EQ = "eq"
    NE = "ne"

    @property
    def operator(self) -> Callable[[np.ndarray, np.ndarray], np.ndarray]:
        return _OPERATORS[self]


_OPERATORS = {
    Comparison.LT: operator.lt,
    Comparison.GT: operator.gt,
    Comparison.LE: operator.le,
    Comparison.GE: operator.ge,
    Comparison.EQ: operator.eq,
    Comparison.NE: operator.ne,
}


def _tensor(t: ArrayLike) -> np.ndarray:
    arr = np.asarray(t)
    if arr.dtype.kind not in "iuf":
        arr = arr.astype(np.float64)
    return arr


def _comparison(op) -> Comparison:
    if isinstance(op, Comparison):
        return op
    try:
        return Comparison(str(op).lower())
    except ValueError:
        raise ValueError(f"unknown comparison: {op!r}") from None


def compare(ta: ArrayLike, tb, op, as_mask: bool = True) -> np.ndarray:
    """Compare ``ta`` with a scalar or with a tensor, element by element.

    ``tb`` is either a scalar or a tensor with as many elements as ``ta``,
    read in row-major order. The result has the shape of ``ta`` and holds 1
    where the relation holds and 0 elsewhere. With ``as_mask`` it is a
    ``uint8`` mask; otherwise it has the dtype of ``ta``.
    """
    relation = _comparison(op)
    left = _tensor(ta)
    if np.ndim(tb) == 0:
        right = np.asarray(tb).astype(left.dtype)[()]
    else:
        other = np.asarray(tb)
        if other.size != left.size:
            raise ValueError(
                f"inconsistent tensor size: {left.size} and {other.size} elements"
            )
        right = other.reshape(left.shape).astype(left.dtype, copy=False)
    result = relation.operator(left, right)
    dtype = np.uint8 if as_mask else left.dtype
    return np.asarray(result).astype(dtype)


def equal(a: ArrayLike, b: ArrayLike) -> bool:
    """Return True when both tensors have the same shape and the same elements."""
    left = np.asarray(a)
    right = np.asarray(b)
    if left.shape != right.shape:
        return False
    return not bool(np.any(left != right))


def _nonempty(t: ArrayLike) -> np.ndarray:
    arr = np.asarray(t)
    if arr.size == 0:
        raise ValueError("empty Tensor")
    return arr


def logical_all(t: ArrayLike) -> bool:
    """Return True when every element is non-zero."""
    return bool(np.all(_nonempty(t) != 0))


def logical_any(t: ArrayLike) -> bool:
    """Return True when at least one element is non-zero."""
    return bool(np.any(_nonempty(t) != 0))