"""Random tensors drawn from a NumPy random generator.

``generator`` may be a :class:`numpy.random.Generator`, an integer seed,
or None for fresh entropy. Functions taking a tensor ``t`` return a new
array with its shape (and, where stated, its dtype) filled with samples.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

_RANDOM_LIMITS = {
    np.dtype(np.uint8): 255,
    np.dtype(np.int8): 127,
    np.dtype(np.int16): 32767,
    np.dtype(np.int32): 2**31 - 1,
    np.dtype(np.int64): 2**63 - 1,
    np.dtype(np.float32): 2**24,
    np.dtype(np.float64): 2**53,
}


def _rng(generator) -> np.random.Generator:
    if isinstance(generator, np.random.Generator):
        return generator
    return np.random.default_rng(generator)


def _tensor(t: ArrayLike) -> np.ndarray:
    arr = np.asarray(t)
    if arr.dtype.kind not in "iuf":
        arr = arr.astype(np.float64)
    return arr


def _float_tensor(t: ArrayLike) -> np.ndarray:
    arr = np.asarray(t)
    if arr.dtype.kind != "f":
        arr = arr.astype(np.float64)
    return arr


def _shape(size) -> tuple[int, ...]:
    dims = (int(size),) if np.ndim(size) == 0 else tuple(int(s) for s in size)
    if any(d < 0 for d in dims):
        raise ValueError(f"invalid size {dims}")
    return dims


def random(t: ArrayLike, generator=None) -> np.ndarray:
    """Return integers drawn from a 32-bit random word, reduced to the dtype's range.

    Each element is ``word % (limit + 1)`` where ``limit`` is the largest
    positive value of an integer dtype, or the largest exactly representable
    integer of a floating one.
    """
    arr = _tensor(t)
    limit = _RANDOM_LIMITS.get(arr.dtype)
    if limit is None:
        raise TypeError(f"unsupported dtype {arr.dtype}")
    words = _rng(generator).integers(0, 2**32, size=arr.shape, dtype=np.uint64)
    return (words % np.uint64(limit + 1)).astype(arr.dtype)


def geometric(t: ArrayLike, generator=None, p=0.5) -> np.ndarray:
    """Return counts of trials up to the first success, with success probability ``p``."""
    arr = _tensor(t)
    if not 0 < p <= 1:
        raise ValueError("p must be in (0, 1]")
    return _rng(generator).geometric(p, size=arr.shape).astype(arr.dtype)


def bernoulli(t: ArrayLike, generator=None, p=0.5) -> np.ndarray:
    """Return 1 with probability ``p`` and 0 otherwise.

    ``p`` is a scalar or a tensor with one probability per element.
    """
    arr = _tensor(t)
    probs = np.asarray(p, dtype=np.float64)
    if probs.ndim:
        if probs.size != arr.size:
            raise ValueError(
                f"inconsistent tensor size: {arr.size} and {probs.size} elements"
            )
        probs = probs.reshape(arr.shape)
    if np.any((probs < 0) | (probs > 1)):
        raise ValueError("probabilities must lie in [0, 1]")
    draws = _rng(generator).random(arr.shape)
    return (draws < probs).astype(arr.dtype)


def uniform(t: ArrayLike, generator=None, a=0.0, b=1.0) -> np.ndarray:
    """Return samples uniform on ``[a, b)``."""
    arr = _float_tensor(t)
    return _rng(generator).uniform(a, b, size=arr.shape).astype(arr.dtype)


def normal(t: ArrayLike, generator=None, mean=0.0, stdv=1.0) -> np.ndarray:
    """Return normal samples with the given mean and standard deviation."""
    arr = _float_tensor(t)
    if stdv < 0:
        raise ValueError("standard deviation must be non-negative")
    return _rng(generator).normal(mean, stdv, size=arr.shape).astype(arr.dtype)


def exponential(t: ArrayLike, generator=None, lambd=1.0) -> np.ndarray:
    """Return exponential samples with rate ``lambd``."""
    arr = _float_tensor(t)
    if not lambd > 0:
        raise ValueError("rate must be positive")
    return _rng(generator).exponential(1.0 / lambd, size=arr.shape).astype(arr.dtype)


def cauchy(t: ArrayLike, generator=None, median=0.0, sigma=1.0) -> np.ndarray:
    """Return Cauchy samples centred on ``median`` with scale ``sigma``."""
    arr = _float_tensor(t)
    draws = _rng(generator).standard_cauchy(size=arr.shape)
    return (median + sigma * draws).astype(arr.dtype)


def log_normal(t: ArrayLike, generator=None, mean=1.0, stdv=2.0) -> np.ndarray:
    """Return samples whose logarithm is normal with the given mean and deviation."""
    arr = _float_tensor(t)
    if stdv < 0:
        raise ValueError("standard deviation must be non-negative")
    return _rng(generator).lognormal(mean, stdv, size=arr.shape).astype(arr.dtype)


def multinomial(
    prob_dist: ArrayLike, generator=None, n_sample: int = 1, with_replacement: bool = False
) -> np.ndarray:
    """Return ``n_sample`` category indices drawn from each row of ``prob_dist``.

    Rows need not sum to one but must sum to more than zero. Without
    replacement a category is drawn at most once per row. A 1-D
    distribution gives a 1-D result.
    """
    probs = np.asarray(prob_dist, dtype=np.float64)
    if probs.ndim not in (1, 2):
        raise ValueError("prob_dist must be a vector or a matrix")
    single = probs.ndim == 1
    rows = probs.reshape(1, -1) if single else probs
    n_categories = rows.shape[1]
    n_sample = int(n_sample)
    if n_sample <= 0:
        raise ValueError("cannot sample n_sample <= 0 samples")
    if not with_replacement and n_sample > n_categories:
        raise ValueError(
            "cannot sample n_sample > prob_dist:size(1) samples without replacement"
        )
    rng = _rng(generator)
    result = np.zeros((rows.shape[0], n_sample), dtype=np.int64)
    for i, row in enumerate(rows):
        cum = np.cumsum(row)
        total = cum[-1] if n_categories else 0.0
        if not total > 0:
            raise ValueError(
                "invalid multinomial distribution (sum of probabilities <= 0)"
            )
        cum = cum / total
        for j in range(n_sample):
            u = rng.uniform(0.0, 1.0)
            cum[-1] = 1.0
            idx = int(np.searchsorted(cum, u, side="left"))
            result[i, j] = idx
            if not with_replacement:
                below = cum[idx - 1] if idx else 0.0
                diff = cum[idx] - below
                with np.errstate(all="ignore"):
                    cum[idx:] -= diff
                    cum /= 1.0 - diff
    return result[0] if single else result


def rand(size, generator=None) -> np.ndarray:
    """Return a ``float64`` tensor of the given size, uniform on ``[0, 1)``."""
    return _rng(generator).random(_shape(size))


def randn(size, generator=None) -> np.ndarray:
    """Return a ``float64`` tensor of the given size with standard normal samples."""
    return _rng(generator).standard_normal(_shape(size))


def randperm(n: int, generator=None) -> np.ndarray:
    """Return a random permutation of ``0 .. n-1``."""
    n = int(n)
    if n <= 0:
        raise ValueError("must be strictly positive")
    return _rng(generator).permutation(n).astype(np.int64)