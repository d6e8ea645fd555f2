"""Linear systems, inverses and Cholesky factorizations through LAPACK.

Inputs that are not floating point are converted to ``float64``. A routine
that fails on its data raises :class:`LapackError`; badly shaped arguments
raise ``ValueError``.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike
from scipy.linalg import get_lapack_funcs


class LapackError(ArithmeticError):
    """A LAPACK routine reported that it could not complete its work."""

    def __init__(self, routine: str, info: int, message: str) -> None:
        super().__init__(f"Lapack Error in {routine} : {message}")
        self.routine = routine
        self.info = info


def _check(routine: str, info, message: str) -> None:
    info = int(info)
    if info < 0:
        raise ValueError(f"Lapack Error in {routine} : illegal argument {-info}")
    if info > 0:
        raise LapackError(routine, info, message.format(info=info))


def _float(x: ArrayLike) -> np.ndarray:
    arr = np.asarray(x)
    if arr.dtype.kind != "f":
        arr = arr.astype(np.float64)
    return arr


def _matrix(x: ArrayLike, name: str) -> np.ndarray:
    arr = _float(x)
    if arr.ndim != 2:
        raise ValueError(f"{name} should be 2 dimensional")
    return arr


def _square(x: ArrayLike, name: str = "A") -> np.ndarray:
    arr = _matrix(x, name)
    if arr.shape[0] != arr.shape[1]:
        raise ValueError(f"{name} should be square")
    return arr


def _pair(a: np.ndarray, b: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    dtype = np.result_type(a, b)
    return a.astype(dtype, copy=False), b.astype(dtype, copy=False)


def _flag(value, allowed: str, name: str) -> str:
    flag = str(value)[:1].upper()
    if not flag or flag not in allowed:
        raise ValueError(f"{name} must be one of {', '.join(allowed)}, got {value!r}")
    return flag


def _routine(name: str, *arrays: np.ndarray):
    (func,) = get_lapack_funcs((name,), arrays)
    return func


def gesv(b: ArrayLike, a: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """Solve ``a @ x = b`` for a square ``a``.

    Returns the solution and the LU factorization of ``a`` (unit lower
    triangle below the diagonal, ``U`` on and above it).
    """
    a_arr = _matrix(a, "A")
    b_arr = _matrix(b, "B")
    if a_arr.shape[0] != a_arr.shape[1]:
        raise ValueError("A should be square")
    if a_arr.shape[0] != b_arr.shape[0]:
        raise ValueError("A,b size incompatible")
    a_arr, b_arr = _pair(a_arr, b_arr)
    lu, _, x, info = _routine("gesv", a_arr, b_arr)(a_arr, b_arr)
    _check("gesv", info, "U({info},{info}) is zero, singular U.")
    return x, lu


_TRANS = {"N": 0, "T": 1, "C": 2}


def trtrs(b: ArrayLike, a: ArrayLike, uplo="U", trans="N", diag="N") -> np.ndarray:
    """Solve a triangular system ``op(a) @ x = b``.

    ``uplo`` names the triangle of ``a`` that is used, ``trans`` is ``N``,
    ``T`` or ``C`` for ``op``, and ``diag`` is ``U`` when the diagonal is
    taken to be all ones.
    """
    a_arr = _matrix(a, "A")
    b_arr = _matrix(b, "B")
    if a_arr.shape[0] != a_arr.shape[1]:
        raise ValueError("A should be square")
    if b_arr.shape[0] != a_arr.shape[0]:
        raise ValueError("A,b size incompatible")
    u = _flag(uplo, "UL", "uplo")
    t = _flag(trans, "NTC", "trans")
    d = _flag(diag, "NU", "diag")
    a_arr, b_arr = _pair(a_arr, b_arr)
    x, info = _routine("trtrs", a_arr, b_arr)(
        a_arr, b_arr, lower=int(u == "L"), trans=_TRANS[t], unitdiag=int(d == "U")
    )
    _check("trtrs", info, "A({info},{info}) is zero, singular A")
    return x


def gels(b: ArrayLike, a: ArrayLike) -> np.ndarray:
    """Solve ``a @ x = b`` in the least-squares sense for a full-rank ``a``.

    An overdetermined system gives the least-squares solution, an
    underdetermined one the solution of minimum norm. The result has
    ``a.shape[1]`` rows.
    """
    a_arr = _matrix(a, "A")
    b_arr = _matrix(b, "B")
    if a_arr.shape[0] != b_arr.shape[0]:
        raise ValueError("size incompatible A,b")
    a_arr, b_arr = _pair(a_arr, b_arr)
    m, n = a_arr.shape
    padded = np.zeros((max(m, n), b_arr.shape[1]), dtype=b_arr.dtype)
    padded[:m] = b_arr
    _, x, info = _routine("gels", a_arr, padded)(a_arr, padded)
    _check(
        "gels",
        info,
        "The {info}-th diagonal element of the triangular factor of A is zero",
    )
    return np.array(x[:n])


def getri(a: ArrayLike) -> np.ndarray:
    """Return the inverse of a square matrix, computed from its LU factorization."""
    arr = _square(a)
    lu, piv, info = _routine("getrf", arr)(arr)
    _check("getrf", info, "U({info},{info}) is 0, U is singular")
    inverse, info = _routine("getri", lu)(lu, piv)
    _check("getri", info, "U({info},{info}) is 0, U is singular")
    return inverse


def clear_triangle(a: ArrayLike, uplo="U") -> np.ndarray:
    """Return a square matrix keeping only its ``uplo`` triangle.

    ``U`` zeroes everything below the diagonal, ``L`` everything above it;
    any other value leaves the matrix unchanged.
    """
    arr = _square(a)
    flag = str(uplo)[:1].upper()
    if flag == "U":
        return np.triu(arr)
    if flag == "L":
        return np.tril(arr)
    return arr.copy()


def copy_triangle(a: ArrayLike, uplo="U") -> np.ndarray:
    """Return the symmetric matrix built from the ``uplo`` triangle of a square matrix.

    ``U`` mirrors the upper triangle into the lower one, ``L`` the lower
    into the upper; any other value leaves the matrix unchanged.
    """
    arr = _square(a)
    flag = str(uplo)[:1].upper()
    if flag == "U":
        return np.triu(arr) + np.triu(arr, 1).T
    if flag == "L":
        return np.tril(arr) + np.tril(arr, -1).T
    return arr.copy()


def potrf(a: ArrayLike, uplo="U") -> np.ndarray:
    """Return the Cholesky factor of a symmetric positive definite matrix.

    With ``U`` the factor ``u`` is upper triangular and ``a = u.T @ u``;
    with ``L`` it is lower triangular and ``a = l @ l.T``. Only the named
    triangle of ``a`` is read.
    """
    arr = _square(a)
    u = _flag(uplo, "UL", "uplo")
    factor, info = _routine("potrf", arr)(arr, lower=int(u == "L"), clean=1)
    _check("potrf", info, "A({info},{info}) is 0, A cannot be factorized")
    return clear_triangle(factor, u)


def potrs(b: ArrayLike, a: ArrayLike, uplo="U") -> np.ndarray:
    """Solve ``A @ x = b`` where ``a`` is the Cholesky factor of ``A`` from :func:`potrf`."""
    a_arr = _square(a)
    b_arr = _matrix(b, "B")
    if b_arr.shape[0] != a_arr.shape[0]:
        raise ValueError("A,b size incompatible")
    u = _flag(uplo, "UL", "uplo")
    a_arr, b_arr = _pair(a_arr, b_arr)
    x, info = _routine("potrs", a_arr, b_arr)(a_arr, b_arr, lower=int(u == "L"))
    _check("potrs", info, "A({info},{info}) is zero, singular A")
    return x


def potri(a: ArrayLike, uplo="U") -> np.ndarray:
    """Return the inverse of ``A`` given its Cholesky factor ``a`` from :func:`potrf`."""
    arr = _square(a)
    u = _flag(uplo, "UL", "uplo")
    inverse, info = _routine("potri", arr)(arr, lower=int(u == "L"))
    _check("potri", info, "A({info},{info}) is 0, A cannot be factorized")
    return copy_triangle(inverse, u)


def pstrf(a: ArrayLike, uplo="U", tol=-1.0) -> tuple[np.ndarray, np.ndarray]:
    """Cholesky factorization with complete pivoting of a positive semidefinite matrix.

    Returns the factor and a 0-based pivot vector ``piv`` encoding the
    permutation ``P[piv[k], k] = 1``, so that ``a[piv][:, piv]`` equals
    ``u.T @ u`` (``U``) or ``l @ l.T`` (``L``). A negative ``tol`` lets the
    routine choose its own tolerance. A rank-deficient matrix is an error.
    """
    arr = _square(a)
    u = _flag(uplo, "UL", "uplo")
    factor, piv, _, info = _routine("pstrf", arr)(
        arr, tol=float(tol), lower=int(u == "L")
    )
    _check("pstrf", info, "matrix is rank deficient or not positive semidefinite")
    piv = np.asarray(piv, dtype=np.int64)
    if piv.size:
        # The pivots form a full permutation; shift them to start at 0.
        piv = piv - int(piv.min())
    return clear_triangle(factor, u), piv