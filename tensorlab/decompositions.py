"""Eigenvalue, singular value and QR decompositions through LAPACK.

Inputs that are not floating point are converted to ``float64``. A routine
that fails on its data raises :class:`~tensorlab.solvers.LapackError`;
badly shaped arguments raise ``ValueError``.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from tensorlab.solvers import LapackError, _check, _flag, _float, _matrix, _routine, _square

__all__ = ["LapackError", "syev", "geev", "gesvd", "qr", "geqrf", "orgqr", "ormqr"]


def _common(*arrays: np.ndarray) -> list[np.ndarray]:
    dtype = np.result_type(*arrays)
    return [a.astype(dtype, copy=False) for a in arrays]


def syev(a: ArrayLike, jobz="N", uplo="U") -> tuple[np.ndarray, np.ndarray | None]:
    """Eigenvalues, ascending, and optionally eigenvectors of a symmetric matrix.

    With ``jobz`` ``V`` the eigenvectors are the columns of the second
    result; with ``N`` it is None. Only the ``uplo`` triangle of ``a`` is read.
    """
    arr = _square(a)
    want = _flag(jobz, "NV", "jobz") == "V"
    lower = _flag(uplo, "UL", "uplo") == "L"
    w, v, info = _routine("syev", arr)(arr, compute_v=int(want), lower=int(lower))
    _check("syev", info, "{info} off-diagonal elements didn't converge to zero")
    return w, (v if want else None)


def geev(a: ArrayLike, jobvr="N") -> tuple[np.ndarray, np.ndarray | None]:
    """Eigenvalues and optionally right eigenvectors of a general square matrix.

    The eigenvalues come as an ``n`` by 2 array of real and imaginary parts.
    With ``jobvr`` ``V`` the second result holds the eigenvectors in the
    LAPACK real form: a complex pair ``j, j+1`` is stored as columns
    ``v[:, j] ± i v[:, j+1]``. With ``N`` it is None.
    """
    arr = _square(a)
    want = _flag(jobvr, "NV", "jobvr") == "V"
    wr, wi, _, vr, info = _routine("geev", arr)(
        arr, compute_vl=0, compute_vr=int(want)
    )
    _check("geev", info, "{info} off-diagonal elements of an didn't converge to zero")
    values = np.column_stack((wr, wi)).astype(arr.dtype, copy=False)
    return values, (vr if want else None)


def gesvd(a: ArrayLike, jobu="S") -> tuple[np.ndarray | None, np.ndarray, np.ndarray | None]:
    """Singular value decomposition ``a = u @ diag(s) @ v.T``.

    ``jobu`` ``A`` gives square ``u`` and ``v``; ``S`` gives the reduced
    ``m`` by ``k`` and ``n`` by ``k`` forms, ``k = min(m, n)``; ``N`` gives
    only the singular values, with None for ``u`` and ``v``. Singular values
    come in descending order.
    """
    arr = _matrix(a, "A")
    job = _flag(jobu, "ASN", "jobu")
    u, s, vt, info = _routine("gesvd", arr)(
        arr, compute_uv=int(job != "N"), full_matrices=int(job == "A")
    )
    _check("gesvd", info, "{info} superdiagonals failed to converge.")
    if job == "N":
        return None, s, None
    return u, s, np.ascontiguousarray(vt.T)


def geqrf(a: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """QR factorization in compact form.

    Returns a matrix holding ``R`` on and above the diagonal and the
    directions of the elementary reflectors below it, and the vector of
    reflector magnitudes ``tau``.
    """
    arr = _matrix(a, "A")
    factored, tau, _, info = _routine("geqrf", arr)(arr)
    _check("geqrf", info, "unknown Lapack error. info = {info}")
    return factored, tau


def orgqr(a: ArrayLike, tau: ArrayLike) -> np.ndarray:
    """Build the matrix ``Q`` with orthonormal columns from the output of :func:`geqrf`.

    The first ``len(tau)`` columns of the result hold ``Q``; any further
    columns of ``a`` are returned unchanged.
    """
    arr = _matrix(a, "A")
    taus = _float(tau).reshape(-1)
    arr, taus = _common(arr, taus)
    m, n = arr.shape
    k = taus.shape[0]
    if k > n or k > m:
        raise ValueError(f"tau has {k} elements, more than A of size {m}x{n} allows")
    out = arr.copy()
    if k == 0:
        return out
    q, _, info = _routine("orgqr", arr, taus)(np.ascontiguousarray(arr[:, :k]), taus)
    _check("orgqr", info, "unknown Lapack error. info = {info}")
    out[:, :k] = q
    return out


def ormqr(a: ArrayLike, tau: ArrayLike, c: ArrayLike, side="L", trans="N") -> np.ndarray:
    """Multiply ``c`` by the ``Q`` of a compact QR factorization without forming ``Q``.

    ``side`` ``L`` gives ``op(Q) @ c`` and ``R`` gives ``c @ op(Q)``;
    ``trans`` ``N`` uses ``Q`` and ``T`` its transpose. ``a`` and ``tau``
    come from :func:`geqrf`.
    """
    a_arr = _matrix(a, "A")
    c_arr = _matrix(c, "C")
    taus = _float(tau).reshape(-1)
    s = _flag(side, "LR", "side")
    t = _flag(trans, "NT", "trans")
    a_arr, taus, c_arr = _common(a_arr, taus, c_arr)
    m, n = c_arr.shape
    k = taus.shape[0]
    nq = m if s == "L" else n
    if a_arr.shape[0] != nq:
        raise ValueError(f"A of size {a_arr.shape} does not fit C of size {c_arr.shape}")
    if k > nq or k > a_arr.shape[1]:
        raise ValueError(f"tau has {k} elements, more than A of size {a_arr.shape} allows")
    if k == 0:
        return c_arr.copy()
    lwork = max(1, n if s == "L" else m) * 32
    reflectors = np.ascontiguousarray(a_arr[:, :k])
    cq, _, info = _routine("ormqr", reflectors, taus, c_arr)(
        s, t, reflectors, taus, c_arr, lwork
    )
    _check("ormqr", info, "unknown Lapack error. info = {info}")
    return cq


def qr(a: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """Reduced QR decomposition ``a = q @ r``.

    ``q`` is ``m`` by ``k`` with orthonormal columns and ``r`` is ``k`` by
    ``n`` upper triangular, where ``k = min(m, n)``.
    """
    arr = _matrix(a, "A")
    m, n = arr.shape
    k = min(m, n)
    factored, tau = geqrf(arr)
    r = np.triu(factored[:k])
    q = orgqr(factored, tau)[:, :k]
    return np.ascontiguousarray(q), r