"""Singular value decomposition A = U S VT with LAPACK gesdd semantics.

U is m x m, VT is n x n (the conjugate transpose of the right singular
vectors) and the ``min(m, n)`` singular values, non-negative and in
descending order, are stored in the first row of ``s``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .core import SVD, BackendDidNotConvergeError, InconsistentUVError, SVDBuilder
from .lapack_qr import transpose as _transpose_in_place
from .utils import get_dims

__all__ = [
    "dgesdd",
    "dgesdd_uninit",
    "math_transpose",
    "Lapack",
    "LapackSVDBuilder",
]

_LAPACK_DTYPES = frozenset(
    np.dtype(t) for t in (np.float32, np.float64, np.complex64, np.complex128)
)


def _as_input(a):
    a = np.asarray(a)
    if a.ndim != 2:
        raise ValueError("a must be a two-dimensional matrix")
    if a.dtype not in _LAPACK_DTYPES:
        raise TypeError(f"a has unsupported element type {a.dtype}")
    return a


def _as_output(x, name, dtype):
    if not isinstance(x, np.ndarray):
        raise TypeError(f"{name} must be a numpy array")
    if x.ndim != 2:
        raise ValueError(f"{name} must be a two-dimensional matrix")
    if x.dtype != dtype:
        raise TypeError(f"{name} must have element type {dtype}, got {x.dtype}")
    return x


def _unit_stride(x, axis):
    return x.shape[axis] <= 1 or x.strides[axis] == x.itemsize


def _check_contiguous(a):
    if not (_unit_stride(a, 1) or _unit_stride(a, 0)):
        raise ValueError("a must be contiguous in one dimension")


def _check_room_for_values(s, k):
    if k and (s.shape[0] < 1 or s.shape[1] < k):
        raise ValueError(
            "s must have room for min(m, n) singular values in its first row"
        )


def _job(u, vt):
    """Return True when U and VT are requested, False when neither is."""
    if (u is None) != (vt is None):
        raise InconsistentUVError()
    return u is not None


def _decompose(a, compute_uv):
    try:
        if compute_uv:
            left, values, right_h = np.linalg.svd(a, full_matrices=True)
            return values, left, right_h
        return np.linalg.svd(a, compute_uv=False), None, None
    except np.linalg.LinAlgError as exc:
        raise BackendDidNotConvergeError(0) from exc


def math_transpose(c):
    """Transpose the square matrix ``c`` in place."""
    _transpose_in_place(c)


def dgesdd(a, s, u=None, vt=None):
    """Decompose ``a`` into the given arrays.

    The singular values go to the first row of ``s``; the rest of ``s`` is
    left untouched. ``u`` (m x m) and ``vt`` (n x n) must be given together
    or both omitted; when given, ``s`` must be min(m, n) x min(m, n).
    """
    a = _as_input(a)
    m, n = get_dims(a)
    min_mn = min(m, n)
    compute_uv = _job(u, vt)
    s = _as_output(s, "s", a.dtype)

    if compute_uv:
        u = _as_output(u, "u", a.dtype)
        vt = _as_output(vt, "vt", a.dtype)
        (mu, nu), (ms, ns), (mvt, nvt) = get_dims(u, s, vt)
        if mu != nu:
            raise ValueError("U must be square (m × m)")
        if mvt != nvt:
            raise ValueError("VT must be square (n × n)")
        if ns != ms:
            raise ValueError("s must be square (min(m,n),min(m,n))")
        if ms != min_mn:
            raise ValueError("s must have min(m, n) rows (number of singular values)")
        if mu != m:
            raise ValueError("U must have the same number of rows as A: U(m, m)")
        if nvt != n:
            raise ValueError("VT must have the same number of columns as A: VT(n, n)")

    _check_contiguous(a)
    _check_room_for_values(s, min_mn)

    values, left, right_h = _decompose(a, compute_uv)
    s[0, :min_mn] = values
    if compute_uv:
        u[...] = left
        vt[...] = right_h


def dgesdd_uninit(a, s, u=None, vt=None):
    """Decompose ``a`` into freshly allocated arrays and return ``(s, u, vt)``.

    The previous contents of the arrays are not read: ``s`` is zeroed and its
    first row receives the singular values. Without ``u`` and ``vt`` the
    returned U and VT are 1 x 1 zero matrices.
    """
    a = _as_input(a)
    m, n = get_dims(a)
    min_mn = min(m, n)
    compute_uv = _job(u, vt)
    s = _as_output(s, "s", a.dtype)

    _check_contiguous(a)
    _check_room_for_values(s, min_mn)
    if compute_uv:
        u = _as_output(u, "u", a.dtype)
        vt = _as_output(vt, "vt", a.dtype)
        if u.shape != (m, m):
            raise ValueError(f"u must have shape {(m, m)}")
        if vt.shape != (n, n):
            raise ValueError(f"vt must have shape {(n, n)}")

    values, left, right_h = _decompose(a, compute_uv)
    s[...] = 0
    s[0, :min_mn] = values
    if not compute_uv:
        return s, np.zeros((1, 1), dtype=a.dtype), np.zeros((1, 1), dtype=a.dtype)
    u[...] = left
    vt[...] = right_h
    return s, u, vt


@dataclass
class LapackSVDBuilder(SVDBuilder):
    """Builder for the SVD of one matrix."""

    a: np.ndarray

    def overwrite_suvt(self, s, u, vt):
        dgesdd(self.a, s, u, vt)

    def overwrite_s(self, s):
        dgesdd(self.a, s)

    def eval(self):
        m, n = self.a.shape
        min_mn = min(m, n)
        dtype = self.a.dtype
        s = np.empty((min_mn, min_mn), dtype=dtype)
        u = np.empty((m, m), dtype=dtype)
        vt = np.empty((n, n), dtype=dtype)
        return dgesdd_uninit(self.a, s, u, vt)

    def eval_s(self):
        s = np.empty(self.a.shape, dtype=self.a.dtype)
        values, _, _ = dgesdd_uninit(self.a, s)
        return values


class Lapack(SVD):
    """SVD backend with LAPACK gesdd semantics."""

    def print_name(self):
        print("Backend: LAPACK")

    def svd(self, a):
        return LapackSVDBuilder(_as_input(a))