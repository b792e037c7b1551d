"""QR decomposition A = Q R with LAPACK geqrf/orgqr semantics.

Q is m x m and orthogonal (unitary for complex input); R is upper
triangular. The input matrix is used as workspace and ends up holding Q.
Like the underlying in-place transposition, only square matrices are
supported.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .core import QR, QRBuilder
from .utils import get_dims

__all__ = ["geqrf", "geqrf_uninit", "transpose", "Lapack", "LapackQRBuilder"]

_LAPACK_DTYPES = frozenset(
    np.dtype(t) for t in (np.float32, np.float64, np.complex64, np.complex128)
)

_SQUARE_ONLY = "Transpose in-place only implemented for square matrices."


def _as_array(x, name):
    if not isinstance(x, np.ndarray):
        raise TypeError(f"{name} must be a numpy array")
    if x.ndim != 2:
        raise ValueError(f"{name} must be a two-dimensional matrix")
    if x.dtype not in _LAPACK_DTYPES:
        raise TypeError(f"{name} has unsupported element type {x.dtype}")
    return x


def _require_square(x):
    m, n = x.shape
    if m != n:
        raise ValueError(_SQUARE_ONLY)


def transpose(c):
    """Transpose the square matrix ``c`` in place."""
    if not isinstance(c, np.ndarray) or c.ndim != 2:
        raise ValueError("c must be a two-dimensional numpy array")
    _require_square(c)
    c[...] = c.T.copy()


def _factorize(a, q, r):
    """Check shapes, factorize ``a`` and write Q into ``a`` and ``q``, R into ``r``.

    Only the upper triangle of ``r`` is written.
    """
    a = _as_array(a, "a")
    q = _as_array(q, "q")
    r = _as_array(r, "r")
    (m, n), (mq, nq), (mr, nr) = get_dims(a, q, r)
    min_mn = min(m, n)

    if mq != nq:
        raise ValueError("Q must be square (m × m)")
    if mr != min_mn:
        raise ValueError("R must have min(m,n) rows")
    if nr != n:
        raise ValueError("R must have n columns")
    _require_square(a)

    q_full, r_full = np.linalg.qr(a, mode="complete")

    upper = np.triu(np.ones((min_mn, n), dtype=bool))
    r[upper] = r_full[:min_mn][upper]

    a[...] = q_full
    q[...] = a[:, :m]
    return q, r, upper


def geqrf(a, q, r):
    """Compute the QR decomposition of ``a`` into the given ``q`` and ``r``.

    The upper triangle of ``r`` is overwritten; its strict lower part is
    left as it was. ``a`` is overwritten with Q.
    """
    _factorize(a, q, r)


def geqrf_uninit(a, q, r):
    """Compute the QR decomposition of ``a`` into fresh arrays and return ``(q, r)``.

    The previous contents of ``q`` and ``r`` are not read; the strict lower
    part of ``r`` is set to zero. ``a`` is overwritten with Q.
    """
    q, r, upper = _factorize(a, q, r)
    r[~upper] = 0
    return q, r


@dataclass
class LapackQRBuilder(QRBuilder):
    """Builder for the QR decomposition of one matrix, used as workspace."""

    a: np.ndarray

    def overwrite(self, q, r):
        geqrf(self.a, q, r)

    def eval(self):
        m, n = self.a.shape
        q = np.empty((m, m), dtype=self.a.dtype)
        r = np.empty((m, n), dtype=self.a.dtype)
        return geqrf_uninit(self.a, q, r)


class Lapack(QR):
    """QR backend with LAPACK semantics."""

    def qr(self, a):
        return LapackQRBuilder(_as_array(a, "a"))