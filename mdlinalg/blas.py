"""General matrix multiplication with BLAS semantics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from .core import MatMul, MatMulBuilder
from .utils import into_i32

__all__ = ["gemm", "gemm_uninit", "Blas", "BlasMatMulBuilder"]

_BLAS_DTYPES = frozenset(
    np.dtype(t) for t in (np.float32, np.float64, np.complex64, np.complex128)
)


class _Order(Enum):
    ROW = "row"
    COL = "col"


def _as_matrix(x, name):
    x = np.asarray(x)
    if x.ndim != 2:
        raise ValueError(f"{name} must be a two-dimensional matrix")
    if x.dtype not in _BLAS_DTYPES:
        raise TypeError(f"{name} has unsupported element type {x.dtype}")
    return x


def _check_output(c):
    if not isinstance(c, np.ndarray):
        raise TypeError("c must be a numpy array")
    return _as_matrix(c, "c")


def _check_same_dtype(*arrays):
    if len({x.dtype for x in arrays}) != 1:
        raise TypeError("all matrices must share one element type")


def _dims(a_shape, b_shape, c_shape):
    """Check C = A * B shapes and return (m, n, k)."""
    m, k = a_shape
    k2, n = b_shape
    m2, n2 = c_shape
    if m != m2:
        raise ValueError("a and c must agree in number of rows")
    if n != n2:
        raise ValueError("b and c must agree in number of columns")
    if k != k2:
        raise ValueError("a's number of columns must be equal to b's number of rows")
    return into_i32(m), into_i32(n), into_i32(k)


def _unit_stride(x, axis):
    return x.shape[axis] <= 1 or x.strides[axis] == x.itemsize


def _order(x, name):
    if _unit_stride(x, 1):
        return _Order.ROW
    if _unit_stride(x, 0):
        return _Order.COL
    raise ValueError(f"{name} must be contiguous in one dimension")


def _product(alpha, a, b, dtype):
    return dtype.type(alpha) * (a @ b)


def gemm(alpha, a, b, beta, c):
    """Compute ``c = alpha * a @ b + beta * c`` in place.

    When ``beta`` is zero the previous contents of ``c`` are not read.
    """
    a = _as_matrix(a, "a")
    b = _as_matrix(b, "b")
    c = _check_output(c)
    _check_same_dtype(a, b, c)
    _dims(a.shape, b.shape, c.shape)
    _order(c, "c")
    _order(a, "a")
    _order(b, "b")

    product = _product(alpha, a, b, c.dtype)
    if beta == 0:
        c[...] = product
    else:
        c[...] = product + c.dtype.type(beta) * c


def gemm_uninit(alpha, a, b, c):
    """Fill the row-major array ``c`` with ``alpha * a @ b`` and return it.

    The previous contents of ``c`` are never read.
    """
    a = _as_matrix(a, "a")
    b = _as_matrix(b, "b")
    c = _check_output(c)
    _check_same_dtype(a, b, c)
    _dims(a.shape, b.shape, c.shape)
    if not _unit_stride(c, 1):
        raise ValueError("c must be row major")
    _order(a, "a")
    _order(b, "b")
    c[...] = _product(alpha, a, b, c.dtype)
    return c


@dataclass
class BlasMatMulBuilder(MatMulBuilder):
    """Builder for a product computed with :func:`gemm`."""

    alpha: Any
    a: np.ndarray
    b: np.ndarray

    def parallelize(self):
        return self

    def scale(self, factor):
        self.alpha = self.alpha * factor
        return self

    def eval(self):
        m = self.a.shape[0]
        n = self.b.shape[1]
        c = np.empty((m, n), dtype=self.a.dtype)
        return gemm_uninit(self.alpha, self.a, self.b, c)

    def overwrite(self, c):
        gemm(self.alpha, self.a, self.b, 0, c)

    def add_to(self, c):
        gemm(self.alpha, self.a, self.b, 1, c)

    def add_to_scaled(self, c, beta):
        gemm(self.alpha, self.a, self.b, beta, c)


class Blas(MatMul):
    """Matrix multiplication backend with BLAS gemm semantics."""

    def matmul(self, a, b):
        return BlasMatMulBuilder(
            alpha=1, a=_as_matrix(a, "a"), b=_as_matrix(b, "b")
        )