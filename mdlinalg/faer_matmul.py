"""Matrix multiplication backend that accepts arbitrarily strided operands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .core import MatMul, MatMulBuilder, _as_matrix

__all__ = ["UnsupportedOperationError", "Faer", "FaerMatMulBuilder"]


class UnsupportedOperationError(RuntimeError):
    """The backend cannot carry out the requested operation."""


@dataclass
class FaerMatMulBuilder(MatMulBuilder):
    """Builder for a product computed directly on strided views.

    ``par`` is ``None`` for sequential execution, otherwise the number of
    worker threads requested.
    """

    alpha: Any
    a: np.ndarray
    b: np.ndarray
    par: Optional[int] = None

    def _product(self, c_shape=None):
        m, k = self.a.shape
        k2, n = self.b.shape
        if k != k2:
            raise ValueError("a's number of columns must be equal to b's number of rows")
        if c_shape is not None and c_shape != (m, n):
            raise ValueError(f"c must have shape {(m, n)}, got {c_shape}")
        return self.alpha * (self.a @ self.b)

    def _write(self, c, accumulate):
        c = _as_matrix(c, "c", output=True)
        c[...] = c + self._product(c.shape) if accumulate else self._product(c.shape)

    def parallelize(self):
        self.par = os.cpu_count() or 1
        return self

    def scale(self, factor):
        self.alpha = self.alpha * factor
        return self

    def eval(self):
        return np.asarray(self._product())

    def overwrite(self, c):
        self._write(c, accumulate=False)

    def add_to(self, c):
        self._write(c, accumulate=True)

    def add_to_scaled(self, c, beta):
        """Unsupported: the product is added to ``c`` unscaled, then this raises."""
        self._write(c, accumulate=True)
        raise UnsupportedOperationError(
            "scaling the accumulated matrix by beta is not supported by this backend"
        )


class Faer(MatMul):
    """Matrix multiplication backend working on views of any stride."""

    def matmul(self, a, b):
        return FaerMatMulBuilder(alpha=1, a=_as_matrix(a, "a"), b=_as_matrix(b, "b"))