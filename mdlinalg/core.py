"""Backend-independent interfaces for matrix products and decompositions.

Matrices are two-dimensional NumPy arrays. Backends implement the abstract
classes below; each entry point returns a builder that configures the
operation and then either returns new arrays or writes into given ones.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

__all__ = [
    "SVDError",
    "BackendError",
    "InconsistentUVError",
    "BackendDidNotConvergeError",
    "SVDResult",
    "MatMul",
    "MatMulBuilder",
    "QR",
    "QRBuilder",
    "SVD",
    "SVDBuilder",
]


class SVDError(Exception):
    """Base class for failures of a singular value decomposition."""


class BackendError(SVDError):
    """The backend reported an error code."""

    def __init__(self, code):
        self.code = code
        super().__init__(f"Backend error code: {code}")


class InconsistentUVError(SVDError):
    """U and VT were not both requested or both omitted."""

    def __init__(self):
        super().__init__("Inconsistent U and VT: must be both given or both None")


class BackendDidNotConvergeError(SVDError):
    """The backend's iteration did not converge."""

    def __init__(self, superdiagonals):
        self.superdiagonals = superdiagonals
        super().__init__(
            f"Backend failed to converge: {superdiagonals} "
            "superdiagonals did not converge to zero"
        )


SVDResult = tuple[np.ndarray, np.ndarray, np.ndarray]


def _as_matrix(x, name, *, output=False, inexact=False):
    """Validate ``x`` as a two-dimensional matrix and return it as an array.

    ``output`` demands an existing array that can be written to; ``inexact``
    demands a floating-point or complex element type.
    """
    if output and not isinstance(x, np.ndarray):
        raise TypeError(f"{name} must be a numpy array")
    x = np.asarray(x)
    if x.ndim != 2:
        raise ValueError(f"{name} must be a two-dimensional matrix")
    if inexact and not np.issubdtype(x.dtype, np.inexact):
        raise TypeError(f"{name} has unsupported element type {x.dtype}")
    return x


class MatMulBuilder(ABC):
    """Configures and runs the product of two matrices."""

    @abstractmethod
    def parallelize(self):
        """Enable parallel execution; returns the builder."""

    @abstractmethod
    def scale(self, factor):
        """Multiply the result by ``factor``; returns the builder."""

    @abstractmethod
    def eval(self):
        """Return a new array holding the result."""

    @abstractmethod
    def overwrite(self, c):
        """Overwrite ``c`` with the result."""

    @abstractmethod
    def add_to(self, c):
        """Add the result to ``c``."""

    @abstractmethod
    def add_to_scaled(self, c, beta):
        """Set ``c`` to ``beta * c + result``."""


class MatMul(ABC):
    """A backend able to multiply matrices."""

    @abstractmethod
    def matmul(self, a, b):
        """Return a builder for the product ``a @ b``."""


class QRBuilder(ABC):
    """Configures and runs a QR decomposition."""

    @abstractmethod
    def overwrite(self, q, r):
        """Write the factors Q and R into the given arrays."""

    @abstractmethod
    def eval(self):
        """Return new arrays ``(q, r)``."""


class QR(ABC):
    """A backend able to compute QR decompositions."""

    @abstractmethod
    def qr(self, a):
        """Return a builder for the QR decomposition of ``a``."""


class SVDBuilder(ABC):
    """Configures and runs a singular value decomposition A = U S VT."""

    @abstractmethod
    def overwrite_suvt(self, s, u, vt):
        """Write singular values, U and VT into the given arrays."""

    @abstractmethod
    def overwrite_s(self, s):
        """Write only the singular values into ``s``."""

    @abstractmethod
    def eval(self):
        """Return new arrays ``(s, u, vt)``."""

    @abstractmethod
    def eval_s(self):
        """Return a new array holding only the singular values."""


class SVD(ABC):
    """A backend able to compute singular value decompositions."""

    @abstractmethod
    def print_name(self):
        """Print the backend's name."""

    @abstractmethod
    def svd(self, a):
        """Return a builder for the SVD of ``a``."""