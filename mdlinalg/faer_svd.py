"""Singular value decomposition backend A = U S VT.

Singular values are stored along the first row of ``s``; ``vt`` receives
the plain transpose of the right singular vectors.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .core import SVD, BackendDidNotConvergeError, InconsistentUVError, SVDBuilder, _as_matrix
from .utils import get_dims

__all__ = ["svd_faer", "Faer", "FaerSVDBuilder"]


def svd_faer(a, s, u=None, vt=None):
    """Decompose ``a`` and write the results into ``s`` and optionally ``u``, ``vt``.

    The ``min(m, n)`` singular values, in descending order, go to the first
    row of ``s``. ``u`` (m x m) gets the left singular vectors and ``vt``
    (n x n) the transpose of the right singular vectors. ``u`` and ``vt``
    must be given together or both omitted. ``a`` is left unchanged.
    """
    a = _as_matrix(a, "a", inexact=True)
    m, n = get_dims(a)
    k = min(m, n)
    if (u is None) != (vt is None):
        raise InconsistentUVError()

    s = _as_matrix(s, "s", output=True)
    if s.shape[0] != k or s.shape[1] < k:
        raise ValueError(f"s must have {k} rows and at least {k} columns")
    compute_uv = u is not None
    if compute_uv:
        for name, matrix, size in (("u", u, m), ("vt", vt, n)):
            if _as_matrix(matrix, name, output=True).shape != (size, size):
                raise ValueError(f"{name} must have shape {(size, size)}")

    try:
        if compute_uv:
            left, values, right_h = np.linalg.svd(a, full_matrices=True)
        else:
            values = np.linalg.svd(a, compute_uv=False)
    except np.linalg.LinAlgError as exc:
        raise BackendDidNotConvergeError(0) from exc

    s[0, :k] = values
    if compute_uv:
        u[...] = left
        # The right singular vectors V are written transposed, not conjugated.
        vt[...] = right_h.conj()


@dataclass
class FaerSVDBuilder(SVDBuilder):
    """Builder for the SVD of one matrix."""

    a: np.ndarray

    def _zeros(self, *sizes):
        return [np.zeros((size, size), dtype=self.a.dtype) for size in sizes]

    def overwrite_suvt(self, s, u, vt):
        svd_faer(self.a, s, u, vt)

    def overwrite_s(self, s):
        svd_faer(self.a, s)

    def eval(self):
        m, n = self.a.shape
        s, u, vt = self._zeros(min(m, n), m, n)
        svd_faer(self.a, s, u, vt)
        return s, u, vt

    def eval_s(self):
        (s,) = self._zeros(min(self.a.shape))
        svd_faer(self.a, s)
        return s


class Faer(SVD):
    """SVD backend returning full U and VT."""

    name = "Faer"

    def print_name(self):
        """Print the backend's name and return the printed line."""
        line = f"Backend: {self.name}"
        print(line)
        return line

    def svd(self, a):
        return FaerSVDBuilder(_as_matrix(a, "a", inexact=True))