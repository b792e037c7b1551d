"""Helpers shared by the backends: printing, reference product, dimensions."""

from __future__ import annotations

import operator
import sys

import numpy as np

__all__ = ["pretty_print", "naive_matmul", "into_i32", "get_dims"]

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def pretty_print(mat, file=None):
    """Print a matrix row by row, each entry as real and imaginary part."""
    out = sys.stdout if file is None else file
    mat = np.asarray(mat)
    if mat.ndim != 2:
        raise ValueError("pretty_print expects a two-dimensional matrix")
    for row in mat:
        line = "".join(f"{v.real:>10.4f} {v.imag:+.4f}i  " for v in row)
        print(line, file=out)
    print(file=out)


def naive_matmul(a, b, c):
    """Accumulate ``a @ b`` into ``c`` in place with a plain triple loop."""
    for c_row, a_row in zip(c, a):
        for a_ik, b_row in zip(a_row, b):
            c_row += a_ik * b_row


def into_i32(x):
    """Return ``x`` as an int, raising ValueError if it does not fit in 32 bits."""
    value = operator.index(x)
    if not _I32_MIN <= value <= _I32_MAX:
        raise ValueError("dimension must fit into i32")
    return value


def get_dims(*matrices):
    """Return ``(rows, cols)`` of one matrix, or a tuple of such pairs for several."""
    if not matrices:
        raise TypeError("get_dims needs at least one matrix")
    dims = []
    for mat in matrices:
        shape = np.shape(mat)
        if len(shape) != 2:
            raise ValueError("get_dims expects two-dimensional matrices")
        dims.append((into_i32(shape[0]), into_i32(shape[1])))
    return dims[0] if len(dims) == 1 else tuple(dims)