# mdlinalg

Matrix multiplication, QR decomposition and singular value decomposition for
two-dimensional NumPy arrays. Each operation is started from a backend object
and configured through a small builder, which then either returns new arrays
or writes into arrays you provide.

## Installation

```
pip install mdlinalg
```

The only runtime dependency is NumPy.

## Interfaces

`mdlinalg.core` defines the abstract interfaces the backends implement:
`MatMul` / `MatMulBuilder`, `QR` / `QRBuilder` and `SVD` / `SVDBuilder`, and
the SVD exceptions `SVDError` with its subclasses `BackendError`,
`InconsistentUVError` and `BackendDidNotConvergeError`.

## Matrix multiplication

`mdlinalg.blas.Blas` and `mdlinalg.faer_matmul.Faer` both implement `MatMul`.
`matmul(a, b)` returns a builder:

```python
import numpy as np
from mdlinalg.blas import Blas

a = np.arange(1.0, 7.0).reshape(2, 3)
b = np.arange(1.0, 7.0).reshape(3, 2)

c = Blas().matmul(a, b).scale(2.5).eval()      # new array: 2.5 * a @ b

out = np.ones((2, 2))
Blas().matmul(a, b).overwrite(out)             # out := a @ b
Blas().matmul(a, b).add_to(out)                # out := a @ b + out
Blas().matmul(a, b).add_to_scaled(out, 3.0)    # out := a @ b + 3 * out
```

`scale` may be called several times; the factors multiply.

The `Blas` backend accepts `float32`, `float64`, `complex64` and `complex128`
matrices, all of one element type, each contiguous along one of its two axes
(row- or column-major views both work). Anything else raises `TypeError` or
`ValueError`, as do mismatched shapes.

The lower-level functions in `mdlinalg.blas` are:

- `gemm(alpha, a, b, beta, c)`: `c := alpha * a @ b + beta * c` in place; with
  `beta == 0` the old contents of `c` are not read.
- `gemm_uninit(alpha, a, b, c)`: fills the row-major array `c` with
  `alpha * a @ b` and returns it.

The `Faer` backend accepts views of any stride. `eval`, `overwrite` and
`add_to` behave as above, but `add_to_scaled(c, beta)` adds the unscaled
product to `c` and then raises
`mdlinalg.faer_matmul.UnsupportedOperationError`.

`parallelize()` returns the builder; on `Faer` it records the number of CPUs,
on `Blas` it does nothing. Neither changes how the product is computed.

## QR decomposition

```python
from mdlinalg.lapack_qr import Lapack

q, r = Lapack().qr(a_square.copy()).eval()
```

Only square matrices are supported; other shapes raise `ValueError`. Q is
orthogonal (unitary for complex input) and R is upper triangular. The input
matrix is used as workspace and ends up holding Q.

`overwrite(q, r)` writes into arrays you provide: Q in full, and only the upper
triangle of R, leaving its strict lower part as it was. The functions
`geqrf(a, q, r)`, `geqrf_uninit(a, q, r)` (returns `(q, r)` with the lower
part of R zeroed) and `transpose(c)` (in-place transpose of a square matrix)
are available too.

## Singular value decomposition

```python
from mdlinalg.lapack_svd import Lapack

s, u, vt = Lapack().svd(a.copy()).eval()
```

For an m x n matrix, `u` is m x m, `vt` is n x n and `s` is
min(m, n) x min(m, n), with the singular values, in descending order, in its
first row and zeros elsewhere. Hence `a == u @ sigma @ vt` where
`sigma[i, i] = s[0, i]`.

Builder methods:

- `eval()` returns `(s, u, vt)`.
- `eval_s()` returns only `s`; for the `Lapack` backend it has the shape of
  the input, for `Faer` it is min(m, n) x min(m, n).
- `overwrite_suvt(s, u, vt)` and `overwrite_s(s)` write into arrays you provide.
- `print_name()` on the backend prints its name (`Backend: LAPACK` or
  `Backend: Faer`; the `Faer` version also returns the line).

`mdlinalg.lapack_svd` also offers `dgesdd(a, s, u=None, vt=None)`,
`dgesdd_uninit(a, s, u=None, vt=None)` (without `u` and `vt` the returned U
and VT are 1 x 1 zero matrices) and `math_transpose(c)`.
`mdlinalg.faer_svd` offers `svd_faer(a, s, u=None, vt=None)`.

The two SVD backends differ for complex input: `Lapack` returns the conjugate
transpose of the right singular vectors as `vt`, `Faer` their plain
transpose. For real input they agree.

Giving only one of `u` and `vt` raises `InconsistentUVError`; a decomposition
that fails to converge raises `BackendDidNotConvergeError`.

## Utilities

`mdlinalg.utils` provides:

- `naive_matmul(a, b, c)`: adds `a @ b` into `c` in place.
- `pretty_print(mat, file=None)`: prints each entry as real and imaginary part.
- `into_i32(x)`: returns `x` as an int, raising `ValueError` outside 32 bits.
- `get_dims(*matrices)`: `(rows, cols)` for one matrix, a tuple of such pairs
  for several.

## What it does not do

The package does not bind to native BLAS or LAPACK libraries; every backend
computes through NumPy, and the backend names only select the conventions
described above. There is no command-line program.

## Running the tests

```
pip install mdlinalg[test]
pytest
```