import itertools

import numpy as np
import pytest

from mdlinalg.blas import Blas, gemm, gemm_uninit
from mdlinalg.utils import naive_matmul


def example(rows, cols, complex_values=False):
    values = np.arange(1, rows * cols + 1, dtype=np.float64).reshape(rows, cols)
    return values + 0.5j * values if complex_values else values


def naive(a, b):
    out = np.zeros((a.shape[0], b.shape[1]), dtype=np.result_type(a, b))
    naive_matmul(a, b, out)
    return out


def _filled(method, *args):
    def run(builder, c):
        getattr(builder, method)(c, *args)
        return c

    return run


# name: (what to do with the builder and c, expected value from a @ b and old c)
OPERATIONS = {
    "eval": (lambda bld, c: bld.eval(), lambda ab, c: ab),
    "parallelize": (lambda bld, c: bld.parallelize().eval(), lambda ab, c: ab),
    "scale": (lambda bld, c: bld.scale(2.5).eval(), lambda ab, c: 2.5 * ab),
    "overwrite": (_filled("overwrite"), lambda ab, c: ab),
    "add_to": (_filled("add_to"), lambda ab, c: ab + c),
    "add_to_scaled": (_filled("add_to_scaled", 3.0), lambda ab, c: ab + 3.0 * c),
    "chained": (
        lambda bld, c: _filled("overwrite")(bld.scale(2.0), c),
        lambda ab, c: 2.0 * ab,
    ),
}


@pytest.mark.parametrize("complex_values", [False, True])
@pytest.mark.parametrize("name", list(OPERATIONS))
def test_builder_operations(name, complex_values):
    run, expected = OPERATIONS[name]
    a = example(2, 3, complex_values)
    b = example(3, 2, complex_values)
    c = example(2, 2, complex_values)
    c_original = c.copy()
    result = run(Blas().matmul(a, b), c)
    assert result.shape == (2, 2)
    np.testing.assert_allclose(result, expected(naive(a, b), c_original), rtol=1e-14, atol=0)


def test_overwrite_ignores_previous_nan():
    a, b = example(2, 3), example(3, 2)
    c = np.full((2, 2), np.nan)
    Blas().matmul(a, b).overwrite(c)
    assert np.array_equal(c, naive(a, b))


def test_matmul_complex_with_complex_scaling():
    a, b = example(2, 3, True), example(3, 2, True)
    factor = complex(2.0, 1.5)
    result = Blas().matmul(a, b).scale(factor).eval()
    assert np.array_equal(result, factor * naive(a, b))


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (np.array([[3.0]]), np.array([[4.0]]), np.array([[12.0]])),
        (np.full((100, 100), 1.0), np.full((100, 100), 2.0), np.full((100, 100), 200.0)),
        (np.zeros((2, 3)), np.full((3, 2), 5.0), np.zeros((2, 2))),
        (np.zeros((0, 3)), np.zeros((3, 0)), np.zeros((0, 0))),
    ],
)
def test_pinned_products(a, b, expected):
    result = Blas().matmul(a, b).eval()
    assert result.shape == expected.shape
    assert np.array_equal(result, expected)


@pytest.mark.parametrize(
    "a_shape, b_shape",
    [((2, 3), (3, 4)), ((1, 5), (5, 1)), ((4, 4), (4, 4)), ((10, 20), (20, 15)), ((3, 5), (5, 4))],
)
def test_consistency_with_reference(a_shape, b_shape):
    a, b = example(*a_shape), example(*b_shape)
    assert np.array_equal(Blas().matmul(a, b).eval(), naive(a, b))


def test_dimension_mismatch_raises():
    with pytest.raises(ValueError, match="number of rows"):
        Blas().matmul(example(2, 3), example(4, 2)).eval()


def test_output_shape_mismatch_raises():
    with pytest.raises(ValueError, match="a and c must agree"):
        Blas().matmul(example(2, 3), example(3, 2)).overwrite(np.zeros((3, 2)))


@pytest.mark.parametrize("a_order,b_order,c_order", list(itertools.product("CF", repeat=3)))
def test_gemm_all_layouts(a_order, b_order, c_order):
    a = np.array(example(2, 3), order=a_order)
    b = np.array(example(3, 4), order=b_order)
    c = np.array(example(2, 4), order=c_order)
    expected = naive(a, b) + example(2, 4)
    gemm(1.0, a, b, 1.0, c)
    assert np.array_equal(c, expected)


def test_gemm_float32():
    a = example(2, 3).astype(np.float32)
    b = example(3, 2).astype(np.float32)
    c = np.zeros((2, 2), dtype=np.float32)
    gemm(1.0, a, b, 0.0, c)
    assert c.dtype == np.float32
    assert np.array_equal(c, naive(a, b))


@pytest.mark.parametrize("which", ["a", "c"])
def test_gemm_rejects_non_contiguous(which):
    operands = {"a": example(2, 3), "b": example(3, 2), "c": np.zeros((2, 2))}
    rows, cols = operands[which].shape
    operands[which] = np.zeros((2 * rows, 2 * cols))[::2, ::2]
    with pytest.raises(ValueError, match=f"{which} must be contiguous in one dimension"):
        gemm(1.0, operands["a"], operands["b"], 0.0, operands["c"])


@pytest.mark.parametrize(
    "a, c",
    [
        (np.ones((2, 2), dtype=np.int64), np.zeros((2, 2), dtype=np.int64)),
        (example(2, 2), np.zeros((2, 2), dtype=np.complex128)),
    ],
)
def test_gemm_rejects_unsupported_types(a, c):
    with pytest.raises(TypeError):
        gemm(1, a, a, 0, c)


def test_gemm_uninit_fills_array():
    a, b = example(2, 3), example(3, 4)
    c = np.full((2, 4), np.nan)
    out = gemm_uninit(2.0, a, b, c)
    assert out is c
    assert np.array_equal(out, 2.0 * naive(a, b))


def test_gemm_uninit_requires_row_major():
    c = np.empty((2, 4), order="F")
    with pytest.raises(ValueError, match="row major"):
        gemm_uninit(1.0, example(2, 3), example(3, 4), c)