import io

import numpy as np
import pytest

from mdlinalg.utils import get_dims, into_i32, naive_matmul, pretty_print


def example_matrix(shape):
    rows, cols = shape
    return np.arange(1, rows * cols + 1, dtype=np.float64).reshape(rows, cols)


def assert_matrix_eq(a, b, epsilon=1e-8):
    assert a.shape == b.shape, "Matrix shapes don't match"
    assert np.allclose(a, b, atol=epsilon, rtol=0)


def test_naive_matmul_matches_numpy():
    a = example_matrix((2, 3))
    b = example_matrix((3, 2))
    c = np.zeros((2, 2))
    naive_matmul(a, b, c)
    assert_matrix_eq(c, a @ b)


def test_naive_matmul_accumulates():
    a = example_matrix((3, 5))
    b = example_matrix((5, 4))
    c = example_matrix((3, 4))
    start = c.copy()
    naive_matmul(a, b, c)
    assert_matrix_eq(c, a @ b + start)


def test_naive_matmul_complex():
    a = example_matrix((2, 3)) * (1 + 0.5j)
    b = example_matrix((3, 2)) * (1 + 0.5j)
    c = np.zeros((2, 2), dtype=np.complex128)
    naive_matmul(a, b, c)
    assert np.allclose(c, a @ b)


def test_pretty_print_format():
    buf = io.StringIO()
    pretty_print(np.array([[1.0, 2.0]]), file=buf)
    assert buf.getvalue() == "    1.0000 +0.0000i      2.0000 +0.0000i  \n\n"


def test_pretty_print_complex_to_stdout(capsys):
    pretty_print(np.array([[1 - 2j], [3 + 0.5j]]))
    lines = capsys.readouterr().out.split("\n")
    assert lines[0] == "    1.0000 -2.0000i  "
    assert lines[1] == "    3.0000 +0.5000i  "
    assert lines[2] == ""


def test_pretty_print_rejects_vector():
    with pytest.raises(ValueError):
        pretty_print(np.zeros(3), file=io.StringIO())


@pytest.mark.parametrize("value", [0, 5, 2**31 - 1, -(2**31), np.int64(12)])
def test_into_i32_accepts_in_range(value):
    assert into_i32(value) == int(value)


@pytest.mark.parametrize("value", [2**31, -(2**31) - 1])
def test_into_i32_rejects_out_of_range(value):
    with pytest.raises(ValueError, match="dimension must fit into i32"):
        into_i32(value)


def test_into_i32_rejects_float():
    with pytest.raises(TypeError):
        into_i32(2.5)


def test_get_dims_single():
    assert get_dims(example_matrix((2, 3))) == (2, 3)


def test_get_dims_several():
    a = example_matrix((2, 3))
    b = example_matrix((3, 4))
    c = example_matrix((2, 4))
    assert get_dims(a, b, c) == ((2, 3), (3, 4), (2, 4))


def test_get_dims_rejects_non_matrix():
    with pytest.raises(ValueError):
        get_dims(np.zeros(4))