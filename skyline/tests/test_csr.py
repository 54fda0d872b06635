import copy

import numpy as np
import pytest
import scipy.sparse

from ..csr import GeneralSparseMatrix
from ..errors import MatrixError, SizeMismatch, NoSuchElement, OutOfRange
from ..matrix import Element
from ..vector import DenseVector


def random_grid(rng, rows: int, cols: int, density: float = 0.3) -> np.ndarray:
    """ Helper function.  (Not a test!)
    Dense matrix with roughly `density` of its entries nonzero. """
    mask = rng.random((rows, cols)) < density
    return rng.standard_normal((rows, cols)) * mask


def test_from_dense():
    m = GeneralSparseMatrix.from_dense([[1, 0, 2], [0, 3, 0], [4, 0, 5]])
    assert m.shape == (3, 3)
    assert m.nnz == 5
    assert m.values == [1, 2, 3, 4, 5]
    assert m.row_start == [0, 2, 3, 5]
    assert m.col_index == [0, 2, 1, 0, 2]
    m.check()


def test_mult():
    m = GeneralSparseMatrix.from_dense([[1, 0, 2], [0, 3, 0], [4, 0, 5]])
    y = m.multiply(DenseVector([1, 1, 1]))
    assert isinstance(y, DenseVector)
    assert y == [3, 3, 9]
    # Plain sequences and the `@` operator work too
    assert m @ [1, 1, 1] == [3, 3, 9]


def test_mult_size_mismatch():
    m = GeneralSparseMatrix.from_dense([[1, 0, 2], [0, 3, 0]])
    assert m.multiply([1, 2, 3]) == [7, 6]
    with pytest.raises(SizeMismatch):
        m.multiply([1, 2])
    with pytest.raises(SizeMismatch):
        m.multiply(DenseVector([1, 2, 3, 4]))


def test_empty_rows():
    m = GeneralSparseMatrix.from_dense([[0, 0], [0, 0], [0, 7]])
    assert m.row_start == [0, 0, 0, 1]
    assert m.multiply([1, 2]) == [0, 0, 14]
    m.check()


def test_custom_empty_value():
    m = GeneralSparseMatrix.from_dense([[-1, 0], [2, -1]], empty=-1)
    assert m.values == [0, 2]
    assert m.col_index == [1, 0]
    assert m.get(0, 0) == -1
    assert m.to_dense() == [[-1, 0], [2, -1]]
    assert m.multiply([5, 6]) == [0, 10]


def test_ragged_grid():
    with pytest.raises(SizeMismatch):
        GeneralSparseMatrix.from_dense([[1, 2], [3]])


def test_matches_scipy_layout():
    rng = np.random.default_rng(7)
    grid = random_grid(rng, 12, 9)
    m = GeneralSparseMatrix.from_dense(grid.tolist())
    ref = scipy.sparse.csr_matrix(grid)
    assert m.row_start == ref.indptr.tolist()
    assert m.col_index == ref.indices.tolist()
    assert np.allclose(m.values, ref.data)


@pytest.mark.parametrize("shape", [(1, 1), (5, 5), (8, 3), (3, 11), (40, 40)])
def test_dense_round_trip(shape):
    rng = np.random.default_rng(sum(shape))
    grid = random_grid(rng, *shape)
    m = GeneralSparseMatrix.from_dense(grid.tolist())
    m.check()
    assert np.array_equal(np.array(m.to_dense()), grid)
    for _ in range(3):
        x = rng.standard_normal(shape[1])
        assert np.allclose(m.multiply(x.tolist()).tolist(), grid.dot(x))


def test_from_pattern():
    m = GeneralSparseMatrix.from_pattern([2, 0, 1], [0, 2, 1], rows=3, cols=3)
    assert m.row_start == [0, 2, 2, 3]
    assert m.values == [0, 0, 0]
    m.check()

    m.insert(1.5, 0, 2)
    m.insert(-4, 2, 1)
    assert m.values == [0, 1.5, -4]
    assert m.get(0, 2) == 1.5
    assert m.get(1, 1) == 0


def test_from_pattern_size_mismatch():
    with pytest.raises(SizeMismatch):
        GeneralSparseMatrix.from_pattern([1, 1], [0], rows=2, cols=2)
    with pytest.raises(SizeMismatch):
        GeneralSparseMatrix.from_pattern([1], [0], rows=2, cols=2)


def test_insert_then_read():
    m = GeneralSparseMatrix.from_pattern([1, 2, 1], [1, 0, 2, 2], rows=3, cols=3)
    m.insert(11, 1, 2)
    for j in range(3):
        e = [0] * 3
        e[j] = 1
        y = m.multiply(e)
        assert y[1] == (11 if j == 2 else 0)


def test_insert_undeclared():
    m = GeneralSparseMatrix.from_pattern([1, 1], [0, 1], rows=2, cols=2)
    m.insert(3, 0, 0)
    before = m.copy()

    with pytest.raises(NoSuchElement) as info:
        m.insert(9, 0, 1)
    assert (info.value.row, info.value.col) == (0, 1)
    with pytest.raises(NoSuchElement):
        m.insert(9, 5, 0)
    with pytest.raises(NoSuchElement):
        m.insert(9, 0, -1)
    assert m == before


def test_get():
    m = GeneralSparseMatrix.from_dense([[0, 2], [3, 0]])
    assert m.get(0, 1) == 2
    assert m.get(1, 0) == 3
    assert m.get(0, 0) == 0
    with pytest.raises(OutOfRange):
        m.get(2, 0)
    with pytest.raises(OutOfRange):
        m.get(0, 2)


def test_raw_arrays():
    m = GeneralSparseMatrix([1, 2], [0, 1, 2], [1, 0], rows=2, cols=2)
    assert m.to_dense() == [[0, 1], [2, 0]]

    with pytest.raises(SizeMismatch):
        GeneralSparseMatrix([1, 2], [0, 1], [1, 0], rows=2, cols=2)
    with pytest.raises(SizeMismatch):
        GeneralSparseMatrix([1, 2], [0, 1, 2], [1], rows=2, cols=2)
    with pytest.raises(SizeMismatch):
        GeneralSparseMatrix([1, 2], [0, 1, 3], [1, 0], rows=2, cols=2)


def test_copy():
    values = [1, 2, 3]
    m = GeneralSparseMatrix(values, [0, 2, 3], [0, 1, 1], rows=2, cols=2)
    values[0] = 100
    assert m.values[0] == 1

    for cp in (m.copy(), copy.copy(m), copy.deepcopy(m)):
        assert cp == m
        assert cp is not m
        assert cp.values is not m.values
        assert cp.row_start is not m.row_start
        assert cp.col_index is not m.col_index
        cp.insert(50, 1, 1)
        assert m.get(1, 1) == 3
        assert cp != m


def test_elements():
    m = GeneralSparseMatrix.from_dense([[0, 2], [3, 4]])
    assert list(m.elements()) == [Element(0, 1, 2), Element(1, 0, 3), Element(1, 1, 4)]


def test_display():
    m = GeneralSparseMatrix.from_dense([[1, 0, 2], [0, 3, 0]])
    assert m.display() == 'X X\n X \n'


def test_check():
    m = GeneralSparseMatrix.from_dense([[1, 2], [3, 4]])
    m.check()

    bad = m.copy()
    bad.col_index[0], bad.col_index[1] = 1, 0
    with pytest.raises(MatrixError):
        bad.check()

    bad = m.copy()
    bad.col_index[3] = 2
    with pytest.raises(MatrixError):
        bad.check()

    bad = m.copy()
    bad.row_start[1] = 3
    bad.row_start[2] = 2
    with pytest.raises(MatrixError):
        bad.check()


def test_from_pattern_custom_empty():
    m = GeneralSparseMatrix.from_pattern([1, 1], [0, 1], rows=2, cols=2, empty=-1)
    assert m.values == [-1, -1]
    assert m.get(0, 1) == -1
    m.check()

    m.insert(3, 0, 0)
    assert m.multiply([1, 2]) == [3, -2]
    m.insert(5, 1, 1)
    assert m.multiply([1, 2]) == [3, 10]


def test_element_eq():
    e = Element(0, 0, 1)
    assert e == Element(0, 0, 1)
    assert e != Element(0, 0, 2)
    assert not (e == None)
    assert e != (0, 0, 1)
