"""
Machinery shared by the compressed-row formats.

Both formats keep a `row_start` array of length `n + 1` and a parallel
`col_index` array.  Entries of row `i` live at storage offsets
`row_start[i] <= k < row_start[i + 1]`, with strictly increasing column indices.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import MatrixError, SizeMismatch
from .vector import DenseVector


class Element(object):
    """ A stored (row, col, val) entry, as yielded by `elements()` """

    def __init__(self, row: int, col: int, val):
        self.row = row
        self.col = col
        self.val = val

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self.row == other.row and self.col == other.col and self.val == other.val

    def __repr__(self):
        return f"<{self.__class__.__name__}(row={self.row}, col={self.col}, val={self.val})>"


def prefix_sum(counts: Sequence[int]) -> List[int]:
    """ Turn per-row entry counts into a `row_start` array, one longer than `counts`. """
    starts = [0] * (len(counts) + 1)
    for i, n in enumerate(counts):
        starts[i + 1] = starts[i] + n
    return starts


class CompressedMatrix(object):
    """ Base for row-compressed matrices.
    Sub-classes provide `shape`, `elements()`, `multiply()` and `copy()`. """

    row_start: List[int]
    col_index: List[int]

    @property
    def shape(self) -> Tuple[int, int]:
        raise NotImplementedError

    @property
    def nnz(self) -> int:
        """ Number of stored (off-diagonal, for the symmetric format) entries """
        return len(self.col_index)

    def segment(self, row: int) -> range:
        """ Storage offsets of the entries stored for `row` """
        return range(self.row_start[row], self.row_start[row + 1])

    def find(self, row: int, col: int) -> Optional[int]:
        """ Storage offset of (row, col) within `row`'s segment, or None if not in the pattern.
        Linear scan, stopping early once column indices pass `col`. """
        for k in self.segment(row):
            c = self.col_index[k]
            if c == col:
                return k
            if c > col:
                break
        return None

    def elements(self) -> Iterator[Element]:
        raise NotImplementedError

    def multiply(self, vector) -> DenseVector:
        raise NotImplementedError

    def copy(self):
        raise NotImplementedError

    def __matmul__(self, vector) -> DenseVector:
        return self.multiply(vector)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __eq__(self, other):
        if not isinstance(other, CompressedMatrix):
            return NotImplemented
        if type(self) is not type(other): return False
        if self.shape != other.shape: return False
        return list(self.elements()) == list(other.elements())

    def __repr__(self):
        rows, cols = self.shape
        return f"<{self.__class__.__name__}(shape=({rows}, {cols}), nnz={self.nnz})>"

    def display(self) -> str:
        """ Create a string "X" versus " " display of the nonzero pattern. """
        rows, cols = self.shape
        grid = [[' '] * cols for _ in range(rows)]
        for e in self.elements():
            grid[e.row][e.col] = 'X'
        return ''.join(''.join(row) + '\n' for row in grid)

    def to_dense(self) -> List[list]:
        """ Expand into a list-of-rows, with `empty` in every position outside the pattern. """
        rows, cols = self.shape
        grid = [[self.empty] * cols for _ in range(rows)]
        for e in self.elements():
            grid[e.row][e.col] = e.val
        return grid

    @staticmethod
    def operand(vector, size: int) -> Sequence:
        """ Validate the length of a multiplication operand """
        if len(vector) != size:
            raise SizeMismatch(f"Cannot multiply: vector of length {len(vector)} for {size} columns")
        return vector

    def check_rows(self, num_rows: int, col_bound):
        """ Internal consistency of `row_start` and `col_index`.
        `col_bound(row)` gives the exclusive upper bound for column indices in `row`. """
        MatrixError.assert_eq(len(self.row_start), num_rows + 1)
        MatrixError.assert_eq(self.row_start[0], 0)
        MatrixError.assert_eq(self.row_start[num_rows], self.nnz)
        for row in range(num_rows):
            MatrixError.assert_true(self.row_start[row] <= self.row_start[row + 1])
            prev = -1
            for k in self.segment(row):
                col = self.col_index[k]
                MatrixError.assert_lt(prev, col, f"Column indices not increasing in row {row}")
                MatrixError.assert_lt(col, col_bound(row), f"Column {col} out of bounds in row {row}")
                prev = col
