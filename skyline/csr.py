"""
CSR - Compressed Sparse Row storage, for matrices with arbitrary nonzero patterns.

Stored arrays:
* `values` - stored entries, row-major
* `row_start` - `row_start[i]` is the offset at which row `i` begins in `values`
* `col_index` - column index of each entry in `values`
"""

import logging
from typing import Iterator, List, Sequence, Tuple

from .errors import MatrixError, SizeMismatch, NoSuchElement, OutOfRange
from .matrix import CompressedMatrix, Element, prefix_sum
from .vector import DenseVector

logger = logging.getLogger(__name__)


class GeneralSparseMatrix(CompressedMatrix):
    def __init__(self, values: Sequence, row_start: Sequence[int], col_index: Sequence[int],
                 rows: int, cols: int, empty=0):
        """ Create from raw CSR arrays.  All arrays are copied; ordering is not validated. """
        SizeMismatch.assert_eq(len(row_start), rows + 1, f"row_start must have {rows + 1} entries")
        SizeMismatch.assert_eq(len(values), len(col_index), "values and col_index lengths differ")
        SizeMismatch.assert_eq(row_start[rows], len(values), "row_start does not end at the entry count")

        self.rows = rows
        self.cols = cols
        self.empty = empty
        self.values: List = list(values)
        self.row_start: List[int] = list(row_start)
        self.col_index: List[int] = list(col_index)
        logger.debug("Created %dx%d CSR matrix with %d entries", rows, cols, self.nnz)

    @classmethod
    def from_dense(cls, grid: Sequence[Sequence], empty=0):
        """ Parse a dense row-major grid.
        An entry is stored iff it is not equal to `empty`.  Exact equality only. """
        rows = len(grid)
        cols = len(grid[0]) if rows else 0

        row_start = [0] * (rows + 1)
        col_index = []
        values = []
        for i, row in enumerate(grid):
            SizeMismatch.assert_eq(len(row), cols, f"Row {i} has {len(row)} entries, expected {cols}")
            for j, val in enumerate(row):
                if val != empty:
                    col_index.append(j)
                    values.append(val)
            row_start[i + 1] = len(values)

        return cls(values, row_start, col_index, rows, cols, empty=empty)

    @classmethod
    def from_pattern(cls, row_counts: Sequence[int], col_index: Sequence[int], rows: int, cols: int, empty=0):
        """ Declare a nonzero pattern, with values to be supplied later via `insert`.
        Column indices must be ascending within each row; this is not checked. """
        SizeMismatch.assert_eq(len(row_counts), rows, f"Expected {rows} row counts")
        row_start = prefix_sum(row_counts)
        SizeMismatch.assert_eq(row_start[rows], len(col_index), "Row counts do not sum to the number of column indices")
        return cls([empty] * len(col_index), row_start, col_index, rows, cols, empty=empty)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def elements(self) -> Iterator[Element]:
        for row in range(self.rows):
            for k in self.segment(row):
                yield Element(row, self.col_index[k], self.values[k])

    def get(self, row: int, col: int):
        """ Get the value at (row, col), or `empty` if outside the pattern """
        if not 0 <= row < self.rows: raise OutOfRange(row, self.rows)
        if not 0 <= col < self.cols: raise OutOfRange(col, self.cols)
        k = self.find(row, col)
        if k is None:
            return self.empty
        return self.values[k]

    def insert(self, val, row: int, col: int) -> None:
        """ Set the value at (row, col), which must be part of the declared pattern """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise NoSuchElement(row, col)
        k = self.find(row, col)
        if k is None:
            raise NoSuchElement(row, col)
        self.values[k] = val

    def multiply(self, vector) -> DenseVector:
        """ Multiply with a column vector of length `cols` """
        x = self.operand(vector, self.cols)
        values, col_index, row_start = self.values, self.col_index, self.row_start

        y = [0] * self.rows
        for row in range(self.rows):
            acc = 0
            for k in range(row_start[row], row_start[row + 1]):
                acc += values[k] * x[col_index[k]]
            y[row] = acc
        return DenseVector(y)

    def copy(self):
        """ Create an array-by-array copy """
        return GeneralSparseMatrix(self.values, self.row_start, self.col_index,
                                   self.rows, self.cols, empty=self.empty)

    def check(self) -> None:
        """ Internal consistency tests.  Raises `MatrixError` on failure. """
        MatrixError.assert_eq(len(self.values), len(self.col_index))
        self.check_rows(self.rows, lambda row: self.cols)
