"""
CSLR - Compressed Sparse (lower triangle) Row.  A.k.a. skyline format.

For square matrices whose *pattern* of nonzeros is symmetric, while values need not be.
Stored arrays:
* `diag` - diagonal entries, all treated as present
* `lower` - stored entries of the strictly-lower triangle
* `upper` - entries of the strictly-upper triangle, at the mirror of each `lower` position
* `row_start` - `row_start[i]` is the offset at which row `i` begins in `lower`
* `col_index` - column index (always less than the row) of each `lower` entry

`lower` and `upper` share `row_start` and `col_index`.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import MatrixError, SizeMismatch, NoSuchElement, OutOfRange
from .matrix import CompressedMatrix, Element, prefix_sum
from .vector import DenseVector

logger = logging.getLogger(__name__)


class SymmetricPortraitMatrix(CompressedMatrix):
    def __init__(self, diag: Sequence, lower: Sequence, upper: Sequence,
                 row_start: Sequence[int], col_index: Sequence[int],
                 size: int, nnz: Optional[int] = None, empty=0):
        """ Create from raw arrays.  All arrays are copied; ordering is not validated.
        `nnz`, if given, is the number of stored lower-triangle entries. """
        if nnz is None:
            nnz = len(col_index)
        SizeMismatch.assert_eq(len(diag), size, f"diag must have {size} entries")
        SizeMismatch.assert_eq(len(row_start), size + 1, f"row_start must have {size + 1} entries")
        SizeMismatch.assert_eq(len(col_index), nnz, f"col_index must have {nnz} entries")
        SizeMismatch.assert_eq(len(lower), nnz, f"lower must have {nnz} entries")
        SizeMismatch.assert_eq(len(upper), nnz, f"upper must have {nnz} entries")
        SizeMismatch.assert_eq(row_start[size], nnz, "row_start does not end at the entry count")

        self.size = size
        self.empty = empty
        self.diag: List = list(diag)
        self.lower: List = list(lower)
        self.upper: List = list(upper)
        self.row_start: List[int] = list(row_start)
        self.col_index: List[int] = list(col_index)
        logger.debug("Created %dx%d CSLR matrix with %d off-diagonal pairs", size, size, nnz)

    @classmethod
    def from_dense(cls, grid: Sequence[Sequence], size: Optional[int] = None, empty=0):
        """ Parse a dense matrix with symmetric portrait.
        The pattern is read from the lower triangle alone; upper-triangle values
        are taken from the mirrored positions whether or not they equal `empty`. """
        if size is None:
            size = len(grid)
        SizeMismatch.assert_eq(len(grid), size, f"Expected {size} rows, got {len(grid)}")
        for i, row in enumerate(grid):
            SizeMismatch.assert_eq(len(row), size, f"Row {i} has {len(row)} entries, expected {size}")

        diag = [grid[i][i] for i in range(size)]
        row_start = [0] * (size + 1)
        col_index, lower, upper = [], [], []
        for i in range(size):
            for j in range(i):
                if grid[i][j] != empty:
                    col_index.append(j)
                    lower.append(grid[i][j])
                    upper.append(grid[j][i])
            row_start[i + 1] = len(col_index)

        return cls(diag, lower, upper, row_start, col_index, size, empty=empty)

    @classmethod
    def from_pattern(cls, row_counts: Sequence[int], col_index: Sequence[int], size: int, empty=0):
        """ Declare the lower-triangle pattern, with values to be supplied later via `insert`.
        `row_counts[i]` is the number of stored entries in row `i` of the lower triangle.
        The diagonal starts at zero; `lower` and `upper` placeholders hold `empty`. """
        SizeMismatch.assert_eq(len(row_counts), size, f"Expected {size} row counts")
        row_start = prefix_sum(row_counts)
        nnz = row_start[size]
        SizeMismatch.assert_eq(nnz, len(col_index), "Row counts do not sum to the number of column indices")
        return cls([0] * size, [empty] * nnz, [empty] * nnz, row_start, col_index, size, nnz=nnz, empty=empty)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.size, self.size)

    def elements(self) -> Iterator[Element]:
        """ Row-major iterator over every logically present entry """
        # Mirrored entries of row `r` are stored in later rows; gather them first
        upper = [[] for _ in range(self.size)]
        for row in range(self.size):
            for k in self.segment(row):
                upper[self.col_index[k]].append(Element(self.col_index[k], row, self.upper[k]))

        for row in range(self.size):
            for k in self.segment(row):
                yield Element(row, self.col_index[k], self.lower[k])
            yield Element(row, row, self.diag[row])
            yield from upper[row]

    def get(self, row: int, col: int):
        """ Get the value at (row, col), or `empty` if outside the pattern """
        if not 0 <= row < self.size: raise OutOfRange(row, self.size)
        if not 0 <= col < self.size: raise OutOfRange(col, self.size)
        if row == col:
            return self.diag[row]
        if row > col:
            k = self.find(row, col)
            return self.empty if k is None else self.lower[k]
        k = self.find(col, row)
        return self.empty if k is None else self.upper[k]

    def insert(self, val, row: int, col: int) -> None:
        """ Set the value at (row, col).
        Off-diagonal positions must have been declared in the pattern,
        otherwise raises `NoSuchElement` and leaves the matrix unchanged. """
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise NoSuchElement(row, col)

        if row == col:
            self.diag[row] = val
        elif row > col:
            k = self.find(row, col)
            if k is None:
                raise NoSuchElement(row, col)
            self.lower[k] = val
        else:  # Upper triangle: look up the mirror in row `col`
            k = self.find(col, row)
            if k is None:
                raise NoSuchElement(row, col)
            self.upper[k] = val

    def multiply(self, vector) -> DenseVector:
        """ Multiply with a column vector of length `size`.
        Each stored pair updates two outputs in a single pass:
        `lower[k]` into the entry's own row, `upper[k]` into the row of its column.
        So no entry of `y` is final until every row has been visited. """
        x = self.operand(vector, self.size)
        lower, upper, col_index, row_start = self.lower, self.upper, self.col_index, self.row_start

        y = [self.diag[i] * x[i] for i in range(self.size)]
        for i in range(self.size):
            xi = x[i]
            for k in range(row_start[i], row_start[i + 1]):
                j = col_index[k]
                y[i] += lower[k] * x[j]
                y[j] += upper[k] * xi
        return DenseVector(y)

    def copy(self):
        """ Create an array-by-array copy """
        return SymmetricPortraitMatrix(self.diag, self.lower, self.upper, self.row_start, self.col_index,
                                       self.size, nnz=self.nnz, empty=self.empty)

    def check(self) -> None:
        """ Internal consistency tests.  Raises `MatrixError` on failure. """
        MatrixError.assert_eq(len(self.diag), self.size)
        MatrixError.assert_eq(len(self.lower), self.nnz)
        MatrixError.assert_eq(len(self.upper), self.nnz)
        self.check_rows(self.size, lambda row: row)
