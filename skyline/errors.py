"""
Error taxonomy shared by the sparse formats and vectors.
"""

from enum import Enum, auto


class ErrorKind(Enum):
    INVALID = auto()
    SIZE_MISMATCH = auto()
    NO_SUCH_ELEMENT = auto()
    OUT_OF_RANGE = auto()
    DIVIDE_BY_ZERO = auto()


class MatrixError(Exception):
    """ Base of all failures raised by `skyline`.
    Each subclass pins an `ErrorKind`, so callers can either catch the
    specific class or dispatch on `err.kind`. """

    kind = ErrorKind.INVALID

    @classmethod
    def assert_true(cls, cond, msg: str = ""):
        if not cond:
            raise cls(msg)

    @classmethod
    def assert_eq(cls, x, y, msg: str = ""):
        if x != y:
            raise cls(msg or f"{x!r} != {y!r}")

    @classmethod
    def assert_not_eq(cls, x, y, msg: str = ""):
        if x == y:
            raise cls(msg or f"{x!r} == {y!r}")

    @classmethod
    def assert_lt(cls, x, y, msg: str = ""):
        if not x < y:
            raise cls(msg or f"{x!r} >= {y!r}")


class SizeMismatch(MatrixError):
    kind = ErrorKind.SIZE_MISMATCH


class NoSuchElement(MatrixError):
    """ Insertion at a position the nonzero pattern does not declare. """

    kind = ErrorKind.NO_SUCH_ELEMENT

    def __init__(self, row: int, col: int):
        super().__init__(f"Cannot insert: matrix was not declared to have an element at ({row}, {col})")
        self.row = row
        self.col = col


class OutOfRange(MatrixError):
    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self, index, size: int):
        super().__init__(f"Index {index} out of range for size {size}")
        self.index = index
        self.size = size


class DivideByZero(MatrixError):
    kind = ErrorKind.DIVIDE_BY_ZERO
