from abc import ABC, abstractmethod
from typing import Iterable, List

from .errors import SizeMismatch, OutOfRange, DivideByZero


class VectorBase(ABC):
    """ Capability interface shared by vector variants: `get`, `set` and `size`. """

    @property
    @abstractmethod
    def size(self) -> int:
        ...

    @abstractmethod
    def get(self, index: int):
        ...

    @abstractmethod
    def set(self, index: int, val) -> None:
        ...

    def __len__(self):
        return self.size

    def check_index(self, index: int):
        if not 0 <= index < self.size:
            raise OutOfRange(index, self.size)

    def at(self, index: int):
        """ Bounds-checked element access """
        return self.get(index)


class DenseVector(VectorBase):
    """ Fixed-length numeric vector.
    `v[i]` is the unchecked hot-path accessor; `at`, `get` and `set` check bounds. """

    def __init__(self, elements: Iterable = ()):
        self.elements: List = list(elements)

    @classmethod
    def zeros(cls, n: int):
        return cls([0] * n)

    @property
    def size(self) -> int:
        return len(self.elements)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.elements!r})"

    def __iter__(self):
        return iter(self.elements)

    def __getitem__(self, index: int):
        return self.elements[index]

    def __setitem__(self, index: int, val):
        self.elements[index] = val

    def __eq__(self, other):
        if isinstance(other, DenseVector):
            return self.elements == other.elements
        if isinstance(other, list):
            return self.elements == other
        return NotImplemented

    def get(self, index: int):
        self.check_index(index)
        return self.elements[index]

    def set(self, index: int, val) -> None:
        self.check_index(index)
        self.elements[index] = val

    def tolist(self) -> list:
        return self.elements[:]

    def copy(self):
        return DenseVector(self.elements)

    __copy__ = copy

    def __deepcopy__(self, memo):
        return self.copy()

    def _elementwise(self, other, op):
        if len(other) != self.size:
            raise SizeMismatch(f"Vector sizes {self.size} and {len(other)} do not match")
        return DenseVector(op(x, y) for x, y in zip(self.elements, other))

    def __add__(self, other):
        return self._elementwise(other, lambda x, y: x + y)

    def __sub__(self, other):
        return self._elementwise(other, lambda x, y: x - y)

    def __mul__(self, val):
        if isinstance(val, VectorBase):
            return NotImplemented
        return DenseVector(x * val for x in self.elements)

    __rmul__ = __mul__

    def __truediv__(self, val):
        if val == 0:
            raise DivideByZero("Cannot divide a vector by zero")
        return DenseVector(x / val for x in self.elements)

    def __neg__(self):
        return DenseVector(-x for x in self.elements)
