"""
Compressed row-oriented sparse matrices:
general CSR, and CSLR ("skyline") for matrices with symmetric portraits.
"""

import logging

from .errors import ErrorKind, MatrixError, SizeMismatch, NoSuchElement, OutOfRange, DivideByZero
from .vector import VectorBase, DenseVector
from .matrix import Element
from .csr import GeneralSparseMatrix
from .cslr import SymmetricPortraitMatrix

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
