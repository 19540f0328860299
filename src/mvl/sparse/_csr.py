"""CSR (Compressed Sparse Row) Store.

Row-major compressed container. Element lookup binary-searches the
row's sorted column indices, and the row iteration bounds come straight
from the first and last stored column of each row, so copy() and
supply_to() never visit a cell the container cannot hold.

Example:
    >>> builder = CSRStore.builder(3, 3)
    >>> builder.set(0, 0, 5.0)
    >>> builder.set(1, 2, 3.0)
    >>> builder.set(2, 2, 7.0)
    >>> csr = builder.build()
    >>> csr.row_indices(1).tolist()
    [2]
    >>> csr.first_in_row(1), csr.limit_of_row(1)
    (2, 3)
"""

import numpy as np

from ._base import CompressedStore

__all__ = ['CSRStore']


class CSRStore(CompressedStore):
    """
    Immutable CSR matrix.

    Attributes:
        values: Non-zero values (row by row)
        indices: Column index of each value
        indptr: Row pointers, length rows + 1
    """

    __slots__ = ()

    _row_major = True

    def row_values(self, i: int) -> np.ndarray:
        """Stored values of row ``i``."""
        return self.major_values(i)

    def row_indices(self, i: int) -> np.ndarray:
        """Column indices of row ``i``."""
        return self.major_indices(i)

    def row_length(self, i: int) -> int:
        """Number of stored entries in row ``i``."""
        return self.major_length(i)

    def first_in_row(self, row: int) -> int:
        return self._major_first(row)

    def limit_of_row(self, row: int) -> int:
        return self._major_limit(row)
