"""CSC (Compressed Sparse Column) Store.

Column-major mirror of CSRStore: indptr runs over columns, indices hold
row numbers, and the column iteration bounds are taken from the stored
row indices of each column.
"""

import numpy as np

from ._base import CompressedStore

__all__ = ['CSCStore']


class CSCStore(CompressedStore):
    """
    Immutable CSC matrix.

    Attributes:
        values: Non-zero values (column by column)
        indices: Row index of each value
        indptr: Column pointers, length cols + 1
    """

    __slots__ = ()

    _row_major = False

    def col_values(self, j: int) -> np.ndarray:
        """Stored values of column ``j``."""
        return self.major_values(j)

    def col_indices(self, j: int) -> np.ndarray:
        """Row indices of column ``j``."""
        return self.major_indices(j)

    def col_length(self, j: int) -> int:
        return self.major_length(j)

    def first_in_column(self, col: int) -> int:
        return self._major_first(col)

    def limit_of_column(self, col: int) -> int:
        return self._major_limit(col)
