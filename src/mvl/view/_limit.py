"""
Clipping View

Presents only the leading sub-block of a larger store without copying.
The effective extent is the element-wise minimum of the base extent and
the requested one; element queries are forwarded without re-addressing.
"""

from ..core.error import InvalidArgumentError
from ..store import MatrixStore
from ._logical import LogicalView

__all__ = ['LimitView']


class LimitView(LogicalView):
    """
    Leading (rows x cols) block of the base store.

    Example:
        >>> base = DenseStore.make(3, 5)
        >>> LimitView(10, 10, base).shape
        (3, 5)
        >>> LimitView(2, 2, base).shape
        (2, 2)
    """

    __slots__ = ()

    def __init__(self, rows: int, cols: int, base: MatrixStore):
        if rows < 0 or cols < 0:
            raise InvalidArgumentError(f"Negative clip extent ({rows}, {cols})")
        super().__init__(base, min(base.rows, rows), min(base.cols, cols))

    def slice_row(self, row: int):
        return self._base.slice_row(row)[:self._cols]

    def slice_column(self, col: int):
        return self._base.slice_column(col)[:self._rows]
