"""
Symmetric / Hermitian Completion

Completes a matrix of which only one triangle is meaningful. For the upper
variant, (r, c) with r <= c is read directly and (r, c) with r > c is read
from (c, r); the lower variant mirrors that. The Hermitian variant also
conjugates reflected values on the boxed and algebraic paths. The primitive
path never conjugates: the floating reduction of a conjugate is unchanged.
"""

from typing import Any

from ..store import MatrixStore
from ._logical import LogicalView

__all__ = ['SymmetricView']


class SymmetricView(LogicalView):
    """
    Symmetric (or Hermitian) view over one stored triangle.

    Attributes:
        upper: True if the upper triangle holds the data
        hermitian: Conjugate reflected values

    Example:
        >>> store = DenseStore([[1.0, 2.0], [0.0, 3.0]])
        >>> store.symmetric(upper=True).get(1, 0)
        2.0
    """

    __slots__ = ('_upper', '_hermitian')

    def __init__(self, base: MatrixStore, upper: bool = True, hermitian: bool = False):
        super().__init__(base, base.rows, base.cols)
        self._upper = bool(upper)
        self._hermitian = bool(hermitian)

    @property
    def upper(self) -> bool:
        return self._upper

    @property
    def hermitian(self) -> bool:
        return self._hermitian

    def _stored(self, row: int, col: int) -> bool:
        return row <= col if self._upper else row >= col

    def _double_value(self, row: int, col: int) -> float:
        if self._stored(row, col):
            return self._base._double_value(row, col)
        return self._base._double_value(col, row)

    def _get(self, row: int, col: int) -> Any:
        if self._stored(row, col):
            return self._base._get(row, col)
        value = self._base._get(col, row)
        if self._hermitian:
            return self.factory.conjugate(value)
        return value

    # Reflection fills the whole extent regardless of the base bounds.

    def first_in_row(self, row: int) -> int:
        return 0

    def limit_of_row(self, row: int) -> int:
        return self._cols

    def first_in_column(self, col: int) -> int:
        return 0

    def limit_of_column(self, col: int) -> int:
        return self._rows

    def __repr__(self) -> str:
        kind = 'hermitian' if self._hermitian else 'symmetric'
        side = 'upper' if self._upper else 'lower'
        return f"SymmetricView(shape={self.shape}, {kind}, {side})"
