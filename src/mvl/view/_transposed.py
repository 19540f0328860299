"""
Transposed and Conjugated Views

TransposedView exposes (r, c) as base(c, r); ConjugatedView additionally
conjugates the value (Hermitian adjoint). Both undo themselves in O(1):
transposing a TransposedView or conjugating a ConjugatedView hands back
the wrapped base object.

Product Rewrite:

    A^H . B^H  ==  (B . A)^H
    A^T . B^T  ==  (B . A)^T

When both operands of multiply() are the same kind of view, the product
is computed on the two inner bases and wrapped once, instead of
materializing both adjoints first. Any other right operand takes the
generic MatrixStore.multiply path.
"""

import logging
from typing import Any

from ..store import MatrixStore
from ._logical import LogicalView

logger = logging.getLogger("mvl.view")

__all__ = ['TransposedView', 'ConjugatedView']


class TransposedView(LogicalView):
    """
    Plain transpose of the base store.

    Example:
        >>> view = store.transpose()
        >>> view.transpose() is store
        True
    """

    __slots__ = ()

    def __init__(self, base: MatrixStore):
        super().__init__(base, base.cols, base.rows)

    def _double_value(self, row: int, col: int) -> float:
        return self._base._double_value(col, row)

    def _get(self, row: int, col: int) -> Any:
        return self._base._get(col, row)

    def first_in_row(self, row: int) -> int:
        return self._base.first_in_column(row)

    def limit_of_row(self, row: int) -> int:
        return self._base.limit_of_column(row)

    def first_in_column(self, col: int) -> int:
        return self._base.first_in_row(col)

    def limit_of_column(self, col: int) -> int:
        return self._base.limit_of_row(col)

    def slice_row(self, row: int):
        return self._base.slice_column(row)

    def slice_column(self, col: int):
        return self._base.slice_row(col)

    def transpose(self) -> MatrixStore:
        logger.debug("Collapsing double transpose")
        return self._base

    def multiply(self, right: MatrixStore) -> MatrixStore:
        if type(right) is type(self) and type(self) is TransposedView:
            logger.debug("Rewriting A^T . B^T as (B . A)^T")
            return TransposedView(right.base.multiply(self._base))
        return super().multiply(right)


class ConjugatedView(TransposedView):
    """
    Conjugate transpose (Hermitian adjoint) of the base store.

    Example:
        >>> adjoint = store.conjugate()
        >>> adjoint.conjugate() is store
        True
    """

    __slots__ = ()

    def _get(self, row: int, col: int) -> Any:
        return self.factory.conjugate(self._base._get(col, row))

    def slice_row(self, row: int):
        return self._conjugated(self._base.slice_column(row))

    def slice_column(self, col: int):
        return self._conjugated(self._base.slice_row(col))

    def _conjugated(self, values):
        if not self.factory.is_complex:
            return values
        values = values.conj()
        values.flags.writeable = False
        return values

    def transpose(self) -> MatrixStore:
        return MatrixStore.transpose(self)

    def conjugate(self) -> MatrixStore:
        logger.debug("Collapsing double conjugation")
        return self._base

    def multiply(self, right: MatrixStore) -> MatrixStore:
        if isinstance(right, ConjugatedView):
            logger.debug("Rewriting A^H . B^H as (B . A)^H")
            return ConjugatedView(right.base.multiply(self._base))
        return MatrixStore.multiply(self, right)
