"""
Broadcast Views (Row / Column Repetition)

Repeat a base store a fixed number of times along one axis by modular
index mapping. Bulk copies fetch every base row (column) exactly once and
write it into all of its destination rows (columns).

Example:
    >>> base = DenseStore([[1.0, 2.0], [3.0, 4.0]])
    >>> tall = RepeatedRowsView(base, 3)
    >>> tall.shape
    (6, 2)
    >>> tall.get(4, 1)
    2.0
"""

from typing import Any

from ..core.error import InvalidArgumentError
from ..store import MatrixStore
from ._logical import LogicalView

__all__ = ['RepeatedRowsView', 'RepeatedColumnsView']


def _check_repetitions(repetitions: int) -> int:
    if repetitions < 1:
        raise InvalidArgumentError(f"Repetition count must be >= 1, got {repetitions}")
    return int(repetitions)


class RepeatedRowsView(LogicalView):
    """
    The base stacked ``repetitions`` times vertically.

    Attributes:
        repetitions: Number of copies along the row axis
    """

    __slots__ = ('_repetitions',)

    def __init__(self, base: MatrixStore, repetitions: int):
        repetitions = _check_repetitions(repetitions)
        super().__init__(base, base.rows * repetitions, base.cols)
        self._repetitions = repetitions

    @property
    def repetitions(self) -> int:
        return self._repetitions

    def _double_value(self, row: int, col: int) -> float:
        return self._base._double_value(row % self._base.rows, col)

    def _get(self, row: int, col: int) -> Any:
        return self._base._get(row % self._base.rows, col)

    def first_in_row(self, row: int) -> int:
        return self._base.first_in_row(row % self._base.rows)

    def limit_of_row(self, row: int) -> int:
        return self._base.limit_of_row(row % self._base.rows)

    def first_in_column(self, col: int) -> int:
        if self._repetitions == 1:
            return self._base.first_in_column(col)
        return 0

    def limit_of_column(self, col: int) -> int:
        if self._repetitions == 1:
            return self._base.limit_of_column(col)
        return self._rows

    def slice_row(self, row: int):
        return self._base.slice_row(row % self._base.rows)

    def supply_to(self, receiver: Any) -> None:
        receiver.reset()
        base_rows = self._base.rows
        for b in range(base_rows):
            values = self._base.slice_row(b)
            for rep in range(self._repetitions):
                receiver.fill_row(b + base_rows * rep, values)


class RepeatedColumnsView(LogicalView):
    """
    The base stacked ``repetitions`` times horizontally.

    Attributes:
        repetitions: Number of copies along the column axis
    """

    __slots__ = ('_repetitions',)

    def __init__(self, base: MatrixStore, repetitions: int):
        repetitions = _check_repetitions(repetitions)
        super().__init__(base, base.rows, base.cols * repetitions)
        self._repetitions = repetitions

    @property
    def repetitions(self) -> int:
        return self._repetitions

    def _double_value(self, row: int, col: int) -> float:
        return self._base._double_value(row, col % self._base.cols)

    def _get(self, row: int, col: int) -> Any:
        return self._base._get(row, col % self._base.cols)

    def first_in_row(self, row: int) -> int:
        if self._repetitions == 1:
            return self._base.first_in_row(row)
        return 0

    def limit_of_row(self, row: int) -> int:
        if self._repetitions == 1:
            return self._base.limit_of_row(row)
        return self._cols

    def first_in_column(self, col: int) -> int:
        return self._base.first_in_column(col % self._base.cols)

    def limit_of_column(self, col: int) -> int:
        return self._base.limit_of_column(col % self._base.cols)

    def slice_column(self, col: int):
        return self._base.slice_column(col % self._base.cols)

    def supply_to(self, receiver: Any) -> None:
        receiver.reset()
        base_cols = self._base.cols
        for b in range(base_cols):
            values = self._base.slice_column(b)
            for rep in range(self._repetitions):
                receiver.fill_column(b + base_cols * rep, values)
