"""
Logical View Base

Root of the view hierarchy: wraps exactly one base store, fixes the
logical extent and forwards every query unchanged. Concrete views
override only what their reinterpretation changes.

Design Philosophy:
1. Single base: a view never owns more than one inner store
2. Read-only: the base is shared and never mutated through the view
3. Composition by nesting constructors, not by deep inheritance
"""

from typing import Any

from ..core.error import InvalidArgumentError
from ..scalar import ScalarFactory
from ..store import MatrixStore

__all__ = ['LogicalView']


class LogicalView(MatrixStore):
    """
    A MatrixStore answering queries against a single base store.

    Attributes:
        base: The wrapped store (shared, never mutated)
        rows, cols: Logical extent, fixed at construction
    """

    __slots__ = ('_base', '_rows', '_cols')

    def __init__(self, base: MatrixStore, rows: int, cols: int):
        if rows < 0 or cols < 0:
            raise InvalidArgumentError(f"Negative extent ({rows}, {cols})")
        self._base = base
        self._rows = int(rows)
        self._cols = int(cols)

    @property
    def base(self) -> MatrixStore:
        return self._base

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def factory(self) -> ScalarFactory:
        return self._base.factory

    def _double_value(self, row: int, col: int) -> float:
        return self._base._double_value(row, col)

    def _get(self, row: int, col: int) -> Any:
        return self._base._get(row, col)

    def first_in_row(self, row: int) -> int:
        return self._base.first_in_row(row)

    def limit_of_row(self, row: int) -> int:
        return min(self._base.limit_of_row(row), self._cols)

    def first_in_column(self, col: int) -> int:
        return self._base.first_in_column(col)

    def limit_of_column(self, col: int) -> int:
        return min(self._base.limit_of_column(col), self._rows)
