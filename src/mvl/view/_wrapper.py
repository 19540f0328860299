"""
Reinterpretation Views

Two adapters that change how existing data is addressed or typed:

    ColumnView  a 1-D sequence of length n exposed as an n x 1 matrix
    CastView    a 2-D source re-derived element by element through
                another ScalarFactory

Both address their source with the column-major linear formula

    index(structure, row, col) = row + col * structure

used throughout the store family.

Example:
    >>> col = ColumnView([1.0, 2.0, 3.0])
    >>> col.shape
    (3, 1)
    >>> exact = CastView(DenseStore([[0.5, 0.25]]), RATIONAL)
    >>> exact.get(0, 1)
    Fraction(1, 4)
"""

from typing import Any, Optional, Sequence, Union

import numpy as np

from ..scalar import ScalarFactory, get_factory, normalize_dtype
from ..store import MatrixStore, index
from ._logical import LogicalView

__all__ = ['ColumnView', 'CastView']


class ColumnView(MatrixStore):
    """
    One-dimensional sequence seen as a single column.

    The sequence may be a list, a numpy array, or another MatrixStore read
    through its linear (column-major) index.
    """

    __slots__ = ('_sequence', '_length', '_factory')

    def __init__(
        self,
        sequence: Union[Sequence[Any], np.ndarray, MatrixStore],
        dtype: Optional[Union[str, ScalarFactory]] = None,
    ):
        if isinstance(sequence, MatrixStore):
            length = sequence.count()
            factory = get_factory(dtype) if dtype is not None else sequence.factory
        else:
            length = len(sequence)
            if dtype is not None:
                factory = get_factory(dtype)
            else:
                try:
                    factory = get_factory(normalize_dtype(np.asarray(sequence).dtype))
                except ValueError:
                    factory = get_factory(None)
        self._sequence = sequence
        self._length = length
        self._factory = factory

    @property
    def rows(self) -> int:
        return self._length

    @property
    def cols(self) -> int:
        return 1

    @property
    def factory(self) -> ScalarFactory:
        return self._factory

    def _read(self, i: int) -> Any:
        if isinstance(self._sequence, MatrixStore):
            return self._sequence.get_at(i)
        return self._sequence[i]

    def double_value_at(self, index: int) -> float:
        return self._factory.double_value(self._read(index))

    def get_at(self, index: int) -> Any:
        return self._factory.cast(self._read(index))

    def _double_value(self, row: int, col: int) -> float:
        return self.double_value_at(row)

    def _get(self, row: int, col: int) -> Any:
        return self.get_at(row)


class CastView(LogicalView):
    """
    A 2-D source whose elements are re-derived through another factory.

    Attributes:
        factory: Target ScalarFactory (the source keeps its own)
    """

    __slots__ = ('_factory',)

    def __init__(self, source: MatrixStore, factory: Union[str, ScalarFactory]):
        super().__init__(source, source.rows, source.cols)
        self._factory = get_factory(factory)

    @property
    def factory(self) -> ScalarFactory:
        return self._factory

    def _get(self, row: int, col: int) -> Any:
        raw = self._base.get_at(index(self._base.rows, row, col))
        return self._factory.cast(raw)

    def _double_value(self, row: int, col: int) -> float:
        return self._factory.double_value(self._get(row, col))
