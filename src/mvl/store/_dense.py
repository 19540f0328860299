"""
Dense Physical Storage

A numpy-backed 2-D store. It is the physical end of every view chain and
doubles as the receiver of bulk copies (supply_to / copy).

Memory Layout:
    - array[rows, cols]: numpy array in the factory's storage dtype
      (float32, float64, complex128, or object holding Fraction)

Receiver Contract:
    reset()                     zero every cell (call before a fresh fill)
    set(row, col, value)        primitive or boxed single-cell write
    fill_one(row, col, value)   generic single-cell write
    add(row, col, value)        accumulate into a cell (compressed stores)
    fill_row(row, values)       write a whole row
    fill_column(col, values)    write a whole column
    fill_all(value)             broadcast one value

Example:
    >>> store = DenseStore([[1.0, 2.0], [3.0, 4.0]])
    >>> store.get(1, 0)
    3.0
    >>> target = DenseStore.make(2, 2)
    >>> store.transpose().supply_to(target)
    >>> target.to_numpy()
    array([[1., 3.],
           [2., 4.]])
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Union

import numpy as np

from ..core.error import InvalidArgumentError
from ..scalar import ScalarFactory, get_factory, normalize_dtype
from ._base import MatrixStore

__all__ = ['DenseStore']


def _infer_factory(data: Any, dtype: Any) -> ScalarFactory:
    if dtype is not None:
        return get_factory(dtype)
    if isinstance(data, MatrixStore):
        return data.factory
    try:
        return get_factory(normalize_dtype(np.asarray(data).dtype))
    except ValueError:
        return get_factory(None)


class DenseStore(MatrixStore):
    """
    Dense 2-D matrix over a numpy array.

    Attributes:
        array: Read-only view of the underlying numpy array
        factory: ScalarFactory of the elements

    Memory Model:
        With ``copy=False`` and a matching dtype the array is borrowed, and
        writes through this store are visible to the caller's array.
    """

    __slots__ = ('_array', '_factory')

    def __init__(
        self,
        data: Any,
        dtype: Optional[Union[str, ScalarFactory]] = None,
        copy: bool = True,
    ):
        """Initialize from a 2-D array-like or another MatrixStore.

        Args:
            data: Nested sequence, numpy array or MatrixStore
            dtype: Element type (inferred from data if not provided)
            copy: Copy the input array (numpy input only)
        """
        factory = _infer_factory(data, dtype)
        if isinstance(data, MatrixStore):
            data = data.to_numpy()
        borrowed = (not copy and isinstance(data, np.ndarray)
                    and data.dtype == factory.numpy_dtype)
        as_object = object if factory.numpy_dtype == object else None
        array = np.asarray(data, dtype=as_object) if not copy else np.array(data, dtype=as_object)
        if array.ndim != 2:
            raise InvalidArgumentError(f"DenseStore needs 2-D data, got ndim={array.ndim}")

        if factory.numpy_dtype == object:
            if not borrowed:
                converted = np.empty(array.shape, dtype=object)
                for idx, value in np.ndenumerate(array):
                    converted[idx] = factory.cast(value)
                array = converted
        else:
            if np.iscomplexobj(array) and not factory.is_complex:
                array = array.real
            array = array.astype(factory.numpy_dtype, copy=False)

        self._array = array
        self._factory = factory

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def make(
        cls,
        rows: int,
        cols: int,
        dtype: Optional[Union[str, ScalarFactory]] = None,
    ) -> "DenseStore":
        """Zero-filled store of the given shape."""
        if rows < 0 or cols < 0:
            raise InvalidArgumentError(f"Negative shape ({rows}, {cols})")
        factory = get_factory(dtype)
        array = np.full((rows, cols), factory.zero, dtype=factory.numpy_dtype)
        return cls(array, dtype=factory, copy=False)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Any]],
        dtype: Optional[Union[str, ScalarFactory]] = None,
    ) -> "DenseStore":
        """Store from a sequence of rows."""
        return cls([list(row) for row in rows], dtype=dtype)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def rows(self) -> int:
        return self._array.shape[0]

    @property
    def cols(self) -> int:
        return self._array.shape[1]

    @property
    def factory(self) -> ScalarFactory:
        return self._factory

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the underlying array."""
        view = self._array.view()
        view.flags.writeable = False
        return view

    # =========================================================================
    # Element Access
    # =========================================================================

    def _double_value(self, row: int, col: int) -> float:
        return self._factory.double_value(self._array[row, col])

    def _get(self, row: int, col: int) -> Any:
        return self._factory.cast(self._array[row, col])

    def slice_row(self, row: int) -> np.ndarray:
        return self.array[row, :]

    def slice_column(self, col: int) -> np.ndarray:
        return self.array[:, col]

    def to_numpy(self, copy: bool = True) -> np.ndarray:
        return self._array.copy() if copy else self._array

    def supply_to(self, receiver: Any) -> None:
        receiver.reset()
        for j in range(self.cols):
            receiver.fill_column(j, self.slice_column(j))

    # =========================================================================
    # Receiver Interface
    # =========================================================================

    def reset(self) -> None:
        """Zero every cell."""
        self._array[...] = self._factory.zero

    def set(self, row: int, col: int, value: Any) -> None:
        self._array[row, col] = self._factory.cast(value)

    def fill_one(self, row: int, col: int, value: Any) -> None:
        self._array[row, col] = self._factory.cast(value)

    def add(self, row: int, col: int, value: Any) -> None:
        self._array[row, col] = self._factory.add(self._array[row, col], value)

    def fill_row(self, row: int, values: Iterable[Any]) -> None:
        self._array[row, :] = self._coerce_line(values)

    def fill_column(self, col: int, values: Iterable[Any]) -> None:
        self._array[:, col] = self._coerce_line(values)

    def fill_all(self, value: Any) -> None:
        self._array[...] = self._factory.cast(value)

    def _coerce_line(self, values: Iterable[Any]) -> Any:
        if self._array.dtype == object:
            values = list(values)
            line = np.empty(len(values), dtype=object)
            for k, value in enumerate(values):
                line[k] = self._factory.cast(value)
            return line
        values = np.asarray(values)
        if np.iscomplexobj(values) and not self._factory.is_complex:
            values = values.real
        return values.astype(self._array.dtype, copy=False)
