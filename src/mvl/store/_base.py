"""
Matrix Store Base Class

This module defines the read contract shared by every physical store,
logical view and compressed sparse container. Views compose by nesting:
each one holds a single base MatrixStore and answers queries against it,
so anything that accepts a MatrixStore accepts a view chain just as well.

Type Hierarchy:

    MatrixStore (ABC)
    ├── DenseStore                  # numpy-backed physical storage
    ├── LogicalView                 # wraps exactly one base store
    │   ├── MaskedView              # triangular / Hessenberg masks
    │   ├── SymmetricView           # symmetric / Hermitian completion
    │   ├── TransposedView          # transpose (ConjugatedView: + conjugate)
    │   ├── RepeatedRowsView        # row broadcast
    │   ├── RepeatedColumnsView     # column broadcast
    │   ├── LimitView               # leading sub-block
    │   └── CastView                # re-cast through another factory
    ├── ColumnView                  # 1-D sequence as an n x 1 matrix
    └── CompressedStore (ABC)       # CSRStore / CSCStore

Access Paths:

    double_value(r, c)  -> float          primitive approximation
    get(r, c)           -> boxed value    float / complex / Fraction
    to_scalar(r, c)     -> Scalar         algebraic wrapper

Iteration Bounds:

    first_in_row / limit_of_row / first_in_column / limit_of_column
    describe the half-open index range that may hold non-zeros. Defaults
    cover the full extent; structured views narrow them so supply_to only
    visits cells that can be non-zero.

Example:

    store = DenseStore([[1.0, 2.0], [3.0, 4.0]])
    upper = store.triangular(upper=True)
    upper.get(1, 0)        # 0.0 (masked)
    upper.copy()           # DenseStore, only the band was visited
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, TYPE_CHECKING

import numpy as np

from ..core.config import config
from ..core.error import DimensionMismatchError, check_coordinates

if TYPE_CHECKING:
    from ..scalar import Scalar, ScalarFactory
    from ._dense import DenseStore

__all__ = ['MatrixStore', 'index']


def index(structure: int, row: int, col: int) -> int:
    """Column-major linear index of (row, col) in a matrix with ``structure`` rows."""
    return row + col * structure


class MatrixStore(ABC):
    """
    Abstract base class for everything readable as a 2-D matrix.

    Required (subclasses must implement):
        rows, cols: Logical extent
        factory: ScalarFactory of the elements
        _double_value(row, col): Primitive read
        _get(row, col): Boxed read

    Everything else has a default expressed in terms of those.
    """

    __slots__ = ()

    # =========================================================================
    # Abstract Properties
    # =========================================================================

    @property
    @abstractmethod
    def rows(self) -> int:
        """Number of rows."""
        ...

    @property
    @abstractmethod
    def cols(self) -> int:
        """Number of columns."""
        ...

    @property
    @abstractmethod
    def factory(self) -> "ScalarFactory":
        """Scalar factory of the elements."""
        ...

    # =========================================================================
    # Derived Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return (self.rows, self.cols)

    @property
    def ndim(self) -> int:
        return 2

    def count(self) -> int:
        """Total number of cells (rows * cols)."""
        return self.rows * self.cols

    # =========================================================================
    # Element Access
    # =========================================================================

    @abstractmethod
    def _double_value(self, row: int, col: int) -> float:
        ...

    @abstractmethod
    def _get(self, row: int, col: int) -> Any:
        ...

    def double_value(self, row: int, col: int) -> float:
        """Primitive (float) value at (row, col)."""
        if config.debug:
            check_coordinates(self.rows, self.cols, row, col)
        return self._double_value(row, col)

    def get(self, row: int, col: int) -> Any:
        """Boxed value at (row, col)."""
        if config.debug:
            check_coordinates(self.rows, self.cols, row, col)
        return self._get(row, col)

    def to_scalar(self, row: int, col: int) -> "Scalar":
        """Algebraic scalar at (row, col)."""
        return self.factory.convert(self.get(row, col))

    def double_value_at(self, index: int) -> float:
        """Primitive value at a column-major linear index."""
        rows = self.rows
        return self.double_value(index % rows, index // rows)

    def get_at(self, index: int) -> Any:
        """Boxed value at a column-major linear index."""
        rows = self.rows
        return self.get(index % rows, index // rows)

    def slice_row(self, row: int) -> np.ndarray:
        """Read-only 1-D array of the boxed values in ``row``."""
        values = np.empty(self.cols, dtype=self.factory.numpy_dtype)
        for j in range(self.cols):
            values[j] = self._get(row, j)
        values.flags.writeable = False
        return values

    def slice_column(self, col: int) -> np.ndarray:
        """Read-only 1-D array of the boxed values in ``col``."""
        values = np.empty(self.rows, dtype=self.factory.numpy_dtype)
        for i in range(self.rows):
            values[i] = self._get(i, col)
        values.flags.writeable = False
        return values

    # =========================================================================
    # Iteration Bounds
    # =========================================================================

    def first_in_row(self, row: int) -> int:
        """First column of ``row`` that may be non-zero."""
        return 0

    def limit_of_row(self, row: int) -> int:
        """One past the last column of ``row`` that may be non-zero."""
        return self.cols

    def first_in_column(self, col: int) -> int:
        """First row of ``col`` that may be non-zero."""
        return 0

    def limit_of_column(self, col: int) -> int:
        """One past the last row of ``col`` that may be non-zero."""
        return self.rows

    # =========================================================================
    # Bulk Materialization
    # =========================================================================

    def supply_to(self, receiver: Any) -> None:
        """Copy this matrix into ``receiver`` visiting only in-bounds cells.

        The receiver is reset first, so cells outside the bounds read as zero.

        Args:
            receiver: Object with reset() and fill_one(row, col, value)
        """
        receiver.reset()
        for j in range(self.cols):
            for i in range(self.first_in_column(j), self.limit_of_column(j)):
                receiver.fill_one(i, j, self._get(i, j))

    def copy(self) -> "DenseStore":
        """Materialize into a new DenseStore.

        Each call must produce a new instance.
        """
        from ._dense import DenseStore

        retval = DenseStore.make(self.rows, self.cols, dtype=self.factory)
        self.supply_to(retval)
        return retval

    def to_numpy(self) -> np.ndarray:
        """Dense numpy array of the boxed values."""
        return self.copy().to_numpy(copy=False)

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def multiply(self, right: "MatrixStore") -> "MatrixStore":
        """Matrix product ``self @ right`` as a new DenseStore.

        The result takes this store's factory, promoted to complex when
        either operand is complex.
        """
        from ._dense import DenseStore

        if self.cols != right.rows:
            raise DimensionMismatchError(
                f"Cannot multiply {self.shape} by {right.shape}"
            )
        factory = self.factory
        if right.factory.is_complex and not factory.is_complex:
            factory = right.factory
        return DenseStore(self.to_numpy() @ right.to_numpy(), dtype=factory, copy=False)

    def equals(self, other: "MatrixStore", tolerance: float = 1e-12) -> bool:
        """Element-wise comparison within an absolute tolerance."""
        if self.shape != other.shape:
            return False
        left = self.to_numpy()
        right = other.to_numpy()
        if left.dtype == object or right.dtype == object:
            return bool(np.all(left == right))
        return bool(np.allclose(left, right, rtol=0.0, atol=tolerance))

    # =========================================================================
    # Logical Views
    # =========================================================================

    def transpose(self) -> "MatrixStore":
        """Transposed view (no conjugation)."""
        from ..view import TransposedView
        return TransposedView(self)

    def conjugate(self) -> "MatrixStore":
        """Conjugate transpose (Hermitian adjoint) view."""
        from ..view import ConjugatedView
        return ConjugatedView(self)

    def triangular(self, upper: bool = True, assume_one: bool = False) -> "MatrixStore":
        """Triangular view, optionally with a unit diagonal."""
        from ..view import MaskedView, UPPER_TRIANGULAR, LOWER_TRIANGULAR
        mask = UPPER_TRIANGULAR if upper else LOWER_TRIANGULAR
        return MaskedView(self, mask, assume_one=assume_one)

    def hessenberg(self, upper: bool = True) -> "MatrixStore":
        """Upper (zero below the first subdiagonal) or lower Hessenberg view."""
        from ..view import MaskedView, UPPER_HESSENBERG, LOWER_HESSENBERG
        return MaskedView(self, UPPER_HESSENBERG if upper else LOWER_HESSENBERG)

    def diagonal(self) -> "MatrixStore":
        return self.triangular(upper=False).triangular(upper=True)

    def bidiagonal(self, upper: bool = True) -> "MatrixStore":
        if upper:
            return self.hessenberg(upper=False).triangular(upper=True)
        return self.hessenberg(upper=True).triangular(upper=False)

    def tridiagonal(self) -> "MatrixStore":
        return self.hessenberg(upper=False).hessenberg(upper=True)

    def symmetric(self, upper: bool = True) -> "MatrixStore":
        """Symmetric completion of the stored upper (or lower) triangle."""
        from ..view import SymmetricView
        return SymmetricView(self, upper=upper, hermitian=False)

    def hermitian(self, upper: bool = True) -> "MatrixStore":
        """Hermitian completion of the stored upper (or lower) triangle."""
        from ..view import SymmetricView
        return SymmetricView(self, upper=upper, hermitian=True)

    def repeat(self, row_repetitions: int, col_repetitions: int) -> "MatrixStore":
        """Tile this matrix ``row_repetitions`` x ``col_repetitions`` times."""
        from ..view import RepeatedRowsView, RepeatedColumnsView

        retval = self
        if row_repetitions != 1:
            retval = RepeatedRowsView(retval, row_repetitions)
        if col_repetitions != 1:
            retval = RepeatedColumnsView(retval, col_repetitions)
        return retval

    def limits(self, row_limit: int, col_limit: int) -> "MatrixStore":
        """Leading sub-block view; a negative limit keeps the current extent."""
        from ..view import LimitView
        return LimitView(
            self.rows if row_limit < 0 else row_limit,
            self.cols if col_limit < 0 else col_limit,
            self,
        )

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __getitem__(self, key: Tuple[int, int]) -> Any:
        row, col = key
        return self.get(row, col)

    def __matmul__(self, right: "MatrixStore") -> "MatrixStore":
        return self.multiply(right)

    def __len__(self) -> int:
        """Return number of rows."""
        return self.rows

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"shape={self.shape}, dtype={self.factory.name})")

    def __str__(self) -> str:
        return self.__repr__()
