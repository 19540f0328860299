"""
Compressed Sparse Container Base Class

Shared implementation of the CSR and CSC containers. Both hold the same
three arrays and differ only in which axis is the major one:

Memory Layout:
    - values[nnz]: Non-zero values
    - indices[nnz]: Minor indices (col for CSR, row for CSC), ascending
      within each major line
    - indptr[major + 1]: Cumulative offsets, indptr[-1] == nnz

Type Hierarchy:

    MatrixStore (ABC)
    └── CompressedStore (ABC)
        ├── CSRStore                  # rows are major
        └── CSCStore                  # columns are major

Sparse Structure Capability:

    count_nonzeros()   stored entries
    density()          count_nonzeros() / (rows * cols), 0.0 if empty
    to_csr(), to_csc() orientation conversion (same orientation -> self)

Containers are immutable: all three arrays are flagged read-only.
"""

from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union, TYPE_CHECKING

import numpy as np

from ..core.config import DuplicatePolicy
from ..core.error import DimensionMismatchError
from ..scalar import ScalarFactory, get_factory, normalize_dtype
from ..store import MatrixStore
from ._builder import SparseBuilder, Triplet, compress

if TYPE_CHECKING:
    from scipy.sparse import spmatrix
    from ._csr import CSRStore
    from ._csc import CSCStore

__all__ = ['SparseFormat', 'CompressedStore']


class SparseFormat:
    """Enumeration of sparse matrix formats."""
    CSR = 'csr'
    CSC = 'csc'


class CompressedStore(MatrixStore):
    """
    Base class for compressed sparse containers.

    Subclasses fix the orientation through ``_row_major`` and add the
    axis-named accessors (row_values / col_values, ...).
    """

    __slots__ = ('_values', '_indices', '_indptr', '_rows', '_cols', '_factory')

    # True when rows are the major axis
    _row_major: bool = True

    def __init__(
        self,
        rows: int,
        cols: int,
        values: np.ndarray,
        indices: np.ndarray,
        indptr: np.ndarray,
        factory: Optional[Union[str, ScalarFactory]] = None,
    ):
        """Wrap already-compressed arrays.

        Minor indices may arrive unsorted within a major line; such lines
        are reordered (stably) so lookups and bounds stay exact.

        Args:
            rows: Number of rows
            cols: Number of columns
            values: Non-zero values
            indices: Minor indices
            indptr: Major pointers (length major_dim + 1)
            factory: Element type (config default if None)
        """
        self._rows = int(rows)
        self._cols = int(cols)
        self._factory = get_factory(factory)
        values = self._coerce_values(values)
        indices = np.asarray(indices, dtype=np.int64).reshape(-1)
        indptr = np.asarray(indptr, dtype=np.int64).reshape(-1)
        if len(indptr) != self.major_dim + 1:
            raise DimensionMismatchError(
                f"indptr length {len(indptr)} != {self.format} major + 1 = {self.major_dim + 1}"
            )
        if len(values) != len(indices) or int(indptr[-1]) != len(values):
            raise DimensionMismatchError(
                f"values/indices/indptr disagree: {len(values)}, {len(indices)}, {int(indptr[-1])}"
            )
        major = np.repeat(np.arange(self.major_dim, dtype=np.int64), np.diff(indptr))
        unsorted = (np.diff(indices) < 0) & (np.diff(major) == 0)
        if unsorted.any():
            # Lookups and bounds rely on ascending minors within a major line.
            order = np.lexsort((indices, major))
            values = values[order]
            indices = indices[order]
        # Caller-owned writeable arrays are copied before being frozen.
        values, indices, indptr = (
            array.copy() if array.flags.writeable else array
            for array in (values, indices, indptr)
        )
        for array in (values, indices, indptr):
            array.flags.writeable = False
        self._values = values
        self._indices = indices
        self._indptr = indptr

    def _coerce_values(self, values: Any) -> np.ndarray:
        """Values as a private array of the factory's storage dtype."""
        if self._factory.numpy_dtype == object:
            values = list(values)
            out = np.empty(len(values), dtype=object)
            for k, value in enumerate(values):
                out[k] = self._factory.cast(value)
            return out
        values = np.asarray(values).reshape(-1)
        if np.iscomplexobj(values) and not self._factory.is_complex:
            values = values.real
        return values.astype(self._factory.numpy_dtype, copy=False)

    # =========================================================================
    # Orientation
    # =========================================================================

    @property
    def format(self) -> str:
        """Sparse format ('csr' or 'csc')."""
        return SparseFormat.CSR if self._row_major else SparseFormat.CSC

    @property
    def major_dim(self) -> int:
        return self._rows if self._row_major else self._cols

    @property
    def minor_dim(self) -> int:
        return self._cols if self._row_major else self._rows

    def _major_minor(self, row: int, col: int) -> Tuple[int, int]:
        return (row, col) if self._row_major else (col, row)

    def _row_col(self, major: int, minor: int) -> Tuple[int, int]:
        return (major, minor) if self._row_major else (minor, major)

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def make(
        cls,
        rows: int,
        cols: int,
        triplets: Sequence[Triplet],
        factory: Optional[Union[str, ScalarFactory]] = None,
        duplicates: Optional[DuplicatePolicy] = None,
    ) -> "CompressedStore":
        """Compress a triplet list into a new container of this orientation."""
        factory = get_factory(factory)
        rows_idx = [t.row for t in triplets]
        cols_idx = [t.col for t in triplets]
        values = [factory.cast(t.value) for t in triplets]
        if cls._row_major:
            major, minor, major_dim, minor_dim = rows_idx, cols_idx, rows, cols
        else:
            major, minor, major_dim, minor_dim = cols_idx, rows_idx, cols, rows
        out, indices, indptr = compress(
            major, minor, values, major_dim, minor_dim, factory, duplicates
        )
        return cls(rows, cols, out, indices, indptr, factory=factory)

    @classmethod
    def builder(
        cls,
        rows: int,
        cols: int,
        factory: Optional[Union[str, ScalarFactory]] = None,
        duplicates: Optional[Union[DuplicatePolicy, str]] = None,
    ) -> SparseBuilder:
        """SparseBuilder that builds into this orientation."""
        return SparseBuilder(rows, cols, factory=factory, make=cls.make, duplicates=duplicates)

    @classmethod
    def from_dense(
        cls,
        source: Union[MatrixStore, Any],
        factory: Optional[Union[str, ScalarFactory]] = None,
    ) -> "CompressedStore":
        """Compress a dense store (or 2-D array-like), dropping zeros."""
        from ..store import DenseStore

        if not isinstance(source, MatrixStore):
            source = DenseStore(source, dtype=factory)
        builder = cls.builder(source.rows, source.cols,
                              factory=factory if factory is not None else source.factory)
        for j in range(source.cols):
            for i in range(source.first_in_column(j), source.limit_of_column(j)):
                builder.set(i, j, source.get(i, j))
        return builder.build()

    @classmethod
    def from_scipy(cls, mat: "spmatrix") -> "CompressedStore":
        """Create from any scipy sparse matrix (copied, duplicates summed)."""
        mat = mat.tocsr(copy=True) if cls._row_major else mat.tocsc(copy=True)
        mat.sum_duplicates()
        mat.eliminate_zeros()
        try:
            factory = get_factory(normalize_dtype(mat.dtype))
        except ValueError:
            factory = get_factory('float64')
        values = np.asarray(mat.data).astype(factory.numpy_dtype)
        indices = np.asarray(mat.indices, dtype=np.int64)
        indptr = np.asarray(mat.indptr, dtype=np.int64)
        for array in (values, indices, indptr):
            array.flags.writeable = False
        rows, cols = mat.shape
        return cls(rows, cols, values, indices, indptr, factory=factory)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def factory(self) -> ScalarFactory:
        return self._factory

    @property
    def values(self) -> np.ndarray:
        """Non-zero values array."""
        return self._values

    @property
    def indices(self) -> np.ndarray:
        """Minor indices array."""
        return self._indices

    @property
    def indptr(self) -> np.ndarray:
        """Major pointer array."""
        return self._indptr

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return len(self._values)

    def count_nonzeros(self) -> int:
        return len(self._values)

    def density(self) -> float:
        """Fraction of stored entries."""
        total = self.count()
        return self.nnz / total if total > 0 else 0.0

    # =========================================================================
    # Major Line Access
    # =========================================================================

    def major_values(self, k: int) -> np.ndarray:
        return self._values[self._indptr[k]:self._indptr[k + 1]]

    def major_indices(self, k: int) -> np.ndarray:
        return self._indices[self._indptr[k]:self._indptr[k + 1]]

    def major_length(self, k: int) -> int:
        return int(self._indptr[k + 1] - self._indptr[k])

    # =========================================================================
    # Element Access
    # =========================================================================

    def _get(self, row: int, col: int) -> Any:
        major, minor = self._major_minor(row, col)
        start = int(self._indptr[major])
        end = int(self._indptr[major + 1])
        pos = start + int(np.searchsorted(self._indices[start:end], minor))
        value = self._factory.zero
        # KEEP policy may leave equal minor indices next to each other.
        while pos < end and self._indices[pos] == minor:
            value = self._factory.add(value, self._values[pos])
            pos += 1
        return value

    def _double_value(self, row: int, col: int) -> float:
        return self._factory.double_value(self._get(row, col))

    def _major_first(self, k: int) -> int:
        start = int(self._indptr[k])
        end = int(self._indptr[k + 1])
        return int(self._indices[start]) if start < end else 0

    def _major_limit(self, k: int) -> int:
        start = int(self._indptr[k])
        end = int(self._indptr[k + 1])
        return int(self._indices[end - 1]) + 1 if start < end else 0

    # =========================================================================
    # Iteration
    # =========================================================================

    def _major_array(self) -> np.ndarray:
        """Major index of every stored entry."""
        return np.repeat(np.arange(self.major_dim, dtype=np.int64), np.diff(self._indptr))

    def coordinates(self) -> Tuple[np.ndarray, np.ndarray]:
        """(row indices, column indices) of every stored entry, in storage order."""
        major = self._major_array()
        if self.format == SparseFormat.CSR:
            return major, self._indices
        return self._indices, major

    def nonzeros(self) -> Iterator[Tuple[int, int, Any]]:
        """Iterate (row, col, value) over stored entries in storage order."""
        for k in range(self.major_dim):
            for pos in range(int(self._indptr[k]), int(self._indptr[k + 1])):
                row, col = self._row_col(k, int(self._indices[pos]))
                yield row, col, self._factory.cast(self._values[pos])

    def to_triplets(self) -> List[Triplet]:
        return [Triplet(row, col, value) for row, col, value in self.nonzeros()]

    def supply_to(self, receiver: Any) -> None:
        """Reset ``receiver`` and add each stored entry through ``receiver.add``.

        Accumulating keeps repeated coordinates (DuplicatePolicy.KEEP) summed.
        """
        receiver.reset()
        for row, col, value in self.nonzeros():
            receiver.add(row, col, value)

    def to_numpy(self) -> np.ndarray:
        dense = np.full(self.shape, self._factory.zero, dtype=self._factory.numpy_dtype)
        row_idx, col_idx = self.coordinates()
        np.add.at(dense, (row_idx, col_idx), self._values)
        return dense

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_csr(self) -> "CSRStore":
        from ._csr import CSRStore
        if isinstance(self, CSRStore):
            return self
        return CSRStore.make(self._rows, self._cols, self.to_triplets(),
                             factory=self._factory, duplicates=DuplicatePolicy.KEEP)

    def to_csc(self) -> "CSCStore":
        from ._csc import CSCStore
        if isinstance(self, CSCStore):
            return self
        return CSCStore.make(self._rows, self._cols, self.to_triplets(),
                             factory=self._factory, duplicates=DuplicatePolicy.KEEP)

    def to_scipy(self) -> "spmatrix":
        """Convert to scipy.sparse.csr_matrix / csc_matrix (copied).

        Rational values are converted to float64.
        """
        import scipy.sparse as sp

        values = self._values
        if values.dtype == object:
            values = values.astype(np.float64)
        matrix_type = sp.csr_matrix if self.format == SparseFormat.CSR else sp.csc_matrix
        return matrix_type(
            (values.copy(), self._indices.copy(), self._indptr.copy()),
            shape=self.shape,
        )

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def multiply_vector(self, vector: Union[Sequence[Any], np.ndarray]) -> np.ndarray:
        """Sparse matrix-vector product ``self @ vector``.

        Args:
            vector: 1-D array-like of length ``cols``

        Returns:
            1-D numpy array of length ``rows``
        """
        vector = np.asarray(vector)
        if vector.ndim != 1 or len(vector) != self._cols:
            raise DimensionMismatchError(
                f"Cannot multiply {self.shape} by vector of shape {vector.shape}"
            )
        row_idx, col_idx = self.coordinates()
        products = self._values * vector[col_idx]
        result = np.zeros(self._rows, dtype=products.dtype)
        if result.dtype == object:
            result[:] = self._factory.zero
        np.add.at(result, row_idx, products)
        return result

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"shape={self.shape}, nnz={self.nnz}, "
                f"dtype={self._factory.name}, format={self.format})")

    def __bool__(self) -> bool:
        """Return True if matrix has any stored entries."""
        return self.nnz > 0
