"""
Sparse Triplet Accumulator and Compression

SparseBuilder collects (row, col, value) triplets for a fixed shape,
dropping exact zeros, and on build() hands them to a container factory
(CSRStore.make / CSCStore.make) which compresses them once.

Compression Algorithm:

    1. stable counting sort by minor index      O(nnz + minor_dim)
    2. stable counting sort by major index      O(nnz + major_dim)
    3. merge duplicate coordinates (policy)     O(nnz)
    4. indptr = [0, cumsum(counts per major)]   O(major_dim)

    After step 2 every major line is contiguous and its minor indices are
    ascending, so the resulting containers always have sorted indices.

Duplicate Policy:

    SUM   (default) repeated coordinates are added; sums that cancel to an
          exact zero are dropped
    KEEP  repeated coordinates stay independent entries (element reads and
          dense conversion still add them up)

Example:
    >>> builder = CSRStore.builder(3, 3)
    >>> builder.set(0, 0, 5.0)
    >>> builder.set(1, 2, 3.0)
    >>> builder.set(2, 2, 7.0)
    >>> builder.density()
    0.3333333333333333
    >>> csr = builder.build()
    >>> csr.indptr.tolist()
    [0, 1, 2, 3]
"""

import logging
from typing import Any, Callable, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from ..core.config import DuplicatePolicy, config
from ..core.error import BuilderStateError, IndexOutOfBoundsError, InvalidArgumentError
from ..scalar import ScalarFactory, get_factory

logger = logging.getLogger("mvl.sparse")

__all__ = ['Triplet', 'SparseBuilder', 'compress']


class Triplet(NamedTuple):
    """A single non-zero entry prior to compression."""
    row: int
    col: int
    value: Any


# =============================================================================
# Compression
# =============================================================================

def _counting_order(keys: np.ndarray, dim: int) -> np.ndarray:
    """Stable permutation sorting ``keys`` (all in [0, dim)) ascending."""
    counts = np.bincount(keys, minlength=dim)
    next_slot = np.zeros(dim, dtype=np.int64)
    if dim > 1:
        np.cumsum(counts[:-1], out=next_slot[1:])
    order = np.empty(len(keys), dtype=np.int64)
    for k, key in enumerate(keys.tolist()):
        order[next_slot[key]] = k
        next_slot[key] += 1
    return order


def _check_range(name: str, keys: np.ndarray, dim: int) -> None:
    if len(keys) and (keys.min() < 0 or keys.max() >= dim):
        raise IndexOutOfBoundsError(
            f"{name} index out of range [0, {dim}): min={keys.min()}, max={keys.max()}"
        )


def compress(
    major: Sequence[int],
    minor: Sequence[int],
    values: Sequence[Any],
    major_dim: int,
    minor_dim: int,
    factory: ScalarFactory,
    duplicates: Optional[DuplicatePolicy] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Compress coordinate lists into (values, indices, indptr).

    Args:
        major: Major index per entry (row for CSR, column for CSC)
        minor: Minor index per entry
        values: Entry values (boxed, already cast by ``factory``)
        major_dim: Extent of the major axis
        minor_dim: Extent of the minor axis
        factory: Element factory (storage dtype, addition, zero test)
        duplicates: Duplicate policy (config default if None)

    Returns:
        Read-only arrays (values[nnz], indices[nnz], indptr[major_dim + 1])
    """
    if duplicates is None:
        duplicates = config.duplicate_policy

    major = np.asarray(major, dtype=np.int64).reshape(-1)
    minor = np.asarray(minor, dtype=np.int64).reshape(-1)
    _check_range("major", major, major_dim)
    _check_range("minor", minor, minor_dim)

    order = _counting_order(minor, minor_dim)
    order = order[_counting_order(major[order], major_dim)]

    sorted_major = major[order].tolist()
    sorted_minor = minor[order].tolist()
    sorted_values = [values[k] for k in order.tolist()]

    if duplicates is DuplicatePolicy.SUM:
        out_major: List[int] = []
        out_minor: List[int] = []
        out_values: List[Any] = []
        for i, j, v in zip(sorted_major, sorted_minor, sorted_values):
            if out_major and out_major[-1] == i and out_minor[-1] == j:
                out_values[-1] = factory.add(out_values[-1], v)
            else:
                out_major.append(i)
                out_minor.append(j)
                out_values.append(v)
        merged = len(sorted_values) - len(out_values)
        kept = [k for k, v in enumerate(out_values) if not factory.is_zero(v)]
        if len(kept) < len(out_values):
            out_major = [out_major[k] for k in kept]
            out_minor = [out_minor[k] for k in kept]
            out_values = [out_values[k] for k in kept]
        if merged:
            logger.debug("Merged %d duplicate entries (%d cancelled)",
                         merged, len(sorted_values) - merged - len(out_values))
        sorted_major, sorted_minor, sorted_values = out_major, out_minor, out_values

    nnz = len(sorted_values)
    out = np.empty(nnz, dtype=factory.numpy_dtype)
    for k, v in enumerate(sorted_values):
        out[k] = v
    indices = np.asarray(sorted_minor, dtype=np.int64).reshape(-1)
    indptr = np.zeros(major_dim + 1, dtype=np.int64)
    if major_dim > 0:
        counts = np.bincount(np.asarray(sorted_major, dtype=np.int64), minlength=major_dim)
        np.cumsum(counts, out=indptr[1:])

    logger.debug("Compressed %d entries into %d x %d (nnz=%d)",
                 len(major), major_dim, minor_dim, nnz)
    for array in (out, indices, indptr):
        array.flags.writeable = False
    return out, indices, indptr


# =============================================================================
# Builder
# =============================================================================

class SparseBuilder:
    """
    Append-only triplet accumulator for a fixed shape.

    Not thread-safe: confine to one writer until build(). After build()
    the builder is sealed and the returned container is immutable.

    Attributes:
        rows, cols: Target shape
        factory: ScalarFactory values are cast through
        duplicates: DuplicatePolicy handed to the container factory
    """

    __slots__ = ('_rows', '_cols', '_factory', '_make', '_duplicates', '_triplets', '_built')

    def __init__(
        self,
        rows: int,
        cols: int,
        factory: Optional[Union[str, ScalarFactory]] = None,
        make: Optional[Callable[..., Any]] = None,
        duplicates: Optional[Union[DuplicatePolicy, str]] = None,
    ):
        """Initialize an empty builder.

        Args:
            rows: Number of rows
            cols: Number of columns
            factory: Element type (config default if None)
            make: Container factory ``make(rows, cols, triplets, factory=, duplicates=)``,
                defaults to CSRStore.make
            duplicates: Duplicate policy (config default if None)
        """
        if rows < 0 or cols < 0:
            raise InvalidArgumentError(f"Negative shape ({rows}, {cols})")
        if make is None:
            from ._csr import CSRStore
            make = CSRStore.make
        if isinstance(duplicates, str):
            duplicates = DuplicatePolicy(duplicates.lower())
        self._rows = int(rows)
        self._cols = int(cols)
        self._factory = get_factory(factory)
        self._make = make
        self._duplicates = duplicates
        self._triplets: List[Triplet] = []
        self._built = False

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def factory(self) -> ScalarFactory:
        return self._factory

    @property
    def triplets(self) -> Tuple[Triplet, ...]:
        """Accumulated triplets in insertion order."""
        return tuple(self._triplets)

    def set(self, row: int, col: int, value: Any) -> None:
        """Append (row, col, value) unless value is the algebraic zero.

        Repeated coordinates are not merged here; see DuplicatePolicy.

        Raises:
            BuilderStateError: If build() was already called
        """
        if self._built:
            raise BuilderStateError("set() called after build()")
        value = self._factory.cast(value)
        if self._factory.is_zero(value):
            return
        if row < 0 or col < 0 or (config.debug and (row >= self._rows or col >= self._cols)):
            raise IndexOutOfBoundsError(
                f"({row}, {col}) outside extent ({self._rows}, {self._cols})"
            )
        self._triplets.append(Triplet(int(row), int(col), value))

    def density(self) -> float:
        """Accumulated triplet count over rows * cols (0.0 for an empty shape).

        A sealed builder keeps reporting its final triplets.
        """
        total = self._rows * self._cols
        return len(self._triplets) / total if total > 0 else 0.0

    def build(self) -> Any:
        """Seal the builder and compress the triplets into a container.

        Raises:
            BuilderStateError: If build() was already called
        """
        if self._built:
            raise BuilderStateError("build() called twice")
        self._built = True
        return self._make(
            self._rows, self._cols, list(self._triplets),
            factory=self._factory, duplicates=self._duplicates,
        )

    def __len__(self) -> int:
        return len(self._triplets)

    def __repr__(self) -> str:
        state = 'built' if self._built else f"{len(self._triplets)} triplets"
        return f"SparseBuilder(shape={self.shape}, {state})"
