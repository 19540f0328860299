"""MVL Sparse Module.

Triplet accumulation and immutable compressed containers.

Type Hierarchy:

    SparseBuilder               # append-only (row, col, value) accumulator
    CompressedStore             # shared CSR/CSC implementation
    ├── CSRStore                # row-major
    └── CSCStore                # column-major

Quick Start:
    >>> from mvl.sparse import CSRStore
    >>> builder = CSRStore.builder(3, 3)
    >>> builder.set(0, 0, 5.0)
    >>> csr = builder.build()
    >>> csr.to_csc().get(0, 0)
    5.0

Interop:
    >>> csr.to_scipy()              # scipy.sparse.csr_matrix
    >>> CSRStore.from_scipy(mat)    # any scipy sparse matrix
"""

from ..core.config import DuplicatePolicy
from ._builder import Triplet, SparseBuilder, compress
from ._base import SparseFormat, CompressedStore
from ._csr import CSRStore
from ._csc import CSCStore

__all__ = [
    'DuplicatePolicy',
    'Triplet',
    'SparseBuilder',
    'compress',
    'SparseFormat',
    'CompressedStore',
    'CSRStore',
    'CSCStore',
]
