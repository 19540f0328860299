"""
MVL - Matrix View Library

Composable, non-copying logical views over 2-D matrix storage:
- One read contract for dense stores, views and sparse containers
- Triangular / Hessenberg / symmetric / Hermitian structure as views
- Transpose and conjugate transpose with algebraic product rewriting
- Row and column broadcast, sub-block clipping, element re-casting
- Triplet builder compressing into CSR / CSC containers

Modules:
- core: Errors and global configuration
- scalar: Element factories (float32, float64, complex128, rational)
- store: MatrixStore contract and DenseStore
- view: Logical views
- sparse: SparseBuilder, CSRStore, CSCStore

Architecture:
    ┌──────────────────────────────────────────────┐
    │     View chain (Masked, Transposed, ...)     │
    ├──────────────────────────────────────────────┤
    │  Physical: DenseStore | CSRStore | CSCStore  │
    │  Elements: ScalarFactory -> Scalar           │
    └──────────────────────────────────────────────┘

Example:
    >>> import mvl
    >>> a = mvl.DenseStore([[1.0, 2.0], [3.0, 4.0]])
    >>> upper = a.triangular(upper=True)
    >>> upper.get(1, 0)
    0.0
    >>> (a.transpose() @ a.transpose()).get(0, 0)
    7.0
"""

__version__ = '0.1.0'

from . import core
from . import scalar
from . import store
from . import view
from . import sparse

from .core import (
    MVLError,
    InvalidArgumentError,
    DimensionMismatchError,
    IndexOutOfBoundsError,
    BuilderStateError,
    DuplicatePolicy,
    config,
)
from .scalar import (
    DType,
    float32,
    float64,
    complex128,
    rational,
    Scalar,
    ScalarFactory,
    FLOAT32,
    FLOAT64,
    COMPLEX128,
    RATIONAL,
    get_factory,
)
from .store import MatrixStore, DenseStore, index
from .view import (
    LogicalView,
    BandMask,
    MaskedView,
    SymmetricView,
    TransposedView,
    ConjugatedView,
    RepeatedRowsView,
    RepeatedColumnsView,
    LimitView,
    ColumnView,
    CastView,
)
from .sparse import (
    Triplet,
    SparseBuilder,
    CompressedStore,
    CSRStore,
    CSCStore,
)

# Aliases
CSR = CSRStore
CSC = CSCStore

__all__ = [
    # Version
    '__version__',

    # Modules
    'core',
    'scalar',
    'store',
    'view',
    'sparse',

    # Errors / config
    'MVLError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'IndexOutOfBoundsError',
    'BuilderStateError',
    'DuplicatePolicy',
    'config',

    # Scalars
    'DType',
    'float32',
    'float64',
    'complex128',
    'rational',
    'Scalar',
    'ScalarFactory',
    'FLOAT32',
    'FLOAT64',
    'COMPLEX128',
    'RATIONAL',
    'get_factory',

    # Stores
    'MatrixStore',
    'DenseStore',
    'index',

    # Views
    'LogicalView',
    'BandMask',
    'MaskedView',
    'SymmetricView',
    'TransposedView',
    'ConjugatedView',
    'RepeatedRowsView',
    'RepeatedColumnsView',
    'LimitView',
    'ColumnView',
    'CastView',

    # Sparse
    'Triplet',
    'SparseBuilder',
    'CompressedStore',
    'CSRStore',
    'CSCStore',
    'CSR',
    'CSC',
]
