"""MVL View Module.

Non-copying logical views over any MatrixStore. Every view answers the
same read contract as the store it wraps, so views nest freely.

Type Hierarchy:

    LogicalView
    ├── MaskedView            # BandMask strategy: triangular / Hessenberg
    ├── SymmetricView         # symmetric / Hermitian completion
    ├── TransposedView        # transpose
    │   └── ConjugatedView    # conjugate transpose
    ├── RepeatedRowsView      # row broadcast
    ├── RepeatedColumnsView   # column broadcast
    ├── LimitView             # leading sub-block
    └── CastView              # re-cast through another factory
    ColumnView                # 1-D sequence as n x 1

Quick Start:
    >>> from mvl import DenseStore
    >>> a = DenseStore([[1.0, 2.0], [3.0, 4.0]])
    >>> a.conjugate().conjugate() is a
    True
    >>> a.triangular(upper=True, assume_one=True).to_numpy()
    array([[1., 2.],
           [0., 1.]])
"""

from ._logical import LogicalView
from ._masked import (
    BandMask,
    MaskedView,
    UPPER_TRIANGULAR,
    LOWER_TRIANGULAR,
    UPPER_HESSENBERG,
    LOWER_HESSENBERG,
)
from ._symmetric import SymmetricView
from ._transposed import TransposedView, ConjugatedView
from ._repeated import RepeatedRowsView, RepeatedColumnsView
from ._limit import LimitView
from ._wrapper import ColumnView, CastView

__all__ = [
    'LogicalView',
    'BandMask',
    'MaskedView',
    'UPPER_TRIANGULAR',
    'LOWER_TRIANGULAR',
    'UPPER_HESSENBERG',
    'LOWER_HESSENBERG',
    'SymmetricView',
    'TransposedView',
    'ConjugatedView',
    'RepeatedRowsView',
    'RepeatedColumnsView',
    'LimitView',
    'ColumnView',
    'CastView',
]
