"""MVL Store Module.

The shared MatrixStore read contract and the dense physical store that
terminates every view chain.
"""

from ._base import MatrixStore, index
from ._dense import DenseStore

__all__ = [
    'MatrixStore',
    'DenseStore',
    'index',
]
