"""MVL Scalar Module.

Element types and the three-way access contract shared by every store
and view (primitive float, boxed value, algebraic Scalar).
"""

from ._dtypes import (
    DType,
    float32,
    float64,
    complex128,
    rational,
    normalize_dtype,
)
from ._factory import (
    Scalar,
    ScalarFactory,
    FLOAT32,
    FLOAT64,
    COMPLEX128,
    RATIONAL,
    get_factory,
)

__all__ = [
    'DType',
    'float32',
    'float64',
    'complex128',
    'rational',
    'normalize_dtype',
    'Scalar',
    'ScalarFactory',
    'FLOAT32',
    'FLOAT64',
    'COMPLEX128',
    'RATIONAL',
    'get_factory',
]
