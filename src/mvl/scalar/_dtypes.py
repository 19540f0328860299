"""
Data Type Definitions

Provides type-safe element type constants for stores and views.
"""

from typing import Union
from enum import Enum

import numpy as np

__all__ = ['DType', 'float32', 'float64', 'complex128', 'rational', 'normalize_dtype']


class DType(Enum):
    """
    MVL Element Type Enumeration.

    Example:
        >>> from mvl import DType, DenseStore
        >>> store = DenseStore.make(3, 3, dtype=DType.complex128)
        >>>
        >>> # Or use module-level constants
        >>> import mvl
        >>> store = DenseStore.make(3, 3, dtype=mvl.rational)
    """

    float32 = 'float32'
    float64 = 'float64'
    complex128 = 'complex128'
    rational = 'rational'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self.name}"

    @property
    def numpy_dtype(self) -> np.dtype:
        """Storage dtype of dense arrays holding this element type."""
        return _NUMPY_DTYPES[self]


_NUMPY_DTYPES = {
    DType.float32: np.dtype(np.float32),
    DType.float64: np.dtype(np.float64),
    DType.complex128: np.dtype(np.complex128),
    DType.rational: np.dtype(object),
}


# =============================================================================
# Module-Level Constants (For Clean Syntax)
# =============================================================================

float32 = DType.float32
float64 = DType.float64
complex128 = DType.complex128
rational = DType.rational


# =============================================================================
# Type Utilities
# =============================================================================

def normalize_dtype(dtype: Union[str, DType, np.dtype, type]) -> DType:
    """
    Normalize a dtype designation to DType.

    Args:
        dtype: String, DType enum or numpy dtype

    Returns:
        DType member

    Raises:
        ValueError: If dtype is not supported

    Example:
        >>> normalize_dtype('float64')
        DType.float64
        >>> normalize_dtype(np.complex128)
        DType.complex128
    """
    if isinstance(dtype, DType):
        return dtype
    if isinstance(dtype, str):
        try:
            return DType(dtype.lower())
        except ValueError:
            pass
    try:
        np_dtype = np.dtype(dtype)
    except TypeError:
        raise ValueError(f"Invalid dtype: {dtype!r}") from None
    for member, candidate in _NUMPY_DTYPES.items():
        if candidate == np_dtype:
            return member
    valid = [e.value for e in DType]
    raise ValueError(f"Invalid dtype: {dtype!r}. Valid: {valid}")
