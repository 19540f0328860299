"""
MVL core: error types and global configuration.
"""

from .error import (
    MVLError,
    InvalidArgumentError,
    DimensionMismatchError,
    IndexOutOfBoundsError,
    BuilderStateError,
    check_coordinates,
)
from .config import DuplicatePolicy, config

__all__ = [
    'MVLError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'IndexOutOfBoundsError',
    'BuilderStateError',
    'check_coordinates',
    'DuplicatePolicy',
    'config',
]
