"""
Global configuration for MVL.

Provides:
- Default scalar factory for stores created without an explicit one
- Debug mode (coordinate assertions on every element read)
- Duplicate-coordinate policy of the sparse builder

Defaults can be seeded from the environment:

    MVL_DEBUG=1                   enable coordinate assertions
    MVL_DEFAULT_DTYPE=complex128  default scalar factory
    MVL_SPARSE_DUPLICATES=keep    keep duplicate triplets instead of summing
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Union

if TYPE_CHECKING:
    from ..scalar import ScalarFactory

logger = logging.getLogger("mvl.config")

__all__ = ['DuplicatePolicy', 'config']


class DuplicatePolicy(Enum):
    """How the sparse builder treats repeated (row, col) coordinates."""
    SUM = "sum"
    KEEP = "keep"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in ('1', 'true', 'yes')


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Restore defaults (re-reading the environment)."""
        self._debug = _env_flag('MVL_DEBUG')
        self._default_dtype = os.environ.get('MVL_DEFAULT_DTYPE', 'float64')
        self._duplicate_policy = DuplicatePolicy(
            os.environ.get('MVL_SPARSE_DUPLICATES', 'sum').lower()
        )

    @property
    def debug(self) -> bool:
        """Whether element reads assert their coordinates."""
        return self._debug

    @debug.setter
    def debug(self, value: bool):
        self._debug = bool(value)
        logger.debug("debug mode set to %s", self._debug)

    @property
    def default_factory(self) -> "ScalarFactory":
        """Scalar factory used when none is given."""
        from ..scalar import get_factory
        return get_factory(self._default_dtype)

    @default_factory.setter
    def default_factory(self, value: Union["ScalarFactory", str]):
        from ..scalar import get_factory
        self._default_dtype = get_factory(value).name
        logger.debug("default factory set to %s", self._default_dtype)

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        """Duplicate-coordinate policy of SparseBuilder."""
        return self._duplicate_policy

    @duplicate_policy.setter
    def duplicate_policy(self, value: Union[DuplicatePolicy, str]):
        if isinstance(value, str):
            value = DuplicatePolicy(value.lower())
        self._duplicate_policy = value
        logger.debug("duplicate policy set to %s", value.value)

    @contextmanager
    def override(self, **kwargs) -> Iterator["_Config"]:
        """
        Temporarily change settings.

        Example:
            >>> with config.override(debug=True):
            ...     view.get(10, 10)  # raises IndexOutOfBoundsError
        """
        saved = (self._debug, self._default_dtype, self._duplicate_policy)
        try:
            for key, value in kwargs.items():
                if not hasattr(type(self), key):
                    raise AttributeError(f"Unknown setting: {key}")
                setattr(self, key, value)
            yield self
        finally:
            self._debug, self._default_dtype, self._duplicate_policy = saved


config = _Config()
