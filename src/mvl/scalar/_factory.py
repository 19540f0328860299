"""
Scalar Factories and the Algebraic Scalar Wrapper

Every element a view produces is available in three forms:

    double_value(r, c)  -> float          primitive approximation
    get(r, c)           -> boxed value    float / complex / Fraction
    to_scalar(r, c)     -> Scalar         algebraic wrapper with conjugate()

A ScalarFactory ties the three together for one element type: it casts raw
input into the boxed representation, supplies the algebraic zero and one,
and reduces boxed values to floats. The floating reduction of a complex
value is its real part, so conjugation never changes it.

Example:
    >>> from mvl.scalar import COMPLEX128
    >>> s = COMPLEX128.convert(1 + 2j)
    >>> s.conjugate().get()
    (1-2j)
    >>> s.double_value()
    1.0
"""

from __future__ import annotations

import numbers
from fractions import Fraction
from typing import Any, Union

import numpy as np

from ._dtypes import DType, normalize_dtype

__all__ = [
    'Scalar',
    'ScalarFactory',
    'FLOAT32',
    'FLOAT64',
    'COMPLEX128',
    'RATIONAL',
    'get_factory',
]


def _real_part(raw: Any) -> Any:
    if isinstance(raw, (complex, np.complexfloating)):
        return raw.real
    return raw


# =============================================================================
# Scalar
# =============================================================================

class Scalar:
    """
    Immutable algebraic scalar bound to its factory.

    Attributes:
        value: Boxed element value
        factory: ScalarFactory that produced it
    """

    __slots__ = ('_value', '_factory')

    def __init__(self, value: Any, factory: "ScalarFactory"):
        self._value = value
        self._factory = factory

    @property
    def factory(self) -> "ScalarFactory":
        return self._factory

    def get(self) -> Any:
        """Boxed value."""
        return self._value

    def double_value(self) -> float:
        """Floating reduction of the value."""
        return self._factory.double_value(self._value)

    def conjugate(self) -> "Scalar":
        return Scalar(self._factory.conjugate(self._value), self._factory)

    def add(self, other: Union["Scalar", Any]) -> "Scalar":
        return Scalar(self._factory.add(self._value, self._unwrap(other)), self._factory)

    def multiply(self, other: Union["Scalar", Any]) -> "Scalar":
        return Scalar(self._factory.multiply(self._value, self._unwrap(other)), self._factory)

    def negate(self) -> "Scalar":
        return Scalar(self._factory.cast(-self._value), self._factory)

    def is_zero(self) -> bool:
        return self._factory.is_zero(self._value)

    def _unwrap(self, other: Union["Scalar", Any]) -> Any:
        if isinstance(other, Scalar):
            return self._factory.cast(other._value)
        return self._factory.cast(other)

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Scalar):
            return self._value == other._value
        return self._value == other

    def __hash__(self) -> int:
        return hash(self._value)

    def __float__(self) -> float:
        return self.double_value()

    def __repr__(self) -> str:
        return f"Scalar({self._value!r}, {self._factory.name})"


# =============================================================================
# Factories
# =============================================================================

class ScalarFactory:
    """
    Produces and reduces element values of one element type.

    Attributes:
        dtype: DType member
        name: dtype string ('float64', 'complex128', ...)
        numpy_dtype: Storage dtype for dense arrays
        zero: Algebraic zero (boxed)
        one: Algebraic one (boxed)
    """

    __slots__ = ('dtype', 'zero', 'one')

    def __init__(self, dtype: DType):
        self.dtype = dtype
        self.zero = self.cast(0)
        self.one = self.cast(1)

    @property
    def name(self) -> str:
        return self.dtype.value

    @property
    def numpy_dtype(self) -> np.dtype:
        return self.dtype.numpy_dtype

    @property
    def is_complex(self) -> bool:
        return self.dtype is DType.complex128

    def cast(self, raw: Any) -> Any:
        """Derive the boxed value of this type from a raw numeric input."""
        raise NotImplementedError

    def convert(self, raw: Any) -> Scalar:
        """Wrap a raw value as a Scalar of this type."""
        return Scalar(self.cast(raw), self)

    def conjugate(self, value: Any) -> Any:
        return value

    def double_value(self, value: Any) -> float:
        return float(_real_part(value))

    def is_zero(self, value: Any) -> bool:
        return value == 0

    def add(self, left: Any, right: Any) -> Any:
        return self.cast(left + right)

    def multiply(self, left: Any, right: Any) -> Any:
        return self.cast(left * right)

    def __repr__(self) -> str:
        return f"ScalarFactory({self.name})"


class _PrimitiveFactory(ScalarFactory):

    __slots__ = ()

    def cast(self, raw: Any) -> float:
        if isinstance(raw, Scalar):
            raw = raw.get()
        return float(self.numpy_dtype.type(_real_part(raw)))


class _ComplexFactory(ScalarFactory):

    __slots__ = ()

    def cast(self, raw: Any) -> complex:
        if isinstance(raw, Scalar):
            raw = raw.get()
        return complex(raw)

    def conjugate(self, value: Any) -> complex:
        return complex(value).conjugate()


class _RationalFactory(ScalarFactory):

    __slots__ = ()

    def cast(self, raw: Any) -> Fraction:
        if isinstance(raw, Scalar):
            raw = raw.get()
        raw = _real_part(raw)
        if isinstance(raw, numbers.Rational):
            return Fraction(raw)
        return Fraction(float(raw))


FLOAT32 = _PrimitiveFactory(DType.float32)
FLOAT64 = _PrimitiveFactory(DType.float64)
COMPLEX128 = _ComplexFactory(DType.complex128)
RATIONAL = _RationalFactory(DType.rational)

_FACTORIES = {
    DType.float32: FLOAT32,
    DType.float64: FLOAT64,
    DType.complex128: COMPLEX128,
    DType.rational: RATIONAL,
}


def get_factory(dtype: Union[ScalarFactory, DType, str, np.dtype, type, None] = None) -> ScalarFactory:
    """
    Resolve a factory from a factory, DType, dtype string or numpy dtype.

    None resolves to the configured default factory.
    """
    if isinstance(dtype, ScalarFactory):
        return dtype
    if dtype is None:
        from ..core.config import config
        return config.default_factory
    return _FACTORIES[normalize_dtype(dtype)]
