"""
#############################
Typing (:mod:`dualad.typing`)
#############################

This module provides type definitions commonly used between modules.

.. autoclass:: RealScalar
    :show-inheritance:
    :no-members:

.. autodata:: RealLike

"""

from abc import abstractmethod
from typing import Protocol, Self

import numpy as np

type RealLike = int | float | np.integer | np.floating
"""Plain real numbers accepted wherever a dual number is, as constants."""

REAL_TYPES = (int, float, np.integer, np.floating)


class RealScalar(Protocol):
    """Protocol that ensures real-scalar-like behavior.

    Objects implementing this protocol must have four arithmetic operations, power,
    negation and absolute value defined, and the operations must be compatible with
    plain real numbers. Types that declare conformance explicitly (by subclassing)
    can be registered with :func:`dualad.linalg.register_scalar`.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | RealLike) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | RealLike) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | RealLike) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | RealLike) -> Self: ...

    @abstractmethod
    def __pow__(self, rhs: Self | RealLike) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: RealLike) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: RealLike) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: RealLike) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: RealLike) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...

    @abstractmethod
    def __pos__(self) -> Self: ...

    @abstractmethod
    def __abs__(self) -> Self: ...
