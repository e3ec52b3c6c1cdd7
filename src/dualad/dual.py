"""
#################################
Dual numbers (:mod:`dualad.dual`)
#################################

.. currentmodule:: dualad.dual

.. autosummary::
    :toctree: generated/

    DualNumber

"""

from typing import Final, Self

import numpy as np

from dualad.context import fpguard
from dualad.typing import REAL_TYPES, RealLike, RealScalar

EPSILON: Final = float(np.finfo(np.float64).eps)
"""Absolute tolerance used by the equality of dual numbers."""


class DualNumber(RealScalar):
    r"""Dual number carrying a value and its derivative.

    Parameters
    ----------
    primal : float, default=0.0
        Value component.
    dual : float, default=0.0
        Derivative (tangent) component. A dual number created from a single real
        number is a constant.

    Raises
    ------
    TypeError
        If `primal` or `dual` is not a real number.

    Attributes
    ----------
    primal : numpy.float64
    dual : numpy.float64

    Warnings
    --------
    Equality is approximate: two dual numbers compare equal when both components
    differ by less than machine epsilon in absolute value. The relation is therefore
    not transitive, and it is too strict for values of large magnitude and too loose
    for values close to zero. Use :func:`pytest.approx` or :func:`numpy.isclose` on
    the components when a relative tolerance is needed.

    Notes
    -----
    Instances of this class behave like elements of the dual number ring
    :math:`\mathbb{R}[\varepsilon]/(\varepsilon^2)`. Both components are stored as
    :class:`numpy.float64`, so that division by zero or a logarithm of a negative
    number yields ``inf`` or ``nan`` instead of raising (see :mod:`dualad.context`).

    Examples
    --------
    >>> x = DualNumber(3.0, 1.0)
    >>> y = x * x + 2 * x
    >>> print(y)
    DualNumber(primal=15.0, dual=8.0)
    >>> print(format(y.dual, ".6f"))
    8.000000
    """

    __slots__ = ("_primal", "_dual")
    _primal: np.float64
    _dual: np.float64

    def __init__(self, primal: RealLike = 0.0, dual: RealLike = 0.0):
        self._primal = _asfloat(primal)
        self._dual = _asfloat(dual)

    @property
    def primal(self) -> np.float64:
        return self._primal

    @primal.setter
    def primal(self, value: RealLike) -> None:
        self._primal = _asfloat(value)

    @property
    def dual(self) -> np.float64:
        return self._dual

    @dual.setter
    def dual(self, value: RealLike) -> None:
        self._dual = _asfloat(value)

    @property
    def real(self) -> np.float64:
        """Alias of :attr:`primal` for code written against complex numbers."""
        return self._primal

    @real.setter
    def real(self, value: RealLike) -> None:
        self._primal = _asfloat(value)

    @property
    def imag(self) -> np.float64:
        """Alias of :attr:`dual` for code written against complex numbers."""
        return self._dual

    @imag.setter
    def imag(self, value: RealLike) -> None:
        self._dual = _asfloat(value)

    def copy(self) -> Self:
        return self.__class__(self._primal, self._dual)

    def _is_acceptable(self, value: object) -> bool:
        return isinstance(value, (DualNumber, *REAL_TYPES))

    def __repr__(self) -> str:
        primal = float(self._primal)
        dual = float(self._dual)
        return f"{type(self).__name__}(primal={primal!r}, dual={dual!r})"

    def __str__(self) -> str:
        return f"{type(self).__name__}(primal={self._primal}, dual={self._dual})"

    def __copy__(self) -> Self:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not self._is_acceptable(other):
            return NotImplemented

        if other is self:
            return True

        if not isinstance(other, DualNumber):
            other = DualNumber(other)  # type: ignore

        return bool(
            abs(self._primal - other._primal) < EPSILON
            and abs(self._dual - other._dual) < EPSILON
        )

    def __ne__(self, other: object) -> bool:
        if (result := self.__eq__(other)) is NotImplemented:
            return NotImplemented

        return not result

    def __lt__(self, other: Self | RealLike) -> bool:
        if not self._is_acceptable(other):
            return NotImplemented

        return bool(self._primal < _primal(other))

    def __le__(self, other: Self | RealLike) -> bool:
        if not self._is_acceptable(other):
            return NotImplemented

        return bool(self._primal <= _primal(other))

    def __gt__(self, other: Self | RealLike) -> bool:
        if not self._is_acceptable(other):
            return NotImplemented

        return bool(self._primal > _primal(other))

    def __ge__(self, other: Self | RealLike) -> bool:
        if not self._is_acceptable(other):
            return NotImplemented

        return bool(self._primal >= _primal(other))

    @fpguard
    def __add__(self, rhs: Self | RealLike) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        if not isinstance(rhs, DualNumber):
            return self.__class__(self._primal + rhs, self._dual)

        return self.__class__(self._primal + rhs._primal, self._dual + rhs._dual)

    @fpguard
    def __sub__(self, rhs: Self | RealLike) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        if not isinstance(rhs, DualNumber):
            return self.__class__(self._primal - rhs, self._dual)

        return self.__class__(self._primal - rhs._primal, self._dual - rhs._dual)

    @fpguard
    def __mul__(self, rhs: Self | RealLike) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        if not isinstance(rhs, DualNumber):
            return self.__class__(self._primal * rhs, self._dual * rhs)

        dual = self._primal * rhs._dual + self._dual * rhs._primal
        return self.__class__(self._primal * rhs._primal, dual)

    @fpguard
    def __truediv__(self, rhs: Self | RealLike) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        if not isinstance(rhs, DualNumber):
            return self.__class__(self._primal / rhs, self._dual / rhs)

        s = rhs._primal * rhs._primal
        dual = (self._dual * rhs._primal - self._primal * rhs._dual) / s
        return self.__class__(self._primal / rhs._primal, dual)

    def __pow__(self, rhs: Self | RealLike) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        from dualad.function import pow

        return pow(self, rhs)

    def __neg__(self) -> Self:
        return self.__class__(-self._primal, -self._dual)

    def __pos__(self) -> Self:
        return self.__class__(self._primal, self._dual)

    def __abs__(self) -> Self:
        from dualad.function import abs

        return abs(self)

    @fpguard
    def __radd__(self, lhs: RealLike) -> Self:
        if not self._is_acceptable(lhs):
            return NotImplemented

        return self.__class__(lhs + self._primal, self._dual)

    @fpguard
    def __rsub__(self, lhs: RealLike) -> Self:
        if not self._is_acceptable(lhs):
            return NotImplemented

        return self.__class__(lhs - self._primal, -self._dual)

    @fpguard
    def __rmul__(self, lhs: RealLike) -> Self:
        if not self._is_acceptable(lhs):
            return NotImplemented

        return self.__class__(lhs * self._primal, lhs * self._dual)

    def __rtruediv__(self, lhs: RealLike) -> Self:
        if not self._is_acceptable(lhs):
            return NotImplemented

        from dualad.function import inverse

        return lhs * inverse(self)

    def __rpow__(self, lhs: RealLike) -> Self:
        if not self._is_acceptable(lhs):
            return NotImplemented

        from dualad.function import pow

        return pow(lhs, self)


def _primal(value: DualNumber | RealLike) -> RealLike:
    return value._primal if isinstance(value, DualNumber) else value


def _asfloat(value: RealLike) -> np.float64:
    if not isinstance(value, REAL_TYPES):
        raise TypeError(f"expected a real number, got {type(value).__name__}")

    return np.float64(value)
