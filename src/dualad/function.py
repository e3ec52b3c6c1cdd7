"""
###############################################
Mathematical functions (:mod:`dualad.function`)
###############################################

.. currentmodule:: dualad.function

This module provides mathematical functions of dual numbers. Each function applies
the real function to the primal component and the chain rule to the dual component,
so that a composition of them carries the exact derivative along.

All of them also accept plain real numbers and NumPy arrays. No domain checks are
performed: arguments outside the domain yield ``nan`` or ``inf`` (see
:mod:`dualad.context`).

Components
==========

.. autosummary::
    :toctree: generated/

    primal
    dual
    real
    imag

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    abs
    abs2
    conj
    exp
    exp2
    inverse
    log
    log2
    log10
    norm
    pow
    sqrt

Trigonometric and hyperbolic functions
======================================

.. autosummary::
    :toctree: generated/

    sin
    cos
    tan
    asin
    acos
    atan
    sinh
    cosh
    tanh
    asinh
    acosh
    atanh

"""

import functools
from collections.abc import Callable
from typing import Any, Final, overload

import numpy as np

from dualad.context import fpguard
from dualad.dual import DualNumber
from dualad.typing import REAL_TYPES, RealLike

LN2: Final = np.log(2.0)
LN10: Final = np.log(10.0)


def _defderiv[**P](
    fun: Callable[P, Any], deriv: Callable[P, Any], *, argnum: int = 0
) -> None:
    if "_dualad_is_primitive" not in fun.__dict__:
        raise ValueError

    fun.__dict__["_dualad_derivs"][argnum] = deriv


def _primitive[T, **P](fun: Callable[P, T]) -> Callable[P, T]:
    derivs: dict[int, Callable] = {}

    @functools.wraps(fun)
    @fpguard
    def wrapper(*args, **kwargs):
        if not any(isinstance(x, DualNumber) for x in args):
            return fun(*args, **kwargs)

        args_real = [x.primal if isinstance(x, DualNumber) else x for x in args]
        dual = None

        for argnum, arg in enumerate(args):
            if not isinstance(arg, DualNumber):
                continue

            tmp = derivs[argnum](*args_real, **kwargs) * arg.dual
            dual = tmp if dual is None else dual + tmp

        return DualNumber(fun(*args_real, **kwargs), dual)  # type: ignore

    wrapper.__dict__["_dualad_is_primitive"] = True
    wrapper.__dict__["_dualad_derivs"] = derivs
    return wrapper  # type: ignore


def _check_real(x: Any) -> None:
    if not isinstance(x, (DualNumber, *REAL_TYPES)):
        raise TypeError(f"expected a dual or real number, got {type(x).__name__}")


def primal(x: DualNumber | RealLike, /) -> np.float64:
    """Primal component of `x`.

    Raises
    ------
    TypeError
        If `x` is neither a dual number nor a real number.
    """
    _check_real(x)

    if isinstance(x, DualNumber):
        return x.primal

    return np.float64(x)


def dual(x: DualNumber | RealLike, /) -> np.float64:
    """Dual component of `x`, which is zero for a real number.

    Raises
    ------
    TypeError
        If `x` is neither a dual number nor a real number.
    """
    _check_real(x)

    if isinstance(x, DualNumber):
        return x.dual

    return np.float64(0.0)


def real(x: DualNumber | RealLike, /) -> np.float64:
    """Alias of :func:`primal`."""
    return primal(x)


def imag(x: DualNumber | RealLike, /) -> np.float64:
    """Alias of :func:`dual`."""
    return dual(x)


@_primitive
def abs(x, /):
    """Absolute value.

    The derivative is the sign of the primal component, which is ``nan`` at zero.
    """
    return np.abs(x)


@overload
def pow(x: DualNumber, y: DualNumber | RealLike, /) -> DualNumber: ...


@overload
def pow(x: DualNumber | RealLike, y: DualNumber, /) -> DualNumber: ...


@overload
def pow(x: RealLike, y: RealLike, /) -> np.float64: ...


@overload
def pow(x: Any, y: Any, /) -> Any: ...


@fpguard
def pow(x, y, /):
    """`x` raised to the power `y`.

    If only `x` is a dual number, `y` is a constant exponent and the derivative is
    ``y * x**(y - 1)``. If both are dual numbers, the derivative of the exponent
    contributes as well.

    Examples
    --------
    >>> x = DualNumber(2.5, 1.0)
    >>> print(format(pow(x, 3).dual, ".6f"))
    18.750000
    """
    match x, y:
        case DualNumber(), DualNumber():
            value = np.power(x.primal, y.primal)
            tmp = y.dual * np.log(x.primal) + x.dual * y.primal / x.primal
            return DualNumber(value, value * tmp)

        case DualNumber(), _:
            dual = y * x.dual * np.power(x.primal, y - 1)
            return DualNumber(np.power(x.primal, y), dual)

        case _, DualNumber():
            value = np.power(x, y.primal)
            return DualNumber(value, value * np.log(x) * y.dual)

        case _:
            return np.power(x, y)


def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> y = sqrt(DualNumber(4.0, 1.0))
    >>> print(format(y.primal, ".6f"), format(y.dual, ".6f"))
    2.000000 0.250000
    """
    return pow(x, 0.5)


def inverse(x, /):
    """Reciprocal, i.e., ``pow(x, -1)``."""
    return pow(x, -1.0)


@_primitive
def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> y = exp(DualNumber(0.0, 2.0))
    >>> print(format(y.primal, ".6f"), format(y.dual, ".6f"))
    1.000000 2.000000
    """
    return np.exp(x)


def exp2(x, /):
    """2 raised to the power `x`, computed as ``exp(ln(2) * x)``."""
    return exp(x * LN2)


@_primitive
def _ln(x, /):
    return np.log(x)


@overload
def log(x: DualNumber, base: DualNumber | RealLike | None = None, /) -> DualNumber: ...


@overload
def log(x: RealLike, base: RealLike | None = None, /) -> np.float64: ...


@overload
def log(x: Any, base: Any = None, /) -> Any: ...


def log(x, base=None, /):
    """Logarithm of `x` to the given `base`, natural if `base` is omitted.

    Examples
    --------
    >>> y = log(DualNumber(2.0, 1.0))
    >>> print(format(y.primal, ".6f"), format(y.dual, ".6f"))
    0.693147 0.500000
    >>> print(format(log(DualNumber(9.0, 1.0), 3).primal, ".6f"))
    2.000000
    """
    if base is None:
        return _ln(x)

    return _ln(x) / _ln(base)


def log2(x, /):
    """Base-2 logarithm."""
    return _ln(x) / LN2


def log10(x, /):
    """Base-10 logarithm."""
    return _ln(x) / LN10


@_primitive
def sin(x, /):
    """Sine."""
    return np.sin(x)


@_primitive
def cos(x, /):
    """Cosine."""
    return np.cos(x)


@_primitive
def tan(x, /):
    """Tangent."""
    return np.tan(x)


@_primitive
def asin(x, /):
    """Inverse sine."""
    return np.arcsin(x)


@_primitive
def acos(x, /):
    """Inverse cosine."""
    return np.arccos(x)


@_primitive
def atan(x, /):
    """Inverse tangent."""
    return np.arctan(x)


@_primitive
def sinh(x, /):
    """Hyperbolic sine."""
    return np.sinh(x)


@_primitive
def cosh(x, /):
    """Hyperbolic cosine."""
    return np.cosh(x)


@_primitive
def tanh(x, /):
    """Hyperbolic tangent."""
    return np.tanh(x)


@_primitive
def asinh(x, /):
    """Inverse hyperbolic sine."""
    return np.arcsinh(x)


@_primitive
def acosh(x, /):
    """Inverse hyperbolic cosine."""
    return np.arccosh(x)


@_primitive
def atanh(x, /):
    """Inverse hyperbolic tangent."""
    return np.arctanh(x)


def conj(x, /):
    """Conjugate, which negates the dual component.

    Examples
    --------
    >>> print(conj(DualNumber(1.5, 2.0)))
    DualNumber(primal=1.5, dual=-2.0)
    """
    if isinstance(x, DualNumber):
        return DualNumber(x.primal, -x.dual)

    return np.conjugate(x)


def abs2(x, /):
    """Square of `x`, i.e., ``x * x``."""
    return x * x


def norm(x, /):
    """Squared norm of `x`, the same as :func:`abs2`."""
    return x * x


_defderiv(abs, lambda x: x / abs(x))
_defderiv(exp, exp)
_defderiv(_ln, lambda x: 1 / x)
_defderiv(sin, cos)
_defderiv(cos, lambda x: -sin(x))
_defderiv(tan, lambda x: 1 / cos(x) ** 2)
_defderiv(asin, lambda x: 1 / sqrt(1 - x * x))
_defderiv(acos, lambda x: -1 / sqrt(1 - x * x))
_defderiv(atan, lambda x: 1 / (1 + x * x))
_defderiv(sinh, cosh)
_defderiv(cosh, sinh)
_defderiv(tanh, lambda x: 1 / cosh(x) ** 2)
_defderiv(asinh, lambda x: 1 / sqrt(x * x + 1))
_defderiv(acosh, lambda x: 1 / sqrt(x * x - 1))
_defderiv(atanh, lambda x: 1 / (1 - x * x))
