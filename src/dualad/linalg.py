"""
#############################################
Arrays of dual numbers (:mod:`dualad.linalg`)
#############################################

.. currentmodule:: dualad.linalg

This module makes NumPy arrays of ``dtype=object`` usable as vectors and matrices of
:class:`~dualad.dual.DualNumber`. Indexing, slicing, ``@``, stacking and the
elementwise ufuncs then work without special-casing the scalar type.

Scalar registration
===================

.. autosummary::
    :toctree: generated/

    ScalarTraits
    register_scalar
    scalar_traits
    result_type

Arrays
======

.. autosummary::
    :toctree: generated/

    asarray
    eye
    zeros
    primals
    tangents

Examples
--------
>>> import numpy as np
>>> from dualad import DualNumber
>>> a = asarray([[1.0, 2.0], [3.0, 4.0]])
>>> x = asarray([1.0, -1.0], [1.0, 0.0])
>>> y = np.sin(a @ x)
>>> print(tangents(y).round(6))
[0.540302 1.620907]
"""

import dataclasses
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from dualad import function as daf
from dualad.dual import DualNumber
from dualad.typing import REAL_TYPES


@dataclasses.dataclass(frozen=True, slots=True)
class ScalarTraits:
    """Properties of a scalar type stored in arrays.

    Attributes
    ----------
    is_complex : bool
    is_integer : bool
    is_signed : bool
    require_initialization : bool
        Whether array entries must be constructed explicitly. Empty object arrays
        hold ``None``, so constructors of this module fill every entry with a distinct
        instance.
    read_cost : int
    add_cost : int
    mul_cost : int
        Relative costs in units of a read of ``float``.
    """

    is_complex: bool = False
    is_integer: bool = False
    is_signed: bool = True
    require_initialization: bool = False
    read_cost: int = 1
    add_cost: int = 1
    mul_cost: int = 1


_traits: dict[type, ScalarTraits] = {float: ScalarTraits()}

# names of the methods which NumPy calls on the elements of object arrays
_UFUNC_METHODS: dict[str, Callable[[Any], Any]] = {
    "sqrt": daf.sqrt,
    "exp": daf.exp,
    "exp2": daf.exp2,
    "log": daf.log,
    "log2": daf.log2,
    "log10": daf.log10,
    "sin": daf.sin,
    "cos": daf.cos,
    "tan": daf.tan,
    "arcsin": daf.asin,
    "arccos": daf.acos,
    "arctan": daf.atan,
    "sinh": daf.sinh,
    "cosh": daf.cosh,
    "tanh": daf.tanh,
    "arcsinh": daf.asinh,
    "arccosh": daf.acosh,
    "arctanh": daf.atanh,
    "conjugate": daf.conj,
}


def _asobject(value: Any) -> npt.NDArray[np.object_]:
    if isinstance(value, np.ndarray):
        return value.astype(np.object_)

    if isinstance(value, np.generic):
        value = value.item()

    result = np.empty((), np.object_)
    result[()] = value
    return result


def _array_ufunc(self, ufunc: np.ufunc, method: str, *inputs, **kwargs):
    if method != "__call__" or "out" in kwargs:
        return NotImplemented

    result = ufunc(*(_asobject(x) for x in inputs), **kwargs)

    if isinstance(result, np.ndarray) and result.ndim == 0:
        return result[()]

    return result


def register_scalar(cls: type, traits: ScalarTraits) -> None:
    """Register `cls` as a scalar type of object arrays.

    Besides recording `traits`, this installs the hooks through which NumPy handles
    `cls`: an ``__array_ufunc__`` override, so that mixing instances with NumPy
    scalars or arrays yields instances or object arrays of `cls`, and the methods
    called by ufunc loops over object arrays (``sin``, ``arcsin``, ``conjugate``,
    ...).

    Raises
    ------
    TypeError
        If `cls` is not a class.
    """
    if not isinstance(cls, type):
        raise TypeError("cls must be a class")

    _traits[cls] = traits
    cls.__array_ufunc__ = _array_ufunc  # type: ignore

    for name, fun in _UFUNC_METHODS.items():
        setattr(cls, name, fun)


def scalar_traits(cls: type) -> ScalarTraits:
    """Return the traits of a registered scalar type.

    Raises
    ------
    TypeError
        If `cls` is not registered.
    """
    for base in cls.__mro__:
        if base in _traits:
            return _traits[base]

    raise TypeError(f"{cls.__name__} is not a registered scalar type")


def result_type(*operands: Any) -> type:
    """Return the scalar type of the result of an operation on `operands`.

    An instance of a registered scalar type, or an object array holding one, promotes
    the result to that type. Real numbers alone yield :class:`numpy.float64`.

    Examples
    --------
    >>> result_type(1.0, DualNumber(2.0))
    <class 'dualad.dual.DualNumber'>
    """
    for x in operands:
        if isinstance(x, np.ndarray) and x.dtype == np.object_:
            values = x.flat
        else:
            values = (x,)

        for y in values:
            if (cls := _registered(type(y))) is not None:
                return cls

    return np.float64


def _registered(cls: type) -> type | None:
    for base in cls.__mro__:
        if base is not float and base in _traits:
            return base

    return None


def zeros(shape: int | tuple[int, ...]) -> npt.NDArray[np.object_]:
    """Return an array of given shape filled with distinct zero dual numbers."""
    result = np.empty(shape, np.object_)

    for key in np.ndindex(result.shape):
        result[key] = DualNumber()

    return result


def eye(n: int, m: int | None = None) -> npt.NDArray[np.object_]:
    """Return a matrix of dual numbers with ones on the diagonal and zeros elsewhere."""
    if m is None:
        m = n

    result = zeros((n, m))

    for i in range(min(n, m)):
        result[i, i] = DualNumber(1.0)

    return result


def asarray(
    primals: npt.ArrayLike, duals: npt.ArrayLike | None = None
) -> npt.NDArray[np.object_]:
    """Return an array of dual numbers built from arrays of their components.

    Parameters
    ----------
    primals : ArrayLike
        Primal components.
    duals : ArrayLike, optional
        Dual components, broadcast to the shape of `primals`. Zero if omitted.
    """
    p = np.asarray(primals, np.float64)
    d = np.zeros_like(p) if duals is None else np.broadcast_to(duals, p.shape)
    result = np.empty(p.shape, np.object_)

    for key in np.ndindex(p.shape):
        result[key] = DualNumber(p[key], d[key])

    return result


def primals(a: npt.ArrayLike | Sequence) -> npt.NDArray[np.float64]:
    """Return the primal components of an array of dual numbers."""
    tmp = np.asarray(a, np.object_)
    gen = (daf.primal(x) for x in tmp.flat)
    return np.fromiter(gen, np.float64, tmp.size).reshape(tmp.shape)


def tangents(a: npt.ArrayLike | Sequence) -> npt.NDArray[np.float64]:
    """Return the dual components of an array of dual numbers.

    Real entries are constants and contribute zero. Any other entry, such as the
    ``None`` of an uninitialized object array, raises :class:`TypeError`.
    """
    tmp = np.asarray(a, np.object_)
    gen = (daf.dual(x) for x in tmp.flat)
    return np.fromiter(gen, np.float64, tmp.size).reshape(tmp.shape)


register_scalar(
    DualNumber,
    ScalarTraits(require_initialization=True, read_cost=1, add_cost=3, mul_cost=3),
)
