"""
##################################################
Automatic differentiation (:mod:`dualad.autodiff`)
##################################################

.. currentmodule:: dualad.autodiff

This module provides forward-mode automatic differentiation.

A function is differentiated by evaluating it on dual numbers whose dual components
are *seeded*: to obtain the partial derivative with respect to the `i`-th input, the
`i`-th dual component is set to one and all others to zero. A gradient or a Jacobian
matrix of a function of `n` inputs therefore costs `n` evaluations, regardless of the
number of outputs.

The evaluation point may be a sequence of real numbers, in which case the function
receives a list of dual numbers and the results are lists, or a one-dimensional
:class:`numpy.ndarray`, in which case the function receives an object array of dual
numbers (see :mod:`dualad.linalg`) and the results are arrays.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    evaluate
    derivative
    gradient
    jacobian

Warnings
--------
The seed vector passed to the function is mutated between passes. The function must
not keep references to it, or to its elements, beyond a single call. Separate calls
of the operators own separate seed vectors and may run concurrently.
"""

import contextlib
from collections.abc import Callable, Iterator, Sequence
from typing import Any, overload

import numpy as np
import numpy.typing as npt

from dualad import function as daf
from dualad import linalg
from dualad.dual import DualNumber
from dualad.logger import dualad_logger
from dualad.typing import REAL_TYPES, RealLike

type Seed = list[DualNumber] | npt.NDArray[np.object_]


def _asdual(value: Any) -> DualNumber:
    if isinstance(value, DualNumber):
        return value.copy()

    return DualNumber(value)


def _seed(u: Sequence[RealLike] | npt.NDArray) -> Seed:
    if isinstance(u, np.ndarray):
        return linalg.asarray(u)

    return [DualNumber(x) for x in u]


@contextlib.contextmanager
def _seeded(seed: Seed, index: int):
    """Activate the `index`-th dual component of `seed` within the with-statement.

    Only one component of a seed vector may be active at a time.
    """
    seed[index].dual = 1.0

    try:
        yield seed
    finally:
        seed[index].dual = 0.0


def _passes(f: Callable[[Seed], Any], u: Sequence[RealLike] | npt.NDArray) -> Iterator:
    seed = _seed(u)

    for i in range(len(seed)):
        with _seeded(seed, i):
            yield f(seed)


@overload
def evaluate(f: Callable[[DualNumber], Any], u: RealLike, /) -> DualNumber: ...


@overload
def evaluate(
    f: Callable[[list[DualNumber]], Any], u: Sequence[RealLike], /
) -> list[DualNumber]: ...


@overload
def evaluate(
    f: Callable[[npt.NDArray[np.object_]], Any], u: npt.NDArray, /
) -> npt.NDArray[np.object_]: ...


def evaluate(f, u, /):
    """Evaluate `f` at `u` on seeded dual numbers.

    Parameters
    ----------
    f : Callable
        Function of a dual number, or of a vector of dual numbers.
    u : float | Sequence[float] | ndarray
        Evaluation point.

    Returns
    -------
    DualNumber | list[DualNumber] | ndarray
        If `u` is a real number, the dual number whose primal component is ``f(u)``
        and whose dual component is ``f'(u)``. Otherwise, the `n` results of the
        seeding passes, where the `i`-th dual component is the partial derivative
        with respect to ``u[i]``.

    Examples
    --------
    >>> from dualad import function as daf
    >>> y = evaluate(lambda x: daf.sin(2 * x), 0.0)
    >>> print(format(y.primal, ".6f"), format(y.dual, ".6f"))
    0.000000 2.000000
    """
    if isinstance(u, np.ndarray) and u.ndim == 0:
        u = u[()]

    if isinstance(u, REAL_TYPES):
        return _asdual(f(DualNumber(u, 1.0)))

    with contextlib.closing(_passes(f, u)) as passes:
        results = [_asdual(x) for x in passes]

    if not isinstance(u, np.ndarray):
        return results

    tmp = np.empty(len(results), np.object_)
    tmp[:] = results
    return tmp


def derivative(f: Callable[[DualNumber], Any], u: RealLike, /) -> np.float64:
    """Return the derivative of the univariate scalar-valued function `f` at `u`.

    Examples
    --------
    >>> from dualad import function as daf
    >>> print(format(derivative(lambda x: daf.pow(x, 3), 2.5), ".6f"))
    18.750000
    """
    return evaluate(f, u).dual


@overload
def gradient(
    f: Callable[[list[DualNumber]], Any], u: Sequence[RealLike], /
) -> list[float]: ...


@overload
def gradient(
    f: Callable[[npt.NDArray[np.object_]], Any], u: npt.NDArray, /
) -> npt.NDArray[np.float64]: ...


def gradient(f, u, /):
    """Return the gradient of the multivariate scalar-valued function `f` at `u`.

    `f` is evaluated exactly ``len(u)`` times.

    Parameters
    ----------
    f : Callable
        Function of a vector of dual numbers.
    u : Sequence[float] | ndarray
        Evaluation point.

    Returns
    -------
    list[float] | ndarray
        Gradient of `f`, of the same kind as `u`.

    Raises
    ------
    TypeError
        If `f` returns neither a dual number nor a real number.

    Examples
    --------
    >>> from dualad import function as daf
    >>> g = gradient(lambda v: daf.sin(v[0] * v[1]), [0.0, 2.0])
    >>> print([format(x, ".6f") for x in g])
    ['2.000000', '0.000000']
    """
    n = len(u)
    dualad_logger.debug("gradient: %d seeding passes", n)

    with contextlib.closing(_passes(f, u)) as passes:
        result = np.fromiter((daf.dual(x) for x in passes), np.float64, n)

    return result if isinstance(u, np.ndarray) else result.tolist()


@overload
def jacobian(
    f: Callable[[list[DualNumber]], Any] | Sequence[Callable[[list[DualNumber]], Any]],
    u: Sequence[RealLike],
    /,
) -> list[list[float]]: ...


@overload
def jacobian(
    f: Callable[[npt.NDArray[np.object_]], Any]
    | Sequence[Callable[[npt.NDArray[np.object_]], Any]],
    u: npt.NDArray,
    /,
) -> npt.NDArray[np.float64]: ...


def jacobian(f, u, /):
    """Return the Jacobian matrix of a multivariate vector-valued function at `u`.

    Parameters
    ----------
    f : Callable | Sequence[Callable]
        Either a single function returning a vector of dual numbers, or a sequence of
        `m` scalar-valued functions, one per row.
    u : Sequence[float] | ndarray
        Evaluation point of length `n`.

    Returns
    -------
    list[list[float]] | ndarray
        `m` x `n` Jacobian matrix, as a list of rows or as an array following `u`.

    Raises
    ------
    TypeError
        If an output is neither a dual number nor a real number.
    ValueError
        If a vector-valued `f` returns a different number of outputs across passes.

    Notes
    -----
    A single vector-valued function is evaluated `n` times, each pass yielding one
    column. A sequence of `m` functions is differentiated function by function and
    costs `m` x `n` evaluations, so a vector-valued function is preferable whenever
    the outputs share intermediate results.

    Examples
    --------
    >>> from dualad import function as daf
    >>> jac = jacobian(lambda v: (v[0] * v[1], v[0] + daf.exp(v[1])), [2.0, 0.0])
    >>> print(jac)
    [[0.0, 2.0], [1.0, 1.0]]
    """
    n = len(u)

    if callable(f):
        dualad_logger.debug("jacobian: %d seeding passes", n)
        result = None

        with contextlib.closing(_passes(f, u)) as passes:
            for i, y in enumerate(passes):
                column = linalg.tangents(y).ravel()

                if result is None:
                    result = np.empty((len(column), n), np.float64)
                elif len(column) != len(result):
                    raise ValueError(
                        f"f returned {len(column)} values at pass {i}, "
                        f"expected {len(result)}"
                    )

                result[:, i] = column

        if result is None:
            result = np.empty((0, n), np.float64)
    else:
        dualad_logger.debug("jacobian: %d functions, %d seeding passes", len(f), n)
        rows = [gradient(g, u) for g in f]
        result = np.array(rows, np.float64).reshape(len(rows), n)

    return result if isinstance(u, np.ndarray) else result.tolist()
