"""
##############################################
Floating-point context (:mod:`dualad.context`)
##############################################

.. currentmodule:: dualad.context

This module provides the context that decides how floating-point exceptions
(division by zero, overflow, invalid operations such as ``log(-1)``) are treated
while dual numbers are computed.

By default they are ignored, so that such operations quietly produce ``inf`` or
``nan`` exactly like IEEE-754 arithmetic does.

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext
    fpguard

"""

import contextlib
import contextvars
import functools
from collections.abc import Callable
from typing import Literal, Self

import numpy as np

type FPError = Literal["ignore", "warn", "raise"]

_FPERRORS = ("ignore", "warn", "raise")


class Context:
    """Create a new context.

    Parameters
    ----------
    fperror : Literal["ignore", "warn", "raise"], default="ignore"
        Treatment of floating-point exceptions. ``"warn"`` emits
        :class:`RuntimeWarning` and ``"raise"`` raises :class:`FloatingPointError`;
        both are meant for debugging a computation that unexpectedly yields ``nan``.

    Raises
    ------
    ValueError
        If `fperror` is not one of the accepted values.
    """

    __slots__ = ("_fperror",)
    _fperror: FPError

    def __init__(self, fperror: FPError = "ignore"):
        if fperror not in _FPERRORS:
            raise ValueError(f"invalid fperror: {fperror!r}")

        self._fperror = fperror

    @property
    def fperror(self) -> FPError:
        return self._fperror

    def copy(self) -> Self:
        return self.__class__(self._fperror)

    def __str__(self):
        return f"{type(self).__name__}({self._fperror!r})"

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("dualad")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    _var.set(ctx)


@contextlib.contextmanager
def localcontext(ctx: Context | None = None, *, fperror: FPError | None = None):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Examples
    --------
    >>> from dualad import DualNumber
    >>> with localcontext(fperror="raise"):
    ...     try:
    ...         DualNumber(1.0) / 0
    ...     except FloatingPointError:
    ...         print("trapped")
    trapped
    """
    if ctx is None:
        ctx = getcontext()

    if fperror is None:
        fperror = ctx._fperror

    ctx = Context(fperror)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)


def fpguard[T, **P](fun: Callable[P, T]) -> Callable[P, T]:
    """Run `fun` under the floating-point policy of the current context."""

    @functools.wraps(fun)
    def wrapper(*args, **kwargs):
        with np.errstate(all=getcontext()._fperror):
            return fun(*args, **kwargs)

    return wrapper
