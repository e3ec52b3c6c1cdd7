from . import linalg
from .autodiff import derivative, evaluate, gradient, jacobian
from .dual import DualNumber
from .function import (
    abs,
    abs2,
    acos,
    acosh,
    asin,
    asinh,
    atan,
    atanh,
    conj,
    cos,
    cosh,
    exp,
    exp2,
    inverse,
    log,
    log2,
    log10,
    norm,
    pow,
    sin,
    sinh,
    sqrt,
    tan,
    tanh,
)

__all__ = [
    "derivative",
    "evaluate",
    "gradient",
    "jacobian",
    "DualNumber",
    "abs",
    "abs2",
    "acos",
    "acosh",
    "asin",
    "asinh",
    "atan",
    "atanh",
    "conj",
    "cos",
    "cosh",
    "exp",
    "exp2",
    "inverse",
    "log",
    "log2",
    "log10",
    "norm",
    "pow",
    "sin",
    "sinh",
    "sqrt",
    "tan",
    "tanh",
]
