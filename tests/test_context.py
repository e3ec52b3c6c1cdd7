import copy
import math
import warnings

import pytest

from dualad import DualNumber
from dualad import function as daf
from dualad.context import Context, getcontext, localcontext, setcontext


def test_context():
    assert Context().fperror == "ignore"
    assert Context("warn").copy().fperror == "warn"
    assert copy.copy(Context("raise")).fperror == "raise"
    assert str(Context()) == "Context('ignore')"

    with pytest.raises(ValueError):
        Context("error")  # type: ignore


def test_default():
    assert getcontext().fperror == "ignore"

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        y = DualNumber(1.0, 1.0) / DualNumber(0.0)
        assert math.isinf(y.primal)


def test_localcontext():
    ctx = Context("warn")

    with localcontext(ctx) as local:
        assert local is not ctx
        assert getcontext() is local
        assert getcontext().fperror == "warn"

        with localcontext(fperror="raise"):
            assert getcontext().fperror == "raise"

        assert getcontext().fperror == "warn"

    assert getcontext().fperror == "ignore"


def test_localcontext_is_restored_on_exception():
    with pytest.raises(FloatingPointError):
        with localcontext(fperror="raise"):
            daf.log(DualNumber(-1.0, 1.0))

    assert getcontext().fperror == "ignore"


def test_setcontext():
    prev = getcontext()

    try:
        setcontext(Context("raise"))
        assert getcontext().fperror == "raise"
    finally:
        setcontext(prev)

    assert getcontext() is prev


def test_raise():
    with localcontext(fperror="raise"):
        with pytest.raises(FloatingPointError):
            DualNumber(1.0, 1.0) / DualNumber(0.0)

        with pytest.raises(FloatingPointError):
            daf.acos(DualNumber(2.0, 1.0))

        with pytest.raises(FloatingPointError):
            daf.pow(DualNumber(0.0, 1.0), -1.0)

        y = DualNumber(2.0, 1.0) / DualNumber(4.0, 0.0)
        assert (y.primal, y.dual) == (0.5, 0.25)


def test_warn():
    with localcontext(fperror="warn"):
        with pytest.warns(RuntimeWarning):
            y = daf.sqrt(DualNumber(-1.0, 1.0))

    assert math.isnan(y.primal)
