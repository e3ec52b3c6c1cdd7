import copy

import numpy as np
import pytest

from dualad import function as daf
from dualad.dual import EPSILON, DualNumber

PAIRS = [
    ((1.5, -2.0), (3.25, 0.5)),
    ((-7.125, 4.0), (2.5, -9.75)),
    ((0.3, 0.0), (-0.8, 1.0)),
    ((9.0, 6.5), (-4.0, -3.0)),
]


def test_construct():
    x = DualNumber()
    assert x.primal == 0.0 and x.dual == 0.0

    x = DualNumber(2.5)
    assert x.primal == 2.5 and x.dual == 0.0

    x = DualNumber(2.5, -1.5)
    assert x.primal == 2.5 and x.dual == -1.5
    assert isinstance(x.primal, np.float64)
    assert isinstance(x.dual, np.float64)

    with pytest.raises(TypeError):
        DualNumber(DualNumber(1.0, 1.0))  # type: ignore

    with pytest.raises(TypeError):
        DualNumber(None)  # type: ignore

    with pytest.raises(TypeError):
        DualNumber("2.5")  # type: ignore

    with pytest.raises(TypeError):
        DualNumber(1.0, None)  # type: ignore

    x = DualNumber(np.int64(2), np.float32(0.5))
    assert (x.primal, x.dual) == (2.0, 0.5)


def test_accessors():
    x = DualNumber(1.0, 2.0)
    x.primal = 3.0
    x.dual = 4.0
    assert (x.primal, x.dual) == (3.0, 4.0)
    assert (x.real, x.imag) == (3.0, 4.0)

    x.real = -1.0
    x.imag = -2.0
    assert (x.primal, x.dual) == (-1.0, -2.0)

    assert daf.primal(x) == daf.real(x) == -1.0
    assert daf.dual(x) == daf.imag(x) == -2.0
    assert daf.primal(5) == 5.0 and daf.dual(5) == 0.0

    with pytest.raises(TypeError):
        x.primal = None  # type: ignore

    with pytest.raises(TypeError):
        x.imag = "1"  # type: ignore

    for value in (None, (x, x), [1.0], np.ones(2), "1"):
        with pytest.raises(TypeError):
            daf.dual(value)  # type: ignore

        with pytest.raises(TypeError):
            daf.primal(value)  # type: ignore


def test_copy():
    x = DualNumber(1.0, 2.0)
    y = x.copy()
    z = copy.copy(x)
    x.dual = 0.0
    assert y.dual == 2.0 and z.dual == 2.0


def test_negation():
    x = -DualNumber(1.25, -3.5)
    assert (x.primal, x.dual) == (-1.25, 3.5)

    x = +DualNumber(1.25, -3.5)
    assert (x.primal, x.dual) == (1.25, -3.5)


def test_equality():
    a = DualNumber(-3.7, 8.2)
    assert a == a
    assert not a != a
    assert a == a.copy()
    assert not a != a.copy()

    for b in (DualNumber(-11.0, -100.0), DualNumber(-3.7, -100.0), DualNumber(-11.0, 8.2)):
        assert a != b
        assert not a == b

    assert DualNumber(2.0) == 2.0
    assert DualNumber(2.0, 1.0) != 2.0
    assert DualNumber(1.0, 1.0) == DualNumber(1.0 + EPSILON / 2, 1.0)


def test_equality_is_not_transitive():
    a = DualNumber(0.0)
    b = DualNumber(1.5e-16)
    c = DualNumber(3.0e-16)
    assert a == b and b == c
    assert a != c


def test_equality_of_nan():
    x = DualNumber(float("nan"))
    assert x == x
    assert x != DualNumber(float("nan"))


def test_unhashable():
    with pytest.raises(TypeError):
        hash(DualNumber(1.0))


def test_ordering():
    x = DualNumber(1.0, 100.0)
    y = DualNumber(2.0, -100.0)
    assert x < y and x <= y and y > x and y >= x
    assert x < 1.5 and x >= 1.0 and 0 < x
    assert max(x, y) is y


@pytest.mark.parametrize(("a", "b"), PAIRS)
def test_arithmetic(a, b):
    x = DualNumber(*a)
    y = DualNumber(*b)
    (p1, t1), (p2, t2) = a, b

    z = x + y
    assert (z.primal, z.dual) == (p1 + p2, t1 + t2)

    z = x - y
    assert (z.primal, z.dual) == (p1 - p2, t1 - t2)

    z = x * y
    assert pytest.approx(z.primal) == p1 * p2
    assert pytest.approx(z.dual) == p1 * t2 + t1 * p2

    z = x / y
    assert pytest.approx(z.primal) == p1 / p2
    assert pytest.approx(z.dual) == (t1 * p2 - p1 * t2) / (p2 * p2)


@pytest.mark.parametrize(("a", "b"), PAIRS)
def test_scalar_arithmetic(a, b):
    x = DualNumber(*a)
    c = b[0]
    p, t = a

    z = x + c
    assert (z.primal, z.dual) == (p + c, t)
    z = c + x
    assert (z.primal, z.dual) == (c + p, t)
    z = x - c
    assert (z.primal, z.dual) == (p - c, t)
    z = c - x
    assert (z.primal, z.dual) == (c - p, -t)
    z = x * c
    assert (z.primal, z.dual) == (p * c, t * c)
    z = c * x
    assert (z.primal, z.dual) == (c * p, c * t)
    z = x / c
    assert (z.primal, z.dual) == (p / c, t / c)

    z = c / x
    assert pytest.approx(z.primal) == c / p
    assert pytest.approx(z.dual) == -c * t / (p * p)


@pytest.mark.parametrize(("a", "b"), PAIRS)
def test_scalar_is_constant(a, b):
    x = DualNumber(*a)
    c = b[0]
    assert DualNumber(c) == DualNumber(c, 0.0)

    for op in (
        lambda u, v: u + v,
        lambda u, v: u - v,
        lambda u, v: u * v,
        lambda u, v: u / v,
    ):
        for actual, expected in (
            (op(x, c), op(x, DualNumber(c))),
            (op(c, x), op(DualNumber(c), x)),
        ):
            assert isinstance(actual, DualNumber)
            assert pytest.approx(actual.primal) == expected.primal
            assert pytest.approx(actual.dual) == expected.dual


def test_compound_assignment():
    x = DualNumber(2.0, 1.0)
    y = x
    x += DualNumber(1.0, 1.0)
    assert (x.primal, x.dual) == (3.0, 2.0)
    x -= 1.0
    assert (x.primal, x.dual) == (2.0, 2.0)
    x *= DualNumber(3.0, 1.0)
    assert (x.primal, x.dual) == (6.0, 8.0)
    x /= 2
    assert (x.primal, x.dual) == (3.0, 4.0)
    x /= DualNumber(2.0, 1.0)
    assert (x.primal, x.dual) == (1.5, 1.25)

    # rebinding leaves other references untouched
    assert (y.primal, y.dual) == (2.0, 1.0)


def test_power_operators():
    x = DualNumber(3.0, 1.0)

    z = x**2
    assert (z.primal, z.dual) == (9.0, 6.0)

    z = 2**x
    assert pytest.approx(z.primal) == 8.0
    assert pytest.approx(z.dual) == 8.0 * np.log(2.0)

    z = x**x
    assert pytest.approx(z.primal) == 27.0
    assert pytest.approx(z.dual) == 27.0 * (np.log(3.0) + 1.0)

    z = abs(DualNumber(-2.0, 1.0))
    assert (z.primal, z.dual) == (2.0, -1.0)


def test_conj_norm():
    a = DualNumber(-2.5, 3.0)

    z = daf.conj(a)
    assert (z.primal, z.dual) == (-2.5, -3.0)

    aa = a * a
    assert daf.norm(a) == aa
    assert daf.abs2(a) == aa
    assert (aa.primal, aa.dual) == (6.25, -15.0)


def test_numpy_scalars():
    x = DualNumber(2.0, 1.0)

    z = np.float64(3.0) * x
    assert isinstance(z, DualNumber)
    assert (z.primal, z.dual) == (6.0, 3.0)

    z = x + np.int64(1)
    assert isinstance(z, DualNumber)
    assert (z.primal, z.dual) == (3.0, 1.0)

    z = np.float64(1.0) - x
    assert isinstance(z, DualNumber)
    assert (z.primal, z.dual) == (-1.0, -1.0)


def test_unsupported_operands():
    x = DualNumber(1.0, 1.0)

    with pytest.raises(TypeError):
        x + "1"  # type: ignore

    with pytest.raises(TypeError):
        x * 1j  # type: ignore

    assert x != "1"


def test_repr():
    x = DualNumber(1.5, -2.0)
    assert repr(x) == "DualNumber(primal=1.5, dual=-2.0)"
    assert str(x) == "DualNumber(primal=1.5, dual=-2.0)"
