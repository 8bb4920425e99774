"""Tests for the closed-form quadratic and linear solver."""

import math
from decimal import Decimal
from fractions import Fraction

import pytest
import sympy

from polyroots import DomainError, solve_quadratic
from polyroots.numeric import is_exact


def test_integer_roots_stay_integers() -> None:
    result = solve_quadratic(1, -3, 2)
    assert result == [2, 1]
    assert all(type(r) is int for r in result)


def test_rational_roots() -> None:
    assert solve_quadratic(2, -3, 1) == [1, Fraction(1, 2)]


def test_exact_imaginary_roots() -> None:
    result = solve_quadratic(1, 0, 1)
    assert all(is_exact(r) for r in result)
    assert [complex(r) for r in result] == [1j, -1j]


def test_irrational_roots_are_floats() -> None:
    result = solve_quadratic(1, 0, -2)
    assert result == pytest.approx([math.sqrt(2), -math.sqrt(2)])


def test_complex_pair_from_real_coefficients() -> None:
    a, b = solve_quadratic(1, 1, 1)
    assert a == pytest.approx(complex(-0.5, math.sqrt(3) / 2))
    assert b == pytest.approx(complex(-0.5, -math.sqrt(3) / 2))


def test_complex_coefficients_can_give_a_real_root() -> None:
    result = solve_quadratic(1, -4 - 1j, 3 + 3j)
    assert result[0] == 3
    assert result[1] == pytest.approx(1 + 1j)


def test_exact_complex_coefficients() -> None:
    # (x - i)(x - 2) = x² - (2 + i)x + 2i
    result = solve_quadratic(1, -2 - sympy.I, 2 * sympy.I)
    assert all(is_exact(r) for r in result)
    assert {complex(r) for r in result} == {2 + 0j, 1j}


def test_linear_fallback() -> None:
    assert solve_quadratic(0, 2, 1) == [Fraction(-1, 2)]


def test_double_root() -> None:
    assert solve_quadratic(2, 0, 0) == [0, 0]


def test_degenerate_raises() -> None:
    with pytest.raises(DomainError, match="A or B must be nonzero"):
        solve_quadratic(0, 0, 1)


@pytest.mark.parametrize(
    "a,b,c",
    [
        (1, 0, -4),
        (3, 7, -2),
        (0.5, -1.25, 4),
        (2, 1 + 2j, -3j),
        (Fraction(1, 3), 5, Fraction(-7, 2)),
        (-4, 0, 9),
    ],
)
def test_roots_satisfy_equation(a, b, c) -> None:
    for r in solve_quadratic(a, b, c):
        r = complex(r)
        assert abs(a * r * r + b * r + c) < 1e-9


# ── Decimal coefficients ─────────────────────────────────────────────────

def test_decimal_real_roots_stay_decimal() -> None:
    result = solve_quadratic(Decimal(1), Decimal(-3), Decimal(2))
    assert result == [2, 1]
    assert all(isinstance(r, Decimal) for r in result)


def test_decimal_complex_roots() -> None:
    assert solve_quadratic(Decimal(1), Decimal(0), Decimal(1)) == [1j, -1j]
    a, b = solve_quadratic(Decimal("0.5"), Decimal("0.5"), Decimal("0.5"))
    assert a == pytest.approx(complex(-0.5, math.sqrt(3) / 2))
    assert b == pytest.approx(complex(-0.5, -math.sqrt(3) / 2))


def test_decimal_mixed_with_other_types() -> None:
    assert solve_quadratic(Decimal(1), 0.0, Fraction(-1, 4)) == [0.5, -0.5]
    assert solve_quadratic(0, Decimal(2), Fraction(1, 2)) == [-0.25]
    result = solve_quadratic(Decimal(1), 1j, Decimal(2))
    assert {complex(r) for r in result} == {1j, -2j}
