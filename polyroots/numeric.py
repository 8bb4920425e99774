"""Numeric tower normalization and a type-preserving square root.

Values move between ``int``, ``Fraction``, ``float``, ``Decimal``,
``complex`` and exact complex numbers.  An exact complex number is a SymPy
``re + im*I`` whose parts are both rational; it only ever appears with a
nonzero imaginary part.  Every arithmetic step in the package is followed by
:func:`convert_down` so callers always receive the simplest representation.
"""

import math
from decimal import Decimal, localcontext
from fractions import Fraction

import numpy as np
import sympy

from polyroots.exceptions import DomainError

_EXACT_TYPES = (int, Fraction)


# ── Normalization ───────────────────────────────────────────────────────

def _rational(value) -> sympy.Rational:
    return sympy.Rational(value.numerator, value.denominator)


def _from_sympy_real(value, drop_float: bool):
    if value.is_Integer:
        return int(value)
    if value.is_Rational:
        return Fraction(int(value.p), int(value.q))
    return convert_down(float(value), drop_float=drop_float)


def _from_sympy(value, drop_float: bool):
    if not value.is_number:
        raise DomainError(f"Not a numeric value: {value}")
    re, im = value.as_real_imag()
    if im.is_zero:
        return _from_sympy_real(re, drop_float)
    if re.is_Rational and im.is_Rational:
        return re + im * sympy.I
    return complex(float(re), float(im))


def convert_down(value, drop_float: bool = True):
    """Collapse *value* to the simplest exact representation.

    - Complex values with a zero imaginary part become real.
    - Fractions with a denominator of one become ``int``.
    - Floats that are exactly integral become ``int`` when *drop_float*.
    - numpy scalars and SymPy numbers become builtin types (or an exact
      complex SymPy number when both parts are rational).

    Lists, tuples and numpy arrays are converted element by element and
    returned as a list.  ``Decimal`` values are returned unchanged.
    """
    if isinstance(value, (list, tuple, np.ndarray)):
        return [convert_down(v, drop_float=drop_float) for v in value]
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, sympy.Basic):
        return _from_sympy(value, drop_float)
    if isinstance(value, complex):
        if value.imag == 0:
            return convert_down(value.real, drop_float=drop_float)
        return value
    if isinstance(value, Fraction):
        return value.numerator if value.denominator == 1 else value
    if isinstance(value, float) and drop_float and value.is_integer():
        return int(value)
    return value


def float_to_rational(value, max_denom: int = 100000, round_digits: int = 12):
    """Convert a float to a ``Fraction`` if its denominator stays bounded.

    The value is first rounded to *round_digits* decimals and accepted if the
    reduced denominator is at most *max_denom*.  Otherwise the closest
    fraction with a denominator of at most *max_denom* is accepted if it lies
    within ``10 ** -round_digits`` of the value, which recovers repeating
    decimals like 1/3.  Complex values are converted part by part.  Values
    that cannot be converted are returned as they are.

    Note that some combinations are nonsensical: rounding to 3 decimals with
    a *max_denom* of 1000 converts every float no matter what is lost.
    """
    value = convert_down(value, drop_float=False)
    if is_complex(value):
        return make_complex(
            float_to_rational(real_part(value), max_denom, round_digits),
            float_to_rational(imag_part(value), max_denom, round_digits),
        )
    if not isinstance(value, (float, Decimal)) or not math.isfinite(value):
        return convert_down(value, drop_float=False)

    exact = Fraction(value)
    rounded = round(exact, round_digits)
    if rounded.denominator <= max_denom:
        return convert_down(rounded)

    nearest = exact.limit_denominator(max_denom)
    if abs(nearest - exact) <= Fraction(1, 10 ** round_digits):
        return convert_down(nearest)
    return value


# ── Parts and predicates ────────────────────────────────────────────────

def make_complex(real, imag):
    """Return the simplest value equal to ``real + imag*i``."""
    real = convert_down(real)
    imag = convert_down(imag)
    if imag == 0:
        return real
    if isinstance(real, _EXACT_TYPES) and isinstance(imag, _EXACT_TYPES):
        return _rational(real) + _rational(imag) * sympy.I
    return complex(float(real), float(imag))


def real_part(value):
    value = convert_down(value, drop_float=False)
    if isinstance(value, complex):
        return value.real
    if isinstance(value, sympy.Expr):
        return _from_sympy_real(value.as_real_imag()[0], False)
    return value


def imag_part(value):
    value = convert_down(value, drop_float=False)
    if isinstance(value, complex):
        return value.imag
    if isinstance(value, sympy.Expr):
        return _from_sympy_real(value.as_real_imag()[1], False)
    return 0


def is_exact(value) -> bool:
    """True for integers, fractions and exact complex numbers."""
    value = convert_down(value, drop_float=False)
    return isinstance(value, (int, Fraction, sympy.Expr))


def is_complex(value) -> bool:
    """True when *value* has a nonzero imaginary part."""
    return isinstance(convert_down(value, drop_float=False), (complex, sympy.Expr))


def quo(numerator, denominator):
    """Divide, keeping the result exact when both operands are exact."""
    if denominator == 0:
        raise ZeroDivisionError(f"division of {numerator} by zero")
    if isinstance(numerator, _EXACT_TYPES) and isinstance(denominator, _EXACT_TYPES):
        return convert_down(Fraction(numerator) / denominator)
    return convert_down(numerator / denominator)


def to_inexact(value):
    """Return a ``float`` or ``complex`` approximation of *value*."""
    value = convert_down(value, drop_float=False)
    if isinstance(value, complex):
        return value
    if isinstance(value, sympy.Expr):
        return complex(value)
    return float(value)


def coerce_decimals(values: list) -> list:
    """Make every value inexact when a ``Decimal`` is mixed with a float,
    fraction or complex value, which ``Decimal`` arithmetic rejects.

    Lists of only ``Decimal`` and ``int`` values are returned unchanged.
    """
    if not any(isinstance(v, Decimal) for v in values):
        return values
    if all(isinstance(v, (Decimal, int)) for v in values):
        return values
    return [to_inexact(v) for v in values]


# ── Square root ─────────────────────────────────────────────────────────

def sqrt(value):
    """Square root that keeps exact values exact whenever possible.

    Perfect-square integers and fractions give exact results, negative reals
    give imaginary results, and complex values use the half-angle identity
    ``sqrt(re + im*i) = x + sign(im)*y*i`` with ``x = sqrt((re + |v|)/2)`` and
    ``y = sqrt((|v| - re)/2)``.  The complex branch is only as exact as its
    intermediate square roots: a perfect square with large rational parts can
    still come back as floats.

    Raises DomainError if *value* is not a supported numeric type.
    """
    value = convert_down(value, drop_float=False)

    if is_complex(value):
        re, im = real_part(value), imag_part(value)
        magnitude = sqrt(re * re + im * im)
        x = sqrt(quo(re + magnitude, 2))
        y = sqrt(quo(magnitude - re, 2))
        if im < 0:
            y = -y
        return make_complex(x, y)

    if isinstance(value, Decimal):
        if value < 0:
            return make_complex(0, sqrt(-value))
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, len(value.as_tuple().digits))
            return value.sqrt(ctx)

    if not isinstance(value, (int, Fraction, float)):
        raise DomainError(f"Cannot take the square root of {type(value).__name__} {value!r}")

    if value < 0:
        return make_complex(0, sqrt(-value))

    if isinstance(value, int):
        root = math.isqrt(value)
        if root * root == value:
            return root
        return convert_down(_float_sqrt(value))

    if isinstance(value, Fraction):
        num = math.isqrt(value.numerator)
        den = math.isqrt(value.denominator)
        if num * num == value.numerator and den * den == value.denominator:
            return convert_down(Fraction(num, den))
        return convert_down(_float_sqrt(value))

    return convert_down(math.sqrt(value))


def _float_sqrt(value):
    """Float square root of an int or Fraction of any size.

    Operands too large to convert to float go through ``Decimal``; a root
    beyond the float range comes back as ``inf``.
    """
    try:
        return math.sqrt(value)
    except OverflowError:
        with localcontext() as ctx:
            ctx.prec = 20
            return float(Decimal(value.numerator).sqrt() / Decimal(value.denominator).sqrt())
