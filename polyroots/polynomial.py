"""A single-variable polynomial of arbitrary degree, for root finding."""

import numbers
from typing import Optional

import sympy

from polyroots.deflation import roots as deflation_roots
from polyroots.division import divide
from polyroots.numeric import convert_down, quo, to_inexact
from polyroots.options import RootOptions
from polyroots.precision import round_value, sigfigs


class Polynomial:
    """Polynomial with coefficients in descending order of power.

    Coefficients may be given as separate arguments or as one list, and may
    be any number including complex, fractions, and SymPy numbers.  Leading
    zeros are dropped and each coefficient is normalized, so a complex
    coefficient with no imaginary part is stored as a real.  An empty
    polynomial always evaluates to zero.

    Example::

        # 5x² + 2x - 6
        Polynomial(5, 2, -6)
    """

    def __init__(self, *coefficients):
        if len(coefficients) == 1 and isinstance(coefficients[0], (list, tuple)):
            coefficients = coefficients[0]

        if not all(isinstance(c, (numbers.Number, sympy.Expr)) for c in coefficients):
            raise TypeError("All coefficients must be numeric")

        coefficients = convert_down(list(coefficients))
        while coefficients and coefficients[0] == 0:
            coefficients = coefficients[1:]

        self._coefficients = tuple(coefficients)

    @property
    def coefficients(self) -> tuple:
        return self._coefficients

    @property
    def degree(self) -> int:
        return max(len(self._coefficients) - 1, 0)

    def __call__(self, x):
        """Evaluate at *x* with Horner's method."""
        acc = 0
        for c in self._coefficients:
            acc = acc * x + c
        return convert_down(acc)

    def prime(self, n: int = 1) -> "Polynomial":
        """Return the *n*th derivative."""
        if not isinstance(n, int) or n < 1:
            raise ValueError(f"Derivative order must be a positive integer, got {n!r}")

        result = []
        for idx, c in enumerate(self._coefficients[:len(self._coefficients) - n]):
            exponent = self.degree - idx
            for _ in range(n):
                c *= exponent
                exponent -= 1
            result.append(c)
        return Polynomial(result)

    def __divmod__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        quotient, remainder = divide(self._coefficients, other.coefficients)
        return Polynomial(quotient), Polynomial(remainder)

    def __truediv__(self, other):
        """Divide by a number, or by a Polynomial (discarding the remainder)."""
        if isinstance(other, Polynomial):
            return divmod(self, other)[0]
        return Polynomial([quo(c, other) for c in self._coefficients])

    def roots(self, options: Optional[RootOptions] = None, **overrides) -> list:
        """All roots, sorted by real then imaginary part.  See :func:`polyroots.roots`."""
        return deflation_roots(self._coefficients, options, **overrides)

    def round(self, digits: int = 0) -> "Polynomial":
        return Polynomial(round_value(list(self._coefficients), digits))

    def sigfigs(self, figs: int) -> "Polynomial":
        return Polynomial(sigfigs(list(self._coefficients), figs))

    def to_float(self) -> "Polynomial":
        """Copy with every coefficient as a float or float-valued complex."""
        result = Polynomial()
        result._coefficients = tuple(to_inexact(c) for c in self._coefficients)
        return result

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._coefficients == other.coefficients

    def __hash__(self):
        return hash(self._coefficients)

    def __repr__(self):
        return f"Polynomial({', '.join(repr(c) for c in self._coefficients)})"
