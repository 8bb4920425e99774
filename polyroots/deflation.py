"""Find every root of a polynomial by repeated deflation.

One root at a time is located with :func:`polyroots.finder.find_one_root`,
snapped back to an exact value when the polynomial is exact, and divided out
with synthetic division.  Once the remaining polynomial is quadratic or
linear it is solved in closed form.
"""

import logging
from decimal import Decimal
from fractions import Fraction
from typing import Callable, Optional

from polyroots.division import divide
from polyroots.exceptions import DeflationError, DomainError
from polyroots.finder import find_one_root
from polyroots.numeric import (
    convert_down,
    float_to_rational,
    imag_part,
    is_exact,
    make_complex,
    quo,
    real_part,
    to_inexact,
)
from polyroots.options import RootOptions
from polyroots.precision import round_value
from polyroots.quadratic import solve_quadratic

logger = logging.getLogger(__name__)

# Starting point for every search; complex so that complex roots of real
# polynomials are reachable.
DEFLATION_SEED = complex(0.6, 0.8)


def _horner(coefficients, x):
    acc = 0
    for c in coefficients:
        acc = acc * x + c
    return acc


def _magnitude(value) -> float:
    return abs(to_inexact(value))


def _sort_key(value):
    return (float(real_part(value)), float(imag_part(value)))


def _nearest_rational(value, max_denom: int):
    parts = []
    for part in (real_part(value), imag_part(value)):
        part = convert_down(part, drop_float=False)
        if isinstance(part, float):
            part = convert_down(Fraction(part).limit_denominator(max_denom))
        parts.append(part)
    return make_complex(*parts)


def _snap_root(root, coefficients: list, exact: bool, options: RootOptions):
    """Replace *root* by a simpler value that fits the polynomial as well.

    Exact polynomials get bounded-denominator rational candidates, inexact
    ones get *root* rounded to ``snap_digits`` decimals.  A candidate is only
    kept if ``|p(candidate)| <= |p(root)|``.
    """
    baseline = _magnitude(convert_down(_horner(coefficients, root)))

    if exact:
        candidates = [
            float_to_rational(root, options.max_denominator, options.snap_digits),
            _nearest_rational(root, options.max_denominator),
        ]
        candidates = [c for c in candidates if is_exact(c)]
    else:
        candidates = [convert_down(to_inexact(round_value(root, options.snap_digits)))]

    best, best_size = root, baseline
    for candidate in candidates:
        size = _magnitude(convert_down(_horner(coefficients, candidate)))
        if size < best_size or (size <= best_size and best is root):
            best, best_size = candidate, size
    return best


def _check_deflation(current: list, quotient: list, remainder: list, root, options: RootOptions):
    degree = len(current) - 1
    scale = max([1.0] + [_magnitude(c) for c in current])
    limit = options.remainder_tolerance * scale

    if len(quotient) - 1 >= degree:
        logger.error("Deflating %s by root %s did not reduce degree %d", current, root, degree)
        raise DeflationError(
            f"Dividing out root {root} left degree {len(quotient) - 1}, expected less than {degree}."
        )
    if any(_magnitude(r) > limit for r in remainder):
        logger.error("Deflating %s by root %s left remainder %s", current, root, remainder)
        raise DeflationError(
            f"Dividing out root {root} left remainder {remainder} (limit {limit})."
        )


def roots(coefficients, options: Optional[RootOptions] = None,
          on_step: Optional[Callable] = None, **overrides) -> list:
    """Return all roots of the polynomial with the given *coefficients*.

    Coefficients run from the highest power down to the constant term;
    leading zeros are ignored.  The result has one entry per degree (repeated
    roots appear repeatedly), sorted by real part and then imaginary part.
    Integer, fraction and exact complex coefficients give exact roots
    wherever the search lands close enough to recover them.

    *on_step*, if given, is called as ``on_step(root, quotient, remainder)``
    after each root is divided out.

    Raises DomainError for a constant polynomial, ConvergenceError if a root
    cannot be found, and DeflationError if dividing out a found root does not
    leave a (numerically) zero remainder.
    """
    options = RootOptions.build(options, **overrides)

    current = convert_down(list(coefficients))
    while current and current[0] == 0:
        current = current[1:]

    if len(current) <= 1:
        raise DomainError("A constant polynomial has no roots (degree must be at least 1).")

    # The search works in floating point; Decimal cannot mix with it
    if any(isinstance(c, Decimal) for c in current):
        current = [to_inexact(c) for c in current]

    exact = all(is_exact(c) for c in current)
    found = []

    while len(current) > 3:
        inexact = [to_inexact(c) for c in current]
        root = find_one_root(DEFLATION_SEED, lambda x: _horner(inexact, x), options)
        root = _snap_root(root, current, exact, options)

        quotient, remainder = divide(current, [1, convert_down(-root)])
        _check_deflation(current, quotient, remainder, root, options)

        logger.debug("Deflated root %s: quotient=%s remainder=%s", root, quotient, remainder)
        if on_step is not None:
            on_step(root, quotient, remainder)

        found.append(root)
        current = quotient

    if len(current) == 3:
        found += solve_quadratic(*current)
    else:
        found.append(quo(-current[1], current[0]))

    return sorted(found, key=_sort_key)
