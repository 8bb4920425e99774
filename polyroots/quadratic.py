"""Closed-form roots for polynomials of degree two or lower."""

from polyroots.exceptions import DomainError
from polyroots.numeric import coerce_decimals, convert_down, is_complex, quo, sqrt


def solve_quadratic(a, b, c) -> list:
    """Return the roots of ``a*x**2 + b*x + c``.

    Real-valued roots are returned as real types even when some coefficients
    are complex, so one root may be real and the other complex.  Exact
    coefficients give exact roots whenever the discriminant is a perfect
    square.  ``Decimal`` coefficients stay ``Decimal`` for real roots and
    give float-based complex roots otherwise.

    If *a* is zero and *b* is nonzero, the single root of the linear
    equation is returned.  Raises DomainError if both *a* and *b* are zero.
    """
    a, b, c = coerce_decimals(convert_down([a, b, c]))

    if a == 0 and b == 0:
        raise DomainError(
            f"A or B must be nonzero to solve {a}x² + {b}x + {c} = 0 "
            "(not a polynomial of degree 1 or 2)."
        )

    if a == 0:
        return [quo(-c, b)]

    discriminant = convert_down(b * b - 4 * a * c)
    root = sqrt(discriminant)
    if is_complex(root):
        a, b, root = coerce_decimals([a, b, root])
    denom = convert_down(2 * a)

    return [
        quo(convert_down(-b + root), denom),
        quo(convert_down(-b - root), denom),
    ]
