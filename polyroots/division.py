"""Polynomial long division using the synthetic division table.

The table is collapsed into a single accumulator row: each column is closed
(summed) from left to right, scaled by the divisor's leading coefficient,
and then pushed diagonally into the following columns.

See https://en.wikipedia.org/wiki/Synthetic_division#For_non-monic_divisors
"""

from polyroots.exceptions import DomainError
from polyroots.numeric import coerce_decimals, convert_down, quo


def _strip_leading_zeros(coefficients: list) -> list:
    for idx, c in enumerate(coefficients):
        if c != 0:
            return coefficients[idx:]
    return []


def divide(dividend, divisor) -> tuple:
    """Divide coefficient vector *dividend* by *divisor*.

    Both vectors list coefficients from the highest power down to the
    constant term.  Returns ``(quotient, remainder)`` as new lists so that
    ``dividend == divisor * quotient + remainder``.  The identity holds
    exactly when every coefficient is an integer, fraction or exact complex
    number, since non-monic scaling uses exact division.

    Raises DomainError if *divisor* is empty or all zeros.
    """
    dividend = convert_down(list(dividend))
    divisor = _strip_leading_zeros(convert_down(list(divisor)))

    mixed = coerce_decimals(dividend + divisor)
    dividend, divisor = mixed[:len(dividend)], mixed[len(dividend):]

    if not divisor:
        raise DomainError("Cannot divide by the zero polynomial.")

    n = len(dividend) - 1
    m = len(divisor) - 1
    c0 = divisor[0]

    if m > n:
        return [0], dividend or [0]

    if m == 0:
        return [quo(c, c0) for c in dividend], [0]

    acc = list(dividend)
    for col in range(n + 1):
        # The diagonal would fall off the right edge: remainder columns
        if col + m >= n + 1:
            break

        if c0 != 1:
            acc[col] = quo(acc[col], c0)

        for k in range(1, m + 1):
            acc[col + k] = convert_down(acc[col + k] + acc[col] * -divisor[k])

    split = n - m + 1
    return acc[:split], acc[split:]
