"""Rounding to decimal places and to significant figures."""

import math
import sys

import numpy as np

from polyroots.numeric import convert_down, imag_part, is_complex, make_complex, real_part


def round_value(value, digits: int = 0):
    """Round a real or complex value (or a list of them) to *digits* decimals.

    Complex values have their real and imaginary parts rounded separately.
    Integers and fractions keep their type.
    """
    if isinstance(value, (list, tuple, np.ndarray)):
        return [round_value(v, digits) for v in value]

    value = convert_down(value, drop_float=False)
    if is_complex(value):
        return make_complex(
            round_value(real_part(value), digits),
            round_value(imag_part(value), digits),
        )
    return round(value, digits)


def sigfigs(value, figs: int):
    """Round *value* to roughly *figs* significant digits.

    Values near the bottom of the floating point range (around 1e-307) may
    come back as 0.0.
    """
    if figs < 1:
        raise ValueError("Number of significant digits must be >= 1")

    if isinstance(value, (list, tuple, np.ndarray)):
        return [sigfigs(v, figs) for v in value]

    value = convert_down(value, drop_float=False)
    if value == 0:
        return 0.0

    if is_complex(value):
        return make_complex(sigfigs(real_part(value), figs), sigfigs(imag_part(value), figs))

    round_digits = figs - math.ceil(math.log10(abs(value)))
    if round_digits > sys.float_info.max_10_exp:
        return 0.0
    return round(value, round_digits)
