"""
Request-level helpers for the polyroots API.

Parses coefficient strings (e.g. "3", "-1/2", "2.5", "3+4i") with SymPy,
runs the root engine, and formats results and deflation steps as text.
"""

import re
import time
from typing import Optional

import sympy
from sympy.parsing.sympy_parser import (
    parse_expr, standard_transformations, implicit_multiplication_application,
    convert_xor,
)

from polyroots import RootOptions, divide, roots, solve_quadratic
from polyroots.numeric import convert_down, imag_part, real_part

TRANSFORMATIONS = standard_transformations + (implicit_multiplication_application, convert_xor)

_SUPERSCRIPT = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")


def _parse_coefficient(text: str):
    """Parse one coefficient string into a normalized number."""
    s = text.strip()
    if not s:
        raise ValueError("Coefficients cannot be empty.")
    s = s.replace('^', '**')
    # Accept both i and j as the imaginary unit
    s = re.sub(r'(?<![A-Za-z])[ij](?![A-Za-z])', 'I', s)
    try:
        expr = parse_expr(s, local_dict={'I': sympy.I}, transformations=TRANSFORMATIONS)
    except Exception as e:
        raise ValueError(f"Could not parse coefficient: '{text}'. Error: {e}")
    if not getattr(expr, "is_number", False):
        raise ValueError(f"Coefficient '{text}' is not a number.")
    return convert_down(expr, drop_float=False)


def _parse_coefficients(texts: list) -> list:
    if not texts:
        raise ValueError("Enter at least one coefficient.")
    return [_parse_coefficient(t) for t in texts]


def _fmt_num(value, max_decimals: int = 12) -> str:
    """Format a real number; floats lose trailing zeros, fractions stay a/b."""
    if isinstance(value, float):
        if abs(value - round(value)) < 1e-12:
            return str(int(round(value)))
        return f"{value:.{max_decimals}f}".rstrip("0").rstrip(".")
    return str(value)


def format_number(value) -> str:
    """Format any engine value, writing complex numbers as ``a + bi``."""
    value = convert_down(value, drop_float=False)
    im = imag_part(value)
    if im == 0:
        return _fmt_num(real_part(value))

    re_part = real_part(value)
    sign = "-" if im < 0 else "+"
    im_str = _fmt_num(abs(im))
    im_str = "" if im_str == "1" else im_str
    if re_part == 0:
        return f"{'-' if im < 0 else ''}{im_str}i"
    return f"{_fmt_num(re_part)} {sign} {im_str}i"


def format_polynomial(coefficients: list) -> str:
    """Format coefficients as e.g. ``x³ - 6x² + 11x - 6``."""
    degree = len(coefficients) - 1
    terms = []
    for idx, c in enumerate(coefficients):
        if c == 0:
            continue
        power = degree - idx
        c_str = format_number(c)
        if ' ' in c_str:
            c_str = f"({c_str})"
        if power > 0 and c_str in ("1", "-1"):
            c_str = c_str[:-1]
        var = "" if power == 0 else "x" if power == 1 else f"x{str(power).translate(_SUPERSCRIPT)}"
        terms.append(f"{c_str}{var}")

    if not terms:
        return "0"
    text = " + ".join(terms)
    return text.replace("+ -", "- ")


def _build_options(options: Optional[dict]) -> Optional[RootOptions]:
    if options is None or isinstance(options, RootOptions):
        return options
    return RootOptions(**options)


def find_roots(coefficient_strs: list, options=None) -> dict:
    """
    Find every root of the polynomial given by coefficient strings.

    Returns a dict with:
      - polynomial: the formatted polynomial
      - degree: its degree
      - roots: formatted roots, sorted by real then imaginary part
      - steps: list of {description, expression, explanation}
      - summary: {runtime_ms, library}
    """
    t_start = time.perf_counter()
    coefficients = _parse_coefficients(coefficient_strs)
    while coefficients and coefficients[0] == 0:
        coefficients = coefficients[1:]

    steps = []
    steps.append({
        "description": "Starting with the polynomial",
        "expression": f"{format_polynomial(coefficients)} = 0",
        "explanation": (
            f"We are looking for every value of x that makes this degree-"
            f"{max(len(coefficients) - 1, 0)} polynomial equal to zero."
        ),
    })

    def _record(root, quotient, remainder):
        root_str = format_number(root)
        steps.append({
            "description": f"Find a root and divide out (x - {root_str})",
            "expression": f"x = {root_str}   →   {format_polynomial(quotient)}",
            "explanation": (
                f"An iterative search found the root x = {root_str}. "
                f"Synthetic division by (x - {root_str}) leaves the quotient "
                f"{format_polynomial(quotient)} with remainder "
                f"{', '.join(format_number(r) for r in remainder)}, "
                f"lowering the degree by one."
            ),
        })

    found = roots(coefficients, _build_options(options), on_step=_record)

    remaining = len(steps) - 1
    closing = "quadratic formula" if len(coefficients) - remaining == 3 else "linear formula"
    steps.append({
        "description": f"Solve the rest with the {closing}",
        "expression": ", ".join(f"x = {format_number(r)}" for r in found),
        "explanation": (
            f"Once the polynomial is down to degree {len(coefficients) - 1 - remaining}, "
            f"the {closing} gives the remaining roots exactly where possible."
        ),
    })

    for i, s in enumerate(steps, 1):
        s["step_number"] = i

    t_end = time.perf_counter()
    return {
        "polynomial": format_polynomial(coefficients),
        "degree": len(coefficients) - 1,
        "roots": [format_number(r) for r in found],
        "steps": steps,
        "summary": {
            "runtime_ms": round((t_end - t_start) * 1000, 3),
            "library": "polyroots (SymPy exact arithmetic, NumPy search)",
        },
    }


def solve_quadratic_strs(a: str, b: str, c: str) -> dict:
    """Solve ``a*x² + b*x + c = 0`` from coefficient strings."""
    coefficients = _parse_coefficients([a, b, c])
    found = solve_quadratic(*coefficients)
    return {
        "polynomial": format_polynomial(coefficients),
        "roots": [format_number(r) for r in found],
    }


def divide_strs(dividend: list, divisor: list) -> dict:
    """Divide two polynomials given as coefficient strings."""
    quotient, remainder = divide(_parse_coefficients(dividend), _parse_coefficients(divisor))
    return {
        "quotient": [format_number(q) for q in quotient],
        "remainder": [format_number(r) for r in remainder],
        "quotient_polynomial": format_polynomial(quotient),
        "remainder_polynomial": format_polynomial(remainder),
    }
