"""Polynomial root extraction that keeps exact arithmetic where it can."""

from polyroots.deflation import roots
from polyroots.division import divide
from polyroots.exceptions import ConvergenceError, DeflationError, DomainError
from polyroots.finder import derivative, find_one_root
from polyroots.numeric import convert_down, float_to_rational, sqrt
from polyroots.options import RootOptions
from polyroots.polynomial import Polynomial
from polyroots.quadratic import solve_quadratic

__all__ = [
    "ConvergenceError",
    "DeflationError",
    "DomainError",
    "Polynomial",
    "RootOptions",
    "convert_down",
    "derivative",
    "divide",
    "find_one_root",
    "float_to_rational",
    "roots",
    "solve_quadratic",
    "sqrt",
]
