"""Errors raised by the root-extraction engine."""


class DomainError(ValueError):
    """The input is mathematically malformed for the requested operation.

    Raised for a constant "polynomial" asked for its roots, a quadratic whose
    two leading coefficients are both zero, division by the zero polynomial,
    or a value whose type has no square root.
    """


class ConvergenceError(ArithmeticError):
    """The iterative root finder ran out of budget before meeting tolerance.

    The final estimate is kept on the exception for diagnostics.
    """

    def __init__(self, message: str, x=None, y=None, displacement=None):
        super().__init__(message)
        self.x = x
        self.y = y
        self.displacement = displacement


class DeflationError(RuntimeError):
    """Dividing a found root out of a polynomial did not reduce it cleanly."""
