"""
Accumulator error types.

All errors derive from ValueError so callers that already guard
parameter validation with ``except ValueError`` keep working.
"""

from typing import Optional


class AccumulatorError(ValueError):
    """Base class for accumulator failures."""


class SetupError(AccumulatorError):
    """Trapdoor material failed its safe-prime checks."""


class NotInvertible(AccumulatorError):
    """An element exponent shares a factor with the group order."""

    def __init__(self, message: str, exponent: Optional[int] = None):
        super().__init__(message)
        self.exponent = exponent


class BezoutVerificationFailed(AccumulatorError):
    """Bezout coefficients did not satisfy a*s + b*t = 1 (mod m)."""

    def __init__(self, a: int, b: int, modulus: int):
        super().__init__(
            f"Bezout identity does not hold for a={a}, b={b} modulo the group order"
        )
        self.a = a
        self.b = b
        self.modulus = modulus
