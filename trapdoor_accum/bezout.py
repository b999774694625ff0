"""
Bezout Coefficients Modulo the Group Order

Extended Euclidean algorithm and a modular inverse built on it, working
modulo the secret group order. Self-contained alternative to the
built-in inverse used by the accumulator operations.
"""

from typing import Tuple

try:
    from .exceptions import BezoutVerificationFailed
except ImportError:
    from exceptions import BezoutVerificationFailed


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm.

    Computes gcd(a, b) and coefficients x, y such that ax + by = gcd(a, b).
    Iterative, so operand size is not bounded by the recursion limit.

    Example:
        >>> gcd, x, y = extended_gcd(35, 15)
        >>> assert gcd == 5
        >>> assert 35 * x + 15 * y == 5
    """
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1

    while r:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s
        old_t, t = t, old_t - quotient * t

    if old_r < 0:
        old_r, old_s, old_t = -old_r, -old_s, -old_t

    return old_r, old_s, old_t


def bezout_coefficients(a: int, b: int, modulus: int) -> Tuple[int, int]:
    """
    Compute (s, t) in [0, modulus) with a*s + b*t = 1 (mod modulus).

    Args:
        a: First input
        b: Second input
        modulus: Group order sk

    Returns:
        Tuple[int, int]: Normalized coefficients (s, t)

    Raises:
        ValueError: If modulus is not positive
        BezoutVerificationFailed: If the identity does not hold after
            normalization (a = b = 0, or inputs not coprime to modulus)

    Example:
        >>> s, t = bezout_coefficients(7, 515617, 515617)
        >>> assert (7 * s) % 515617 == 1
    """
    if modulus <= 0:
        raise ValueError("modulus must be positive")

    _, x, y = extended_gcd(a, b)
    s = x % modulus
    t = y % modulus

    if (a * s + b * t) % modulus != 1 % modulus:
        raise BezoutVerificationFailed(a, b, modulus)

    return s, t


def bezout_inverse(a: int, modulus: int) -> int:
    """
    Inverse of a modulo ``modulus`` via Bezout coefficients of (a, modulus).

    Raises:
        BezoutVerificationFailed: If a is not invertible
    """
    s, _ = bezout_coefficients(a, modulus, modulus)
    return s
