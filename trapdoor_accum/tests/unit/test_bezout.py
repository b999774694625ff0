"""
Unit Tests for the Bezout Utility

Tests the extended Euclidean algorithm and coefficient normalization
modulo the group order.
"""

import os
import pytest

try:
    from trapdoor_accum.bezout import extended_gcd, bezout_coefficients, bezout_inverse
    from trapdoor_accum.exceptions import BezoutVerificationFailed
except ImportError:
    import sys
    sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
    from bezout import extended_gcd, bezout_coefficients, bezout_inverse
    from exceptions import BezoutVerificationFailed


# 509 * 1013, group order for p = 1019, q = 2027
SK = 515617


class TestExtendedGCD:
    """Test extended Euclidean algorithm."""

    def test_extended_gcd_basic(self):
        gcd, x, y = extended_gcd(35, 15)
        assert gcd == 5
        assert 35 * x + 15 * y == gcd

    def test_extended_gcd_coprime(self):
        gcd, x, y = extended_gcd(7, 3)
        assert gcd == 1
        assert 7 * x + 3 * y == 1

    def test_extended_gcd_zero(self):
        gcd, x, y = extended_gcd(0, 5)
        assert gcd == 5
        assert 5 * y == 5

        gcd, x, y = extended_gcd(7, 0)
        assert gcd == 7
        assert 7 * x == 7

    def test_extended_gcd_large_operands(self):
        """Consecutive Fibonacci numbers force the longest Euclid chain."""
        a, b = 1, 1
        for _ in range(3000):
            a, b = b, a + b

        gcd, x, y = extended_gcd(b, a)
        assert gcd == 1
        assert b * x + a * y == 1


class TestBezoutCoefficients:
    """Test coefficient normalization and verification."""

    def test_coefficients_normalized(self):
        s, t = bezout_coefficients(65537, 65539, SK)

        assert 0 <= s < SK
        assert 0 <= t < SK
        assert (65537 * s + 65539 * t) % SK == 1

    def test_coefficients_against_group_order(self):
        """With b = sk, s is the inverse of a modulo sk."""
        s, _ = bezout_coefficients(65537, SK, SK)
        assert s == pow(65537, -1, SK)

    def test_inverse(self):
        assert bezout_inverse(65537, SK) == pow(65537, -1, SK)
        assert (7 * bezout_inverse(7, SK)) % SK == 1

    def test_both_zero(self):
        with pytest.raises(BezoutVerificationFailed):
            bezout_coefficients(0, 0, SK)

    def test_not_coprime_to_group_order(self):
        """509 divides sk, so it has no inverse."""
        with pytest.raises(BezoutVerificationFailed) as exc_info:
            bezout_inverse(509, SK)

        assert exc_info.value.a == 509
        assert exc_info.value.modulus == SK

    def test_common_factor(self):
        """gcd(6, 9) = 3 cannot produce 1."""
        with pytest.raises(BezoutVerificationFailed):
            bezout_coefficients(6, 9, SK)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            bezout_inverse(1013, SK)

    def test_invalid_modulus(self):
        with pytest.raises(ValueError, match="modulus must be positive"):
            bezout_coefficients(3, 5, 0)
