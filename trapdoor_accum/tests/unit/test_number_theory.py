"""
Unit Tests for the Number-Theory Oracle

Tests primality testing, safe-prime generation and random sampling.
"""

import os
import pytest

try:
    from trapdoor_accum.number_theory import (
        is_prime, is_safe_prime, generate_safe_prime, random_below, random_bits
    )
except ImportError:
    import sys
    sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
    from number_theory import (
        is_prime, is_safe_prime, generate_safe_prime, random_below, random_bits
    )


class TestPrimality:
    """Test the primality oracle."""

    def test_small_primes(self):
        """Test known small primes and composites."""
        for p in [2, 3, 5, 7, 11, 13, 509, 1013, 1019, 2027, 65537]:
            assert is_prime(p), f"{p} should be prime"

        for c in [0, 1, 4, 9, 15, 561, 1001, 65535]:
            assert not is_prime(c), f"{c} should be composite"

    def test_negative_numbers(self):
        """Negative numbers are never prime."""
        assert not is_prime(-7)

    def test_large_known_prime(self):
        """Test a Mersenne prime."""
        assert is_prime(2**127 - 1)
        assert not is_prime(2**128 + 1)

    def test_safe_primes(self):
        """Test safe prime detection."""
        for p in [5, 7, 11, 23, 47, 59, 83, 107, 1019, 2027]:
            assert is_safe_prime(p), f"{p} should be a safe prime"

    def test_not_safe_primes(self):
        """Primes whose companion is composite are not safe primes."""
        # 13 -> 6, 17 -> 8, 29 -> 14, 1013 -> 506
        for p in [2, 3, 13, 17, 29, 1013]:
            assert not is_safe_prime(p), f"{p} should not be a safe prime"


class TestSafePrimeGeneration:
    """Test safe prime generation."""

    @pytest.mark.parametrize("bits", [3, 4, 8, 16, 32, 64])
    def test_generate_exact_bits(self, bits):
        """Generated safe primes have exactly the requested bit length."""
        p = generate_safe_prime(bits)

        assert p.bit_length() == bits
        assert is_prime(p)
        assert is_prime((p - 1) // 2)

    def test_generate_256_bits(self):
        """Element-sized safe primes."""
        p = generate_safe_prime(256)

        assert p.bit_length() == 256
        assert is_safe_prime(p)

    def test_generate_is_random(self):
        """Independent calls return different primes."""
        primes = {generate_safe_prime(64) for _ in range(5)}
        assert len(primes) > 1

    def test_generate_too_small(self):
        """There is no 2-bit safe prime."""
        with pytest.raises(ValueError, match="bits must be >= 3"):
            generate_safe_prime(2)


class TestRandomSampling:
    """Test uniform sampling helpers."""

    def test_random_below_range(self):
        """Samples stay in [0, n)."""
        for _ in range(200):
            assert 0 <= random_below(7) < 7

    def test_random_below_invalid(self):
        """Non-positive bounds are rejected."""
        with pytest.raises(ValueError, match="n must be positive"):
            random_below(0)

    def test_random_bits_range(self):
        """Samples fit in the requested width."""
        for _ in range(50):
            assert random_bits(256).bit_length() <= 256
