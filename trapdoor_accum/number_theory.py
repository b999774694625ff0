"""
Number-Theory Oracle

Primality testing, safe-prime generation and uniform sampling used by
the accumulator. Heavy lifting is done by gmpy2; randomness comes from
the operating system via ``secrets``.
"""

import secrets

import gmpy2

DEFAULT_ROUNDS = 25

# Odd primes used to discard candidates before running Miller-Rabin.
_SIEVE_PRIMES = (3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71, 73)


def is_prime(n: int, rounds: int = DEFAULT_ROUNDS) -> bool:
    """Probabilistic primality test (Miller-Rabin via gmpy2)."""
    if n < 2:
        return False
    return bool(gmpy2.is_prime(n, rounds))


def is_safe_prime(n: int, rounds: int = DEFAULT_ROUNDS) -> bool:
    """Return True if n and (n - 1) / 2 are both prime."""
    if n < 5 or n % 2 == 0:
        return False
    return is_prime((n - 1) // 2, rounds) and is_prime(n, rounds)


def _sieve_rejects(q: int) -> bool:
    # A small prime dividing q or 2q + 1 rules out the pair.
    for s in _SIEVE_PRIMES:
        if s >= q:
            break
        r = q % s
        if r == 0 or (2 * r + 1) % s == 0:
            return True
    return False


def generate_safe_prime(bits: int, rounds: int = DEFAULT_ROUNDS) -> int:
    """
    Generate a random safe prime of exactly ``bits`` bits.

    Samples the Sophie Germain candidate q with ``bits - 1`` bits and
    returns P = 2q + 1 once both q and P test prime.

    Args:
        bits: Bit length of the safe prime (>= 3)
        rounds: Miller-Rabin rounds

    Returns:
        int: A prime P such that (P - 1) / 2 is also prime

    Raises:
        ValueError: If bits is too small to hold a safe prime
    """
    if bits < 3:
        raise ValueError("bits must be >= 3")
    if bits == 3:
        return secrets.choice((5, 7))

    q_bits = bits - 1
    while True:
        q = secrets.randbits(q_bits) | (1 << (q_bits - 1)) | 1
        if _sieve_rejects(q):
            continue
        if not gmpy2.is_prime(q, rounds):
            continue
        candidate = 2 * q + 1
        if gmpy2.is_prime(candidate, rounds):
            return candidate


def random_below(n: int) -> int:
    """Uniform random integer in [0, n)."""
    if n <= 0:
        raise ValueError("n must be positive")
    return secrets.randbelow(n)


def random_bits(bits: int) -> int:
    """Uniform random integer with at most ``bits`` bits."""
    return secrets.randbits(bits)
