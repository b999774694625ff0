"""
Trapdoor Setup for the Accumulator

Derives the public modulus n = p * q and the secret group order
sk = p' * q' (p = 2p' + 1, q = 2q' + 1) from two safe primes.

Knowledge of sk lets the holder invert any exponent coprime to sk and
therefore take arbitrary roots in the quadratic-residue subgroup mod n.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

try:
    from .exceptions import SetupError
    from .number_theory import DEFAULT_ROUNDS, generate_safe_prime, is_prime
except ImportError:
    from exceptions import SetupError
    from number_theory import DEFAULT_ROUNDS, generate_safe_prime, is_prime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Trapdoor:
    """
    Trapdoor material for one accumulator instance.

    Attributes:
        p, q: Safe primes
        p_prime, q_prime: Sophie Germain companions (p - 1) / 2, (q - 1) / 2
        n: Public RSA modulus p * q
        sk: Secret group order p' * q' of the quadratic residues mod n
    """

    p: int = field(repr=False)
    q: int = field(repr=False)
    p_prime: int = field(repr=False)
    q_prime: int = field(repr=False)
    n: int
    sk: int = field(repr=False)

    @property
    def prime_bits(self) -> int:
        return max(self.p.bit_length(), self.q.bit_length())

    @classmethod
    def from_primes(cls, p: int, q: int, rounds: int = DEFAULT_ROUNDS) -> "Trapdoor":
        """
        Build trapdoor material from two safe primes.

        Re-derives p' and q', checks that both are prime and that
        2p' + 1 == p, 2q' + 1 == q.

        Raises:
            SetupError: If either prime is not a safe prime or p == q
        """
        if p <= 3 or q <= 3:
            raise SetupError("Safe primes must be greater than 3")
        if p == q:
            raise SetupError("p and q must be distinct")
        if not is_prime(p, rounds) or not is_prime(q, rounds):
            raise SetupError("p and q must be prime")

        p_prime = (p - 1) // 2
        q_prime = (q - 1) // 2

        if not is_prime(p_prime, rounds) or not is_prime(q_prime, rounds):
            raise SetupError("Generated safe primes have non-prime p' and q'")

        if 2 * p_prime + 1 != p or 2 * q_prime + 1 != q:
            raise SetupError("Generated primes are not proper safe primes")

        return cls(
            p=p,
            q=q,
            p_prime=p_prime,
            q_prime=q_prime,
            n=p * q,
            sk=p_prime * q_prime,
        )


def generate_trapdoor(
    prime_bits: int,
    *,
    rounds: int = DEFAULT_ROUNDS,
    safe_prime_generator: Optional[Callable[[int], int]] = None,
) -> Trapdoor:
    """
    Generate fresh trapdoor material.

    Args:
        prime_bits: Bit length of each safe prime (>= 1024 recommended)
        rounds: Miller-Rabin rounds for the companion checks
        safe_prime_generator: Oracle returning a safe prime of a given bit
            length (defaults to :func:`generate_safe_prime`)

    Returns:
        Trapdoor: Validated trapdoor material

    Raises:
        ValueError: If prime_bits is too small
        SetupError: If the oracle returned unusable primes
    """
    if prime_bits < 8:
        raise ValueError("prime_bits must be >= 8")

    if safe_prime_generator is None:
        def safe_prime_generator(bits: int) -> int:
            return generate_safe_prime(bits, rounds)

    p = safe_prime_generator(prime_bits)
    q = safe_prime_generator(prime_bits)

    trapdoor = Trapdoor.from_primes(p, q, rounds)
    logger.info(
        f"Generated trapdoor: {trapdoor.prime_bits}-bit safe primes, "
        f"{trapdoor.n.bit_length()}-bit modulus"
    )
    return trapdoor
