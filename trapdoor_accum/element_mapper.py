"""
Element-to-Exponent Mapping

Assigns each byte-string element a prime exponent, memoized per
accumulator instance.
"""

import logging
from typing import Callable, Dict, Optional, Union

try:
    from .number_theory import generate_safe_prime
except ImportError:
    from number_theory import generate_safe_prime

logger = logging.getLogger(__name__)

ElementLike = Union[bytes, bytearray, memoryview]


def element_key(x: ElementLike) -> bytes:
    """Normalize an element to an immutable bytes key."""
    if isinstance(x, bytes):
        return x
    if isinstance(x, (bytearray, memoryview)):
        return bytes(x)
    raise TypeError("element must be bytes")


class ElementMapper:
    """
    Maps byte-string elements to prime exponents.

    The first reference to an element draws a fresh safe prime from the
    oracle; later references return the cached value, so the exponent is
    stable for the lifetime of the mapper. The PRF key is held alongside
    the cache but does not feed prime generation.
    """

    def __init__(
        self,
        prf_key: int,
        element_bits: int = 256,
        prime_generator: Optional[Callable[[int], int]] = None,
    ):
        if element_bits < 3:
            raise ValueError("element_bits must be >= 3")

        self.prf_key = prf_key
        self.element_bits = element_bits
        self._generate = prime_generator or generate_safe_prime
        self.cache: Dict[bytes, int] = {}

    def __len__(self) -> int:
        return len(self.cache)

    def __contains__(self, x: object) -> bool:
        try:
            return element_key(x) in self.cache
        except TypeError:
            return False

    def get_or_generate(self, x: ElementLike) -> int:
        """
        Return the prime exponent for element x.

        Args:
            x: Element bytes

        Returns:
            int: Prime exponent assigned to x

        Raises:
            TypeError: If x is not bytes-like
        """
        key = element_key(x)

        prime = self.cache.get(key)
        if prime is not None:
            return prime

        prime = self._generate(self.element_bits)
        self.cache[key] = prime
        logger.debug(f"Assigned {prime.bit_length()}-bit exponent to new element ({len(self.cache)} cached)")
        return prime

    def lookup(self, x: ElementLike) -> Optional[int]:
        """Return the cached exponent for x without generating one."""
        return self.cache.get(element_key(x))
