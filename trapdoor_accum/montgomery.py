"""
Montgomery Residues

Ring elements modulo an odd n kept in Montgomery form (a * R mod n with
R = 2^k, k a multiple of the 64-bit limb size).
"""

LIMB_BITS = 64


def limb_width(bits: int) -> int:
    """Round a bit length up to a whole number of 64-bit limbs."""
    return max(LIMB_BITS, -(-bits // LIMB_BITS) * LIMB_BITS)


def widen(value: int, bits: int) -> int:
    """
    Place a non-negative integer into a ``bits``-wide unsigned slot.

    Raises:
        ValueError: If value is negative or does not fit
    """
    if value < 0:
        raise ValueError("value must be non-negative")
    if value.bit_length() > bits:
        raise ValueError(f"value of {value.bit_length()} bits does not fit in {bits} bits")
    return value


class MontyParams:
    """Reduction parameters derived once from an odd modulus."""

    __slots__ = ("modulus", "bits", "r", "mask", "n_prime", "r2", "one")

    def __init__(self, modulus: int):
        if modulus < 3 or modulus % 2 == 0:
            raise ValueError("Montgomery modulus must be odd and > 1")

        self.modulus = modulus
        self.bits = limb_width(modulus.bit_length())
        self.r = 1 << self.bits
        self.mask = self.r - 1
        # n * n_prime = -1 (mod R)
        self.n_prime = (-pow(modulus, -1, self.r)) % self.r
        self.r2 = (self.r * self.r) % modulus
        self.one = self.r % modulus

    def redc(self, t: int) -> int:
        """Montgomery reduction: t * R^-1 mod n for 0 <= t < n * R."""
        m = ((t & self.mask) * self.n_prime) & self.mask
        u = (t + m * self.modulus) >> self.bits
        if u >= self.modulus:
            u -= self.modulus
        return u

    def __eq__(self, other: object) -> bool:
        return isinstance(other, MontyParams) and other.modulus == self.modulus

    def __hash__(self) -> int:
        return hash(self.modulus)

    def __repr__(self) -> str:
        return f"MontyParams(bits={self.bits})"


class MontyForm:
    """An element of Z/nZ stored in Montgomery form."""

    __slots__ = ("params", "montgomery")

    def __init__(self, value: int, params: MontyParams):
        self.params = params
        self.montgomery = params.redc((value % params.modulus) * params.r2)

    @classmethod
    def _from_montgomery(cls, montgomery: int, params: MontyParams) -> "MontyForm":
        obj = cls.__new__(cls)
        obj.params = params
        obj.montgomery = montgomery
        return obj

    @classmethod
    def one(cls, params: MontyParams) -> "MontyForm":
        return cls._from_montgomery(params.one, params)

    def mul(self, other: "MontyForm") -> "MontyForm":
        self._check_params(other)
        return MontyForm._from_montgomery(
            self.params.redc(self.montgomery * other.montgomery), self.params
        )

    def square(self) -> "MontyForm":
        return MontyForm._from_montgomery(
            self.params.redc(self.montgomery * self.montgomery), self.params
        )

    def retrieve(self) -> int:
        """Convert back to standard form in [0, n)."""
        return self.params.redc(self.montgomery)

    def _check_params(self, other: "MontyForm") -> None:
        if other.params != self.params:
            raise ValueError("Montgomery operands use different moduli")

    def __mul__(self, other: "MontyForm") -> "MontyForm":
        return self.mul(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MontyForm):
            return NotImplemented
        return self.params == other.params and self.montgomery == other.montgomery

    def __hash__(self) -> int:
        return hash((self.params.modulus, self.montgomery))

    def __repr__(self) -> str:
        return f"MontyForm({self.retrieve()})"
